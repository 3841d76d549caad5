#!/usr/bin/env python3

"""
Pytest coverage for running the encoder and reporting failures.

The running Python interpreter stands in for ffmpeg.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from vidcroplib.core import runner
from vidcroplib.core import utils
from vidcroplib.core.errors import EncodeFailure
from vidcroplib.core.errors import LaunchFailure
from vidcroplib.media.ffmpeg_command import AssembledCommand

#============================================

@pytest.fixture(autouse=True)
def quiet_commands():
	utils.set_quiet_mode(True)
	yield
	utils.clear_command_reporter()
	utils.set_quiet_mode(False)

#============================================

def _python_command(code: str) -> AssembledCommand:
	return AssembledCommand(sys.executable, ("-c", code))

#============================================

def test_zero_exit_returns_none() -> None:
	assert runner.run_encoder(_python_command("pass")) is None

#============================================

def test_nonzero_exit_keeps_last_twelve_lines() -> None:
	code = (
		"import sys\n"
		"for i in range(50):\n"
		"    sys.stderr.write(f'line {i}\\n')\n"
		"sys.exit(3)\n"
	)
	with pytest.raises(EncodeFailure) as excinfo:
		runner.run_encoder(_python_command(code))
	expected = "\n".join(f"line {i}" for i in range(38, 50))
	assert excinfo.value.returncode == 3
	assert excinfo.value.stderr_tail == expected
	assert str(excinfo.value) == "ffmpeg failed:\n" + expected

#============================================

def test_stdout_is_not_reported() -> None:
	code = (
		"import sys\n"
		"print('from stdout')\n"
		"sys.stderr.write('from stderr\\n')\n"
		"sys.exit(1)\n"
	)
	with pytest.raises(EncodeFailure) as excinfo:
		runner.run_encoder(_python_command(code))
	assert excinfo.value.stderr_tail == "from stderr"

#============================================

def test_missing_binary_is_launch_failure(tmp_path) -> None:
	missing = str(tmp_path / "no-such-ffmpeg")
	with pytest.raises(LaunchFailure) as excinfo:
		runner.run_encoder(AssembledCommand(missing, ("-version",)))
	assert str(excinfo.value).startswith("Failed to run ffmpeg: ")
	assert excinfo.value.os_error != ""

#============================================

def test_reporter_receives_start_and_end() -> None:
	events = []
	utils.set_command_reporter(events.append)
	runner.run_encoder(_python_command("pass"))
	assert [event['event'] for event in events] == ['start', 'end']
	assert 'index' not in events[0]
	assert events[1]['returncode'] == 0
	assert events[1]['seconds'] >= 0

#============================================

def test_tail_lines() -> None:
	assert utils.tail_lines("a\nb\nc", 12) == "a\nb\nc"
	assert utils.tail_lines("a\nb\nc\n", 2) == "b\nc"
	assert utils.tail_lines("", 12) == ""
