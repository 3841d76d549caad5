#!/usr/bin/env python3

import math
import os
import shlex
import subprocess
import time

#============================================

# process-wide output settings, installed by the cli or tui
_QUIET_MODE = False
_COMMAND_REPORTER = None

#============================================

def set_quiet_mode(quiet: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(quiet)

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def set_command_reporter(reporter) -> None:
	"""
	Install a callable that receives command start/end event dicts.
	"""
	global _COMMAND_REPORTER
	_COMMAND_REPORTER = reporter

#============================================

def clear_command_reporter() -> None:
	global _COMMAND_REPORTER
	_COMMAND_REPORTER = None

#============================================

def _report(event: dict) -> None:
	if _COMMAND_REPORTER is None:
		return
	_COMMAND_REPORTER(event)

#============================================

def join_command(argv: list) -> str:
	return " ".join(shlex.quote(str(part)) for part in argv)

#============================================

def run_command(argv: list) -> tuple:
	"""
	Run argv without a shell and return (returncode, stderr_text).

	stdout is discarded. OSError from spawning propagates to the caller.
	"""
	showcmd = join_command(argv)
	if not _QUIET_MODE:
		print(f"CMD: '{showcmd}'")
	_report({'event': 'start', 'command': showcmd})
	t0 = time.time()
	proc = subprocess.Popen(argv, stdout=subprocess.DEVNULL,
		stderr=subprocess.PIPE)
	_, stderr = proc.communicate()
	seconds = time.time() - t0
	_report({
		'event': 'end',
		'command': showcmd,
		'returncode': proc.returncode,
		'seconds': seconds,
	})
	stderr_text = stderr.decode('utf-8', errors='replace')
	return (proc.returncode, stderr_text)

#============================================

def tail_lines(text: str, count: int) -> str:
	lines = text.splitlines()
	if len(lines) > count:
		lines = lines[len(lines) - count:]
	return "\n".join(lines)

#============================================

def parse_timecode(raw_time) -> float:
	"""
	Convert seconds or an HH:MM:SS.mmm / MM:SS timecode to float seconds.
	"""
	if raw_time is None:
		raise RuntimeError("time value is required")
	if isinstance(raw_time, bool):
		raise RuntimeError("time values must be numbers or timecode strings")
	if isinstance(raw_time, (int, float)):
		seconds = float(raw_time)
	elif isinstance(raw_time, str):
		seconds = _parse_timecode_text(raw_time)
	else:
		raise RuntimeError("time values must be numbers or timecode strings")
	if not math.isfinite(seconds):
		raise RuntimeError(f"time value must be finite: {raw_time}")
	return seconds

#============================================

def _parse_timecode_text(raw_time: str) -> float:
	value = raw_time.strip()
	if value == '':
		raise RuntimeError("time value is empty")
	parts = value.split(':')
	if len(parts) > 3:
		raise RuntimeError(f"invalid timecode: {raw_time}")
	try:
		numbers = [float(part) for part in parts]
	except ValueError:
		raise RuntimeError(f"invalid timecode: {raw_time}")
	seconds = 0.0
	for number in numbers:
		seconds = seconds * 60.0 + number
	return seconds

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def format_timecode(seconds: float) -> str:
	total_ms = max(0, int(round(seconds * 1000)))
	ms = total_ms % 1000
	total_sec = total_ms // 1000
	sec = total_sec % 60
	total_min = total_sec // 60
	minute = total_min % 60
	hour = total_min // 60
	return f"{hour:02d}:{minute:02d}:{sec:02d}.{ms:03d}"
