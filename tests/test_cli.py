#!/usr/bin/env python3

"""
Pytest coverage for vidcrop_cli error handling and plan output.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
import vidcrop_cli

#============================================

def _run_cli(monkeypatch, args: list) -> None:
	monkeypatch.setattr(sys, "argv", ["vidcrop_cli.py"] + args)
	vidcrop_cli.main()

#============================================

def test_broken_yaml_exits_with_message(monkeypatch, capsys, tmp_path) -> None:
	yaml_path = tmp_path / "request.yaml"
	yaml_path.write_text("vidcrop: 1\ninput: [unclosed\n")
	with pytest.raises(SystemExit) as excinfo:
		_run_cli(monkeypatch, ["-y", str(yaml_path)])
	assert excinfo.value.code == 1
	assert capsys.readouterr().err.startswith("error: invalid request yaml")

#============================================

def test_missing_yaml_exits_with_message(monkeypatch, capsys, tmp_path) -> None:
	with pytest.raises(SystemExit) as excinfo:
		_run_cli(monkeypatch, ["-y", str(tmp_path / "missing.yaml")])
	assert excinfo.value.code == 1
	assert "file not found" in capsys.readouterr().err

#============================================

def test_dump_plan_prints_argv(monkeypatch, capsys, tmp_path) -> None:
	yaml_path = tmp_path / "request.yaml"
	lines = []
	lines.append("vidcrop: 1")
	lines.append(f"input: \"{tmp_path / 'clip.mp4'}\"")
	lines.append("crop: [10, 10, 100, 50]")
	lines.append("output: {file: out.webm, resolution: [200, 150]}")
	lines.append("trim: {start: 2, end: 5}")
	yaml_path.write_text("\n".join(lines) + "\n")
	monkeypatch.setenv("FFMPEG_PATH", str(tmp_path / "no-such-ffmpeg"))
	_run_cli(monkeypatch, ["-y", str(yaml_path), "-p",
		"-r", str(tmp_path / "resources")])
	plan = yaml.safe_load(capsys.readouterr().out)
	assert plan['argv'][:3] == ["-y", "-ss", "2.000"]
	assert plan['argv'][-1] == "out.webm"
	assert plan['request']['output']['format'] == "webm"
