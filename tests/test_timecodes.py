#!/usr/bin/env python3

"""
Unit tests for timecode parsing and formatting.
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
from vidcroplib.core import utils

#============================================

@pytest.mark.parametrize("raw_time, seconds", [
	(3, 3.0),
	(2.5, 2.5),
	("4.25", 4.25),
	("01:02.5", 62.5),
	("01:00:01.250", 3601.25),
	(" 00:00:02.000 ", 2.0),
])
def test_parse_timecode(raw_time, seconds: float) -> None:
	assert utils.parse_timecode(raw_time) == pytest.approx(seconds)

#============================================

@pytest.mark.parametrize("raw_time", [None, "", "abc", "1:2:3:4", "1:x", True, [1],
	"nan", "inf", float("nan"), float("-inf"), "00:nan"])
def test_parse_timecode_rejects(raw_time) -> None:
	with pytest.raises(RuntimeError):
		utils.parse_timecode(raw_time)

#============================================

def test_format_timecode() -> None:
	assert utils.format_timecode(0) == "00:00:00.000"
	assert utils.format_timecode(3601.25) == "01:00:01.250"
	assert utils.format_timecode(-4) == "00:00:00.000"
	assert utils.parse_timecode(utils.format_timecode(75.125)) == pytest.approx(75.125)
