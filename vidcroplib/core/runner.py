#!/usr/bin/env python3

from vidcroplib.core import utils
from vidcroplib.core.errors import EncodeFailure
from vidcroplib.core.errors import LaunchFailure

#============================================

STDERR_TAIL_LINES = 12

#============================================

def run_encoder(command) -> None:
	"""
	Run an AssembledCommand to completion.

	Raises LaunchFailure when the process cannot start and EncodeFailure
	with the last STDERR_TAIL_LINES lines of stderr on a nonzero exit.
	"""
	try:
		(returncode, stderr_text) = utils.run_command(command.argv)
	except OSError as exc:
		raise LaunchFailure(str(exc))
	if returncode == 0:
		return
	raise EncodeFailure(returncode, utils.tail_lines(stderr_text, STDERR_TAIL_LINES))
