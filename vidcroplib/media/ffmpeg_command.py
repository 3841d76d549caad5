#!/usr/bin/env python3

import math
from vidcroplib.core import geometry
from vidcroplib.core import utils
from vidcroplib.core.errors import InvalidTrim
from vidcroplib.media.ffmpeg_filter import build_crop_scale_filter

#============================================

DEFAULT_FORMAT_KEY = 'default'

# unknown formats fall through to DEFAULT_FORMAT_KEY instead of erroring
FORMAT_ARGS = {
	'webm': (
		'-c:v', 'libvpx-vp9', '-b:v', '0', '-crf', '32',
		'-c:a', 'libopus',
	),
	'avi': (
		'-c:v', 'mpeg4', '-q:v', '3',
		'-c:a', 'mp3',
	),
	'mov': (
		'-c:v', 'libx264', '-preset', 'veryfast', '-crf', '18',
		'-pix_fmt', 'yuv420p',
		'-c:a', 'aac',
		'-movflags', '+faststart',
	),
	DEFAULT_FORMAT_KEY: (
		'-c:v', 'libx264', '-preset', 'veryfast', '-crf', '18',
		'-pix_fmt', 'yuv420p',
		'-c:a', 'aac',
	),
}

STREAM_MAP_ARGS = ('-map', '0:v:0', '-map', '0:a?')

#============================================

class AssembledCommand():
	def __init__(self, binary: str, args: tuple):
		self.binary = str(binary)
		self.args = tuple(args)

	#============================
	@property
	def argv(self) -> list:
		return [self.binary] + list(self.args)

	#============================
	def display(self) -> str:
		return utils.join_command(self.argv)

	#============================
	def __repr__(self) -> str:
		return f"AssembledCommand({self.display()})"

#============================================

def format_args(format_name: str) -> tuple:
	key = str(format_name).lower()
	return FORMAT_ARGS.get(key, FORMAT_ARGS[DEFAULT_FORMAT_KEY])

#============================================

def _clamp_floor(value: float, floor: float) -> float:
	# nan counts as missing, so the floor wins
	if math.isnan(value) or value < floor:
		return floor
	return value

#============================================

def resolve_trim(trim) -> tuple:
	"""
	Clamp a trim range and return (start, duration).
	"""
	start = _clamp_floor(float(trim.start), 0.0)
	end = _clamp_floor(float(trim.end), start)
	duration = end - start
	if not math.isfinite(duration) or duration <= 0:
		raise InvalidTrim("Trim duration must be greater than 0.")
	return (start, duration)

#============================================

def trim_args(input_path: str, trim=None) -> tuple:
	if trim is None:
		return ('-i', str(input_path))
	(start, duration) = resolve_trim(trim)
	return (
		'-ss', f"{start:.3f}",
		'-i', str(input_path),
		'-t', f"{duration:.3f}",
	)

#============================================

def build_command(request, ffmpeg_path: str) -> AssembledCommand:
	(crop, output) = geometry.normalize_geometry(request.crop, request.output)
	vf = build_crop_scale_filter(crop, output)
	args = ('-y',)
	args += trim_args(request.input_path, request.trim)
	args += STREAM_MAP_ARGS
	args += ('-vf', vf)
	args += format_args(output.format)
	args += (str(request.output_path),)
	return AssembledCommand(ffmpeg_path, args)
