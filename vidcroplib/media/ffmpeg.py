#!/usr/bin/env python3

from vidcroplib.media.ffmpeg_filter import build_crop_scale_filter
from vidcroplib.media.ffmpeg_command import build_command
from vidcroplib.media.ffmpeg_command import format_args
from vidcroplib.media.ffmpeg_command import trim_args
from vidcroplib.media.ffmpeg_locate import find_ffmpeg

__all__ = [
	'build_crop_scale_filter',
	'build_command',
	'format_args',
	'trim_args',
	'find_ffmpeg',
]
