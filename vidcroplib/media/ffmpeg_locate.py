#!/usr/bin/env python3

"""
Find the ffmpeg binary across bundled, installed and development layouts.

Search order, first existing path wins:
  1. FFMPEG_PATH environment variable
  2. <resource_dir>/bin/<name>
  3. <exe_dir>/<name>
  4. <dir>/bin/<name> walking up from exe_dir (5 directories)
  5. bare "ffmpeg", left for PATH lookup at spawn time
"""

# Standard Library
import os
import platform
import sys

#============================================

FFMPEG_ENV_VAR = 'FFMPEG_PATH'
FFMPEG_FALLBACK = 'ffmpeg'
ANCESTOR_SEARCH_DEPTH = 5

#============================================

def _target_triple() -> str:
	machine = platform.machine().lower()
	if machine in ('amd64', 'x64'):
		machine = 'x86_64'
	if machine == 'arm64':
		machine = 'aarch64'
	if sys.platform == 'darwin':
		return f"{machine}-apple-darwin"
	if sys.platform.startswith('win'):
		return f"{machine}-pc-windows-msvc"
	return f"{machine}-unknown-linux-gnu"

#============================================

def ffmpeg_binary_names() -> tuple:
	"""
	Plain and per-architecture sidecar binary names for this platform.
	"""
	if sys.platform.startswith('win'):
		return ('ffmpeg.exe', 'ffmpeg-x86_64-pc-windows-msvc.exe')
	return ('ffmpeg', f"ffmpeg-{_target_triple()}")

#============================================

def default_resource_dir() -> str:
	bundle_dir = getattr(sys, '_MEIPASS', None)
	if bundle_dir is not None:
		return bundle_dir
	# vidcroplib/media/ffmpeg_locate.py -> repo root
	media_dir = os.path.dirname(os.path.abspath(__file__))
	return os.path.dirname(os.path.dirname(media_dir))

#============================================

def default_exe_path() -> str:
	if getattr(sys, 'frozen', False):
		return sys.executable
	if sys.argv and sys.argv[0]:
		return os.path.abspath(sys.argv[0])
	return sys.executable

#============================================

def _env_candidates(environ: dict):
	custom = environ.get(FFMPEG_ENV_VAR)
	if custom:
		yield custom

#============================================

def _resource_candidates(resource_dir: str, names: tuple):
	if not resource_dir:
		return
	for name in names:
		yield os.path.join(resource_dir, 'bin', name)

#============================================

def _exe_dir_candidates(exe_dir: str, names: tuple):
	for name in names:
		yield os.path.join(exe_dir, name)

#============================================

def _ancestor_bin_candidates(exe_dir: str, names: tuple):
	search_dir = exe_dir
	for _ in range(ANCESTOR_SEARCH_DEPTH):
		for name in names:
			yield os.path.join(search_dir, 'bin', name)
		parent = os.path.dirname(search_dir)
		if parent == search_dir:
			break
		search_dir = parent

#============================================

def find_ffmpeg(resource_dir: str = None, exe_path: str = None,
	environ: dict = None) -> str:
	"""
	Return a path to ffmpeg, or the bare command name. Never raises.
	"""
	if environ is None:
		environ = os.environ
	if resource_dir is None:
		resource_dir = default_resource_dir()
	if exe_path is None:
		exe_path = default_exe_path()
	names = ffmpeg_binary_names()
	exe_dir = os.path.dirname(os.path.abspath(exe_path)) or '.'
	candidate_groups = (
		lambda: _env_candidates(environ),
		lambda: _resource_candidates(resource_dir, names),
		lambda: _exe_dir_candidates(exe_dir, names),
		lambda: _ancestor_bin_candidates(exe_dir, names),
	)
	for group in candidate_groups:
		for candidate in group():
			if os.path.exists(candidate):
				return candidate
	return FFMPEG_FALLBACK
