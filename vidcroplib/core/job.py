#!/usr/bin/env python3

from vidcroplib.core import runner
from vidcroplib.core import utils
from vidcroplib.core.errors import CropError
from vidcroplib.media.ffmpeg import build_command
from vidcroplib.media.ffmpeg import find_ffmpeg

#============================================

class CropJob():
	def __init__(self, request, resource_dir: str = None, exe_path: str = None,
		environ: dict = None):
		self.request = request
		self.resource_dir = resource_dir
		self.exe_path = exe_path
		self.environ = environ

	#============================
	def locate_encoder(self) -> str:
		return find_ffmpeg(resource_dir=self.resource_dir,
			exe_path=self.exe_path, environ=self.environ)

	#============================
	def build(self):
		return build_command(self.request, self.locate_encoder())

	#============================
	def run(self) -> None:
		"""
		Build and run the encode, raising a CropError subclass on failure.
		"""
		command = self.build()
		runner.run_encoder(command)
		if not utils.is_quiet_mode():
			print(f"complete: {self.request.output_path}")

#============================================

def crop_video(request, resource_dir: str = None, exe_path: str = None,
	environ: dict = None):
	"""
	Run one crop request. Returns None on success or an error string.

	A failed encode may leave a partial file at the output path.
	"""
	job = CropJob(request, resource_dir=resource_dir, exe_path=exe_path,
		environ=environ)
	try:
		job.run()
	except CropError as exc:
		return str(exc)
	return None
