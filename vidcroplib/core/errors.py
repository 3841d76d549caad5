#!/usr/bin/env python3

"""
Failure types for one crop invocation. All are terminal: nothing retries.
"""

#============================================

class CropError(RuntimeError):
	pass

#============================================

class InvalidGeometry(CropError):
	pass

#============================================

class InvalidTrim(CropError):
	pass

#============================================

class LaunchFailure(CropError):
	def __init__(self, os_error: str):
		super().__init__(f"Failed to run ffmpeg: {os_error}")
		self.os_error = os_error

#============================================

class EncodeFailure(CropError):
	def __init__(self, returncode: int, stderr_tail: str):
		super().__init__(f"ffmpeg failed:\n{stderr_tail}")
		self.returncode = returncode
		self.stderr_tail = stderr_tail
