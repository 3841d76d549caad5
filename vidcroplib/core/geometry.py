#!/usr/bin/env python3

from vidcroplib.core.errors import InvalidGeometry

#============================================

class CropRect():
	def __init__(self, x: int, y: int, width: int, height: int):
		self.x = x
		self.y = y
		self.width = width
		self.height = height

	#============================
	def as_tuple(self) -> tuple:
		return (self.x, self.y, self.width, self.height)

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, CropRect):
			return NotImplemented
		return self.as_tuple() == other.as_tuple()

	#============================
	def __repr__(self) -> str:
		return (f"CropRect(x={self.x}, y={self.y}, width={self.width}, "
			f"height={self.height})")

#============================================

class OutputSettings():
	def __init__(self, width: int, height: int, format: str = 'mp4'):
		self.width = width
		self.height = height
		self.format = format

	#============================
	def as_tuple(self) -> tuple:
		return (self.width, self.height, self.format)

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, OutputSettings):
			return NotImplemented
		return self.as_tuple() == other.as_tuple()

	#============================
	def __repr__(self) -> str:
		return (f"OutputSettings(width={self.width}, height={self.height}, "
			f"format={self.format!r})")

#============================================

def make_even(value: int) -> int:
	"""
	Coerce a dimension to the nearest even integer that is at least 2.
	"""
	value = int(value)
	if value < 2:
		return 2
	return value & ~1

#============================================

def normalize_geometry(crop: CropRect, output: OutputSettings) -> tuple:
	"""
	Return even-sized copies of crop and output, raising on empty sizes.
	"""
	norm_crop = CropRect(
		make_even(crop.x),
		make_even(crop.y),
		make_even(crop.width),
		make_even(crop.height),
	)
	norm_output = OutputSettings(
		make_even(output.width),
		make_even(output.height),
		output.format,
	)
	# make_even never yields 0; keep the checks if coercion ever changes
	if norm_crop.width == 0 or norm_crop.height == 0:
		raise InvalidGeometry("Crop size is empty after normalization.")
	if norm_output.width == 0 or norm_output.height == 0:
		raise InvalidGeometry("Output size is empty after normalization.")
	return (norm_crop, norm_output)

#============================================

def parse_ratio(raw_ratio) -> float:
	if isinstance(raw_ratio, bool):
		raise RuntimeError("ratio must be a number or W:H string")
	if isinstance(raw_ratio, (int, float)):
		ratio = float(raw_ratio)
	elif isinstance(raw_ratio, str):
		parts = raw_ratio.strip().split(':')
		try:
			if len(parts) == 1:
				ratio = float(parts[0])
			elif len(parts) == 2:
				ratio = float(parts[0]) / float(parts[1])
			else:
				raise RuntimeError(f"invalid ratio: {raw_ratio}")
		except (ValueError, ZeroDivisionError):
			raise RuntimeError(f"invalid ratio: {raw_ratio}")
	else:
		raise RuntimeError("ratio must be a number or W:H string")
	if ratio <= 0:
		raise RuntimeError(f"ratio must be positive: {raw_ratio}")
	return ratio

#============================================

def fit_size_to_ratio(max_width: int, max_height: int, ratio: float) -> tuple:
	"""
	Largest even (width, height) with the given ratio inside the bounds.
	"""
	width = max_width
	height = int(round(width / ratio))
	if height > max_height:
		height = max_height
		width = int(round(height * ratio))
	return (make_even(width), make_even(height))
