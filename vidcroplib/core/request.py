#!/usr/bin/env python3

import os
import yaml
from vidcroplib.core import geometry
from vidcroplib.core import utils
from vidcroplib.core.geometry import CropRect
from vidcroplib.core.geometry import OutputSettings

#============================================

DEFAULT_FORMAT = 'mp4'
FULL_RANGE_EPSILON = 0.001

#============================================

class TrimRange():
	def __init__(self, start: float, end: float):
		self.start = start
		self.end = end

	#============================
	def __repr__(self) -> str:
		return f"TrimRange(start={self.start}, end={self.end})"

#============================================

class CropRequest():
	def __init__(self, input_path: str, output_path: str, crop: CropRect,
		output: OutputSettings, trim: TrimRange = None):
		self.input_path = input_path
		self.output_path = output_path
		self.crop = crop
		self.output = output
		self.trim = trim

	#============================
	def to_dict(self) -> dict:
		data = {
			'input': self.input_path,
			'output': {
				'file': self.output_path,
				'format': self.output.format,
				'resolution': [self.output.width, self.output.height],
			},
			'crop': {
				'x': self.crop.x,
				'y': self.crop.y,
				'width': self.crop.width,
				'height': self.crop.height,
			},
		}
		if self.trim is not None:
			data['trim'] = {'start': self.trim.start, 'end': self.trim.end}
		return data

#============================================

def default_output_path(input_path: str, format_name: str) -> str:
	input_dir = os.path.dirname(os.path.abspath(input_path))
	return os.path.join(input_dir, f"cropped.{format_name}")

#============================================

def is_full_range_trim(trim: TrimRange, duration: float) -> bool:
	"""
	True when the trim covers the whole source and can be dropped.
	"""
	if trim is None or duration is None or duration <= 0:
		return False
	if abs(trim.start) > FULL_RANGE_EPSILON:
		return False
	return abs(trim.end - duration) <= FULL_RANGE_EPSILON

#============================================

class RequestLoader():
	def __init__(self, yaml_file: str, output_override: str = None):
		self.yaml_file = yaml_file
		self.output_override = output_override

	#============================
	def load(self) -> CropRequest:
		data = self._load_yaml()
		self._validate_required_keys(data)
		input_path = self._parse_input(data.get('input'))
		crop = self._parse_crop(data.get('crop'))
		output_data = data.get('output')
		if not isinstance(output_data, dict):
			raise RuntimeError("output must be a mapping")
		format_name = self._parse_format(output_data)
		output = self._parse_output_size(output_data, crop, format_name)
		output_path = self.output_override or output_data.get('file')
		if output_path is None:
			output_path = default_output_path(input_path, format_name)
		trim = self._parse_trim(data.get('trim'), data.get('source_duration'))
		return CropRequest(input_path, str(output_path), crop, output, trim)

	#============================
	def _load_yaml(self) -> dict:
		utils.ensure_file_exists(self.yaml_file)
		file_size = os.path.getsize(self.yaml_file)
		if file_size > 10 ** 6:
			raise RuntimeError("request yaml file is larger than 1MB")
		with open(self.yaml_file, 'r') as data_file:
			try:
				data = yaml.safe_load(data_file)
			except yaml.YAMLError as exc:
				raise RuntimeError(f"invalid request yaml: {exc}")
		if not isinstance(data, dict):
			raise RuntimeError("request yaml must be a mapping at the top level")
		return data

	#============================
	def _validate_required_keys(self, data: dict) -> None:
		if data.get('vidcrop') != 1:
			raise RuntimeError("vidcrop must be set to 1")
		required_keys = ('input', 'crop', 'output')
		for key in required_keys:
			if key not in data:
				raise RuntimeError(f"missing required key: {key}")

	#============================
	def _parse_input(self, input_data) -> str:
		if isinstance(input_data, dict):
			input_data = input_data.get('file')
		if not isinstance(input_data, str) or input_data == '':
			raise RuntimeError("input.file must be a path string")
		return input_data

	#============================
	def _parse_crop(self, crop_data) -> CropRect:
		if isinstance(crop_data, (list, tuple)):
			if len(crop_data) != 4:
				raise RuntimeError("crop must be [x, y, width, height]")
			values = list(crop_data)
		elif isinstance(crop_data, dict):
			keys = ('x', 'y', 'width', 'height')
			for key in keys:
				if key not in crop_data:
					raise RuntimeError(f"crop.{key} is required")
			values = [crop_data[key] for key in keys]
		else:
			raise RuntimeError("crop must be a mapping or [x, y, width, height]")
		numbers = [self._parse_pixels(value, 'crop') for value in values]
		return CropRect(numbers[0], numbers[1], numbers[2], numbers[3])

	#============================
	def _parse_pixels(self, value, name: str) -> int:
		if isinstance(value, bool) or not isinstance(value, (int, float)):
			raise RuntimeError(f"{name} values must be numbers")
		pixels = int(round(value))
		if pixels < 0:
			raise RuntimeError(f"{name} values must not be negative")
		return pixels

	#============================
	def _parse_format(self, output_data: dict) -> str:
		format_name = output_data.get('format')
		if format_name is None:
			output_file = self.output_override or output_data.get('file')
			if output_file:
				extension = os.path.splitext(str(output_file))[1]
				if extension:
					format_name = extension[1:]
		if format_name is None:
			format_name = DEFAULT_FORMAT
		return str(format_name)

	#============================
	def _parse_output_size(self, output_data: dict, crop: CropRect,
		format_name: str) -> OutputSettings:
		resolution = output_data.get('resolution')
		ratio = output_data.get('ratio')
		if resolution is not None and ratio is not None:
			raise RuntimeError("output.resolution and output.ratio are exclusive")
		if resolution is not None:
			if not isinstance(resolution, (list, tuple)) or len(resolution) != 2:
				raise RuntimeError("output.resolution must be [width, height]")
			width = self._parse_pixels(resolution[0], 'output.resolution')
			height = self._parse_pixels(resolution[1], 'output.resolution')
			return OutputSettings(width, height, format_name)
		if ratio is not None:
			(width, height) = geometry.fit_size_to_ratio(crop.width, crop.height,
				geometry.parse_ratio(ratio))
			return OutputSettings(width, height, format_name)
		raise RuntimeError("output.resolution or output.ratio is required")

	#============================
	def _parse_trim(self, trim_data, source_duration) -> TrimRange:
		if trim_data is None:
			return None
		if not isinstance(trim_data, dict):
			raise RuntimeError("trim must be a mapping with start and end")
		start = utils.parse_timecode(trim_data.get('start', 0))
		if 'end' not in trim_data:
			raise RuntimeError("trim.end is required")
		end = utils.parse_timecode(trim_data.get('end'))
		trim = TrimRange(start, end)
		if source_duration is not None:
			duration = utils.parse_timecode(source_duration)
			if is_full_range_trim(trim, duration):
				return None
		return trim
