#!/usr/bin/env python3

from vidcroplib.core.geometry import CropRect
from vidcroplib.core.geometry import OutputSettings

#============================================

# a bare comma separates filters in a filtergraph, so commas inside
# expression arguments must be backslash escaped
EXPR_COMMA = "\\,"

#============================================

def _min(a, b) -> str:
	return f"min({a}{EXPR_COMMA}{b})"

#============================================

def _max(a, b) -> str:
	return f"max({a}{EXPR_COMMA}{b})"

#============================================

def build_crop_scale_filter(crop: CropRect, output: OutputSettings) -> str:
	"""
	Crop then scale, with the crop box clamped to the decoded frame.

	in_w/in_h are evaluated by ffmpeg at run time, so a crop rectangle
	larger than the real source still produces a valid crop.
	"""
	crop_w = _min(crop.width, "in_w")
	crop_h = _min(crop.height, "in_h")
	crop_x = _min(_max(crop.x, 0), f"in_w-{crop_w}")
	crop_y = _min(_max(crop.y, 0), f"in_h-{crop_h}")
	crop_stage = f"crop=w={crop_w}:h={crop_h}:x={crop_x}:y={crop_y}"
	scale_stage = f"scale={output.width}:{output.height}"
	return f"{crop_stage},{scale_stage}"
