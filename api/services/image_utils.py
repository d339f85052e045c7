from __future__ import annotations
import math
from typing import List, Optional, Tuple
from PIL import Image

from api.services.errors import InvalidDimensions


ORIENTATION_TAG = 0x0112

# EXIF orientation -> transpose operations applied in order
_ORIENTATION_OPS = {
	2: (Image.Transpose.FLIP_LEFT_RIGHT,),
	3: (Image.Transpose.ROTATE_180,),
	4: (Image.Transpose.FLIP_TOP_BOTTOM,),
	5: (Image.Transpose.FLIP_LEFT_RIGHT, Image.Transpose.ROTATE_90),
	6: (Image.Transpose.ROTATE_270,),
	7: (Image.Transpose.FLIP_LEFT_RIGHT, Image.Transpose.ROTATE_270),
	8: (Image.Transpose.ROTATE_90,),
}


def read_orientation(exif) -> Optional[int]:
	if not exif:
		return None
	value = exif.get(ORIENTATION_TAG)
	if value is None:
		return None
	try:
		return int(value)
	except (TypeError, ValueError):
		return None


def apply_exif_orientation(img: Image.Image, exif) -> Image.Image:
	o = read_orientation(exif)
	for op in _ORIENTATION_OPS.get(o, ()):
		img = img.transpose(op)
	return img


def choose_common_size(sizes: List[Tuple[int, int]]) -> Tuple[int, int]:
	if not sizes:
		raise ValueError("At least one size is required")
	min_w = min(w for (w, h) in sizes)
	min_h = min(h for (w, h) in sizes)
	return (min_w, min_h)


def round_half_up(x: float) -> int:
	# Matches Math.round: .5 goes towards +inf, unlike Python's round()
	return int(math.floor(x + 0.5))


def aspect_fit_size(src_w: int, src_h: int, box_w: int, box_h: int) -> Tuple[int, int]:
	"""
	Size of a src_w x src_h image fitted into box_w x box_h keeping its aspect ratio.
	Landscape sources keep the box width, everything else (square included)
	keeps the box height. Neither axis drops below one pixel.
	"""
	if box_w <= 0 or box_h <= 0:
		raise InvalidDimensions(box_w, box_h)
	if src_w <= 0 or src_h <= 0:
		raise InvalidDimensions(src_w, src_h)
	aspect = src_w / src_h
	if aspect > 1:
		return (box_w, max(1, round_half_up(box_w / aspect)))
	return (max(1, round_half_up(box_h * aspect)), box_h)


def parse_size(text: str) -> Tuple[int, int]:
	"""Parse "400x300" into (400, 300)."""
	parts = text.lower().replace(" ", "").split("x")
	if len(parts) != 2:
		raise ValueError(f"Expected WIDTHxHEIGHT, got {text!r}")
	try:
		w, h = int(parts[0]), int(parts[1])
	except ValueError:
		raise ValueError(f"Expected WIDTHxHEIGHT, got {text!r}") from None
	if w <= 0 or h <= 0:
		raise InvalidDimensions(w, h)
	return (w, h)
