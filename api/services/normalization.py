from __future__ import annotations
from enum import Enum
import cv2
from api.services.errors import InvalidDimensions
from api.services.image_buffer import ImageBuffer
from api.services.image_utils import aspect_fit_size


class ResizeMode(str, Enum):
	STRETCH = "stretch"
	ASPECT_FIT = "aspect_fit"


class Resample(str, Enum):
	NEAREST = "nearest"
	BILINEAR = "bilinear"
	AREA = "area"
	LANCZOS = "lanczos"


_INTERPOLATION = {
	Resample.NEAREST: cv2.INTER_NEAREST_EXACT,
	Resample.BILINEAR: cv2.INTER_LINEAR,
	Resample.AREA: cv2.INTER_AREA,
	Resample.LANCZOS: cv2.INTER_LANCZOS4,
}


def output_size(image: ImageBuffer, target_width: int, target_height: int, mode: ResizeMode = ResizeMode.STRETCH):
	if target_width <= 0 or target_height <= 0:
		raise InvalidDimensions(target_width, target_height)
	if ResizeMode(mode) is ResizeMode.ASPECT_FIT:
		return aspect_fit_size(image.width, image.height, target_width, target_height)
	return (target_width, target_height)


def resize_buffer(image: ImageBuffer, width: int, height: int, resample: Resample = Resample.BILINEAR) -> ImageBuffer:
	if width <= 0 or height <= 0:
		raise InvalidDimensions(width, height)
	if image.size == (width, height):
		return image.copy()
	# cv2 takes dsize as (w, h) and keeps the 4 channels
	out = cv2.resize(image.pixels, (width, height), interpolation=_INTERPOLATION[Resample(resample)])
	return ImageBuffer(width=width, height=height, pixels=out.reshape(height, width, 4))


def normalize(
	image: ImageBuffer,
	target_width: int,
	target_height: int,
	mode: ResizeMode = ResizeMode.STRETCH,
	resample: Resample = Resample.BILINEAR,
) -> ImageBuffer:
	"""
	Resize `image` for the target box.
	STRETCH fills the box exactly. ASPECT_FIT keeps the source aspect ratio, so one
	axis of the result can differ from the box (see aspect_fit_size).
	"""
	w, h = output_size(image, target_width, target_height, mode)
	return resize_buffer(image, w, h, resample)
