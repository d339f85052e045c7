from __future__ import annotations

from api.services.errors import DimensionMismatch
from api.services.image_buffer import ImageBuffer


def interleave(a: ImageBuffer, b: ImageBuffer) -> ImageBuffer:
	"""
	Column-interleave two equally sized buffers.

	The result starts as a copy of `a`. Every even column (x = 0, 2, 4, ...)
	then takes the red, green and blue channels of `b`; alpha stays `a`'s.
	Odd columns are `a` untouched.
	"""
	if a.size != b.size:
		raise DimensionMismatch(a.size, b.size)
	out = a.pixels.copy()
	out[:, 0::2, :3] = b.pixels[:, 0::2, :3]
	return ImageBuffer(width=a.width, height=a.height, pixels=out)
