from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from api.services.errors import InvalidDimensions


@dataclass(frozen=True, eq=False)
class ImageBuffer:
	"""
	Decoded RGBA raster: `pixels` is a C-contiguous uint8 array of shape
	(height, width, 4), i.e. row-major with four 8-bit channels per pixel.
	Operations never mutate a buffer; they return new ones.
	"""
	width: int
	height: int
	pixels: np.ndarray

	def __post_init__(self) -> None:
		if self.width <= 0 or self.height <= 0:
			raise InvalidDimensions(self.width, self.height)
		if self.pixels.dtype != np.uint8:
			raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
		if self.pixels.shape != (self.height, self.width, 4):
			raise ValueError(
				f"Pixel array shape {self.pixels.shape} does not match {self.width}x{self.height} RGBA"
			)
		if not self.pixels.flags["C_CONTIGUOUS"]:
			object.__setattr__(self, "pixels", np.ascontiguousarray(self.pixels))

	@classmethod
	def from_array(cls, pixels: np.ndarray) -> "ImageBuffer":
		if pixels.ndim != 3 or pixels.shape[2] != 4:
			raise ValueError(f"Expected an HxWx4 array, got shape {pixels.shape}")
		h, w = pixels.shape[:2]
		return cls(width=w, height=h, pixels=pixels)

	@classmethod
	def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> "ImageBuffer":
		if width <= 0 or height <= 0:
			raise InvalidDimensions(width, height)
		expected = width * height * 4
		if len(data) != expected:
			raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
		arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4).copy()
		return cls(width=width, height=height, pixels=arr)

	@classmethod
	def blank(cls, width: int, height: int, rgba: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> "ImageBuffer":
		if width <= 0 or height <= 0:
			raise InvalidDimensions(width, height)
		arr = np.empty((height, width, 4), dtype=np.uint8)
		arr[...] = rgba
		return cls(width=width, height=height, pixels=arr)

	@property
	def size(self) -> Tuple[int, int]:
		return (self.width, self.height)

	def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
		r, g, b, a = (int(v) for v in self.pixels[y, x])
		return (r, g, b, a)

	def copy(self) -> "ImageBuffer":
		return ImageBuffer(width=self.width, height=self.height, pixels=self.pixels.copy())

	def to_rgba_bytes(self) -> bytes:
		return self.pixels.tobytes()
