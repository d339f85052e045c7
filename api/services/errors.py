from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union


class ImageCombineError(Exception):
	pass


class DecodeError(ImageCombineError):
	def __init__(self, path: Union[str, Path], reason: str) -> None:
		self.path = Path(path)
		self.reason = reason
		super().__init__(f"Failed to load image from {self.path}: {reason}")


class EncodeError(ImageCombineError):
	def __init__(self, path: Union[str, Path], reason: str) -> None:
		self.path = Path(path)
		self.reason = reason
		super().__init__(f"Failed to write image to {self.path}: {reason}")


class InvalidDimensions(ImageCombineError, ValueError):
	def __init__(self, width: int, height: int) -> None:
		self.width = width
		self.height = height
		super().__init__(f"Dimensions must be positive, got {width}x{height}")


class DimensionMismatch(ImageCombineError, ValueError):
	def __init__(self, size_a: Tuple[int, int], size_b: Tuple[int, int]) -> None:
		self.size_a = size_a
		self.size_b = size_b
		super().__init__(
			"Cannot interleave images of different sizes: {}x{} vs {}x{}".format(*size_a, *size_b)
		)
