from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from api.services.errors import DecodeError, EncodeError
from api.services.image_buffer import ImageBuffer
from api.services.image_utils import apply_exif_orientation

logger = logging.getLogger(__name__)

# Integer modes holding 16-bit samples
_WIDE_INT_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


def _to_8bit(img: Image.Image) -> Image.Image:
	"""Reduce wide integer and float rasters to 8-bit grayscale; other modes pass through."""
	if img.mode in _WIDE_INT_MODES:
		# keep the high byte of each 16-bit sample
		arr = np.clip(np.asarray(img), 0, 0xFFFF).astype(np.uint16) >> 8
		return Image.fromarray(arr.astype(np.uint8))
	if img.mode == "F":
		# float samples are taken as [0,1]
		arr = np.clip(np.nan_to_num(np.asarray(img)), 0.0, 1.0)
		return Image.fromarray((arr * 255.0 + 0.5).astype(np.uint8))
	return img


def decode(path: Union[str, Path], respect_exif: bool = True) -> ImageBuffer:
	"""
	Read any Pillow-supported file into an RGBA ImageBuffer.
	The whole raster is loaded before returning; the file handle is closed.
	"""
	path = Path(path)
	try:
		with Image.open(path) as img:
			img.load()
			if respect_exif:
				img = apply_exif_orientation(img, img.getexif())
			img = _to_8bit(img)
			if img.mode != "RGBA":
				img = img.convert("RGBA")
			arr = np.array(img, dtype=np.uint8)
	except FileNotFoundError:
		raise DecodeError(path, "file not found") from None
	except UnidentifiedImageError:
		raise DecodeError(path, "unsupported or unrecognized image format") from None
	except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
		raise DecodeError(path, str(e)) from e
	logger.debug("Decoded %s (%dx%d)", path, arr.shape[1], arr.shape[0])
	return ImageBuffer.from_array(arr)


def encode(buffer: ImageBuffer, path: Union[str, Path]) -> Path:
	"""Write `buffer` as PNG to `path`, creating parent folders."""
	path = Path(path)
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		Image.fromarray(buffer.pixels).save(path, format="PNG", optimize=True)
	except OSError as e:
		raise EncodeError(path, str(e)) from e
	logger.debug("Encoded %dx%d image to %s", buffer.width, buffer.height, path)
	return path
