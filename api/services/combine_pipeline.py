from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple, Union

from api.services.codec import decode, encode
from api.services.image_buffer import ImageBuffer
from api.services.image_utils import aspect_fit_size, choose_common_size
from api.services.interleave import interleave
from api.services.normalization import Resample, ResizeMode, normalize

logger = logging.getLogger(__name__)

DEFAULT_BOX: Tuple[int, int] = (400, 300)


class SizePolicy(str, Enum):
	# min of the natural sizes
	RAW_MINIMUM = "raw_minimum"
	# AspectFit both into a fixed box first, then min of the fitted sizes
	FIXED_BOX_MINIMUM = "fixed_box_minimum"


@dataclass
class CombineResult:
	image: ImageBuffer
	common_size: Tuple[int, int]
	policy: SizePolicy


def common_size(
	size_a: Tuple[int, int],
	size_b: Tuple[int, int],
	policy: SizePolicy = SizePolicy.RAW_MINIMUM,
	box: Tuple[int, int] = DEFAULT_BOX,
) -> Tuple[int, int]:
	policy = SizePolicy(policy)
	if policy is SizePolicy.FIXED_BOX_MINIMUM:
		fitted = [aspect_fit_size(w, h, box[0], box[1]) for (w, h) in (size_a, size_b)]
		return choose_common_size(fitted)
	return choose_common_size([size_a, size_b])


def combine(
	a: ImageBuffer,
	b: ImageBuffer,
	policy: SizePolicy = SizePolicy.RAW_MINIMUM,
	box: Tuple[int, int] = DEFAULT_BOX,
	resample: Resample = Resample.BILINEAR,
) -> CombineResult:
	"""
	Bring both buffers to the common size for `policy` and interleave them.
	Both sides are always stretched to exactly the same size.
	"""
	policy = SizePolicy(policy)
	target_w, target_h = common_size(a.size, b.size, policy, box)
	logger.info("Combining %dx%d and %dx%d at %dx%d (%s)",
		a.width, a.height, b.width, b.height, target_w, target_h, policy.value)
	a_norm = normalize(a, target_w, target_h, ResizeMode.STRETCH, resample)
	b_norm = normalize(b, target_w, target_h, ResizeMode.STRETCH, resample)
	return CombineResult(image=interleave(a_norm, b_norm), common_size=(target_w, target_h), policy=policy)


def validate_output_name(filename: Union[str, Path]) -> str:
	"""Reject names that would not end up as a file inside the output folder."""
	p = Path(filename)
	name = p.name
	if name in ("", ".", "..") or p.is_absolute() or ".." in p.parts:
		raise ValueError(f"Invalid output filename: {str(filename)!r}")
	return name


def resolve_output_path(filename: Union[str, Path], output_dir: Union[str, Path]) -> Path:
	validate_output_name(filename)
	out = Path(output_dir) / filename
	if out.suffix.lower() != ".png":
		out = out.with_name(out.name + ".png")
	return out


def combine_files(
	path_a: Union[str, Path],
	path_b: Union[str, Path],
	output_path: Union[str, Path],
	policy: SizePolicy = SizePolicy.RAW_MINIMUM,
	box: Tuple[int, int] = DEFAULT_BOX,
	resample: Resample = Resample.BILINEAR,
) -> Path:
	a = decode(path_a)
	b = decode(path_b)
	result = combine(a, b, policy=policy, box=box, resample=resample)
	return encode(result.image, output_path)
