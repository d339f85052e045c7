"""
Combine two images into one by interleaving their columns.

    image-combiner images/image1.png images/image2.png output.png

Both inputs are brought to a common size, then every even column of the
first image takes the colour of the second. The result is written as PNG
under --output-dir.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from api import settings
from api.services.combine_pipeline import SizePolicy, combine_files, resolve_output_path
from api.services.errors import ImageCombineError
from api.services.image_utils import parse_size
from api.services.normalization import Resample


def _size_arg(text: str):
    try:
        return parse_size(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interleave the columns of two images into a new PNG")
    parser.add_argument("image1", help="First image; odd columns and all alpha come from it")
    parser.add_argument("image2", help="Second image; its colour fills the even columns")
    parser.add_argument("output", help="Output filename, resolved under --output-dir (.png appended if missing)")
    parser.add_argument("--output-dir", default=str(settings.OUTPUT_DIR), help="Folder for the combined image")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in SizePolicy],
        default=settings.SIZE_POLICY.value,
        help="How the common size is chosen",
    )
    parser.add_argument(
        "--box",
        type=_size_arg,
        default=settings.FIXED_BOX,
        help="Fitting box for the fixed_box_minimum policy, e.g. 400x300",
    )
    parser.add_argument(
        "--resample",
        choices=[r.value for r in Resample],
        default=settings.RESAMPLE.value,
        help="Resampling filter used when resizing",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATEFMT,
    )

    try:
        out_path = resolve_output_path(args.output, args.output_dir)
    except ValueError as e:
        parser.error(str(e))
    try:
        saved = combine_files(
            args.image1,
            args.image2,
            out_path,
            policy=SizePolicy(args.policy),
            box=args.box,
            resample=Resample(args.resample),
        )
    except ImageCombineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Saved: {saved}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
