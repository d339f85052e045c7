from pathlib import Path

import numpy as np
import pytest

from api.services.codec import decode
from api.services.combine_pipeline import (
    SizePolicy,
    combine,
    combine_files,
    common_size,
    resolve_output_path,
)
from api.services.image_buffer import ImageBuffer
from api.services.normalization import Resample
from conftest import BLUE, RED, write_image


def test_raw_minimum_takes_smallest_axis_of_each():
    assert common_size((300, 200), (250, 400)) == (250, 200)


def test_fixed_box_minimum_differs_from_raw():
    # 800x400 -> 400x200, 300x600 -> 150x300
    fixed = common_size((800, 400), (300, 600), SizePolicy.FIXED_BOX_MINIMUM, box=(400, 300))
    raw = common_size((800, 400), (300, 600), SizePolicy.RAW_MINIMUM)
    assert fixed == (150, 200)
    assert raw == (300, 400)


def test_fixed_box_minimum_with_square_source():
    # square -> 300x300 under the height tie-break
    assert common_size((100, 100), (1000, 500), "fixed_box_minimum") == (300, 200)


def test_combine_normalizes_both_then_interleaves():
    a = ImageBuffer.blank(4, 3, RED)
    b = ImageBuffer.blank(6, 2, BLUE)
    result = combine(a, b, resample=Resample.NEAREST)
    assert result.common_size == (4, 2)
    assert result.policy is SizePolicy.RAW_MINIMUM
    px = result.image.pixels
    assert np.all(px[:, 0::2] == np.array([0, 0, 255, 255], dtype=np.uint8))
    assert np.all(px[:, 1::2] == np.array(RED, dtype=np.uint8))


def test_combine_fixed_box_output_size():
    a = ImageBuffer.blank(800, 400, RED)
    b = ImageBuffer.blank(300, 600, BLUE)
    result = combine(a, b, policy=SizePolicy.FIXED_BOX_MINIMUM, box=(400, 300))
    assert result.image.size == (150, 200)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("out", "out.png"),
        ("out.png", "out.png"),
        ("out.PNG", "out.PNG"),
        ("out.jpg", "out.jpg.png"),
        ("nested/out", "nested/out.png"),
    ],
)
def test_resolve_output_path(name, expected):
    assert resolve_output_path(name, "images") == Path("images") / expected


def test_combine_files_writes_png(tmp_path):
    p1 = write_image(tmp_path / "one.png", 10, 8, RED)
    p2 = write_image(tmp_path / "two.png", 6, 12, BLUE)
    out = combine_files(p1, p2, tmp_path / "images" / "out.png", resample=Resample.NEAREST)
    assert out.is_file()
    buf = decode(out)
    assert buf.size == (6, 8)
    assert buf.pixel(0, 0) == (0, 0, 255, 255)
    assert buf.pixel(1, 0) == RED


@pytest.mark.parametrize("name", ["", ".", "..", "../escape", "nested/..", "/abs/out.png"])
def test_resolve_output_path_rejects_names_outside_dir(name):
    with pytest.raises(ValueError):
        resolve_output_path(name, "images/job1")


def test_combine_reports_policy_as_enum():
    a = ImageBuffer.blank(4, 4, RED)
    b = ImageBuffer.blank(4, 4, BLUE)
    assert combine(a, b, policy="fixed_box_minimum").policy is SizePolicy.FIXED_BOX_MINIMUM
