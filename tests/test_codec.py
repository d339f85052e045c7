import numpy as np
import pytest
from PIL import Image

from api.services.codec import decode, encode
from api.services.errors import DecodeError, EncodeError
from conftest import random_buffer, write_image


def test_png_preserves_rgba_exactly(tmp_path):
    buf = random_buffer(13, 9)
    path = encode(buf, tmp_path / "out.png")
    assert np.array_equal(decode(path).pixels, buf.pixels)


def test_rgb_source_gets_opaque_alpha(tmp_path):
    path = tmp_path / "rgb.png"
    Image.new("RGB", (3, 2), (10, 20, 30)).save(path)
    buf = decode(path)
    assert buf.size == (3, 2)
    assert buf.pixel(2, 1) == (10, 20, 30, 255)


def test_exif_orientation_is_applied(tmp_path):
    exif = Image.Exif()
    exif[0x0112] = 6
    path = write_image(tmp_path / "rotated.jpg", 4, 2, fmt="JPEG", exif=exif)
    assert decode(path).size == (2, 4)
    assert decode(path, respect_exif=False).size == (4, 2)


def test_missing_file(tmp_path):
    missing = tmp_path / "nope.png"
    with pytest.raises(DecodeError) as exc:
        decode(missing)
    assert exc.value.path == missing
    assert str(missing) in str(exc.value)


def test_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("definitely not a png")
    with pytest.raises(DecodeError):
        decode(path)


def test_truncated_image(tmp_path):
    path = encode(random_buffer(64, 64), tmp_path / "full.png")
    data = path.read_bytes()
    cut = tmp_path / "cut.png"
    cut.write_bytes(data[: len(data) // 2])
    with pytest.raises(DecodeError):
        decode(cut)


def test_encode_always_writes_png(tmp_path):
    path = encode(random_buffer(2, 2), tmp_path / "sub" / "out.jpg")
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.mode == "RGBA"


def test_encode_into_unwritable_location(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    target = blocker / "out.png"
    with pytest.raises(EncodeError) as exc:
        encode(random_buffer(2, 2), target)
    assert exc.value.path == target


def test_16bit_grayscale_keeps_high_byte(tmp_path):
    path = tmp_path / "deep.png"
    Image.fromarray(np.full((3, 4), 30000, dtype=np.uint16)).save(path)
    buf = decode(path)
    assert buf.size == (4, 3)
    assert buf.pixel(0, 0) == (117, 117, 117, 255)
    assert buf.pixel(3, 2) == (117, 117, 117, 255)


def test_float_raster_scaled_from_unit_range(tmp_path):
    path = tmp_path / "float.tif"
    Image.fromarray(np.full((2, 2), 0.5, dtype=np.float32)).save(path)
    assert decode(path).pixel(1, 1) == (128, 128, 128, 255)
