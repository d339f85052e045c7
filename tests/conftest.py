from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from api.services.image_buffer import ImageBuffer

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def random_buffer(width, height, seed=0):
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return ImageBuffer.from_array(arr)


def write_image(path: Path, width: int, height: int, rgba=RED, fmt="PNG", **save_kwargs) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGBA", (width, height), rgba)
    if fmt == "JPEG":
        img = img.convert("RGB")
    img.save(path, format=fmt, **save_kwargs)
    return path


@pytest.fixture
def red_2x2():
    return ImageBuffer.blank(2, 2, RED)


@pytest.fixture
def blue_2x2():
    return ImageBuffer.blank(2, 2, BLUE)
