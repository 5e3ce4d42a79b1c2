import numpy as np
import pytest

from image_normalizer.exceptions import InvalidInput, InvalidRegion
from image_normalizer.models.bounding_box import BoundingBox
from image_normalizer.models.pixel_buffer import PixelBuffer
from image_normalizer.services.region import extract_region, resize_to_height, scaled_width


@pytest.fixture
def gradient():
    img = np.arange(20 * 30 * 3, dtype=np.uint32).reshape(20, 30, 3) % 256
    return PixelBuffer.from_array(img.astype(np.uint8))


def test_extract_region_copies_exact_pixels(gradient):
    box = BoundingBox(top=2, left=5, bottom=11, right=24)
    region = extract_region(gradient, box)

    assert region.size == (20, 10)
    assert np.array_equal(region.data, gradient.data[2:12, 5:25])


def test_extract_region_does_not_alias_source(gradient):
    region = extract_region(gradient, BoundingBox(top=0, left=0, bottom=3, right=3))

    assert not np.shares_memory(region.data, gradient.data)


def test_extract_region_clamps_to_image(gradient):
    region = extract_region(gradient, BoundingBox(top=15, left=25, bottom=40, right=40))

    assert region.size == (5, 5)


def test_extract_empty_region_fails(gradient):
    with pytest.raises(InvalidRegion):
        extract_region(gradient, None)


def test_extract_region_outside_image_fails(gradient):
    with pytest.raises(InvalidRegion):
        extract_region(gradient, BoundingBox(top=0, left=30, bottom=5, right=35))


@pytest.mark.parametrize("width,height,target,expected", [
    (100, 100, 50, 50),
    (200, 100, 50, 100),
    (100, 300, 60, 20),
    (3, 7, 10, 4),
    (1, 100, 10, 1),
])
def test_scaled_width(width, height, target, expected):
    assert scaled_width(width, height, target) == expected


def test_scaled_width_rejects_degenerate_region():
    with pytest.raises(InvalidRegion):
        scaled_width(10, 0, 50)


def test_resize_keeps_region_aspect_ratio():
    region = PixelBuffer.from_array(np.zeros((37, 91, 3), dtype=np.uint8))
    resized = resize_to_height(region, 64)

    assert resized.height == 64
    assert abs(resized.width - 64 * 91 / 37) <= 1
    assert resized.channels == 3


def test_resize_rejects_non_positive_height():
    region = PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))

    with pytest.raises(InvalidInput):
        resize_to_height(region, 0)
