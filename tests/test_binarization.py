import numpy as np
import pytest

from image_normalizer.config import NormalizerSettings
from image_normalizer.models.pixel_buffer import PixelBuffer
from image_normalizer.services.binarization import binarize, to_grayscale
from .helpers.image_variants import centered_square, white_image


def test_mask_is_strictly_binary():
    img = np.random.default_rng(3).integers(0, 255, (40, 60, 3), dtype=np.uint8, endpoint=True)
    mask = binarize(PixelBuffer.from_array(img))

    assert mask.channels == 1
    assert set(np.unique(mask.data)) <= {0, 255}


def test_threshold_boundary_counts_as_background():
    gray = PixelBuffer.from_array(np.array([[0, 199, 200, 255]], dtype=np.uint8))
    mask = binarize(gray, threshold=200)

    assert mask.data.tolist() == [[0, 0, 255, 255]]


def test_threshold_is_configurable():
    gray = PixelBuffer.from_array(np.array([[220, 254, 255]], dtype=np.uint8))

    assert binarize(gray, threshold=200).data.tolist() == [[255, 255, 255]]
    assert binarize(gray, threshold=255).data.tolist() == [[0, 0, 255]]


@pytest.mark.parametrize("channels", [1, 3, 4])
def test_grayscale_handles_channel_counts(channels):
    img = white_image(20, 10, channels)
    gray = to_grayscale(PixelBuffer.from_array(img))

    assert gray.shape == (10, 20)
    assert (gray == 255).all()


def test_input_buffer_is_not_modified():
    img = centered_square(60, 20)
    buffer = PixelBuffer.from_array(img)

    binarize(buffer)

    assert np.array_equal(buffer.data, img)
    assert buffer.channels == 3


def test_sixteen_bit_input():
    img = np.full((5, 5), 65535, dtype=np.uint16)
    img[2, 2] = 0
    mask = binarize(PixelBuffer.from_array(img))

    assert mask.data[2, 2] == 0
    assert mask.data[0, 0] == 255


def test_default_threshold_follows_settings():
    gray = PixelBuffer.from_array(np.array([[199, 200]], dtype=np.uint8))

    assert NormalizerSettings().threshold == 200
    assert binarize(gray).data.tolist() == [[0, NormalizerSettings().max_value]]
