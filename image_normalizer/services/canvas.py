from typing import Tuple

import numpy as np

from ..exceptions import InvalidInput
from ..models.pixel_buffer import PixelBuffer


def compute_padding(finish_size: int, width: int, height: int) -> Tuple[int, int]:
    """Left/top offsets that center a width x height region, never negative."""
    padding_x = max(0, (finish_size - width) // 2)
    padding_y = max(0, (finish_size - height) // 2)
    return padding_x, padding_y


def white_canvas(finish_size: int, channels: int, dtype, white: int) -> np.ndarray:
    shape = (finish_size, finish_size) if channels == 1 else (finish_size, finish_size, channels)
    return np.full(shape, white, dtype=dtype)


def compose_canvas(region: PixelBuffer, finish_size: int) -> Tuple[PixelBuffer, Tuple[int, int]]:
    """
    Center region on a finish_size x finish_size white square.

    A region larger than the canvas is placed at offset 0 on that axis and
    its far edge is clipped.
    """
    if finish_size <= 0:
        raise InvalidInput(f"finish_size must be positive, got {finish_size}")

    canvas = white_canvas(finish_size, region.channels, region.dtype, region.max_value)
    padding_x, padding_y = compute_padding(finish_size, region.width, region.height)

    copy_w = min(region.width, finish_size - padding_x)
    copy_h = min(region.height, finish_size - padding_y)

    canvas[padding_y:padding_y + copy_h, padding_x:padding_x + copy_w] = region.data[:copy_h, :copy_w]

    return PixelBuffer.from_array(canvas), (padding_x, padding_y)
