import logging
from typing import Optional

import cv2

from ..exceptions import InvalidInput, InvalidRegion
from ..models.bounding_box import BoundingBox
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def extract_region(image: PixelBuffer, box: Optional[BoundingBox]) -> PixelBuffer:
    """Crop the original (not binarized) image to box."""
    if box is None:
        raise InvalidRegion("No foreground content found in image")

    clamped = box.clamp_to(image.width, image.height)
    if clamped is None or clamped.width < 1 or clamped.height < 1:
        raise InvalidRegion(f"Bounding box {box} lies outside {image.width}x{image.height} image")

    rows, cols = clamped.as_slices()
    return PixelBuffer.from_array(image.data[rows, cols])


def scaled_width(width: int, height: int, target_height: int) -> int:
    if width < 1 or height < 1:
        raise InvalidRegion(f"Cannot scale degenerate region {width}x{height}")
    return max(1, int(round(target_height * width / height)))


def resize_to_height(region: PixelBuffer, target_height: int) -> PixelBuffer:
    """Resize keeping the region's own aspect ratio, linear interpolation."""
    if target_height <= 0:
        raise InvalidInput(f"target_height must be positive, got {target_height}")

    target_width = scaled_width(region.width, region.height, target_height)
    resized = cv2.resize(region.data, (target_width, target_height), interpolation=cv2.INTER_LINEAR)

    logger.debug("Resized region %dx%d -> %dx%d", region.width, region.height, target_width, target_height)
    return PixelBuffer.from_array(resized)
