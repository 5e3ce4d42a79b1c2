import cv2
import numpy as np

from ..config import NormalizerSettings
from ..models.pixel_buffer import PixelBuffer


def to_grayscale(image: PixelBuffer) -> np.ndarray:
    """Luma-weighted single channel 8-bit copy of the image."""
    img = image.data
    if img.dtype != np.uint8:
        img = (img >> 8).astype(np.uint8)

    if img.ndim == 2:
        return img.copy()
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def binarize(
    image: PixelBuffer,
    threshold: int = NormalizerSettings.threshold,
    max_value: int = NormalizerSettings.max_value,
) -> PixelBuffer:
    """
    Fixed threshold mask: gray >= threshold -> max_value (paper),
    gray < threshold -> 0 (content).
    """
    gray = to_grayscale(image)
    # THRESH_BINARY keeps values strictly greater than thresh
    _, mask = cv2.threshold(gray, threshold - 1, max_value, cv2.THRESH_BINARY)
    return PixelBuffer.from_array(mask)
