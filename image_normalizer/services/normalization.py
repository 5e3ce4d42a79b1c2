import logging
from typing import Optional, Union

import cv2
import numpy as np

from ..config import NormalizerSettings, get_settings
from ..models.pixel_buffer import PixelBuffer
from ..models.request import NormalizationRequest, check_positive
from ..models.result import NormalizationResult
from .binarization import binarize
from .bounding_box import find_bounding_box
from .canvas import compose_canvas
from .codec import decode_base64, decode_bytes, read_file, read_stream
from .region import extract_region, resize_to_height, scaled_width

logger = logging.getLogger(__name__)


def load_source(request: NormalizationRequest, settings: NormalizerSettings) -> PixelBuffer:
    """Decode the single image source of a validated request."""
    kind = request.source_kind

    if kind == "file":
        data = read_file(request.resolved_path)
    elif kind == "base64":
        data = decode_base64(request.base64_data)
    else:
        data = read_stream(request.stream)

    return decode_bytes(data, max_bytes=settings.max_input_bytes)


def pre_resize_to_height(image: PixelBuffer, target_height: int) -> PixelBuffer:
    target_width = scaled_width(image.width, image.height, target_height)
    resized = cv2.resize(image.data, (target_width, target_height), interpolation=cv2.INTER_LINEAR)
    return PixelBuffer.from_array(resized)


def normalize_image(
    image: Union[PixelBuffer, np.ndarray],
    target_height: int,
    finish_size: int,
    settings: Optional[NormalizerSettings] = None,
    pre_resize: bool = False,
) -> NormalizationResult:
    """
    Crop image to its dark content, scale it to target_height and center
    it on a white finish_size square.
    """
    settings = settings or get_settings()

    if isinstance(image, np.ndarray):
        image = PixelBuffer.from_array(image)

    check_positive("target_height", target_height)
    check_positive("finish_size", finish_size)

    if pre_resize:
        image = pre_resize_to_height(image, target_height)

    mask = binarize(image, threshold=settings.threshold, max_value=settings.max_value)

    box = find_bounding_box(
        mask,
        workers=settings.scan_workers,
        min_rows_per_partition=settings.min_rows_per_partition,
    )

    # original pixels, not the mask
    region = extract_region(image, box)
    resized = resize_to_height(region, target_height)
    canvas, padding = compose_canvas(resized, finish_size)

    logger.debug(
        "Normalized %dx%d image: box=%s resized=%dx%d padding=%s canvas=%d",
        image.width, image.height, box.as_xywh(), resized.width, resized.height, padding, finish_size,
    )

    return NormalizationResult(
        image=canvas,
        bounding_box=box,
        resized_size=resized.size,
        padding=padding,
        jpeg_quality=settings.jpeg_quality,
    )


def normalize(request: NormalizationRequest, settings: Optional[NormalizerSettings] = None) -> NormalizationResult:
    """Main entry point: decode the request's source and normalize it."""
    settings = settings or get_settings()
    request.validate()

    image = load_source(request, settings)

    return normalize_image(
        image,
        target_height=request.target_height,
        finish_size=request.finish_size,
        settings=settings,
        pre_resize=request.pre_resize,
    )
