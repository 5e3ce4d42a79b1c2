from .config import NormalizerSettings, get_settings
from .exceptions import DecodeError, EncodeError, InvalidInput, InvalidRegion, NormalizationError
from .models import BoundingBox, NormalizationRequest, NormalizationResult, PixelBuffer
from .services.normalization import normalize, normalize_image
from .services.normalizer_service import NormalizerService

__all__ = [
    "BoundingBox",
    "DecodeError",
    "EncodeError",
    "InvalidInput",
    "InvalidRegion",
    "NormalizationError",
    "NormalizationRequest",
    "NormalizationResult",
    "NormalizerService",
    "NormalizerSettings",
    "PixelBuffer",
    "get_settings",
    "normalize",
    "normalize_image",
]
