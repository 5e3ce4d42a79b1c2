from .bounding_box import BoundingBox
from .pixel_buffer import PixelBuffer
from .request import NormalizationRequest
from .result import NormalizationResult

__all__ = ["BoundingBox", "PixelBuffer", "NormalizationRequest", "NormalizationResult"]
