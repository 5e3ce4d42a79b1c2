import logging
from typing import Optional

from ..config import NormalizerSettings, get_settings
from ..exceptions import NormalizationError
from ..models.request import NormalizationRequest
from .normalization import normalize

logger = logging.getLogger(__name__)


class NormalizerService:
    """
    Request in, envelope dict out. Errors come back as
    {"success": False, "error_code": ..., "error_message": ...}
    instead of being raised.
    """

    def __init__(self, settings: Optional[NormalizerSettings] = None):
        self.settings = settings or get_settings()

    def process(self, request: NormalizationRequest) -> dict:
        try:
            result = normalize(request, settings=self.settings)
            image_base64 = result.to_base64()

        except NormalizationError as e:
            return self._failure(e)

        return {
            "success": True,
            "image_base64": image_base64,
            "width": result.width,
            "height": result.height,
            "bounding_box": result.bounding_box.to_dict(),
            "padding": {"x": result.padding[0], "y": result.padding[1]},
        }

    def _failure(self, error) -> dict:
        logger.info("Normalization failed with %s: %s", error.error_code, error)
        return {
            "success": False,
            "error_code": error.error_code,
            "error_message": str(error),
        }
