import base64
from io import BytesIO

import pytest

from image_normalizer.config import NormalizerSettings
from image_normalizer.models.request import NormalizationRequest
from image_normalizer.services.normalizer_service import NormalizerService
from .helpers.image_variants import centered_square, decode_jpeg, huge_png_header, to_base64_png, to_png_bytes, white_image


@pytest.fixture
def service():
    return NormalizerService(NormalizerSettings())


def test_success_envelope(service):
    request = NormalizationRequest.from_base64(to_base64_png(centered_square(300, 100)), target_height=50, finish_size=100)

    result = service.process(request)

    assert result["success"] is True
    assert (result["width"], result["height"]) == (100, 100)
    assert result["bounding_box"]["left"] == 100
    assert result["bounding_box"]["width"] == 100
    assert result["padding"] == {"x": 25, "y": 25}
    assert decode_jpeg(base64.b64decode(result["image_base64"])).shape == (100, 100, 3)


@pytest.mark.parametrize("request_factory,error_code", [
    (lambda: NormalizationRequest.from_base64(to_base64_png(white_image(10, 10)), 50, 100), "INVALID_REGION"),
    (lambda: NormalizationRequest.from_base64("not base64!!", 50, 100), "DECODE_ERROR"),
    (lambda: NormalizationRequest(target_height=50, finish_size=100), "INVALID_INPUT"),
    (lambda: NormalizationRequest.from_stream(BytesIO(b"garbage"), 50, 100), "DECODE_ERROR"),
    (lambda: NormalizationRequest.from_stream(BytesIO(huge_png_header()), 50, 100), "DECODE_ERROR"),
])
def test_error_envelopes(service, request_factory, error_code):
    result = service.process(request_factory())

    assert result["success"] is False
    assert result["error_code"] == error_code
    assert result["error_message"]


def test_size_limit_is_invalid_input():
    service = NormalizerService(NormalizerSettings(max_input_bytes=16))
    request = NormalizationRequest.from_stream(BytesIO(to_png_bytes(centered_square(50, 10))), 20, 40)

    assert service.process(request)["error_code"] == "INVALID_INPUT"
