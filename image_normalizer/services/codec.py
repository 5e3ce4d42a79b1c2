import base64
import binascii
import logging
import re
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..exceptions import DecodeError, EncodeError, InvalidInput
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

_DATA_URI = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)

SUPPORTED_TYPES = ("jpeg", "png", "bmp", "gif", "tiff", "webp")


def detect_file_type(data: bytes) -> str:
    header = data[:12]

    if header.startswith(b"\xff\xd8"):
        return "jpeg"

    if header.startswith(b"\x89PNG"):
        return "png"

    if header.startswith(b"BM"):
        return "bmp"

    if header.startswith((b"GIF87a", b"GIF89a")):
        return "gif"

    if header.startswith((b"II*\x00", b"MM\x00*")):
        return "tiff"

    if header.startswith(b"RIFF") and header[8:12] == b"WEBP":
        return "webp"

    return "unknown"


def _to_uint16(arr: np.ndarray, mode: str) -> np.ndarray:
    """32-bit int or float gray -> uint16. Float data in 0..1 is scaled to full range."""
    if mode == "F" and arr.size and arr.max() <= 1.0:
        arr = arr * 65535
    return np.clip(np.rint(arr), 0, 65535).astype(np.uint16)


def pil_to_cv(img_pil: Image.Image) -> np.ndarray:
    """PIL image -> OpenCV array (gray, BGR or BGRA)."""
    if img_pil.mode in ("1", "P", "CMYK", "YCbCr", "LAB", "HSV"):
        img_pil = img_pil.convert("RGBA" if "transparency" in img_pil.info else "RGB")
    elif img_pil.mode == "LA":
        img_pil = img_pil.convert("RGBA")
    elif img_pil.mode.startswith("I;16"):
        # keep 16-bit gray, native byte order
        return np.array(img_pil).astype(np.uint16)
    elif img_pil.mode in ("I", "F"):
        return _to_uint16(np.array(img_pil, dtype=np.float64), img_pil.mode)

    img = np.array(img_pil)

    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    return cv2.cvtColor(img, cv2.COLOR_RGB2BGR)


def decode_bytes(data: bytes, max_bytes: Optional[int] = None) -> PixelBuffer:
    """
    Decode encoded image bytes into a PixelBuffer.

    Raises DecodeError for empty, corrupt or unsupported data and
    InvalidInput when data exceeds max_bytes.
    """
    if not data:
        raise DecodeError("Image data is empty")

    if max_bytes is not None and len(data) > max_bytes:
        raise InvalidInput(f"Image exceeds {max_bytes} bytes limit ({len(data)} bytes)")

    file_type = detect_file_type(data)
    if file_type not in SUPPORTED_TYPES:
        raise DecodeError(f"Unsupported image format. Needs to be one of: {', '.join(SUPPORTED_TYPES)}")

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            arr = pil_to_cv(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError, ValueError, SyntaxError) as exc:
        raise DecodeError(f"Image {file_type} data cannot be decoded: {exc}") from exc

    buffer = PixelBuffer.from_array(arr)
    logger.debug("Decoded %s image %dx%d with %d channel(s)", file_type, buffer.width, buffer.height, buffer.channels)
    return buffer


def decode_base64(text: str) -> bytes:
    """Strict base64 -> bytes. Accepts a data URI prefix and surrounding whitespace."""
    if not isinstance(text, str):
        raise DecodeError("Base64 image data must be a string")

    payload = _DATA_URI.sub("", text.strip())
    payload = "".join(payload.split())

    if not payload:
        raise DecodeError("Base64 image data is empty")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Malformed base64 image data: {exc}") from exc


def read_stream(stream: BinaryIO) -> bytes:
    if not hasattr(stream, "read"):
        raise InvalidInput("stream must be a readable binary file-like object")

    try:
        data = stream.read()
    except (OSError, ValueError) as exc:
        raise DecodeError(f"Image stream cannot be read: {exc}") from exc

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError("Image stream must yield bytes")
    return bytes(data)


def read_file(path: Union[str, Path]) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DecodeError(f"Image file {path} cannot be read: {exc}") from exc


def encode_jpeg(buffer: PixelBuffer, quality: int = 95) -> bytes:
    """PixelBuffer -> JPEG bytes. JPEG has no alpha, so BGRA is flattened to BGR."""
    img = buffer.data
    if img.dtype != np.uint8:
        img = (img >> 8).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)

    try:
        ok, encoded = cv2.imencode(".jpg", img, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    except cv2.error as exc:
        raise EncodeError(f"Image cannot be encoded as JPEG: {exc}") from exc

    if not ok:
        raise EncodeError("Image cannot be encoded as JPEG")

    return encoded.tobytes()
