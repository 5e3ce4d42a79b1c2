import base64
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Tuple, Union

from .bounding_box import BoundingBox
from .pixel_buffer import PixelBuffer
from ..services.codec import encode_jpeg


@dataclass(frozen=True)
class NormalizationResult:
    image: PixelBuffer
    bounding_box: BoundingBox
    resized_size: Tuple[int, int]
    padding: Tuple[int, int]
    jpeg_quality: int = 95

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def to_jpeg_bytes(self) -> bytes:
        return encode_jpeg(self.image, quality=self.jpeg_quality)

    def to_base64(self) -> str:
        return base64.b64encode(self.to_jpeg_bytes()).decode("ascii")

    def to_stream(self) -> BytesIO:
        """JPEG bytes in a fresh stream positioned at offset 0."""
        stream = BytesIO(self.to_jpeg_bytes())
        stream.seek(0)
        return stream

    def save(self, directory: Union[str, Path], file_name: str) -> Path:
        """Write the JPEG to directory/file_name, creating the directory if needed."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / file_name
        target.write_bytes(self.to_jpeg_bytes())
        return target
