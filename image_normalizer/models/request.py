from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..exceptions import InvalidInput


@dataclass(frozen=True)
class NormalizationRequest:
    """
    One image to normalize, given by exactly one source:

    - file_path (+ optional file_name, joined onto file_path when present)
    - base64_data
    - stream (any binary file-like object)
    """

    target_height: int
    finish_size: int
    file_path: Optional[Union[str, Path]] = None
    file_name: Optional[str] = None
    base64_data: Optional[str] = None
    stream: Optional[BinaryIO] = None
    pre_resize: bool = False

    @classmethod
    def from_file(cls, file_path, target_height: int, finish_size: int, file_name: Optional[str] = None, **kwargs):
        return cls(target_height=target_height, finish_size=finish_size, file_path=file_path, file_name=file_name, **kwargs)

    @classmethod
    def from_base64(cls, base64_data: str, target_height: int, finish_size: int, **kwargs):
        return cls(target_height=target_height, finish_size=finish_size, base64_data=base64_data, **kwargs)

    @classmethod
    def from_stream(cls, stream: BinaryIO, target_height: int, finish_size: int, **kwargs):
        return cls(target_height=target_height, finish_size=finish_size, stream=stream, **kwargs)

    @property
    def source_kind(self) -> str:
        self.validate()
        if self.file_path is not None:
            return "file"
        if self.base64_data is not None:
            return "base64"
        return "stream"

    @property
    def resolved_path(self) -> Optional[Path]:
        if self.file_path is None:
            return None
        path = Path(self.file_path)
        return path / self.file_name if self.file_name else path

    def validate(self) -> None:
        sources = [
            name for name, value in (
                ("file_path", self.file_path),
                ("base64_data", self.base64_data),
                ("stream", self.stream),
            )
            if value is not None
        ]

        if not sources:
            raise InvalidInput("No image source supplied: need file_path, base64_data or stream")

        if len(sources) > 1:
            raise InvalidInput(f"Exactly one image source allowed, got: {', '.join(sources)}")

        if self.file_name is not None and self.file_path is None:
            raise InvalidInput("file_name given without file_path")

        check_positive("target_height", self.target_height)
        check_positive("finish_size", self.finish_size)


def check_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInput(f"{name} must be a positive integer, got {value!r}")
