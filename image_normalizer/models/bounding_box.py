from dataclasses import dataclass
from typing import Optional, Tuple

from ..exceptions import InvalidRegion


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel rectangle: right and bottom are the last covered column and row."""

    top: int
    left: int
    bottom: int
    right: int

    def __post_init__(self):
        if min(self.top, self.left, self.bottom, self.right) < 0:
            raise InvalidRegion(f"Negative bounding box coordinates: {self}")
        if self.left > self.right or self.top > self.bottom:
            raise InvalidRegion(f"Degenerate bounding box: {self}")

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    def as_slices(self) -> Tuple[slice, slice]:
        return slice(self.top, self.bottom + 1), slice(self.left, self.right + 1)

    def as_xywh(self) -> Tuple[int, int, int, int]:
        return self.left, self.top, self.width, self.height

    def clamp_to(self, width: int, height: int) -> Optional["BoundingBox"]:
        """
        Clip the box to a width x height image.
        Returns None when nothing of the box lies inside the image.
        """
        if self.left >= width or self.top >= height:
            return None
        return BoundingBox(
            top=self.top,
            left=self.left,
            bottom=min(self.bottom, height - 1),
            right=min(self.right, width - 1),
        )

    def to_dict(self) -> dict:
        return {
            "top": self.top,
            "left": self.left,
            "bottom": self.bottom,
            "right": self.right,
            "width": self.width,
            "height": self.height,
        }
