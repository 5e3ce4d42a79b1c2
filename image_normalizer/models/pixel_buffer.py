from dataclasses import dataclass
from typing import Tuple

import numpy as np


_BIT_DEPTHS = {
    np.dtype(np.uint8): 8,
    np.dtype(np.uint16): 16,
}


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Decoded pixels owned by a single pipeline stage.

    data is HxW (gray) or HxWxC with C in (3, 4), BGR(A) channel order,
    and is always a read-only array so later stages cannot write into it.
    """

    data: np.ndarray

    def __post_init__(self):
        arr = self.data
        if not isinstance(arr, np.ndarray):
            raise TypeError("PixelBuffer data must be a numpy array")
        if arr.dtype not in _BIT_DEPTHS:
            raise ValueError(f"Unsupported pixel dtype {arr.dtype}")
        if arr.ndim == 3 and arr.shape[2] == 1:
            arr = arr[:, :, 0]
            object.__setattr__(self, "data", arr)
        if arr.ndim not in (2, 3) or (arr.ndim == 3 and arr.shape[2] not in (3, 4)):
            raise ValueError(f"Unsupported pixel layout {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError("PixelBuffer must be at least 1x1")
        if arr.flags.writeable:
            raise ValueError("PixelBuffer data must be read-only, use PixelBuffer.from_array")

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Copy array into a new read-only buffer."""
        data = np.array(array, copy=True, order="C")
        data.setflags(write=False)
        return cls(data)

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        return 1 if self.data.ndim == 2 else int(self.data.shape[2])

    @property
    def bit_depth(self) -> int:
        return _BIT_DEPTHS[self.data.dtype]

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @property
    def max_value(self) -> int:
        return int(np.iinfo(self.data.dtype).max)

    @property
    def size(self) -> Tuple[int, int]:
        # (width, height), same order as PIL
        return self.width, self.height
