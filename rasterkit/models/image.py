from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union
import numpy as np

from ..exceptions import ConstructionError
from .annotations import ImageAnnotations

# Integer kinds whose full range maps onto [0, 1] in the color view.
_UNIT_RANGE_KINDS = (np.uint8, np.uint16)


def validate_buffer(buffer) -> np.ndarray:
    """
    Returns a private, read-only copy of `buffer` after checking it is a
    (H, W) or (H, W, C) matrix with H, W, C >= 1.
    """
    arr = np.array(buffer, copy=True)
    if arr.ndim < 2 or arr.ndim > 3 or min(arr.shape) < 1:
        raise ConstructionError(arr.shape)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Image:
    """
    A rectangular raster image plus the data derived from it.

    Core fields are fixed at construction: the buffer is copied and made
    read-only, height/width come from its first two dimensions.
    `annotations` is the only mutable part.
    Image() with no buffer is the empty placeholder (height = width = 0).
    """
    buffer: np.ndarray | None = field(default=None, repr=False)  # (H, W) or (H, W, C)
    name: str = ""
    height: int = field(init=False, default=0)
    width: int = field(init=False, default=0)
    annotations: ImageAnnotations = field(default_factory=ImageAnnotations, repr=False)

    def __post_init__(self):
        if self.buffer is None:
            arr = np.empty((0, 0))
            arr.setflags(write=False)
        else:
            arr = validate_buffer(self.buffer)
        object.__setattr__(self, "buffer", arr)
        object.__setattr__(self, "height", int(arr.shape[0]))
        object.__setattr__(self, "width", int(arr.shape[1]))

    @classmethod
    def from_buffer(cls, buffer, name: str = "") -> "Image":
        return cls(buffer=buffer, name=name)

    # ─── Geometry ──────────────────────────────────────────────────────
    def is_empty(self) -> bool:
        return self.height == 0

    def size(self) -> Union[Tuple[int, int], int]:
        """(height, width), or 0 for the empty image."""
        if self.is_empty():
            return 0
        return self.height, self.width

    def area(self) -> int:
        return self.height * self.width

    def is_rgb(self) -> bool:
        return self.buffer.ndim == 3 and self.buffer.shape[2] == 3

    # ─── Color view ────────────────────────────────────────────────────
    def color(self) -> np.ndarray:
        """
        Every pixel with its content. 8/16-bit unsigned samples are rescaled
        to float64 in [0, 1]; any other sample kind is returned as stored.
        """
        if self.buffer.dtype.type in _UNIT_RANGE_KINDS:
            return self.buffer.astype(np.float64) / np.iinfo(self.buffer.dtype).max
        return self.buffer
