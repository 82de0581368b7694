from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from .image import Image


@runtime_checkable
class SupportsCorners(Protocol):
    """Anything that can describe an axis-aligned rectangle in pixel space."""

    def get_corners(self) -> Tuple[int, int, int, int]:
        ...


@dataclass(frozen=True)
class Patch:
    """
    Axis-aligned rectangle, 0-based, corners inclusive on both ends.
    """
    xmin: int
    ymin: int
    xmax: int
    ymax: int

    def __post_init__(self):
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError(
                f"Patch corners out of order: ({self.xmin}, {self.ymin}, {self.xmax}, {self.ymax})"
            )

    def get_corners(self) -> Tuple[int, int, int, int]:
        return self.xmin, self.ymin, self.xmax, self.ymax

    @property
    def height(self) -> int:
        return self.ymax - self.ymin + 1

    @property
    def width(self) -> int:
        return self.xmax - self.xmin + 1


class PatchCollection:
    """
    Patches bound to the Image they were cut from.
    """

    def __init__(self, patches: Iterable[SupportsCorners], image: "Image"):
        self.patches: Tuple[SupportsCorners, ...] = tuple(patches)
        self.image = image

    def __repr__(self) -> str:
        return f"PatchCollection(n={len(self.patches)}, image={self.image.name!r})"

    def __len__(self) -> int:
        return len(self.patches)

    def __iter__(self) -> Iterator[SupportsCorners]:
        return iter(self.patches)

    def __getitem__(self, idx: int) -> SupportsCorners:
        return self.patches[idx]
