from __future__ import annotations
import threading
import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Set

from ..exceptions import MissingAnnotationError, PatchOverwriteWarning

if TYPE_CHECKING:
    from .image import Image
    from .patch import PatchCollection

RESIZED = "resized"
GT_SEGMENTATION = "gt_segmentation"
PATCHES = "patches"

_SLOTS = (RESIZED, GT_SEGMENTATION, PATCHES)


@dataclass
class ImageAnnotations:
    """
    Derived artifacts attached to one Image after construction.

    The three well-known annotations get typed slots; anything else lands in
    `extras`. A key counts as set once it has been written, even with None.
    """
    resized: "Image | None" = None
    gt_segmentation: Any = None
    patches: "PatchCollection | None" = None
    extras: Dict[str, Any] = field(default_factory=dict)
    _written: Set[str] = field(default_factory=set, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def set(self, key: str, value: Any) -> None:
        """
        Add `key` or overwrite it. Replacing the patch collection warns but
        still goes through.
        """
        if not isinstance(key, str):
            raise TypeError(f"Annotation keys must be strings, got {type(key).__name__}")
        with self._lock:
            if key == PATCHES and PATCHES in self._written:
                warnings.warn(
                    "Updating image to a new set of patches.",
                    PatchOverwriteWarning,
                    stacklevel=2,
                )
            if key in _SLOTS:
                setattr(self, key, value)
            else:
                self.extras[key] = value
            self._written.add(key)

    def get(self, key: str) -> Any:
        if key not in self._written:
            raise MissingAnnotationError(key)
        if key in _SLOTS:
            return getattr(self, key)
        return self.extras[key]

    def has(self, key: str) -> bool:
        return key in self._written

    __contains__ = has

    def keys(self) -> List[str]:
        return [k for k in _SLOTS if k in self._written] + list(self.extras)
