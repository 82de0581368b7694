from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union, Iterator
import logging
import numbers

import numpy as np

from ..exceptions import InvalidDimensionError, PatchBoundsError, ShapeMismatchError
from ..models.image import Image
from ..models.patch import SupportsCorners
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)

RESIZED_SUFFIX = "-resized"


class ImageService:
    """
    Business-level operations on Image objects.
    Every transform returns new data; the source Image is never modified.
    """
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    # ─── Construction ──────────────────────────────────────────────────
    def from_buffer(self, pixels, name: str = "") -> Image:
        return self.image_repository.create_image(pixels, name)

    def from_path(self, path: Union[str, Path], name: str = "") -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path, name=name)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield images lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    def load_gallery(self, folder: Union[str, Path], *, recursive: bool = False) -> List[Image]:
        return self.image_repository.load_dir(folder, recursive=recursive)

    # ─── Patches & masks ───────────────────────────────────────────────
    def content_in_patch(self, img: Image, patch: SupportsCorners) -> np.ndarray:
        """
        Args:
            img (Image): Source image.
            patch: Anything with get_corners() -> (xmin, ymin, xmax, ymax),
                0-based and inclusive.

        Returns:
            (np.ndarray): Copy of the pixels inside the patch, all channels.
        """
        corners = tuple(patch.get_corners())
        if any(isinstance(c, bool) or not isinstance(c, numbers.Integral) for c in corners):
            raise PatchBoundsError(corners, img.height, img.width, reason="must be integers")
        xmin, ymin, xmax, ymax = (int(c) for c in corners)
        if xmin > xmax or ymin > ymax:
            raise PatchBoundsError(corners, img.height, img.width, reason="are out of order")
        if xmin < 0 or ymin < 0 or xmax >= img.width or ymax >= img.height:
            raise PatchBoundsError((xmin, ymin, xmax, ymax), img.height, img.width)
        return self.image_repository.slice_region(img.buffer, xmin, ymin, xmax, ymax)

    def apply_mask(self, img: Image, mask: np.ndarray) -> np.ndarray:
        """
        Applies a 2-dimensional mask to the color channels of the color view;
        a fourth (alpha) channel and beyond pass through unchanged.
        """
        mask = np.asarray(mask)
        if mask.shape != (img.height, img.width):
            raise ShapeMismatchError((img.height, img.width), mask.shape)
        return self.image_repository.multiply_mask(img.color(), mask)

    # ─── Structural transforms ─────────────────────────────────────────
    def resize(self, img: Image, new_height: int, new_width: int) -> Image:
        """
        Bilinear resize into a *new* Image named '<name>-resized'.
        """
        for dim in (new_height, new_width):
            if isinstance(dim, bool) or not isinstance(dim, numbers.Integral) or dim < 1:
                raise InvalidDimensionError(new_height, new_width)
        if img.is_empty():
            raise InvalidDimensionError(new_height, new_width, reason="cannot resize an empty image")

        pixels = self.image_repository.resample(img.buffer, int(new_height), int(new_width))
        logger.debug("Resized %r %sx%s → %sx%s", img.name, img.height, img.width, new_height, new_width)
        return self.image_repository.create_image(pixels, img.name + RESIZED_SUFFIX)

    def to_single(self, img: Image) -> Image:
        """
        Single-precision copy of `img`, same name, no annotations.
        """
        if img.is_empty():
            return Image(name=img.name)
        return self.image_repository.create_image(
            self.image_repository.to_float32(img.buffer), img.name
        )
