from __future__ import annotations
from typing import Any, Iterable
import logging

from ..models.annotations import GT_SEGMENTATION, PATCHES, RESIZED
from ..models.image import Image
from ..models.patch import PatchCollection, SupportsCorners
from .image_service import ImageService

logger = logging.getLogger(__name__)


class AnnotationService:
    """
    Named conveniences over Image.annotations.
    Values are stored on the Image itself, so every holder of the same
    instance sees them.
    """

    def __init__(self, image_service: ImageService | None = None) -> None:
        self.image_service = image_service or ImageService()

    # ---------- generic ----------
    @staticmethod
    def set(img: Image, key: str, value: Any) -> None:
        img.annotations.set(key, value)

    @staticmethod
    def get(img: Image, key: str) -> Any:
        return img.annotations.get(key)

    # ---------- resized copy ----------
    def set_resized_image(self, img: Image, new_height: int, new_width: int) -> Image:
        resized = self.image_service.resize(img, new_height, new_width)
        img.annotations.set(RESIZED, resized)
        return resized

    @staticmethod
    def get_resized_image(img: Image) -> Image:
        return img.annotations.get(RESIZED)

    # ---------- ground truth ----------
    @staticmethod
    def set_gt_segmentation(img: Image, segmentation: Any) -> None:
        """Attach a ground-truth segmentation of the image (opaque value)."""
        img.annotations.set(GT_SEGMENTATION, segmentation)

    @staticmethod
    def get_gt_segmentation(img: Image) -> Any:
        return img.annotations.get(GT_SEGMENTATION)

    # ---------- patches ----------
    @staticmethod
    def set_patches(img: Image, patches: Iterable[SupportsCorners]) -> PatchCollection:
        """
        Bind `patches` to `img`. Replacing an existing collection warns
        (PatchOverwriteWarning) but still succeeds.
        """
        collection = PatchCollection(patches, img)
        img.annotations.set(PATCHES, collection)
        logger.debug("Attached %d patches to %r", len(collection), img.name)
        return collection

    @staticmethod
    def get_patches(img: Image) -> PatchCollection:
        return img.annotations.get(PATCHES)
