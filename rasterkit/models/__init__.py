from .annotations import GT_SEGMENTATION, PATCHES, RESIZED, ImageAnnotations
from .image import Image, validate_buffer
from .patch import Patch, PatchCollection, SupportsCorners

__all__ = [
    "GT_SEGMENTATION",
    "PATCHES",
    "RESIZED",
    "Image",
    "ImageAnnotations",
    "Patch",
    "PatchCollection",
    "SupportsCorners",
    "validate_buffer",
]
