from .exceptions import (
    ConstructionError,
    InvalidDimensionError,
    MissingAnnotationError,
    PatchBoundsError,
    PatchOverwriteWarning,
    RasterError,
    ShapeMismatchError,
)
from .models import Image, ImageAnnotations, Patch, PatchCollection
from .utils import normalize_pixel_values, white_image

__version__ = "1.0.0"

__all__ = [
    "ConstructionError",
    "Image",
    "ImageAnnotations",
    "InvalidDimensionError",
    "MissingAnnotationError",
    "Patch",
    "PatchBoundsError",
    "PatchCollection",
    "PatchOverwriteWarning",
    "RasterError",
    "ShapeMismatchError",
    "normalize_pixel_values",
    "white_image",
]
