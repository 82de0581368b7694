"""
Error taxonomy for rasterkit.

Every failure is raised synchronously where the violation is detected.
Each class also derives from the builtin it specialises, so callers that only
know about ValueError / KeyError / IndexError keep working.
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class RasterError(Exception):
    """Base exception for rasterkit."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConstructionError(RasterError, ValueError):
    """Raised when an Image is built from a buffer of invalid shape."""

    def __init__(self, shape):
        super().__init__(
            message=(
                "Image constructor: stores image matrices and expects at least "
                f"a 2D matrix as input (got shape {tuple(shape)})."
            ),
            details={"shape": tuple(shape)},
        )


class ShapeMismatchError(RasterError, ValueError):
    """Raised when a mask does not match the image it is applied to."""

    def __init__(self, expected, actual):
        super().__init__(
            message=f"Mask shape {tuple(actual)} does not match image shape {tuple(expected)}.",
            details={"expected": tuple(expected), "actual": tuple(actual)},
        )


class InvalidDimensionError(RasterError, ValueError):
    """Raised for a resize target that is not a positive integer."""

    def __init__(self, new_height, new_width, reason: str = "must be integers >= 1"):
        super().__init__(
            message=f"Invalid target size ({new_height}, {new_width}): {reason}.",
            details={"new_height": new_height, "new_width": new_width},
        )


class MissingAnnotationError(RasterError, KeyError):
    """Raised when reading an annotation that was never set."""

    def __init__(self, key: str):
        super().__init__(
            message=f"Annotation not set: {key!r}",
            details={"key": key},
        )


class PatchBoundsError(RasterError, IndexError):
    """Raised when patch corners fall outside the image buffer."""

    def __init__(self, corners, height: int, width: int, reason: str = "exceed image extent"):
        super().__init__(
            message=(
                f"Patch corners {tuple(corners)} {reason} "
                f"(height={height}, width={width})."
            ),
            details={"corners": tuple(corners), "height": height, "width": width},
        )


class PatchOverwriteWarning(UserWarning):
    """Emitted when an image's patch collection is replaced."""
