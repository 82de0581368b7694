from .annotation_service import AnnotationService
from .image_service import ImageService
from .render_service import RenderService

__all__ = ["AnnotationService", "ImageService", "RenderService"]
