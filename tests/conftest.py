"""
Pytest configuration and fixtures for rasterkit tests
"""

import matplotlib

matplotlib.use("Agg")

import cv2
import matplotlib.pyplot as plt
import numpy as np
import pytest

from rasterkit.models.image import Image
from rasterkit.repositories.image_repository import ImageRepository
from rasterkit.services.annotation_service import AnnotationService
from rasterkit.services.image_service import ImageService


@pytest.fixture
def rgb_pixels():
    """10x12 uint8 RGB buffer with a bright square"""
    pixels = np.zeros((10, 12, 3), dtype=np.uint8)
    pixels[2:6, 3:8] = (255, 128, 0)
    return pixels


@pytest.fixture
def rgb_image(rgb_pixels):
    return Image.from_buffer(rgb_pixels, "test_rgb")


@pytest.fixture
def gray_image():
    pixels = np.arange(20, dtype=np.uint8).reshape(4, 5) * 10
    return Image.from_buffer(pixels, "gray")


@pytest.fixture
def image_repository():
    return ImageRepository()


@pytest.fixture
def image_service(image_repository):
    return ImageService(image_repository)


@pytest.fixture
def annotation_service(image_service):
    return AnnotationService(image_service)


@pytest.fixture
def image_dir(tmp_path, rgb_pixels):
    """Folder with two readable images, one broken file and one text file"""
    # cv2 writes BGR, so flip to keep the RGB fixture content on disk.
    cv2.imwrite(str(tmp_path / "first.png"), rgb_pixels[:, :, ::-1])
    cv2.imwrite(str(tmp_path / "second.png"), np.full((6, 7), 200, dtype=np.uint8))
    (tmp_path / "broken.png").write_bytes(b"not an image")
    (tmp_path / "notes.txt").write_text("ignore me")
    return tmp_path


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
