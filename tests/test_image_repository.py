"""
Unit tests for ImageRepository decoding and folder streaming
"""

import signal
import time

import cv2
import numpy as np
import pytest
from PIL import Image as PILImage

from rasterkit.repositories.image_repository import ImageRepository


class TestDecode:
    """Tests for single-file decoding"""

    def test_png_roundtrips_as_rgb(self, image_repository, image_dir, rgb_pixels):
        arr = image_repository.decode(image_dir / "first.png")

        assert arr.dtype == np.uint8
        np.testing.assert_array_equal(arr, rgb_pixels)

    def test_bgr_order_on_request(self, image_repository, image_dir, rgb_pixels):
        arr = image_repository.decode(image_dir / "first.png", rgb=False)
        np.testing.assert_array_equal(arr, rgb_pixels[:, :, ::-1])

    def test_grayscale_stays_2d(self, image_repository, image_dir):
        arr = image_repository.decode(image_dir / "second.png")
        assert arr.shape == (6, 7)

    def test_sixteen_bit_is_preserved(self, image_repository, tmp_path):
        pixels = np.full((3, 3), 40000, dtype=np.uint16)
        cv2.imwrite(str(tmp_path / "deep.png"), pixels)

        img = image_repository.load(tmp_path / "deep.png")
        assert img.buffer.dtype == np.uint16
        assert img.color().max() == pytest.approx(40000 / 65535)

    def test_gif_is_decoded(self, image_repository, tmp_path):
        PILImage.new("RGB", (4, 3), (255, 0, 0)).save(tmp_path / "anim.gif")

        arr = image_repository.decode(tmp_path / "anim.gif")
        assert arr.shape == (3, 4, 3)
        assert (arr[..., 0] > 200).all()

    def test_missing_file_raises(self, image_repository, tmp_path):
        with pytest.raises(FileNotFoundError):
            image_repository.decode(tmp_path / "nope.png")

    def test_unreadable_file_raises(self, image_repository, image_dir):
        with pytest.raises(FileNotFoundError):
            image_repository.decode(image_dir / "broken.png")

    @pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM is POSIX only")
    def test_slow_decode_times_out(self, monkeypatch, image_dir):
        monkeypatch.setenv("DECODE_TIMEOUT_S", "1")
        monkeypatch.setattr(cv2, "imread", lambda *args, **kwargs: time.sleep(5))
        before = signal.getsignal(signal.SIGALRM)

        with pytest.raises(TimeoutError):
            ImageRepository().decode(image_dir / "first.png")
        assert signal.getsignal(signal.SIGALRM) == before

    @pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM is POSIX only")
    def test_slow_pillow_fallback_times_out(self, monkeypatch, image_dir):
        monkeypatch.setenv("DECODE_TIMEOUT_S", "1")
        monkeypatch.setattr(cv2, "imread", lambda *args, **kwargs: None)
        monkeypatch.setattr(PILImage, "open", lambda *args, **kwargs: time.sleep(5))

        with pytest.raises(TimeoutError):
            ImageRepository().decode(image_dir / "first.png")

    @pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM is POSIX only")
    def test_handler_restored_after_decode(self, image_repository, image_dir):
        def custom(signum, frame):
            pass

        before = signal.signal(signal.SIGALRM, custom)
        try:
            image_repository.decode(image_dir / "first.png")
            assert signal.getsignal(signal.SIGALRM) is custom
        finally:
            signal.signal(signal.SIGALRM, before)

    def test_load_sets_name(self, image_repository, image_dir):
        img = image_repository.load(image_dir / "first.png", name="first")
        assert img.name == "first"
        assert img.is_rgb()


class TestIterDir:
    """Tests for folder streaming"""

    def test_streams_readable_images_named_by_stem(self, image_repository, image_dir):
        images = image_repository.load_dir(image_dir)
        assert [img.name for img in images] == ["first", "second"]

    def test_broken_file_is_logged(self, image_repository, image_dir, caplog):
        with caplog.at_level("WARNING"):
            list(image_repository.iter_dir(image_dir))
        assert "broken.png" in caplog.text

    def test_custom_extensions(self, image_repository, image_dir):
        assert image_repository.load_dir(image_dir, exts=[".jpg"]) == []

    def test_recursive(self, image_repository, image_dir, rgb_pixels):
        nested = image_dir / "nested"
        nested.mkdir()
        cv2.imwrite(str(nested / "third.png"), rgb_pixels)

        flat = image_repository.load_dir(image_dir)
        deep = image_repository.load_dir(image_dir, recursive=True)
        assert len(deep) == len(flat) + 1

    def test_not_a_directory(self, image_repository, image_dir):
        with pytest.raises(NotADirectoryError):
            list(image_repository.iter_dir(image_dir / "first.png"))

    def test_extensions_from_environment(self, monkeypatch, image_dir):
        monkeypatch.setenv("VALID_IMAGE_EXTENSIONS", ".jpg, .JPEG")
        repo = ImageRepository()

        assert repo.VALID_EXTS == {".jpg", ".jpeg"}
        assert repo.load_dir(image_dir) == []


class TestServiceLoading:
    """Tests for ImageService path constructors"""

    def test_from_path(self, image_service, image_dir):
        img = image_service.from_path(image_dir / "second.png", "gray")
        assert img.size() == (6, 7)
        assert img.name == "gray"

    def test_stream_gallery_is_lazy(self, image_service, image_dir):
        gallery = image_service.stream_gallery(image_dir)
        assert next(gallery).name == "first"

    def test_load_gallery(self, image_service, image_dir):
        assert len(image_service.load_gallery(image_dir)) == 2
