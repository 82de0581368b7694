from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, List, Iterator
import logging
import signal
import threading

import cv2
import numpy as np
from PIL import Image as PILImage

from .. import config
from ..models.image import Image

logger = logging.getLogger(__name__)

# Sample kinds cv2.resize handles natively; anything else is resampled in float64.
_CV2_RESAMPLE_KINDS = {np.uint8, np.uint16, np.int16, np.float32, np.float64}


class ImageRepository:
    """
    Handles file decoding and raw pixel primitives for Image entities.
    Nothing here validates business rules; see ImageService.
    """
    def __init__(self):
        self.VALID_EXTS = config.valid_image_extensions()
        self.DECODE_TIMEOUT = config.decode_timeout()

    @staticmethod
    def create_image(pixels: np.ndarray, name: str = "") -> Image:
        return Image.from_buffer(pixels, name)

    # ─── Decoding ──────────────────────────────────────────────────────
    @staticmethod
    def _pil_read(path: Path) -> np.ndarray:
        try:
            with PILImage.open(path) as pil_img:
                if pil_img.mode not in ("L", "I;16", "I", "F", "RGB", "RGBA"):
                    pil_img = pil_img.convert("RGB")
                return np.asarray(pil_img).copy()
        except TimeoutError:
            raise
        except OSError as err:
            raise FileNotFoundError(f"Image not found or unreadable: {path}") from err

    @classmethod
    def _read(cls, path: Path, rgb: bool) -> np.ndarray:
        arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if arr is None:
            # Older OpenCV builds have no GIF reader, among others.
            arr = cls._pil_read(path)
            if not rgb and arr.ndim == 3:
                if arr.shape[2] == 3:
                    arr = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)
                elif arr.shape[2] == 4:
                    arr = cv2.cvtColor(arr, cv2.COLOR_RGBA2BGRA)
            return arr

        if rgb and arr.ndim == 3:
            if arr.shape[2] == 3:
                arr = cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)
            elif arr.shape[2] == 4:
                arr = cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
        return arr

    def decode(self, path: Union[str, Path], rgb: bool = True) -> np.ndarray:
        """
        Decode an image file into a pixel buffer, keeping its sample kind
        (8-bit stays uint8, 16-bit stays uint16).
        Channel order is RGB(A) unless rgb=False.
        Both the OpenCV read and the Pillow fallback run under DECODE_TIMEOUT_S.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found or unreadable: {path}")

        timeout = self.DECODE_TIMEOUT

        # ─── timeout wrapper ──────────────────────────────────────────────
        # SIGALRM only exists on POSIX and can only be armed from the main thread.
        use_alarm = (
            timeout > 0
            and hasattr(signal, "SIGALRM")
            and threading.current_thread() is threading.main_thread()
        )
        if not use_alarm:
            return self._read(path, rgb)

        def _handler(signum, frame):
            raise TimeoutError(f"Decoding timed-out after {timeout}s: {path}")

        previous = signal.signal(signal.SIGALRM, _handler)
        signal.alarm(timeout)
        try:
            return self._read(path, rgb)
        finally:
            signal.alarm(0)  # always disarm
            # None means the old handler was not installed from Python.
            signal.signal(signal.SIGALRM, signal.SIG_DFL if previous is None else previous)

    def load(self, path: Union[str, Path], name: str = "", rgb: bool = True) -> Image:
        arr = self.decode(path, rgb=rgb)
        logger.debug("Decoded %s → shape=%s dtype=%s", path, arr.shape, arr.dtype)
        return Image.from_buffer(arr, name)

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time, named after the file stem.
        Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug("Skipping due to extension: %s", p)
                continue
            try:
                img = self.load(p, name=p.stem)
            except (OSError, TimeoutError, ValueError) as err:
                logger.warning("Skipping %s: %s", p.name, err)
                continue
            yield img

    def load_dir(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[Image]:
        """
        Helper that returns a list, but internally streams.
        """
        return list(self.iter_dir(folder, recursive=recursive, exts=exts))

    # ─── Pixel primitives ──────────────────────────────────────────────
    @staticmethod
    def slice_region(buffer: np.ndarray, xmin: int, ymin: int, xmax: int, ymax: int) -> np.ndarray:
        """Inclusive crop across all channels, returned as a fresh array."""
        return buffer[ymin:ymax + 1, xmin:xmax + 1, ...].copy()

    @staticmethod
    def resample(buffer: np.ndarray, new_height: int, new_width: int) -> np.ndarray:
        """Bilinear resample of every channel; keeps dtype and channel axis."""
        kind = buffer.dtype
        # astype always copies, which also hands cv2 a writeable array.
        src = buffer.astype(kind if kind.type in _CV2_RESAMPLE_KINDS else np.float64)

        out = cv2.resize(src, (new_width, new_height), interpolation=cv2.INTER_LINEAR)

        # cv2 drops a trailing singleton channel axis.
        if buffer.ndim == 3 and out.ndim == 2:
            out = out[:, :, np.newaxis]

        if out.dtype != kind:
            if np.issubdtype(kind, np.integer):
                info = np.iinfo(kind)
                out = np.clip(np.rint(out), info.min, info.max)
            out = out.astype(kind)
        return out

    @staticmethod
    def multiply_mask(pixels: np.ndarray, mask: np.ndarray) -> np.ndarray:
        """
        Multiply the first (up to three) channels of `pixels` element-wise by
        a 2-D mask. Channels past the third are copied through unchanged.
        """
        if pixels.ndim == 2:
            return pixels * mask
        out = np.array(pixels, dtype=np.result_type(pixels.dtype, mask.dtype), copy=True)
        out[:, :, :3] = out[:, :, :3] * mask[:, :, np.newaxis]
        return out

    @staticmethod
    def to_float32(buffer: np.ndarray) -> np.ndarray:
        """
        Single-precision copy; 8/16-bit unsigned samples rescale into [0, 1].
        """
        if buffer.dtype == np.uint8 or buffer.dtype == np.uint16:
            return buffer.astype(np.float32) / np.float32(np.iinfo(buffer.dtype).max)
        return buffer.astype(np.float32)
