from __future__ import annotations
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.image import AxesImage

from .. import config
from ..models.image import Image
from ..models.patch import SupportsCorners


def display_title(name: str) -> str:
    # Escape underscores so they are not read as subscripts.
    return "Image name = " + name.replace("_", "\\_")


class RenderService:
    """
    Thin matplotlib front-end for showing images and patch outlines.
    """
    def __init__(self):
        self.PATCH_EDGE_COLOR = config.patch_edge_color()
        self.PATCH_LINE_WIDTH = config.patch_line_width()

    def plot(self, img: Image, ax: Axes | None = None) -> AxesImage:
        """
        Show the image and return the graphic's handle to it.
        """
        if ax is None:
            _, ax = plt.subplots()
        cmap = "gray" if img.buffer.ndim == 2 else None
        handle = ax.imshow(img.buffer, cmap=cmap)
        ax.set_axis_off()
        if img.name:
            ax.set_title(display_title(img.name))
        return handle

    def plot_patch(self, img: Image, patch: SupportsCorners, ax: Axes | None = None) -> AxesImage:
        """
        Show the image with the patch outline drawn on top.
        """
        handle = self.plot(img, ax)
        xmin, ymin, xmax, ymax = patch.get_corners()
        handle.axes.plot(
            [xmin, xmax, xmax, xmin, xmin],
            [ymin, ymin, ymax, ymax, ymin],
            color=self.PATCH_EDGE_COLOR,
            linewidth=self.PATCH_LINE_WIDTH,
        )
        return handle
