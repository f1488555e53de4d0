"""Interactive window for a canvas, backed by matplotlib.

The presenter is a canvas listener: every ``repaint()`` pushes the current
buffer into a matplotlib figure. ``show()`` blocks until the window is
closed.
"""

import logging

import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


class WindowPresenter:
    """Shows a canvas buffer in a matplotlib window sized to the pixel grid."""

    def __init__(self, title: str = "Painter", dpi: int = 100):
        self.title = title
        self.dpi = dpi
        self._figure = None
        self._image = None

    def __call__(self, canvas) -> None:
        pixels = canvas.pixels
        if self._figure is None:
            h, w = pixels.shape[:2]
            self._figure = plt.figure(figsize=(w / self.dpi, h / self.dpi), dpi=self.dpi)
            self._figure.canvas.manager.set_window_title(self.title)
            ax = self._figure.add_axes([0, 0, 1, 1])
            ax.set_axis_off()
            self._image = ax.imshow(pixels.copy(), interpolation='nearest')
            logger.debug(f"Opened window '{self.title}' ({w}x{h} px)")
        else:
            self._image.set_data(pixels.copy())
        self._figure.canvas.draw_idle()
        self._figure.canvas.flush_events()

    def show(self) -> None:
        """Block until the window is closed (no-op if nothing was painted)."""
        if self._figure is not None:
            plt.show()

    def close(self) -> None:
        if self._figure is not None:
            plt.close(self._figure)
            self._figure = None
            self._image = None
