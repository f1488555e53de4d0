"""Raster canvas with drawing primitives in logical coordinates.

Architecture:
    - Owns an (H, W, 3) uint8 RGB numpy buffer
    - Every coordinate and size goes through a CoordinateSpace
      (logical: centre origin, +Y up → device: top-left origin, +Y down)
    - Rasterisation with OpenCV (lines, rectangles, ellipses, arcs, polygons)
    - Text through Pillow ImageDraw with an ordered font fallback chain
    - Export/import through src.utils.fs (format chosen by file extension)

Drawing style:
    - Persistent colour and line width live in a DrawStyle
    - Every primitive accepts ``color=`` as a one-shot override; the persistent
      colour is restored when the call exits, also when it raises

Angle convention:
    - 0° = +X axis, positive sweep = counterclockwise (math convention)
    - OpenCV measures angles clockwise in device space, so arcs are mapped
      with start → -start and end → -(start + sweep)

Centre+radius shapes (ellipse, circle, arc) all derive one device bounding box
``origin = centre - (rx, ry)``, ``size = (2·rx, 2·ry)`` shared by the stroke and
fill variants.

Usage:
    from src.painter.canvas import Canvas

    canvas = Canvas(512, 512, logical_width=10.0)
    canvas.clear((0, 0, 255))
    canvas.set_color((255, 224, 64))
    canvas.filled_circle((0, 0), 4)
    canvas.set_line_width(0.1)
    canvas.arc((0, 0), 3.5, 3.5, 180, 180, color=(0, 0, 0))
    canvas.save("smiley.png")
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image, ImageColor, ImageDraw

from src.painter.coordinates import CoordinateSpace, round_half_away
from src.painter.errors import ConfigError
from src.painter.fonts import resolve_font
from src.painter.shades import DEFAULT_HUE_OFFSET, ShadeWheel, shade
from src.utils import fs

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]
Point = Tuple[float, float]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)


def _clamp(n: int) -> int:
    return 0 if n < 0 else (255 if n > 255 else n)


def to_rgb(color: ColorLike) -> RGB:
    """Normalise a colour to an (r, g, b) triple of ints in [0, 255].

    Parameters
    ----------
    color : str or sequence of int
        Any colour string Pillow understands ("#FF8000", "white",
        "rgb(1,2,3)") or an (r, g, b[, a]) sequence; channels are clamped

    Raises
    ------
    ConfigError
        If the colour string can't be parsed or the sequence is too short
    """
    if isinstance(color, str):
        try:
            rgb = ImageColor.getrgb(color)
        except ValueError as e:
            raise ConfigError(f"Unknown colour {color!r}") from e
        return rgb[0], rgb[1], rgb[2]
    if len(color) < 3:
        raise ConfigError(f"Colour needs 3 channels, got {color!r}")
    return _clamp(int(color[0])), _clamp(int(color[1])), _clamp(int(color[2]))


class RenderTarget(Enum):
    """Where repaints go: the in-memory buffer only, or also a window."""
    BUFFER = "buffer"
    WINDOW = "window"


@dataclass
class DrawStyle:
    """Persistent drawing style read by every primitive.

    ``stroke_px`` is the device stroke width, fixed when the line width is set.
    """
    color: RGB = BLACK
    line_width: float = 0.0
    stroke_px: float = 1.0

    @property
    def thickness(self) -> int:
        """Stroke thickness as OpenCV wants it (integer, at least 1 px)."""
        return max(1, round_half_away(self.stroke_px))


class Canvas:
    """Raster drawing surface addressed in logical coordinates.

    Attributes
    ----------
    space : CoordinateSpace
        Logical ↔ device transform
    style : DrawStyle
        Current colour and line width
    target : RenderTarget
        BUFFER (headless) or WINDOW
    export_path : Path, optional
        File written on every ``repaint()``
    presenter : WindowPresenter, optional
        Window listener when target is WINDOW
    """

    def __init__(
        self,
        pixel_width: int = 512,
        pixel_height: int = 512,
        logical_width: float = 10.0,
        *,
        target: Union[RenderTarget, str] = RenderTarget.BUFFER,
        export_path: Optional[Union[str, Path]] = None,
        antialias: bool = True,
        title: str = "Painter"
    ):
        # Validates sizes before the buffer is allocated
        self.space = CoordinateSpace(pixel_width, pixel_height, logical_width)
        self.target = RenderTarget(target)

        self._buffer = np.zeros((self.space.pixel_height, self.space.pixel_width, 3), dtype=np.uint8)
        self.style = DrawStyle()
        self.line_type = cv2.LINE_AA if antialias else cv2.LINE_8
        self.export_path = Path(export_path) if export_path else None
        self._listeners: List[Callable[['Canvas'], None]] = []
        self._shades: Optional[ShadeWheel] = None

        # Text state
        self._font_name: Optional[str] = None
        self._font_size = 1.0
        self._align = (1, 1)
        self._text_pos: Point = (0.0, 0.0)

        self.presenter = None
        if self.target is RenderTarget.WINDOW:
            from src.painter.display import WindowPresenter
            self.presenter = WindowPresenter(title)
            self.add_listener(self.presenter)

        logger.debug(
            f"Canvas initialized: {self.space.pixel_width}x{self.space.pixel_height} px, "
            f"logical width {logical_width}, target={self.target.value}"
        )

    @classmethod
    def from_pixels(cls, pixels: np.ndarray, logical_width: float = 1.0, **kwargs) -> 'Canvas':
        """Canvas whose buffer starts as a copy of an (H, W, 3) uint8 array."""
        h, w = pixels.shape[:2]
        canvas = cls(w, h, logical_width, **kwargs)
        canvas._buffer[...] = pixels[..., :3]
        return canvas

    @classmethod
    def read(cls, path: Union[str, Path], **kwargs) -> 'Canvas':
        """Canvas loaded from an image file, one logical unit wide."""
        return cls.from_pixels(fs.load_image(path), 1.0, **kwargs)

    # ------------------------------------------------------------------
    # Geometry and style
    # ------------------------------------------------------------------

    @property
    def width(self) -> float:
        """Logical width."""
        return self.space.width

    @property
    def height(self) -> float:
        """Logical height."""
        return self.space.height

    @property
    def pixels(self) -> np.ndarray:
        """The raw (H, W, 3) uint8 RGB buffer (not a copy)."""
        return self._buffer

    def rescale(self, logical_width: float) -> None:
        self.space.rescale(logical_width)

    def set_color(self, color: ColorLike) -> None:
        self.style.color = to_rgb(color)

    def set_line_width(self, logical_width: float) -> None:
        """Set the stroke width in logical units (device width = scale · width)."""
        if logical_width < 0:
            raise ConfigError(f"Line width must be >= 0, got {logical_width}")
        self.style.line_width = logical_width
        self.style.stroke_px = self.space.scale * logical_width

    def use_shades(
        self,
        steps: int,
        saturation_floor: int = 0,
        hue_offset: int = DEFAULT_HUE_OFFSET
    ) -> ShadeWheel:
        """Install a colour wheel of ``steps`` colours for ``set_shade``."""
        self._shades = ShadeWheel(steps, saturation_floor, hue_offset)
        return self._shades

    def set_shade(self, n: int) -> None:
        """Make colour ``n`` of the installed wheel the current colour."""
        if self._shades is None:
            raise ConfigError("No colour wheel installed, call use_shades() first")
        self.style.color = shade(n, self._shades)

    @contextmanager
    def _color_override(self, color: Optional[ColorLike]):
        """Temporarily replace the persistent colour; restored on every exit path."""
        saved = self.style.color
        try:
            if color is not None:
                self.style.color = to_rgb(color)
            yield self.style.color
        finally:
            self.style.color = saved

    # ------------------------------------------------------------------
    # Device helpers
    # ------------------------------------------------------------------

    def _device_box(self, center: Point, rx: float, ry: float) -> Tuple[int, int, int, int]:
        """Device bounding box (left, top, width, height) of a centre+radii shape."""
        cx, cy = center
        rx, ry = abs(rx), abs(ry)
        left = self.space.to_device_x(cx - rx)
        top = self.space.to_device_y(cy + ry)
        return left, top, abs(self.space.to_device_length(2 * rx)), abs(self.space.to_device_length(2 * ry))

    def _draw_ellipse(self, box, start: float, end: float, thickness: int) -> None:
        # shift=1: centre and axes in half-pixel fixed point so odd box sizes stay exact
        left, top, w, h = box
        cv2.ellipse(
            self._buffer,
            (2 * left + w, 2 * top + h),
            (w, h),
            0,
            start,
            end,
            self.style.color,
            thickness,
            self.line_type,
            1
        )

    def _draw_arc(self, center, rx, ry, start_deg, sweep_deg, thickness) -> None:
        box = self._device_box(center, rx, ry)
        self._draw_ellipse(box, -start_deg, -(start_deg + sweep_deg), thickness)

    def _device_points(self, points: Iterable[Point]) -> np.ndarray:
        pts = [self.space.to_device(p) for p in points]
        return np.array(pts, dtype=np.int32).reshape(-1, 1, 2)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def clear(self, color: Optional[ColorLike] = None) -> None:
        """Fill the whole buffer with ``color`` (current colour if omitted)."""
        self._buffer[...] = to_rgb(color) if color is not None else self.style.color

    def line(self, p0: Point, p1: Point, color: Optional[ColorLike] = None) -> None:
        with self._color_override(color):
            cv2.line(
                self._buffer,
                self.space.to_device(p0),
                self.space.to_device(p1),
                self.style.color,
                self.style.thickness,
                self.line_type
            )

    def box(self, origin: Point, w: float, h: float, color: Optional[ColorLike] = None) -> None:
        """Rectangle outline; ``origin`` is the bottom-left corner."""
        with self._color_override(color):
            left, top, right, bottom = self._device_rect(origin, w, h)
            cv2.rectangle(
                self._buffer, (left, top), (right, bottom),
                self.style.color, self.style.thickness, self.line_type
            )

    def filled_box(self, origin: Point, w: float, h: float, color: Optional[ColorLike] = None) -> None:
        """Filled rectangle covering ``w × h`` device pixels from the bottom-left corner."""
        with self._color_override(color):
            left, top, right, bottom = self._device_rect(origin, w, h)
            if right <= left or bottom <= top:
                return
            cv2.rectangle(
                self._buffer, (left, top), (right - 1, bottom - 1),
                self.style.color, cv2.FILLED, self.line_type
            )

    def _device_rect(self, origin: Point, w: float, h: float) -> Tuple[int, int, int, int]:
        x, y = origin
        left = self.space.to_device_x(x)
        bottom = self.space.to_device_y(y)
        right = left + self.space.to_device_length(w)
        top = bottom - self.space.to_device_length(h)
        return min(left, right), min(top, bottom), max(left, right), max(top, bottom)

    def ellipse(self, center: Point, rx: float, ry: float, color: Optional[ColorLike] = None) -> None:
        with self._color_override(color):
            self._draw_ellipse(self._device_box(center, rx, ry), 0, 360, self.style.thickness)

    def filled_ellipse(self, center: Point, rx: float, ry: float, color: Optional[ColorLike] = None) -> None:
        with self._color_override(color):
            self._draw_ellipse(self._device_box(center, rx, ry), 0, 360, cv2.FILLED)

    def circle(self, center: Point, r: float, color: Optional[ColorLike] = None) -> None:
        self.ellipse(center, r, r, color=color)

    def filled_circle(self, center: Point, r: float, color: Optional[ColorLike] = None) -> None:
        self.filled_ellipse(center, r, r, color=color)

    def arc(
        self,
        center: Point,
        rx: float,
        ry: float,
        start_deg: float,
        sweep_deg: float,
        color: Optional[ColorLike] = None
    ) -> None:
        """Elliptical arc from ``start_deg`` sweeping ``sweep_deg`` counterclockwise."""
        with self._color_override(color):
            self._draw_arc(center, rx, ry, start_deg, sweep_deg, self.style.thickness)

    def filled_arc(
        self,
        center: Point,
        rx: float,
        ry: float,
        start_deg: float,
        sweep_deg: float,
        color: Optional[ColorLike] = None
    ) -> None:
        """Pie wedge bounded by the arc and the two radii to its ends."""
        with self._color_override(color):
            self._draw_arc(center, rx, ry, start_deg, sweep_deg, cv2.FILLED)

    def polyline(self, points: Sequence[Point], color: Optional[ColorLike] = None) -> None:
        """Open polyline through ``points``."""
        self._polylines(points, False, color)

    def polygon(self, points: Sequence[Point], color: Optional[ColorLike] = None) -> None:
        """Closed polygon outline through ``points``."""
        self._polylines(points, True, color)

    def _polylines(self, points, closed: bool, color) -> None:
        if len(points) < 2:
            return
        with self._color_override(color):
            cv2.polylines(
                self._buffer, [self._device_points(points)], closed,
                self.style.color, self.style.thickness, self.line_type
            )

    def filled_polygon(self, points: Sequence[Point], color: Optional[ColorLike] = None) -> None:
        if len(points) < 3:
            return
        with self._color_override(color):
            cv2.fillPoly(self._buffer, [self._device_points(points)], self.style.color, self.line_type)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def font(self, name: Optional[str] = None, size: Optional[float] = None) -> None:
        """Select the font by file path or name and its size in logical units."""
        if name is not None:
            self._font_name = name
        if size is not None:
            self._font_size = size

    def align(self, horizontal: int, vertical: int) -> None:
        """Text alignment: >0 left/bottom, <0 right/top, 0 centre."""
        self._align = (
            (horizontal > 0) - (horizontal < 0),
            (vertical > 0) - (vertical < 0)
        )

    @property
    def text_position(self) -> Point:
        """Logical point where the next position-less ``text()`` call starts."""
        return self._text_pos

    def text(self, s: str, position: Optional[Point] = None, color: Optional[ColorLike] = None) -> None:
        """Draw ``s`` anchored at ``position`` (or the text cursor).

        The cursor then moves to the end of the string on the same baseline.
        """
        x, y = position if position is not None else self._text_pos
        size_px = self.space.to_device_length(self._font_size)
        font = resolve_font(self._font_name, size_px)

        with self._color_override(color):
            img = Image.fromarray(self._buffer)
            draw = ImageDraw.Draw(img)
            l, t, r, b = draw.textbbox((0, 0), s, font=font)
            w_px, h_px = r - l, b - t

            h_align, v_align = self._align
            dx = {1: 0, 0: w_px / 2, -1: w_px}[h_align]
            dy = {1: 0, 0: h_px / 3, -1: h_px}[v_align]

            # Bottom-left of the text box lands on the anchor
            anchor_x = self.space.to_device_x(x) - dx
            anchor_y = self.space.to_device_y(y) + dy
            draw.text((anchor_x - l, anchor_y - b), s, fill=self.style.color, font=font)
            self._buffer[...] = np.asarray(img)

        self._text_pos = (x + w_px / self.space.scale, y)

    # ------------------------------------------------------------------
    # Export and notifications
    # ------------------------------------------------------------------

    def to_image(self) -> Image.Image:
        """Copy of the buffer as a Pillow RGB image."""
        return Image.fromarray(self._buffer.copy())

    def save(self, path: Union[str, Path], **pil_kwargs) -> None:
        """Write the buffer to ``path``; the file extension selects the format.

        Raises
        ------
        RuntimeError
            If encoding or writing fails
        """
        fs.atomic_save_image(self._buffer, path, pil_kwargs)
        logger.info(f"Saved canvas to {path}")

    def add_listener(self, callback: Callable[['Canvas'], None]) -> None:
        """Register ``callback(canvas)`` to run on every ``repaint()``."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[['Canvas'], None]) -> None:
        self._listeners.remove(callback)

    def repaint(self) -> None:
        """Announce that the content changed: notify listeners, then export."""
        for callback in list(self._listeners):
            callback(self)
        if self.export_path is not None:
            self.save(self.export_path)
