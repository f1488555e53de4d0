"""Turtle graphics on top of a drawing surface.

The turtle is a small state machine (position + heading) that turns
move/turn commands into line requests on the surface it holds. It does not
subclass the canvas: anything providing ``line``, ``set_color`` and
``set_line_width`` will do (see DrawingSurface).

Heading:
    - radians, counterclockwise from +X (0 = facing right)
    - accumulated without wrapping, so ``heading_degrees`` after a run is the
      total rotation and callers can test closure with ``% 360``

Usage (the "house of Santa Claus"):
    turtle = create_turtle()
    turtle.color((0, 255, 0))
    turtle.line_width(0.1)
    turtle.move(1); turtle.turn(90)
    turtle.move(1); turtle.turn(45)
    ...
"""

import logging
import math
from typing import Optional, Protocol, Sequence, Tuple, Union

from src.painter.canvas import BLACK, WHITE, Canvas

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class DrawingSurface(Protocol):
    """What a turtle needs from the surface it draws on."""

    def line(self, p0: Point, p1: Point, color=None) -> None:
        ...

    def set_color(self, color) -> None:
        ...

    def set_line_width(self, logical_width: float) -> None:
        ...


class Turtle:
    """Position and heading driving line draws on a surface.

    Parameters
    ----------
    canvas : DrawingSurface
        Surface receiving the line requests
    origin : tuple of float
        Starting position in logical coordinates, default (0, 0) = centre
    heading_deg : float
        Starting heading in degrees, default 0 = +X
    """

    def __init__(self, canvas: DrawingSurface, origin: Point = (0.0, 0.0), heading_deg: float = 0.0):
        self.canvas = canvas
        self._x, self._y = float(origin[0]), float(origin[1])
        self._heading = math.radians(heading_deg)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def position(self) -> Point:
        return self._x, self._y

    @property
    def heading(self) -> float:
        """Heading in radians, unwrapped."""
        return self._heading

    @property
    def heading_degrees(self) -> float:
        """Heading in degrees, unwrapped (total rotation since the last turn_to)."""
        return math.degrees(self._heading)

    def _ahead(self, distance: float) -> Point:
        return (
            self._x + distance * math.cos(self._heading),
            self._y + distance * math.sin(self._heading)
        )

    def move(self, distance: float) -> None:
        """Walk ``distance`` along the heading, drawing a line (negative = backwards)."""
        self.move_to(*self._ahead(distance))

    def move_to(self, x: float, y: float) -> None:
        """Walk straight to (x, y), drawing a line; the heading is left alone."""
        self.canvas.line((self._x, self._y), (x, y))
        self._x, self._y = x, y

    def fly(self, distance: float) -> None:
        """Like ``move`` without drawing."""
        self._x, self._y = self._ahead(distance)

    def fly_to(self, x: float, y: float) -> None:
        """Like ``move_to`` without drawing."""
        self._x, self._y = x, y

    def turn(self, degrees: float) -> None:
        """Rotate counterclockwise by ``degrees`` (clockwise if negative)."""
        self._heading += degrees * math.pi / 180

    def turn_to(self, degrees: float) -> None:
        """Face the absolute direction ``degrees`` (0 = 3 o'clock, counterclockwise)."""
        self._heading = degrees * math.pi / 180

    def color(self, color) -> None:
        self.canvas.set_color(color)

    def line_width(self, logical_width: float) -> None:
        self.canvas.set_line_width(logical_width)

    def __repr__(self) -> str:
        return f"Turtle(x={self._x:.4f}, y={self._y:.4f}, heading={self.heading_degrees:.2f}°)"


def create_turtle(
    pixel_width: int = 512,
    pixel_height: int = 512,
    logical_width: float = 5.0,
    background: Union[str, Sequence[int]] = BLACK,
    foreground: Union[str, Sequence[int]] = WHITE,
    line_width: Optional[float] = None,
    **canvas_kwargs
) -> Turtle:
    """Build a canvas ready for turtle drawing and a turtle at its centre.

    The canvas is cleared to ``background`` and strokes in ``foreground``; the
    turtle sits at the logical origin facing +X.

    Parameters
    ----------
    pixel_width, pixel_height : int
        Buffer size in pixels
    logical_width : float
        Logical width of the canvas (height follows the aspect ratio)
    background, foreground : colour
        Clear colour and stroke colour
    line_width : float, optional
        Stroke width in logical units; None keeps the 1 px default
    **canvas_kwargs
        Passed to Canvas (target, export_path, antialias, title)
    """
    canvas = Canvas(pixel_width, pixel_height, logical_width, **canvas_kwargs)
    canvas.clear(background)
    canvas.set_color(foreground)
    if line_width is not None:
        canvas.set_line_width(line_width)
    logger.debug(f"Turtle canvas ready: {pixel_width}x{pixel_height} px, logical width {logical_width}")
    return Turtle(canvas)
