"""Logical ↔ device coordinate transform.

Coordinate frames:
    - logical: origin at the centre of the buffer, +X right, +Y up, real-valued
    - device: origin at the top-left pixel, +X right, +Y down, integer

The transform is a uniform scale (pixels per logical unit) plus a centre
offset and a Y flip:

    x_px = round(scale * x) + pixel_width // 2
    y_px = pixel_height // 2 - round(scale * y)

Magnitudes (radii, widths, box extents) only get scaled, never offset.

Rounding is half-away-from-zero, so a shape centred on the origin maps onto
pixels symmetrically on both sides of the centre.
"""

import math

from src.painter.errors import ConfigError


def round_half_away(v: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(v) + 0.5), v))


class CoordinateSpace:
    """Scale state and conversions between logical and device coordinates.

    Attributes
    ----------
    pixel_width : int
        Buffer width in pixels
    pixel_height : int
        Buffer height in pixels
    scale : float
        Pixels per logical unit, always > 0
    """

    def __init__(self, pixel_width: int, pixel_height: int, logical_width: float = 10.0):
        if int(pixel_width) <= 0 or int(pixel_height) <= 0:
            raise ConfigError(
                f"Pixel dimensions must be at least 1, got {pixel_width}x{pixel_height}"
            )
        self.pixel_width = int(pixel_width)
        self.pixel_height = int(pixel_height)
        self.scale = 1.0
        self.rescale(logical_width)

    def rescale(self, logical_width: float) -> None:
        """Make the buffer `logical_width` logical units wide.

        Parameters
        ----------
        logical_width : float
            New logical width, must be > 0

        Raises
        ------
        ConfigError
            If logical_width is not positive
        """
        if not logical_width > 0:
            raise ConfigError(f"Logical width must be positive, got {logical_width}")
        self.scale = self.pixel_width / logical_width

    @property
    def width(self) -> float:
        """Current logical width."""
        return self.pixel_width / self.scale

    @property
    def height(self) -> float:
        """Current logical height."""
        return self.pixel_height / self.scale

    def to_device_x(self, x: float) -> int:
        return round_half_away(self.scale * x) + self.pixel_width // 2

    def to_device_y(self, y: float) -> int:
        return self.pixel_height // 2 - round_half_away(self.scale * y)

    def to_device(self, point) -> tuple:
        """Convert a logical (x, y) point to a device (x_px, y_px) pixel."""
        x, y = point
        return self.to_device_x(x), self.to_device_y(y)

    def to_device_length(self, v: float) -> int:
        return round_half_away(self.scale * v)

    def from_device_x(self, x_px: float) -> float:
        return (x_px - self.pixel_width // 2) / self.scale

    def from_device_y(self, y_px: float) -> float:
        return (self.pixel_height // 2 - y_px) / self.scale

    def from_device(self, pixel) -> tuple:
        """Convert a device pixel back to logical coordinates (no rounding)."""
        x_px, y_px = pixel
        return self.from_device_x(x_px), self.from_device_y(y_px)

    def __repr__(self) -> str:
        return (
            f"CoordinateSpace({self.pixel_width}x{self.pixel_height} px, "
            f"scale={self.scale:.4f} px/unit)"
        )
