"""Drawing engine: coordinates, canvas, turtle and colour wheel.

Modules:
    - coordinates: logical ↔ device transform (CoordinateSpace)
    - canvas: raster primitives on an RGB buffer (Canvas, DrawStyle, RenderTarget)
    - turtle: position/heading state machine over a canvas (Turtle, create_turtle)
    - shades: six-sector colour wheel (ShadeWheel, shade, shade_hex)
    - fonts: ordered font fallback (resolve_font)
    - display: matplotlib window presenter (imported lazily)
    - spirolateral: closed spirolateral curves (draw_spirolateral)
"""

from .canvas import Canvas, DrawStyle, RenderTarget, to_rgb
from .coordinates import CoordinateSpace
from .errors import ConfigError
from .shades import ShadeWheel, shade, shade_hex
from .spirolateral import SpirolateralResult, draw_spirolateral
from .turtle import Turtle, create_turtle

__all__ = [
    'Canvas',
    'ConfigError',
    'CoordinateSpace',
    'DrawStyle',
    'RenderTarget',
    'ShadeWheel',
    'SpirolateralResult',
    'Turtle',
    'create_turtle',
    'draw_spirolateral',
    'shade',
    'shade_hex',
    'to_rgb',
]
