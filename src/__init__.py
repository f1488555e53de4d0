"""Turtle Painter: a small 2D procedural-drawing engine.

This package contains a raster canvas addressed in logical coordinates, a
turtle layer on top of it, a deterministic colour wheel, and the drivers
built on them (spirolateral curves, street-net tariffs).

Architecture layers (strict one-way dependency):
    scripts/ → src/apps/ → src/{painter,tariff}/ → src/utils/

Key invariants:
    - Logical coordinates: origin at the canvas centre, +Y up
    - Device coordinates: origin at the top-left pixel, +Y down
    - Angles in degrees at the API, counterclockwise from +X
    - Buffers are (H, W, 3) uint8 RGB
    - YAML-only configs
"""

__version__ = "1.0.0"
