"""YAML schema validation and config loading.

Provides validation for the drawing configuration files using pydantic:
    - Spirolateral schema (spirolateral.v1.yaml): canvas style and colour wheel

All entry points load configs through these validators for fail-fast error
detection with actionable messages (offending keys, expected ranges).

Units:
    - Geometry: logical units (the canvas is ``logical_width`` units wide)
    - Colour: [r, g, b] lists of ints in [0, 255] or colour strings ("#RRGGBB", "white")

Usage:
    from src.utils import validators

    cfg = validators.load_spirolateral_config("configs/spirolateral.v1.yaml")
    cfg.canvas.background   # (0, 0, 0)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.painter.canvas import to_rgb
from src.painter.errors import ConfigError
from src.painter.shades import DEFAULT_HUE_OFFSET


def _color(v: Union[str, List[int], Tuple[int, ...]]) -> Tuple[int, int, int]:
    if isinstance(v, (list, tuple)):
        if len(v) != 3:
            raise ValueError(f"Colour must have 3 channels, got {v}")
        for c in v:
            if not 0 <= int(c) <= 255:
                raise ValueError(f"Colour channels must be in [0, 255], got {v}")
    try:
        return to_rgb(v)
    except ConfigError as e:
        raise ValueError(str(e)) from e


# ============================================================================
# SPIROLATERAL SCHEMA V1
# ============================================================================

class CanvasStyle(BaseModel):
    """Canvas appearance for a drawing run."""
    model_config = ConfigDict(extra='forbid')

    background: Tuple[int, int, int] = Field((0, 0, 0), description="Clear colour")
    foreground: Tuple[int, int, int] = Field((255, 255, 255), description="Initial stroke colour")
    line_width: Optional[float] = Field(None, ge=0.0, description="Stroke width in logical units (None = 1 px)")
    antialias: bool = Field(True, description="Anti-aliased rasterisation")

    @field_validator('background', 'foreground', mode='before')
    @classmethod
    def validate_color(cls, v):
        return _color(v)


class ShadesConfig(BaseModel):
    """Colour wheel settings."""
    model_config = ConfigDict(extra='forbid')

    saturation_floor: int = Field(0, ge=0, le=255, description="0 = pure hues, 255 = white")
    hue_offset: int = Field(DEFAULT_HUE_OFFSET, description="Starting hue in 1/256 sectors (6·256 = 360°)")


class SpirolateralConfigV1(BaseModel):
    """Style configuration for the spirolateral driver (spirolateral.v1.yaml)."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    schema_version: str = Field("spirolateral.v1", alias="schema", description="Schema version")
    canvas: CanvasStyle = Field(default_factory=CanvasStyle)
    shades: ShadesConfig = Field(default_factory=ShadesConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "spirolateral.v1":
            raise ValueError(f"Expected schema 'spirolateral.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_spirolateral_config(path: Union[str, Path]) -> SpirolateralConfigV1:
    """Load and validate a spirolateral config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to spirolateral.v1.yaml file

    Returns
    -------
    SpirolateralConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Spirolateral config not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Spirolateral config is not valid YAML at {path}: {e}") from e
    try:
        return SpirolateralConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Spirolateral config validation failed at {path}: {e}") from e


def flatten_config(cfg: Union[Dict, BaseModel], prefix: str = "") -> Dict[str, Any]:
    """Flatten a nested config into dotted keys (for run summaries and logs).

    Examples
    --------
    >>> flatten_config({"canvas": {"line_width": 0.1}})
    {'canvas.line_width': 0.1}
    """
    if isinstance(cfg, BaseModel):
        cfg = cfg.model_dump()

    flat = {}
    for key, value in cfg.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_config(value, full_key))
        elif isinstance(value, tuple):
            flat[full_key] = list(value)
        else:
            flat[full_key] = value
    return flat
