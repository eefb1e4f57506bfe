"""Pydantic models shared by the converter, the filters and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOWEST = float(np.finfo(np.float64).min)
HIGHEST = float(np.finfo(np.float64).max)

CLIP_FIELDS = (
    "clip_x_min", "clip_x_max",
    "clip_y_min", "clip_y_max",
    "clip_z_min", "clip_z_max",
)


def parse_vector(value: Any) -> Optional[tuple[float, ...]]:
    """Parse 'x,y,z' / '[x,y,z]' strings or sequences into a float tuple.

    Returns None when the value is empty, not a sequence, or any component is
    not a number.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().strip("[]()")
        if not text:
            return None
        parts = [p for p in text.replace(" ", ",").split(",") if p]
    else:
        parts = value
    try:
        return tuple(float(p) for p in parts)
    except (TypeError, ValueError):
        return None


class FilterOptions(BaseModel):
    """Filter settings built once per invocation and shared by every file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    clip_x_min: Optional[float] = Field(None, description="Drop points with x < clip_x_min")
    clip_x_max: Optional[float] = Field(None, description="Drop points with x > clip_x_max")
    clip_y_min: Optional[float] = Field(None, description="Drop points with y < clip_y_min")
    clip_y_max: Optional[float] = Field(None, description="Drop points with y > clip_y_max")
    clip_z_min: Optional[float] = Field(None, description="Drop points with z < clip_z_min")
    clip_z_max: Optional[float] = Field(None, description="Drop points with z > clip_z_max")
    voxel_size: float = Field(0.0, description="Voxel edge length for downsampling (<= 0 = disabled)")
    normal_radius: float = Field(0.0, description="Search radius for normal estimation (<= 0 = disabled)")
    orient_normals: Optional[tuple[float, float, float]] = Field(
        None, description="Flip normals to face this direction (needs exactly 3 components)"
    )

    @field_validator("orient_normals", mode="before")
    @classmethod
    def _three_components_or_none(cls, value: Any) -> Optional[tuple[float, ...]]:
        vector = parse_vector(value)
        if vector is not None and len(vector) != 3:
            return None
        return vector

    @property
    def clip_enabled(self) -> bool:
        return any(getattr(self, name) is not None for name in CLIP_FIELDS)

    @property
    def min_bound(self) -> np.ndarray:
        return np.array([
            LOWEST if self.clip_x_min is None else self.clip_x_min,
            LOWEST if self.clip_y_min is None else self.clip_y_min,
            LOWEST if self.clip_z_min is None else self.clip_z_min,
        ])

    @property
    def max_bound(self) -> np.ndarray:
        return np.array([
            HIGHEST if self.clip_x_max is None else self.clip_x_max,
            HIGHEST if self.clip_y_max is None else self.clip_y_max,
            HIGHEST if self.clip_z_max is None else self.clip_z_max,
        ])

    @property
    def voxel_enabled(self) -> bool:
        return self.voxel_size > 0.0

    @property
    def normals_enabled(self) -> bool:
        return self.normal_radius > 0.0


class ConversionResult(BaseModel):
    """Outcome of converting one file."""

    input_path: Path
    output_path: Path
    num_points_in: int = 0
    num_points_out: int = 0
    processed: bool = Field(False, description="True if clip, downsample or normal estimation ran")
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchReport(BaseModel):
    """All conversions performed by one invocation, in processing order."""

    source: Path
    target: Path
    results: list[ConversionResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[ConversionResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[ConversionResult]:
        return [r for r in self.results if not r.ok]
