"""Filter pipeline driver: load one cloud, run the filters in order, write it."""

from __future__ import annotations

from pathlib import Path

from pcconvert.filters.clip import ClipFilter
from pcconvert.filters.estimate_normals import EstimateNormalsFilter
from pcconvert.filters.orient_normals import OrientNormalsFilter
from pcconvert.filters.voxel_downsample import VoxelDownsampleFilter
from pcconvert.utils.io import read_point_cloud, write_point_cloud

from .contracts import ConversionResult, FilterOptions
from .filter_base import BaseFilter
from .logging import RunContext

# Execution order matters: clip before downsampling, normals after both.
FILTER_CHAIN: tuple[type[BaseFilter], ...] = (
    ClipFilter,
    VoxelDownsampleFilter,
    EstimateNormalsFilter,
    OrientNormalsFilter,
)


def convert_file(
    input_path: Path,
    output_path: Path,
    options: FilterOptions,
    ctx: RunContext | None = None,
) -> ConversionResult:
    """Convert a single point cloud file, applying the enabled filters.

    Raises:
        FileNotFoundError: input does not exist.
        RuntimeError: input could not be read or output could not be written.
    """
    ctx = ctx or RunContext()
    input_path = Path(input_path)
    output_path = Path(output_path)

    pcd = read_point_cloud(input_path)
    num_points_in = len(pcd.points)
    ctx.debug(f"Loaded {num_points_in} points from {input_path}")

    processed = False
    for filter_cls in FILTER_CHAIN:
        step = filter_cls(options, ctx)
        if not step.is_enabled(pcd):
            continue
        pcd = step.execute(pcd)
        processed = processed or step.changes_points

    num_points_out = len(pcd.points)
    if processed:
        ctx.info(f"Processed point cloud from {num_points_in} points to {num_points_out} points.")

    write_point_cloud(output_path, pcd)

    return ConversionResult(
        input_path=input_path,
        output_path=output_path,
        num_points_in=num_points_in,
        num_points_out=num_points_out,
        processed=processed,
    )
