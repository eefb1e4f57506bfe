"""Voxel downsample: one centroid per occupied voxel cell."""

from __future__ import annotations

from typing import ClassVar

from pcconvert.core.filter_base import BaseFilter


class VoxelDownsampleFilter(BaseFilter):
    """Open3D voxel grid downsampling, active when voxel_size > 0.

    Open3D replaces all points falling into the same cell by their centroid
    (normals and colors are averaged the same way), which is deterministic
    for a given input and voxel size.
    """

    name: ClassVar[str] = "voxel_downsample"

    def is_enabled(self, pcd) -> bool:
        return self.options.voxel_enabled

    def run(self, pcd):
        if not pcd.has_points():
            self.ctx.warning("Skip voxel downsample: point cloud is empty.")
            return pcd
        self.ctx.debug(f"Downsample point cloud with voxel size {self.options.voxel_size:.4f}.")
        return pcd.voxel_down_sample(self.options.voxel_size)
