"""Estimate normals from a radius neighborhood."""

from __future__ import annotations

from typing import ClassVar

import numpy as np

from pcconvert.core.filter_base import BaseFilter
from pcconvert.utils.geometry import align_signs

# Orientation used when the cloud had no normals to begin with.
DEFAULT_ORIENTATION = (0.0, 0.0, -1.0)


def estimate_normals(pcd, radius: float):
    """Estimate normals of ``pcd`` in place using a KD-tree radius search.

    If ``pcd`` already has normals, each new normal is flipped to agree with
    the previous normal at the same index. Otherwise the new normals are
    oriented toward DEFAULT_ORIENTATION.
    """
    import open3d as o3d

    previous = np.asarray(pcd.normals).copy() if pcd.has_normals() else None

    pcd.estimate_normals(search_param=o3d.geometry.KDTreeSearchParamRadius(radius=radius))

    if previous is not None:
        normals, _ = align_signs(np.asarray(pcd.normals), previous)
        pcd.normals = o3d.utility.Vector3dVector(normals)
    else:
        pcd.orient_normals_to_align_with_direction(
            orientation_reference=np.array(DEFAULT_ORIENTATION)
        )
    return pcd


class EstimateNormalsFilter(BaseFilter):
    """Normal estimation, active when a positive search radius was given."""

    name: ClassVar[str] = "estimate_normals"

    def is_enabled(self, pcd) -> bool:
        return self.options.normals_enabled

    def run(self, pcd):
        if not pcd.has_points():
            self.ctx.warning("Skip normal estimation: point cloud is empty.")
            return pcd
        self.ctx.debug(f"Estimate normals with search radius {self.options.normal_radius:.4f}.")
        return estimate_normals(pcd, self.options.normal_radius)
