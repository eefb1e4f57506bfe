"""Orient normals toward a user supplied direction."""

from __future__ import annotations

from typing import ClassVar

import numpy as np

from pcconvert.core.filter_base import BaseFilter
from pcconvert.utils.geometry import flip_toward


def orient_normals(pcd, direction) -> int:
    """Negate every normal of ``pcd`` facing away from ``direction``.

    Sign flip only: lengths are kept and the cloud is modified in place.
    Returns the number of flipped normals.
    """
    import open3d as o3d

    normals, flipped = flip_toward(np.asarray(pcd.normals), direction)
    pcd.normals = o3d.utility.Vector3dVector(normals)
    return int(flipped.sum())


class OrientNormalsFilter(BaseFilter):
    """Orientation pass, active when a 3D direction was given and the cloud has normals."""

    name: ClassVar[str] = "orient_normals"
    changes_points: ClassVar[bool] = False

    def is_enabled(self, pcd) -> bool:
        return self.options.orient_normals is not None and pcd.has_normals()

    def run(self, pcd):
        x, y, z = self.options.orient_normals
        self.ctx.debug(f"Orient normals to [{x:.2f}, {y:.2f}, {z:.2f}].")
        n_flipped = orient_normals(pcd, self.options.orient_normals)
        self.ctx.debug(f"Flipped {n_flipped}/{len(pcd.normals)} normals.")
        return pcd
