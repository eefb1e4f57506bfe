"""Clip: keep only the points inside an axis-aligned box."""

from __future__ import annotations

from typing import ClassVar

import numpy as np

from pcconvert.core.filter_base import BaseFilter
from pcconvert.utils.geometry import box_indices


def clip_point_cloud(pcd, min_bound, max_bound):
    """Return a new cloud with the points inside [min_bound, max_bound] (inclusive).

    Relative order is preserved and normals/colors stay index-aligned with
    their points. The input cloud is not modified.
    """
    indices = box_indices(np.asarray(pcd.points), min_bound, max_bound)
    return pcd.select_by_index(indices.tolist())


class ClipFilter(BaseFilter):
    """Bounding-box clip, active when any clip bound was given."""

    name: ClassVar[str] = "clip"

    def is_enabled(self, pcd) -> bool:
        return self.options.clip_enabled

    def run(self, pcd):
        min_bound = self.options.min_bound
        max_bound = self.options.max_bound
        self.ctx.debug(f"Clip point cloud to min {min_bound.tolist()}, max {max_bound.tolist()}.")
        return clip_point_cloud(pcd, min_bound, max_bound)
