"""Base class for all point cloud filters.

Every filter reads its settings from the shared FilterOptions and decides on
its own whether it applies to the current cloud. The converter runs filters
in a fixed order and only cares about three things: whether a filter is
enabled, what cloud it returns, and whether it counts as processing for the
final summary line.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import ClassVar

from .contracts import FilterOptions
from .logging import RunContext


class BaseFilter(ABC):
    """Abstract base for pipeline filters.

    Subclasses must:
    1. Set the ``name`` class variable
    2. Implement is_enabled() and run()
    3. Set ``changes_points = False`` if they only touch normals/colors
       and should not trigger the point count summary

    ``run`` may return a new cloud (clip, downsample) or the same object
    with modified attributes (normal estimation, orientation).

    Example:
        class ClipFilter(BaseFilter):
            name = "clip"

            def is_enabled(self, pcd) -> bool: ...
            def run(self, pcd): ...
    """

    name: ClassVar[str] = ""
    changes_points: ClassVar[bool] = True

    def __init__(self, options: FilterOptions, ctx: RunContext):
        self.options = options
        self.ctx = ctx

    @abstractmethod
    def is_enabled(self, pcd) -> bool:
        """Whether this filter applies to ``pcd`` under the current options."""
        ...

    @abstractmethod
    def run(self, pcd):
        """Apply the filter. Returns the resulting cloud."""
        ...

    def execute(self, pcd):
        """Run with logging and timing."""
        filter_name = self.name or self.__class__.__name__
        before = len(pcd.points)
        t0 = time.time()
        result = self.run(pcd)
        elapsed = time.time() - t0
        self.ctx.debug(
            f"[{filter_name}] {before} -> {len(result.points)} points in {elapsed:.3f}s"
        )
        return result
