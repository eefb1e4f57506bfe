"""Logging setup and verbosity context for pcconvert."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

MIN_VERBOSITY = 0
MAX_VERBOSITY = 4
DEFAULT_VERBOSITY = 2

_VERBOSITY_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
    4: logging.DEBUG,
}


def clamp_verbosity(verbosity: int) -> int:
    """Clamp a --verbose value into the supported 0-4 range."""
    return max(MIN_VERBOSITY, min(MAX_VERBOSITY, int(verbosity)))


def level_for_verbosity(verbosity: int) -> int:
    """Map a 0-4 verbosity value to a stdlib logging level."""
    return _VERBOSITY_LEVELS[clamp_verbosity(verbosity)]


@dataclass(frozen=True)
class RunContext:
    """Per-invocation settings passed explicitly to every component.

    Components ask the context whether a message is wanted instead of relying
    on a process-wide verbosity setting, so two contexts with different
    verbosity can coexist (e.g. in tests).
    """

    verbosity: int = DEFAULT_VERBOSITY
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("pcconvert"))

    def __post_init__(self) -> None:
        object.__setattr__(self, "verbosity", clamp_verbosity(self.verbosity))

    @property
    def level(self) -> int:
        return level_for_verbosity(self.verbosity)

    def enabled_for(self, level: int) -> bool:
        return level >= self.level

    def log(self, level: int, msg: str, *args) -> None:
        if self.enabled_for(level):
            self.logger.log(level, msg, *args)

    def debug(self, msg: str, *args) -> None:
        self.log(logging.DEBUG, msg, *args)

    def info(self, msg: str, *args) -> None:
        self.log(logging.INFO, msg, *args)

    def warning(self, msg: str, *args) -> None:
        self.log(logging.WARNING, msg, *args)

    def error(self, msg: str, *args) -> None:
        self.log(logging.ERROR, msg, *args)


def set_open3d_verbosity(verbosity: int) -> None:
    """Align Open3D's own console output with the requested verbosity."""
    import open3d as o3d

    levels = o3d.utility.VerbosityLevel
    mapping = {
        0: levels.Error,
        1: levels.Warning,
        2: levels.Info,
        3: levels.Debug,
        4: levels.Debug,
    }
    o3d.utility.set_verbosity_level(mapping[clamp_verbosity(verbosity)])


def setup_logging(verbosity: int = DEFAULT_VERBOSITY) -> RunContext:
    """Configure structured logging with consistent format.

    Returns the RunContext that should be threaded through the run.
    """
    level = level_for_verbosity(verbosity)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    return RunContext(verbosity=verbosity)
