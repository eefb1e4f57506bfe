"""I/O utilities: point cloud read/write via Open3D, directory helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Fixed write policy: binary (non-ASCII), compressed where the format supports it.
WRITE_ASCII = False
WRITE_COMPRESSED = True


# ── Point cloud I/O ──────────────────────────────────────────────────

def read_point_cloud(path: Path):
    """Read a point cloud in any format Open3D recognises from its extension.

    Raises:
        FileNotFoundError: if ``path`` is not an existing file.
        RuntimeError: if the file could not be parsed or holds no points.
    """
    import open3d as o3d

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Point cloud file not found: {path}")

    pcd = o3d.io.read_point_cloud(str(path))
    if pcd is None or not pcd.has_points():
        raise RuntimeError(f"Failed to read point cloud (no points): {path}")
    logger.debug(f"Read {len(pcd.points)} points from {path.name}")
    return pcd


def write_point_cloud(path: Path, pcd) -> None:
    """Write ``pcd`` to ``path``; the format follows the file extension."""
    import open3d as o3d

    path = Path(path)
    if not pcd.has_points():
        raise RuntimeError(f"Failed to write point cloud (no points left): {path}")
    ok = o3d.io.write_point_cloud(
        str(path), pcd, write_ascii=WRITE_ASCII, compressed=WRITE_COMPRESSED
    )
    if not ok:
        raise RuntimeError(f"Failed to write point cloud: {path}")
    logger.debug(f"Wrote {len(pcd.points)} points -> {path}")


# ── Filesystem helpers ───────────────────────────────────────────────

def regularize_directory_name(directory: str | Path) -> str:
    """Return ``directory`` as a string ending in exactly one separator."""
    text = str(directory)
    stripped = text.rstrip("/" + os.sep)
    if not stripped and text:
        # Root directory
        return text[0]
    return stripped + os.sep


def base_name(path: str | Path) -> str:
    """File name without its directory part."""
    return Path(path).name


def list_files_in_directory(directory: Path) -> list[Path]:
    """Regular files directly inside ``directory``, sorted by name (non-recursive)."""
    return sorted(p for p in Path(directory).iterdir() if p.is_file())


def make_directory_hierarchy(directory: Path) -> Path:
    """Create ``directory`` and any missing parents; no error if it exists."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
