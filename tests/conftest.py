"""Shared pytest fixtures for pcconvert tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import open3d as o3d
import pytest

from pcconvert.core.logging import RunContext


def make_cloud(points, normals=None, colors=None) -> o3d.geometry.PointCloud:
    """Build an Open3D cloud from plain arrays."""
    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(np.asarray(points, dtype=np.float64))
    if normals is not None:
        pcd.normals = o3d.utility.Vector3dVector(np.asarray(normals, dtype=np.float64))
    if colors is not None:
        pcd.colors = o3d.utility.Vector3dVector(np.asarray(colors, dtype=np.float64))
    return pcd


def write_cloud(path: Path, pcd: o3d.geometry.PointCloud) -> Path:
    assert o3d.io.write_point_cloud(str(path), pcd)
    return path


def plane_grid(n: int = 15, spacing: float = 0.1) -> np.ndarray:
    """(n*n, 3) grid of points on the z=0 plane."""
    xs, ys = np.meshgrid(np.arange(n) * spacing, np.arange(n) * spacing)
    return np.column_stack([xs.ravel(), ys.ravel(), np.zeros(n * n)])


@pytest.fixture
def ctx() -> RunContext:
    return RunContext(verbosity=3)


@pytest.fixture
def random_points() -> np.ndarray:
    """1000 points with x in [-10, 20], y and z in [-5, 5]."""
    rng = np.random.default_rng(42)
    return np.column_stack([
        rng.uniform(-10.0, 20.0, 1000),
        rng.uniform(-5.0, 5.0, 1000),
        rng.uniform(-5.0, 5.0, 1000),
    ])


@pytest.fixture
def random_cloud_ply(tmp_path: Path, random_points: np.ndarray) -> Path:
    return write_cloud(tmp_path / "random.ply", make_cloud(random_points))


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory with three small PLY clouds and a nested subdirectory."""
    src = tmp_path / "clouds"
    src.mkdir()
    rng = np.random.default_rng(7)
    for i in range(3):
        write_cloud(src / f"scan_{i}.ply", make_cloud(rng.uniform(0.0, 1.0, (50 + 10 * i, 3))))
    nested = src / "nested"
    nested.mkdir()
    write_cloud(nested / "ignored.ply", make_cloud(rng.uniform(0.0, 1.0, (20, 3))))
    return src
