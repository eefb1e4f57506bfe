"""Tests for the single-file filter pipeline driver."""

import logging
from pathlib import Path

import numpy as np
import open3d as o3d
import pytest

from conftest import make_cloud, plane_grid, write_cloud
from pcconvert.core.contracts import ConversionResult, FilterOptions
from pcconvert.core.converter import FILTER_CHAIN, convert_file
from pcconvert.core.logging import RunContext

SUMMARY_PREFIX = "Processed point cloud from"


def _summaries(caplog) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.getMessage().startswith(SUMMARY_PREFIX)]


def _read(path: Path) -> o3d.geometry.PointCloud:
    return o3d.io.read_point_cloud(str(path))


class TestFilterChain:
    def test_fixed_order(self):
        assert [f.name for f in FILTER_CHAIN] == [
            "clip", "voxel_downsample", "estimate_normals", "orient_normals",
        ]


class TestConvertFile:
    def test_pure_conversion_is_lossless(self, tmp_path, random_cloud_ply, random_points, ctx, caplog):
        caplog.set_level(logging.DEBUG, logger="pcconvert")
        out = tmp_path / "copy.ply"

        result = convert_file(random_cloud_ply, out, FilterOptions(), ctx)

        assert isinstance(result, ConversionResult)
        assert result.processed is False
        assert result.num_points_in == result.num_points_out == 1000
        np.testing.assert_array_equal(np.asarray(_read(out).points), random_points)
        assert _summaries(caplog) == []

    def test_clip_scenario(self, tmp_path, random_cloud_ply, random_points, caplog):
        caplog.set_level(logging.INFO, logger="pcconvert")
        out = tmp_path / "clipped.ply"

        result = convert_file(
            random_cloud_ply, out, FilterOptions(clip_x_min=0.0, clip_x_max=10.0), RunContext()
        )

        expected = random_points[(random_points[:, 0] >= 0.0) & (random_points[:, 0] <= 10.0)]
        written = np.asarray(_read(out).points)
        np.testing.assert_array_equal(written, expected)
        assert result.num_points_out == len(expected)
        assert _summaries(caplog) == [
            f"Processed point cloud from 1000 points to {len(expected)} points."
        ]

    def test_summary_respects_verbosity(self, tmp_path, random_cloud_ply, caplog):
        caplog.set_level(logging.DEBUG, logger="pcconvert")
        convert_file(
            random_cloud_ply, tmp_path / "o.ply", FilterOptions(voxel_size=1.0), RunContext(verbosity=1)
        )
        assert _summaries(caplog) == []

    def test_orientation_alone_is_not_processing(self, tmp_path, ctx, caplog):
        caplog.set_level(logging.DEBUG, logger="pcconvert")
        normals = np.tile([0.0, 0.0, -1.0], (10, 1))
        src = write_cloud(tmp_path / "n.ply", make_cloud(np.random.rand(10, 3), normals=normals))
        out = tmp_path / "oriented.ply"

        result = convert_file(src, out, FilterOptions(orient_normals="0,0,1"), ctx)

        assert result.processed is False
        assert _summaries(caplog) == []
        np.testing.assert_allclose(np.asarray(_read(out).normals), -normals)

    def test_voxel_then_normals(self, tmp_path, ctx):
        src = write_cloud(tmp_path / "plane.ply", make_cloud(plane_grid(n=20, spacing=0.05)))
        out = tmp_path / "plane_out.ply"

        result = convert_file(
            src, out, FilterOptions(voxel_size=0.1, normal_radius=0.25, orient_normals="0,0,1"), ctx
        )

        assert result.processed is True
        assert result.num_points_out < result.num_points_in
        written = _read(out)
        assert written.has_normals()
        # Estimated toward -Z, then oriented toward +Z
        assert np.all(np.asarray(written.normals)[:, 2] > 0.99)

    def test_radius_zero_leaves_normals_absent(self, tmp_path, random_cloud_ply, ctx):
        out = tmp_path / "o.ply"
        convert_file(random_cloud_ply, out, FilterOptions(normal_radius=0.0, voxel_size=0.0), ctx)
        assert not _read(out).has_normals()

    def test_format_conversion_ply_to_pcd(self, tmp_path, ctx):
        pts = np.array([[0.0, 0.0, 0.0], [0.5, 0.25, 1.0], [2.0, 4.0, 8.0]])
        src = write_cloud(tmp_path / "in.ply", make_cloud(pts))
        out = tmp_path / "out.pcd"

        convert_file(src, out, FilterOptions(), ctx)

        np.testing.assert_allclose(np.asarray(_read(out).points), pts, atol=1e-6)

    def test_missing_input_raises(self, tmp_path, ctx):
        with pytest.raises(FileNotFoundError):
            convert_file(tmp_path / "missing.ply", tmp_path / "o.ply", FilterOptions(), ctx)
        assert not (tmp_path / "o.ply").exists()

    def test_everything_clipped_fails_on_write(self, tmp_path, random_cloud_ply, ctx):
        opts = FilterOptions(clip_x_min=1000.0)
        with pytest.raises(RuntimeError, match="Failed to write"):
            convert_file(random_cloud_ply, tmp_path / "empty.ply", opts, ctx)
