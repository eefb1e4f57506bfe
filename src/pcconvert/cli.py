"""CLI entry point for pcconvert.

Usage:
    pcconvert source_file target_file [options]
    pcconvert source_directory target_directory [options]

Options are applied in a fixed order: clip, voxel downsample, normal
estimation, normal orientation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pcconvert.core.contracts import BatchReport
from pcconvert.core.logging import DEFAULT_VERBOSITY, set_open3d_verbosity, setup_logging

app = typer.Typer(
    name="pcconvert",
    help="Read point clouds from a source file or directory and convert them to the target.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _print_report(report: BatchReport) -> None:
    table = Table(title=f"Converted {len(report.succeeded)}/{len(report.results)} files")
    table.add_column("#", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Points in", justify="right")
    table.add_column("Points out", justify="right")
    table.add_column("Status", style="yellow")

    for i, result in enumerate(report.results, 1):
        table.add_row(
            str(i),
            result.input_path.name,
            str(result.num_points_in) if result.ok else "-",
            str(result.num_points_out) if result.ok else "-",
            "OK" if result.ok else "FAILED",
        )
    console.print(table)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def convert(
    ctx: typer.Context,
    source: Optional[Path] = typer.Argument(None, help="Source file or directory"),
    target: Optional[Path] = typer.Argument(None, help="Target file or directory"),
    verbose: int = typer.Option(DEFAULT_VERBOSITY, "--verbose", help="Verbosity level (0-4)"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML file with filter options"),
    clip_x_min: Optional[float] = typer.Option(None, "--clip_x_min", help="Clip points with x < x0"),
    clip_x_max: Optional[float] = typer.Option(None, "--clip_x_max", help="Clip points with x > x1"),
    clip_y_min: Optional[float] = typer.Option(None, "--clip_y_min", help="Clip points with y < y0"),
    clip_y_max: Optional[float] = typer.Option(None, "--clip_y_max", help="Clip points with y > y1"),
    clip_z_min: Optional[float] = typer.Option(None, "--clip_z_min", help="Clip points with z < z0"),
    clip_z_max: Optional[float] = typer.Option(None, "--clip_z_max", help="Clip points with z > z1"),
    voxel_sample: Optional[float] = typer.Option(
        None, "--voxel_sample", help="Downsample the point cloud with this voxel size"
    ),
    estimate_normals: Optional[float] = typer.Option(
        None,
        "--estimate_normals",
        help="Estimate normals within this search radius. Oriented w.r.t. existing "
        "normals if present, otherwise towards -Z",
    ),
    orient_normals: Optional[str] = typer.Option(
        None, "--orient_normals", help="Orient the normals w.r.t. the direction x,y,z"
    ),
) -> None:
    """Convert point clouds between formats, optionally clipping, downsampling and estimating normals."""
    if source is None or target is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    run_ctx = setup_logging(verbose)
    set_open3d_verbosity(run_ctx.verbosity)

    from pcconvert.core.pipeline_runner import load_filter_options, run_conversion

    try:
        options = load_filter_options(
            config,
            clip_x_min=clip_x_min,
            clip_x_max=clip_x_max,
            clip_y_min=clip_y_min,
            clip_y_max=clip_y_max,
            clip_z_min=clip_z_min,
            clip_z_max=clip_z_max,
            voxel_size=voxel_sample,
            normal_radius=estimate_normals,
            orient_normals=orient_normals,
            ctx=run_ctx,
        )
    except ValueError as e:
        err_console.print(str(e), style="red", markup=False)
        raise typer.Exit(1)

    try:
        report = run_conversion(source, target, options, run_ctx)
    except FileNotFoundError:
        err_console.print("[red]File or directory does not exist.[/red]")
        raise typer.Exit(1)
    except OSError as e:
        err_console.print(f"Cannot create target directory: {e}", style="red", markup=False)
        raise typer.Exit(1)

    if source.is_dir() and run_ctx.verbosity >= DEFAULT_VERBOSITY:
        _print_report(report)

    # Exit status is 1 whether or not the conversion succeeded.
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
