"""Batch orchestrator: dispatches single files or whole directories to the converter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pcconvert.utils.io import (
    base_name,
    list_files_in_directory,
    make_directory_hierarchy,
    regularize_directory_name,
)

from .contracts import BatchReport, ConversionResult, FilterOptions
from .converter import convert_file
from .logging import RunContext


def load_filter_options(
    config_path: Path | None = None, ctx: RunContext | None = None, **overrides: Any
) -> FilterOptions:
    """Build FilterOptions from an optional YAML file plus command line overrides.

    Overrides whose value is None are treated as not given, so the YAML value
    (or the model default) is kept. An orientation that does not have exactly
    three numeric components is dropped with a debug message.

    Raises:
        ValueError: the YAML file is missing, malformed or has unknown keys.
    """
    raw: dict[str, Any] = {}
    if config_path is not None:
        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot read config file {config_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

    ctx = ctx or RunContext()
    raw.update({k: v for k, v in overrides.items() if v is not None})
    try:
        options = FilterOptions(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid filter options: {e}") from e

    requested = raw.get("orient_normals")
    if requested is not None and options.orient_normals is None:
        ctx.debug(f"Ignoring orientation {requested!r}: expected 3 numeric components")
    return options


def _convert_one(
    input_path: Path, output_path: Path, options: FilterOptions, ctx: RunContext
) -> ConversionResult:
    try:
        return convert_file(input_path, output_path, options, ctx)
    except (OSError, RuntimeError) as e:
        ctx.error(f"Failed to convert {input_path}: {e}")
        return ConversionResult(input_path=input_path, output_path=output_path, error=str(e))


def run_conversion(
    source: Path,
    target: Path,
    options: FilterOptions,
    ctx: RunContext | None = None,
) -> BatchReport:
    """Convert ``source`` into ``target``.

    A file source is converted directly. A directory source has every file
    directly inside it converted into ``target`` (created if needed) under
    the same base name. A failing file is logged and the rest still run.

    Raises:
        FileNotFoundError: ``source`` is neither a file nor a directory.
        OSError: the target directory cannot be created.
    """
    ctx = ctx or RunContext()
    source = Path(source)
    target = Path(target)
    report = BatchReport(source=source, target=target)

    if source.is_file():
        report.results.append(_convert_one(source, target, options, ctx))
    elif source.is_dir():
        try:
            make_directory_hierarchy(target)
        except OSError as e:
            ctx.error(f"Cannot create target directory {target}: {e}")
            raise
        filenames = list_files_in_directory(source)
        ctx.debug(f"Found {len(filenames)} files in {source}")
        target_prefix = regularize_directory_name(target)
        for fn in filenames:
            output_path = Path(target_prefix + base_name(fn))
            report.results.append(_convert_one(fn, output_path, options, ctx))
    else:
        raise FileNotFoundError(f"File or directory does not exist: {source}")

    return report
