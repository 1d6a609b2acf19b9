"""snapdiff CLI: command-line interface for snapdiff.

Commands:
    compare     Show what changed between two snapshot files
    replay      Feed snapshot files in order through one comparer
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from typing import Any

import click
import yaml

from snapdiff import __version__
from snapdiff.comparer import ComparerConfig, CopyMode, SnapshotComparer, SnapshotError
from snapdiff.config import OUTPUT_FORMATS, SnapdiffConfig, load_config
from snapdiff.loader import SnapshotLoadError, load_snapshot
from snapdiff.models import DiffReport, ReplayReport

# --- Defaults ---

DEFAULT_FORMAT = "text"
DEFAULT_COPY_MODE = CopyMode.DEEP

EXIT_ERROR = 1
EXIT_CHANGED = 3


def _resolve_cfg(config_path: str | None) -> SnapdiffConfig:
    """Load config from --config or snapdiff.yaml (auto-discover)."""
    try:
        return load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(EXIT_ERROR)


def _or(explicit: Any, cfg_val: Any, fallback: Any) -> Any:
    """Return first non-None value: explicit CLI flag > config > fallback."""
    if explicit is not None:
        return explicit
    if cfg_val is not None:
        return cfg_val
    return fallback


_COMMON_OPTIONS = (
    click.option(
        "--format", "fmt",
        type=click.Choice(OUTPUT_FORMATS),
        default=None,
        help=f"Output format (default: {DEFAULT_FORMAT})",
    ),
    click.option(
        "--config", "config_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Path to snapdiff.yaml (default: auto-discover)",
    ),
    click.option(
        "--copy-mode",
        type=click.Choice([m.value for m in CopyMode]),
        default=None,
        help="How stored snapshots are copied (default: deep)",
    ),
    click.option(
        "--fail-on-change",
        is_flag=True,
        help=f"Exit with code {EXIT_CHANGED} if any change is reported",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Enable debug logging"),
)


def _common_options(f: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_COMMON_OPTIONS):
        f = option(f)
    return f


def _build_comparer(
    cfg: SnapdiffConfig, copy_mode: str | None,
) -> SnapshotComparer[Any, Any]:
    mode = CopyMode(_or(copy_mode, cfg.copy_mode, DEFAULT_COPY_MODE))
    return SnapshotComparer(ComparerConfig(copy_mode=mode))


def _load(path: str) -> dict[Any, Any]:
    try:
        return load_snapshot(path)
    except SnapshotLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


def _diff_step(
    comparer: SnapshotComparer[Any, Any],
    step: int,
    path: str,
) -> DiffReport:
    snapshot = _load(path)
    try:
        changed = comparer.update_and_compare(snapshot)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    try:
        return DiffReport.from_diff(
            step=step, changed=changed, total_count=len(snapshot), source=path,
        )
    except ValueError as e:
        click.echo(f"Error: {path}: {e}", err=True)
        sys.exit(EXIT_ERROR)


def _format_text(report: DiffReport) -> str:
    header = f"step {report.step} ({report.source})"
    if report.is_same:
        return f"{header}: no changes"
    lines = [f"{header}: {report.changed_count} changed / {report.total_count} total"]
    for key, value in report.changed.items():
        lines.append(f"  {key}: {json.dumps(value, default=str)}")
    return "\n".join(lines)


def _emit(data: DiffReport | ReplayReport, fmt: str) -> None:
    if fmt == "json":
        click.echo(json.dumps(data.model_dump(mode="json"), indent=2))
    elif fmt == "yaml":
        click.echo(
            yaml.safe_dump(data.model_dump(mode="json"), sort_keys=False).rstrip()
        )
    elif isinstance(data, ReplayReport):
        for report in data.steps:
            click.echo(_format_text(report))
    else:
        click.echo(_format_text(data))


def _setup(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
        logging.getLogger("snapdiff").setLevel(logging.DEBUG)


# --- Root group ---


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """snapdiff: report new and changed entries across key-value snapshots."""


# --- compare command ---


@cli.command()
@click.argument("old", type=click.Path())
@click.argument("new", type=click.Path())
@_common_options
def compare(
    old: str,
    new: str,
    fmt: str | None,
    config_path: str | None,
    copy_mode: str | None,
    fail_on_change: bool,
    verbose: bool,
) -> None:
    """Show entries of NEW that are new or changed relative to OLD.

    Keys present in OLD but missing from NEW are not reported.
    """
    _setup(verbose)
    cfg = _resolve_cfg(config_path)
    fmt = _or(fmt, cfg.format, DEFAULT_FORMAT)
    fail_on_change = fail_on_change or bool(cfg.fail_on_change)

    comparer = _build_comparer(cfg, copy_mode)
    try:
        comparer.update(_load(old))
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    report = _diff_step(comparer, step=1, path=new)
    _emit(report, fmt)

    if fail_on_change and not report.is_same:
        sys.exit(EXIT_CHANGED)


# --- replay command ---


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path())
@_common_options
def replay(
    files: tuple[str, ...],
    fmt: str | None,
    config_path: str | None,
    copy_mode: str | None,
    fail_on_change: bool,
    verbose: bool,
) -> None:
    """Feed FILES in order through one comparer and report each step.

    The first file is compared against an empty snapshot, so every entry
    in it is reported as new.
    """
    _setup(verbose)
    cfg = _resolve_cfg(config_path)
    fmt = _or(fmt, cfg.format, DEFAULT_FORMAT)
    fail_on_change = fail_on_change or bool(cfg.fail_on_change)

    comparer = _build_comparer(cfg, copy_mode)
    result = ReplayReport(
        steps=[_diff_step(comparer, step=i, path=p) for i, p in enumerate(files, 1)],
    )
    _emit(result, fmt)

    if fail_on_change and result.has_changes:
        sys.exit(EXIT_CHANGED)
