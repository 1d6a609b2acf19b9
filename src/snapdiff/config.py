"""CLI defaults read from ``snapdiff.yaml``.

The nearest file at or above the working directory is used unless the
caller names one. Unknown keys are ignored; known keys are validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from snapdiff.comparer import CopyMode

CONFIG_FILENAME = "snapdiff.yaml"
OUTPUT_FORMATS = ("text", "json", "yaml")


@dataclass(frozen=True)
class SnapdiffConfig:
    """Parsed snapdiff project configuration."""

    config_path: Path | None = None
    format: str | None = None
    copy_mode: CopyMode | None = None
    fail_on_change: bool | None = None


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``snapdiff.yaml`` at or above *start*.

    *start* defaults to the working directory. Directories named
    ``snapdiff.yaml`` are skipped. Returns ``None`` when no ancestor has one.
    """
    base = (start or Path.cwd()).resolve()
    for directory in (base, *base.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: str | Path | None = None,
    *,
    auto_discover: bool = True,
) -> SnapdiffConfig:
    """Read CLI defaults from a ``snapdiff.yaml`` file.

    An explicit *path* must exist. Without one, the nearest config above the
    working directory is used when *auto_discover* is set. With no file at
    all, every field of the returned ``SnapdiffConfig`` is ``None``.

    Raises:
        FileNotFoundError: If *path* is given but is not a file.
        ValueError: If the file is not a mapping or holds an invalid value.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).resolve()
        if not config_path.is_file():
            msg = f"snapdiff config not found at {config_path}"
            raise FileNotFoundError(msg)
    elif auto_discover:
        config_path = find_config()

    if config_path is None:
        return SnapdiffConfig()

    return _parse_config(config_path)


def _parse_config(config_path: Path) -> SnapdiffConfig:
    """Read and validate a YAML config file."""
    text = config_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {config_path}, got {type(data).__name__}"
        raise ValueError(msg)

    fmt = data.get("format")
    if fmt is not None and fmt not in OUTPUT_FORMATS:
        msg = (
            f"Invalid format '{fmt}' in {config_path}; "
            f"expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
        raise ValueError(msg)

    copy_mode = data.get("copy_mode")
    if copy_mode is not None:
        try:
            copy_mode = CopyMode(copy_mode)
        except ValueError:
            msg = (
                f"Invalid copy_mode '{copy_mode}' in {config_path}; "
                f"expected one of: {', '.join(m.value for m in CopyMode)}"
            )
            raise ValueError(msg) from None

    fail_on_change = data.get("fail_on_change")
    if fail_on_change is not None and not isinstance(fail_on_change, bool):
        msg = f"'fail_on_change' must be true or false in {config_path}"
        raise ValueError(msg)

    return SnapdiffConfig(
        config_path=config_path,
        format=fmt,
        copy_mode=copy_mode,
        fail_on_change=fail_on_change,
    )
