"""Snapshot file loader.

Reads one snapshot (a top-level mapping) from a JSON or YAML file.
The format is chosen by file extension.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class SnapshotLoadError(Exception):
    """Raised when a snapshot file cannot be read or is not a mapping."""


def load_snapshot(path: str | Path) -> dict[Any, Any]:
    """Load a snapshot mapping from a JSON or YAML file.

    An empty YAML document loads as an empty snapshot.

    Raises:
        SnapshotLoadError: If the file is missing, unreadable, unparseable, has an
            unsupported extension, or does not contain a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise SnapshotLoadError(f"Snapshot file not found: {path}")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotLoadError(f"Cannot read snapshot file {path}: {e}") from e

    if suffix in JSON_SUFFIXES:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(f"Invalid JSON in {path}: {e}") from e
    elif suffix in YAML_SUFFIXES:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SnapshotLoadError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            raw = {}
    else:
        raise SnapshotLoadError(
            f"Unsupported snapshot format '{suffix or path.name}': {path} "
            f"(expected .json, .yaml or .yml)"
        )

    if not isinstance(raw, dict):
        raise SnapshotLoadError(
            f"Snapshot must be a mapping, got {type(raw).__name__}: {path}"
        )

    logger.debug("Loaded snapshot %s (%d keys)", path, len(raw))
    return raw
