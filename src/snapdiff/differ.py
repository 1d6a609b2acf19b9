"""Key-value differ for successive snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def changed_entries(
    previous: Mapping[Any, Any],
    current: Mapping[Any, Any],
) -> dict[Any, Any]:
    """Return the entries of *current* that are new or changed since *previous*.

    An entry is included when its key is missing from *previous* or the
    stored value differs under ``!=``. Keys present only in *previous* are
    not reported. Neither argument is modified.
    """
    changed: dict[Any, Any] = {}
    for key, value in current.items():
        if key not in previous or previous[key] != value:
            changed[key] = value
    return changed
