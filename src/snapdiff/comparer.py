"""Snapshot comparer: tracks the last-seen mapping and reports what changed.

Each call hands the comparer the caller's full current snapshot.  The
comparer reports the entries that are new or whose value changed since the
previous snapshot, then replaces its stored copy with the new one.  Keys
that disappear are dropped silently; if they come back later they are
reported as new.

Usage::

    comparer = SnapshotComparer()

    changed = comparer.update_and_compare({"a": 1, "b": 2})
    # {"a": 1, "b": 2} (first snapshot, everything is new)

    changed = comparer.update_and_compare({"a": 1, "b": 3})
    # {"b": 3}

    comparer.is_same_update({"a": 1, "b": 3})
    # True
"""

from __future__ import annotations

import copy
import enum
import logging
import threading
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from snapdiff.differ import changed_entries

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class SnapshotError(Exception):
    """Raised when a snapshot cannot be compared or stored."""


class CopyMode(enum.StrEnum):
    DEEP = "deep"
    SHALLOW = "shallow"


class ComparerConfig(BaseModel):
    """Configuration for a SnapshotComparer."""

    copy_mode: CopyMode = CopyMode.DEEP
    """How the stored snapshot is copied from the caller's mapping.
    ``deep`` owns independent copies of every value; ``shallow`` shares
    value objects with the caller and suits immutable values."""


class SnapshotComparer(Generic[K, V]):
    """Stateful comparer over successive key-value snapshots.

    Thread-safe via a lock on the stored snapshot: every call reads and
    replaces the last-seen mapping atomically relative to other calls.
    """

    def __init__(self, config: ComparerConfig | None = None) -> None:
        self._config = config or ComparerConfig()
        self._lock = threading.Lock()
        self._last_seen: dict[K, V] = {}

    @property
    def config(self) -> ComparerConfig:
        """The comparer configuration."""
        return self._config

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_seen)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(keys={len(self)}, "
            f"copy_mode={self._config.copy_mode.value!r})"
        )

    def update_and_compare(self, current: Mapping[K, V]) -> dict[K, V]:
        """Return new or changed entries of *current* and store it as last-seen.

        Returns an empty dict when nothing changed.  The stored snapshot is
        replaced wholesale, so keys missing from *current* are forgotten.
        """
        self._check_mapping(current)
        with self._lock:
            changed = changed_entries(self._last_seen, current)
            self._last_seen = self._copy(current)
        logger.debug(
            "Compared snapshot of %d keys: %d new or changed",
            len(current),
            len(changed),
        )
        return changed

    def is_same_update(self, current: Mapping[K, V]) -> bool:
        """Store *current* as last-seen and report whether nothing changed.

        Equivalent to ``not update_and_compare(current)``.
        """
        return not self.update_and_compare(current)

    def compare(self, current: Mapping[K, V]) -> dict[K, V]:
        """Return new or changed entries of *current* without storing it."""
        self._check_mapping(current)
        with self._lock:
            return changed_entries(self._last_seen, current)

    def is_same(self, current: Mapping[K, V]) -> bool:
        """Report whether *current* has no new or changed entries. Does not store it."""
        return not self.compare(current)

    def update(self, current: Mapping[K, V]) -> None:
        """Replace the last-seen snapshot without computing a diff."""
        self._check_mapping(current)
        stored = self._copy(current)
        with self._lock:
            self._last_seen = stored

    def snapshot(self) -> dict[K, V]:
        """Return a copy of the last-seen snapshot."""
        with self._lock:
            return self._copy(self._last_seen)

    def reset(self) -> None:
        """Forget the last-seen snapshot; the next comparison reports everything."""
        with self._lock:
            self._last_seen = {}

    def _copy(self, current: Mapping[K, V]) -> dict[K, V]:
        if self._config.copy_mode == CopyMode.SHALLOW:
            return dict(current)
        try:
            return copy.deepcopy(dict(current))
        except (TypeError, copy.Error) as exc:
            raise SnapshotError(f"Snapshot values cannot be copied: {exc}") from exc

    @staticmethod
    def _check_mapping(current: Any) -> None:
        if not isinstance(current, Mapping):
            raise SnapshotError(
                f"Expected a mapping snapshot, got {type(current).__name__}"
            )
