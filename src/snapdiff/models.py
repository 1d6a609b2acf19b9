"""Report models for snapshot diffs.

Defines the schemas for:
- Per-step diff reports (what changed in one snapshot)
- Replay reports (a sequence of snapshots fed through one comparer)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, computed_field


class DiffReport(BaseModel):
    """Result of comparing one snapshot against the last-seen one."""

    step: int = Field(ge=1)
    source: str | None = None
    changed: dict[str, Any] = Field(default_factory=dict)
    changed_count: int = Field(0, ge=0)
    total_count: int = Field(0, ge=0)
    is_same: bool = True

    @classmethod
    def from_diff(
        cls,
        step: int,
        changed: Mapping[Any, Any],
        total_count: int,
        source: str | None = None,
    ) -> DiffReport:
        """Build a report from a comparer result.

        String keys are kept as they are. If any key is not a string, every
        key is rendered with ``repr`` so that ``1`` and ``"1"`` stay distinct.

        Raises:
            ValueError: If two keys still render to the same string.
        """
        rendered = _render_keys(changed)
        return cls(
            step=step,
            source=source,
            changed=rendered,
            changed_count=len(rendered),
            total_count=total_count,
            is_same=not changed,
        )


class ReplayReport(BaseModel):
    """Reports for a sequence of snapshots, in replay order."""

    steps: list[DiffReport] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def changed_steps(self) -> int:
        """Number of steps that reported at least one change."""
        return sum(1 for s in self.steps if not s.is_same)

    @property
    def has_changes(self) -> bool:
        """True if any step reported at least one change."""
        return self.changed_steps > 0


def _render_keys(changed: Mapping[Any, Any]) -> dict[str, Any]:
    if all(isinstance(k, str) for k in changed):
        return dict(changed)
    rendered = {repr(k): v for k, v in changed.items()}
    if len(rendered) != len(changed):
        raise ValueError("Snapshot keys render to the same string in the report")
    return rendered
