"""snapdiff: report new and changed entries across successive key-value snapshots."""

__version__ = "0.1.0"

from snapdiff.comparer import ComparerConfig, CopyMode, SnapshotComparer, SnapshotError
from snapdiff.config import SnapdiffConfig, find_config, load_config
from snapdiff.differ import changed_entries
from snapdiff.loader import SnapshotLoadError, load_snapshot
from snapdiff.models import DiffReport, ReplayReport

__all__ = [
    "changed_entries",
    "ComparerConfig",
    "CopyMode",
    "DiffReport",
    "find_config",
    "load_config",
    "load_snapshot",
    "ReplayReport",
    "SnapdiffConfig",
    "SnapshotComparer",
    "SnapshotError",
    "SnapshotLoadError",
    "__version__",
]
