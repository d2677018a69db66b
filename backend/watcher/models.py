"""
ModWatch Watcher Data Models.

Defines the records exchanged between the scan cycle and its listeners.
Requires Python 3.11+.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DirectoryNotFoundError(FileNotFoundError):
    """Raised when a mod search directory does not exist."""


class ChangeKind(str, Enum):
    """Kinds of per-mod notifications."""

    FOUND = "found"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(slots=True)
class TrackedEntry:
    """A known mod marker file and when it was last confirmed current."""

    path: Path
    timestamp: float


@dataclass(frozen=True, slots=True)
class ModChange:
    """One detected difference between the tracked table and the disk."""

    kind: ChangeKind
    subfolder: Path
    path: Path

    @property
    def as_dict(self) -> dict[str, str]:
        """Convert to dictionary for logging."""
        return {
            "kind": self.kind.value,
            "subfolder": str(self.subfolder),
            "path": str(self.path),
        }
