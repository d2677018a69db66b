"""
ModWatch Watcher Package.

Polling-based monitoring of mod search directories.
Requires Python 3.11+.
"""

from watcher.models import ChangeKind, DirectoryNotFoundError, ModChange
from watcher.mod_search_directory import ModSearchDirectory
from watcher.refresh_timer import RefreshTimer
from watcher.scan import find_marker_files, get_subfolder_path
from watcher.signals import Signal

__all__ = [
    "ModSearchDirectory",
    "RefreshTimer",
    "Signal",
    # Models
    "ChangeKind",
    "DirectoryNotFoundError",
    "ModChange",
    # Helpers
    "find_marker_files",
    "get_subfolder_path",
]
