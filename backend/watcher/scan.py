"""
ModWatch Scanning Helpers.

Marker discovery and per-mod subtree timestamp checks.
Requires Python 3.11+.
"""

import os
from pathlib import Path

from watchdog.utils.dirsnapshot import DirectorySnapshot


def _find_files(root: Path, extension: str) -> list[Path]:
    # The root must exist, folders that vanish mid-walk are skipped.
    os.stat(root)

    suffix = os.path.normcase(extension)
    found = [
        Path(dirpath, name)
        for dirpath, _, filenames in os.walk(root)
        for name in filenames
        if os.path.splitext(os.path.normcase(name))[1] == suffix
    ]
    return sorted(found)


def find_marker_files(root: Path, marker_extension: str, fallback_extension: str) -> list[Path]:
    """
    Find every mod marker file under ``root``.

    Falls back to package binaries only when no metadata file exists
    anywhere under the root. The two kinds are never mixed.

    Args:
        root: Directory to search recursively
        marker_extension: Primary marker extension, e.g. ``.info``
        fallback_extension: Extension used when no primary markers exist

    Returns:
        Sorted list of marker file paths
    """
    markers = _find_files(root, marker_extension)
    if not markers:
        markers = _find_files(root, fallback_extension)
    return markers


def get_subfolder_path(base_path: Path | str, path: Path | str) -> Path:
    """
    Return the top-level folder of ``base_path`` that contains ``path``.

    ``path`` is returned unchanged when it is not strictly below
    ``base_path``.
    """
    base_abs = Path(os.path.abspath(base_path))
    target_abs = Path(os.path.abspath(path))

    base_parts = Path(os.path.normcase(base_abs)).parts
    target_parts = Path(os.path.normcase(target_abs)).parts

    if len(target_parts) > len(base_parts) and target_parts[: len(base_parts)] == base_parts:
        return base_abs / target_abs.parts[len(base_parts)]
    return Path(path)


def subtree_changed_since(mod_root: Path, since: float, marker_extension: str) -> bool:
    """
    Check whether anything under a mod's root was modified after ``since``.

    The root directory itself is checked first, then every subdirectory,
    then every file except marker files.

    Args:
        mod_root: The mod's own directory
        since: Wall-clock timestamp in seconds
        marker_extension: Extension of files to leave out of the file check

    Raises:
        OSError: If the mod root cannot be read
    """
    root = str(mod_root)
    marker_suffix = os.path.normcase(marker_extension)
    snapshot = DirectorySnapshot(root, recursive=True)

    if snapshot.mtime(root) > since:
        return True

    entries = [p for p in snapshot.paths if p != root]
    directories = [p for p in entries if snapshot.isdir(p)]
    if any(snapshot.mtime(p) > since for p in directories):
        return True

    return any(
        snapshot.mtime(p) > since
        for p in entries
        if not snapshot.isdir(p) and os.path.splitext(os.path.normcase(p))[1] != marker_suffix
    )
