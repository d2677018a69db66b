"""
ModWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import os
import threading
import time
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from watcher.mod_search_directory import ModSearchDirectory


class EventRecorder:
    """Collects every notification a watcher emits, in order."""

    def __init__(self, watcher: ModSearchDirectory) -> None:
        self._lock = threading.Lock()
        self.events: list[tuple] = []

        watcher.mod_found.connect(lambda subfolder, path: self._add("found", subfolder, path))
        watcher.mod_removed.connect(lambda subfolder, path: self._add("removed", subfolder, path))
        watcher.mod_changed.connect(lambda subfolder, path: self._add("changed", subfolder, path))
        watcher.mods_changed.connect(lambda: self._add("mods_changed"))

    def _add(self, *event: object) -> None:
        with self._lock:
            self.events.append(event)

    def take(self) -> list[tuple]:
        """Return recorded events and start over."""
        with self._lock:
            events, self.events = self.events, []
        return events

    def kinds(self) -> list[str]:
        with self._lock:
            return [event[0] for event in self.events]


def touch_future(path: Path, seconds: float = 60.0) -> None:
    """Push a path's mtime into the future so it is newer than any scan."""
    stamp = time.time() + seconds
    os.utime(path, (stamp, stamp))


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def mods_root(tmp_path: Path) -> Path:
    """Create an empty mod search directory."""
    root = tmp_path / "mods"
    root.mkdir()
    return root


@pytest.fixture
def make_mod(mods_root: Path) -> Callable[..., Path]:
    """
    Factory that lays out a mod folder under the search directory.

    Returns the path of the created marker (or binary) file.
    """

    def _make_mod(
        name: str,
        marker: str | None = "About.info",
        files: dict[str, str] | None = None,
        nested: str | None = None,
    ) -> Path:
        mod_dir = mods_root / name
        if nested:
            mod_dir = mod_dir / nested
        mod_dir.mkdir(parents=True, exist_ok=True)

        for relative, content in (files or {}).items():
            file_path = mod_dir / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)

        if marker is None:
            return mod_dir

        marker_path = mod_dir / marker
        marker_path.write_text(f"<ModMetadata><Name>{name}</Name></ModMetadata>")
        return marker_path

    return _make_mod


@pytest.fixture
def watcher(mods_root: Path) -> Generator[ModSearchDirectory, None, None]:
    """Create a manually refreshed watcher over the mod search directory."""
    mods = ModSearchDirectory(mods_root, auto_refresh_ms=0)
    yield mods
    mods.dispose()


@pytest.fixture
def recorder(watcher: ModSearchDirectory) -> EventRecorder:
    """Record the watcher's notifications."""
    return EventRecorder(watcher)
