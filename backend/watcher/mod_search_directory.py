"""
ModWatch Mod Search Directory.

Polls a directory of mods and reports found, removed and changed mods.
Requires Python 3.11+.
"""

import os
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from utils.config import get_settings, normalize_extension
from utils.logger import LoggerMixin
from watcher.models import ChangeKind, DirectoryNotFoundError, ModChange, TrackedEntry
from watcher.refresh_timer import RefreshTimer
from watcher.scan import find_marker_files, get_subfolder_path, subtree_changed_since
from watcher.signals import Signal


class ModSearchDirectory(LoggerMixin):
    """
    A directory that is monitored for mods.

    Every mod is identified by a marker file (``.info`` by default, or a
    package binary when no marker exists anywhere under the root). The
    directory holding the marker is the mod's root, and a mod counts as
    changed when anything below that root was modified after it was last
    seen.

    Scans run on a dedicated worker thread, one at a time, whenever
    :meth:`refresh` is called. All notifications are emitted on that
    thread, so handlers must return quickly.
    """

    def __init__(
        self,
        path: Path | str,
        marker_extension: str | None = None,
        fallback_extension: str | None = None,
        auto_refresh_ms: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the search directory and start its worker.

        Args:
            path: Directory containing one folder per mod
            marker_extension: Mod metadata extension
            fallback_extension: Package binary extension used when no
                metadata files exist
            auto_refresh_ms: Refresh interval in milliseconds, 0 for
                manual refreshes only
            clock: Wall-clock source compared against file mtimes

        Raises:
            DirectoryNotFoundError: If ``path`` is not an existing directory
        """
        settings = get_settings().watcher

        self._base_path = Path(os.path.abspath(path))
        if not self._base_path.is_dir():
            raise DirectoryNotFoundError(str(self._base_path))

        self._marker_extension = normalize_extension(marker_extension or settings.marker_extension)
        self._fallback_extension = normalize_extension(
            fallback_extension or settings.fallback_extension
        )
        self._clock = clock

        # Only the worker thread touches this table.
        self._tracked: dict[str, TrackedEntry] = {}

        self.mod_found = Signal("mod_found")
        self.mod_removed = Signal("mod_removed")
        self.mod_changed = Signal("mod_changed")
        self.mods_changed = Signal("mods_changed")

        self._condition = threading.Condition()
        self._pending = False
        self._disposed = False
        self._stopped = False
        self._cycles_started = 0
        self._cycles_finished = 0

        self._thread = threading.Thread(
            target=self._run,
            name=f"ModSearchDirectory({self._base_path.name})",
            daemon=True,
        )
        self._thread.start()

        interval = settings.poll_interval_ms if auto_refresh_ms is None else auto_refresh_ms
        self._timer: RefreshTimer | None = None
        if interval > 0:
            self._timer = RefreshTimer(interval, self.refresh)
            self._timer.start()

        self.log.info(
            "mod_search_directory_started",
            path=str(self._base_path),
            marker_extension=self._marker_extension,
            fallback_extension=self._fallback_extension,
            auto_refresh_ms=interval,
        )

    @property
    def base_path(self) -> Path:
        """Absolute path of the watched directory."""
        return self._base_path

    @property
    def is_running(self) -> bool:
        """Check if the worker thread is still alive."""
        return self._thread.is_alive()

    @property
    def is_disposed(self) -> bool:
        """Check if dispose has been called."""
        return self._disposed

    @property
    def cycle_count(self) -> int:
        """Number of completed scan cycles."""
        with self._condition:
            return self._cycles_finished

    def refresh(self, wait: bool = False, timeout: float | None = None) -> bool:
        """
        Request a scan of the directory.

        Requests made before the worker picks them up are merged into a
        single scan.

        Args:
            wait: Block until a scan started after this request has finished
            timeout: Maximum seconds to wait when ``wait`` is set

        Returns:
            False if the watcher is disposed or its worker has stopped, or
            if waiting timed out; True otherwise
        """
        if wait and threading.current_thread() is self._thread:
            raise RuntimeError("refresh(wait=True) cannot be called from a watcher handler")

        with self._condition:
            if self._disposed or self._stopped:
                return False

            self._pending = True
            target = self._cycles_started + 1
            self._condition.notify_all()

            if not wait:
                return True

            self._condition.wait_for(
                lambda: self._cycles_finished >= target or self._stopped,
                timeout,
            )
            return self._cycles_finished >= target

    def dispose(self) -> None:
        """
        Stop the watcher and release its worker thread.

        Handlers are detached before the worker is woken, so no emit that
        starts after this method has been entered reaches them. A scan that is already
        running is allowed to finish and this method blocks until it has.

        A handler that was already being called when dispose began still
        returns normally, and the other handlers copied for that same emit
        are still called. Nothing is emitted after this method returns.
        """
        if self._timer is not None:
            self._timer.stop()

        for signal in (self.mod_found, self.mod_removed, self.mod_changed, self.mods_changed):
            signal.clear()

        with self._condition:
            already_disposed = self._disposed
            self._disposed = True
            self._condition.notify_all()

        if threading.current_thread() is not self._thread:
            self._thread.join()

        if not already_disposed:
            self.log.info("mod_search_directory_disposed", path=str(self._base_path))

    def __enter__(self) -> "ModSearchDirectory":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.dispose()

    def _wait_for_wake(self) -> bool:
        with self._condition:
            self._condition.wait_for(lambda: self._pending or self._disposed)
            if self._disposed:
                return False

            self._pending = False
            self._cycles_started += 1
            return True

    def _run(self) -> None:
        try:
            while self._wait_for_wake():
                self._run_cycle()
                with self._condition:
                    self._cycles_finished += 1
                    self._condition.notify_all()
        except Exception:
            self.log.exception("refresh_worker_failed", path=str(self._base_path))
        finally:
            with self._condition:
                self._stopped = True
                self._condition.notify_all()

    def _run_cycle(self) -> None:
        changes = self._diff()

        signals = {
            ChangeKind.FOUND: self.mod_found,
            ChangeKind.REMOVED: self.mod_removed,
            ChangeKind.CHANGED: self.mod_changed,
        }
        for change in changes:
            self.log.info(f"mod_{change.kind.value}", **change.as_dict)
            signals[change.kind].emit(change.subfolder, change.path)

        if changes:
            self.mods_changed.emit()

        self.log.debug(
            "refresh_cycle_completed",
            path=str(self._base_path),
            tracked=len(self._tracked),
            changes=len(changes),
        )

    def _diff(self) -> list[ModChange]:
        """Reconcile the tracked table with the disk and list the differences."""
        scan_started = self._clock()
        candidates = {
            self._key(p): p
            for p in find_marker_files(
                self._base_path,
                self._marker_extension,
                self._fallback_extension,
            )
        }

        changes: list[ModChange] = []

        for key, entry in list(self._tracked.items()):
            if key not in candidates:
                changes.append(self._remove(key))
                continue

            checked_at = self._clock()
            try:
                changed = subtree_changed_since(
                    entry.path.parent,
                    entry.timestamp,
                    self._marker_extension,
                )
            except OSError as e:
                self.log.warning("mod_scan_failed", path=str(entry.path), error=str(e))
                continue

            if not changed:
                continue

            if not entry.path.exists():
                changes.append(self._remove(key))
                continue

            entry.timestamp = checked_at
            changes.append(self._change(ChangeKind.CHANGED, entry.path))

        for key, path in candidates.items():
            if key in self._tracked:
                continue
            self._tracked[key] = TrackedEntry(path=path, timestamp=scan_started)
            changes.append(self._change(ChangeKind.FOUND, path))

        return changes

    def _remove(self, key: str) -> ModChange:
        entry = self._tracked.pop(key)
        return self._change(ChangeKind.REMOVED, entry.path)

    def _change(self, kind: ChangeKind, path: Path) -> ModChange:
        return ModChange(
            kind=kind,
            subfolder=get_subfolder_path(self._base_path, path),
            path=path,
        )

    @staticmethod
    def _key(path: Path) -> str:
        return os.path.normcase(str(path))
