#!/usr/bin/env python3
"""
ModWatch Directory Watch Script.

Watches a mod search directory and logs every notification.
Requires Python 3.11+.

Usage:
    python scripts/watch_mods.py /path/to/mods --interval-ms 2000
"""

import argparse
import os
import sys
import threading
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher import DirectoryNotFoundError, ModSearchDirectory


logger = get_logger("watch_mods")


def watch(root_path: Path, interval_ms: int, stop: threading.Event) -> int:
    """
    Watch ``root_path`` until ``stop`` is set.

    Args:
        root_path: Mod search directory
        interval_ms: Refresh interval in milliseconds
        stop: Event that ends the watch

    Returns:
        Number of scan cycles that completed
    """
    with ModSearchDirectory(root_path, auto_refresh_ms=interval_ms) as mods:
        mods.mod_found.connect(
            lambda subfolder, path: logger.info("found", mod=subfolder.name, path=str(path))
        )
        mods.mod_removed.connect(
            lambda subfolder, path: logger.info("removed", mod=subfolder.name, path=str(path))
        )
        mods.mod_changed.connect(
            lambda subfolder, path: logger.info("changed", mod=subfolder.name, path=str(path))
        )

        # Initial scan so existing mods are reported right away
        mods.refresh()

        while not stop.wait(0.5):
            if not mods.is_running:
                logger.error("watcher_stopped_unexpectedly", path=str(root_path))
                break

        return mods.cycle_count


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Watch a mod search directory and log changes",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the mod search directory",
    )
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=2000,
        help="Refresh interval in milliseconds (default: 2000)",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    args = parser.parse_args()

    if args.interval_ms <= 0:
        print("Error: --interval-ms must be positive")
        sys.exit(1)

    os.environ["LOG_FORMAT"] = args.log_format
    get_settings.cache_clear()
    configure_logging()

    stop = threading.Event()
    try:
        cycles = watch(args.path, args.interval_ms, stop)
    except DirectoryNotFoundError as e:
        print(f"Error: Path is not a directory: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        stop.set()
        print("\nStopped by user")
        return

    print(f"\nWatcher stopped after {cycles} scans")


if __name__ == "__main__":
    main()
