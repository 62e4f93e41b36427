"""
File watcher that re-invokes the renderer when data or style files change.

This module provides:
- Watchdog-based monitoring of a fixed set of files
- Debounced change emission (editor save cycles produce one refresh)
- Content hashing so touch-only saves do not trigger a refresh
"""

import hashlib
import time
from pathlib import Path
from typing import Callable, Iterable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer


def compute_file_hash(path: Path) -> str | None:
    """SHA-256 of a file's content, or None if it cannot be read."""
    try:
        return hashlib.sha256(path.read_bytes()).hexdigest()
    except OSError:
        return None


class DataFileHandler(FileSystemEventHandler):
    """
    Collects change events for the watched files.

    Watchdog calls the `on_*` hooks from its observer thread; they only record
    pending changes. `flush_pending()` runs on the caller's thread and invokes
    `on_change` there, so rendering stays single-threaded.
    """

    DEBOUNCE_SECONDS = 0.5

    def __init__(self, paths: Iterable[Path], on_change: Callable[[Path], None]):
        super().__init__()
        self.paths = {p.resolve() for p in paths}
        self.on_change = on_change
        self.pending: dict[Path, float] = {}  # path -> last event time
        self.file_hashes: dict[Path, str | None] = {p: compute_file_hash(p) for p in self.paths}

    def _watched(self, raw: str | bytes) -> Path | None:
        path = Path(raw.decode() if isinstance(raw, bytes) else raw).resolve()
        return path if path in self.paths else None

    def _mark(self, raw: str | bytes) -> None:
        path = self._watched(raw)
        if path is not None:
            self.pending[path] = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._mark(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors often save by writing a temp file and renaming it over the target.
        if not event.is_directory:
            self._mark(event.dest_path)

    def flush_pending(self) -> list[Path]:
        """Emit changes whose debounce window has passed. Returns emitted paths."""
        now = time.time()
        ready = [p for p, ts in list(self.pending.items()) if now - ts >= self.DEBOUNCE_SECONDS]
        emitted = []
        for path in ready:
            del self.pending[path]
            new_hash = compute_file_hash(path)
            if new_hash is None or new_hash == self.file_hashes.get(path):
                continue
            self.file_hashes[path] = new_hash
            emitted.append(path)
            self.on_change(path)
        return emitted


def watch_files(
    paths: Iterable[Path],
    on_change: Callable[[Path], None],
) -> tuple[Observer, DataFileHandler]:
    """
    Start watching files for content changes.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    handler = DataFileHandler(paths, on_change)

    observer = Observer()
    for directory in sorted({p.parent for p in handler.paths}):
        observer.schedule(handler, str(directory), recursive=False)
    observer.start()

    return observer, handler


def run_watch_loop(
    paths: Iterable[Path],
    on_change: Callable[[Path], None],
    *,
    poll_seconds: float = 0.25,
) -> None:
    """
    Run the watch loop until interrupted.

    This is a blocking function that flushes pending changes periodically.
    """
    observer, handler = watch_files(paths, on_change)

    try:
        while True:
            time.sleep(poll_seconds)
            handler.flush_pending()
    finally:
        observer.stop()
        observer.join()
