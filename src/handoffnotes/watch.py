"""Watch mode for handoffnotes - re-render records as their files change."""

import json
import logging
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .export.html import HtmlExportAdapter

logger = logging.getLogger(__name__)

BatchCallback = Callable[[set[str], set[str]], None]


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing."""

    def __init__(self, notes_path: Path, on_batch: BatchCallback | None, debounce_ms: int = 150):
        super().__init__()
        self.notes_path = notes_path
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms

        # Pending changes by record id
        self.changed: set[str] = set()
        self.deleted: set[str] = set()
        self.last_event_time = 0.0
        # Events arrive on the observer thread, flushes run on the polling thread
        self._lock = threading.Lock()

    def _should_skip(self, path: Path) -> bool:
        name = path.name
        if name.startswith("."):
            return True
        # Editor swap files and our own atomic-write temp files
        if name.endswith("~") or name.endswith(".swp") or name.endswith(".tmp"):
            return True
        return not name.endswith(".md")

    def _extract_id(self, path: Path) -> str | None:
        if self._should_skip(path):
            return None
        return path.stem

    def _record(self, bucket: str, path: Path) -> None:
        record_id = self._extract_id(path)
        if record_id:
            with self._lock:
                getattr(self, bucket).add(record_id)
                self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record("changed", Path(str(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record("changed", Path(str(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Atomic writes arrive as tmp -> <id>.md moves
        if event.is_directory:
            return
        self._record("deleted", Path(str(event.src_path)))
        self._record("changed", Path(str(event.dest_path)))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record("deleted", Path(str(event.src_path)))

    def check_and_flush(self) -> None:
        """Flush if the debounce window has elapsed since the last event."""
        if not (self.changed or self.deleted):
            return
        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        with self._lock:
            if not (self.changed or self.deleted):
                return
            changed, deleted = self.changed, self.deleted
            self.changed, self.deleted = set(), set()
        # A record that reappeared within the window is a change, not a delete
        deleted = deleted - changed

        if self.on_batch:
            self.on_batch(changed, deleted)


def make_export_batch(exporter: HtmlExportAdapter, quiet: bool = False, json_output: bool = False) -> BatchCallback:
    """Build a batch callback that re-exports changed records and drops deleted ones."""

    def handle_batch(changed: set[str], deleted: set[str]) -> None:
        start_time = time.time()
        rendered: list[str] = []
        removed: list[str] = []
        failed: list[str] = []

        def report(rid: str, e: Exception) -> None:
            logger.warning("Re-render of %s failed: %s", rid, e)
            failed.append(rid)
            if json_output:
                print(json.dumps({"type": "error", "id": rid, "message": str(e)}), flush=True)
            else:
                print(f"Error: {rid}: {e}", file=sys.stderr, flush=True)

        # One bad record must not hold back the rest of the batch
        for rid in sorted(changed):
            try:
                record = exporter.store.get(rid)
                if record is None:
                    deleted = deleted | {rid}
                    continue
                exporter.export_record(record)
                rendered.append(rid)
            except (OSError, ValueError) as e:
                report(rid, e)
        for rid in sorted(deleted):
            try:
                exporter.remove_record(rid)
                removed.append(rid)
            except OSError as e:
                report(rid, e)

        duration_ms = int((time.time() - start_time) * 1000)
        if json_output:
            event = {
                "type": "batch",
                "rendered": rendered,
                "deleted": removed,
                "failed": failed,
                "duration_ms": duration_ms,
            }
            print(json.dumps(event), flush=True)
        elif not quiet:
            print(f"Rendered: ~{len(rendered)} -{len(removed)} ({duration_ms}ms)", flush=True)

    return handle_batch


def watch_notes(
    notes_path: Path,
    exporter: HtmlExportAdapter,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch a notes directory and keep its HTML export current.

    Args:
        notes_path: Directory of record files
        exporter: Export adapter writing the HTML
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable

    Returns:
        Exit code
    """
    if not notes_path.exists():
        print(f"Error: Notes directory not found: {notes_path}", file=sys.stderr)
        return 1

    # Initial full render so the output is complete before watching
    index = exporter.export_all()
    if not quiet and not json_output:
        print(f"Rendered {len(index['records'])} records to {exporter.out}", flush=True)

    running = True

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(notes_path, make_export_batch(exporter, quiet, json_output), debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(notes_path), recursive=False)

    if not quiet and not json_output:
        print(f"Watching {notes_path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
