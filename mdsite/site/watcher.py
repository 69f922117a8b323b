"""Rebuilds the site when markdown sources change."""

from __future__ import annotations

import logging
import os
import threading
import time
from pathlib import Path

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

from mdsite.scanner.scanner import output_path_for
from mdsite.site.builder import SiteBuildError, SiteBuilder

logger = logging.getLogger(__name__)


class MarkdownChangeHandler(PatternMatchingEventHandler):
    """Rebuilds on ``.md`` events.

    The first event for a path rebuilds at once. Further events for it
    inside the debounce window collapse into one trailing rebuild, so the
    last save always reaches the output.
    """

    def __init__(self, builder: SiteBuilder, debounce: float = 0.5):
        super().__init__(patterns=["*.md"], ignore_directories=True)
        self.builder = builder
        self._debounce = debounce
        self._last_event: dict[str, float] = {}
        self._timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """True while a trailing rebuild is scheduled."""
        with self._timer_lock:
            return self._timer is not None

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._remove_output(str(event.src_path))
        self._rebuild()

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._remove_output(str(event.src_path))
        self._rebuild()

    def flush(self) -> None:
        """Run a scheduled trailing rebuild now instead of waiting for it."""
        timer = self._take_timer()
        if timer is not None:
            timer.cancel()
            self._rebuild()

    def cancel(self) -> None:
        """Drop a scheduled trailing rebuild."""
        timer = self._take_timer()
        if timer is not None:
            timer.cancel()

    def _handle(self, event: FileSystemEvent) -> None:
        now = time.monotonic()
        src = str(event.src_path)
        self._prune(now)
        last = self._last_event.get(src)
        self._last_event[src] = now
        if last is not None and now - last < self._debounce:
            self._schedule_trailing()
            return
        self._rebuild()

    def _prune(self, now: float) -> None:
        expired = [p for p, t in self._last_event.items() if now - t >= self._debounce]
        for path in expired:
            del self._last_event[path]

    def _schedule_trailing(self) -> None:
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce, self._trailing_rebuild)
            self._timer.daemon = True
            self._timer.start()

    def _trailing_rebuild(self) -> None:
        self._rebuild()
        with self._timer_lock:
            if self._timer is threading.current_thread():
                self._timer = None

    def _take_timer(self) -> threading.Timer | None:
        with self._timer_lock:
            timer, self._timer = self._timer, None
        return timer

    def _remove_output(self, src_path: str) -> None:
        rel = Path(os.path.relpath(src_path, self.builder.root))
        html_file = self.builder.output_dir / output_path_for(rel)
        if html_file.resolve().is_relative_to(self.builder.output_dir.resolve()) and html_file.exists():
            html_file.unlink()
            logger.info("Deleted: %s", html_file)

    def _rebuild(self) -> None:
        try:
            report = self.builder.build()
        except SiteBuildError as exc:
            logger.error("Rebuild failed: %s", exc)
            return
        logger.info("Rebuilt %d page(s)", len(report.documents))


class SiteWatcher:
    """Runs a watchdog observer over the source tree until stopped."""

    def __init__(self, builder: SiteBuilder, debounce: float = 0.5) -> None:
        self.builder = builder
        self.handler = MarkdownChangeHandler(builder, debounce=debounce)
        self._observer = Observer()

    def start(self) -> None:
        self._observer.schedule(self.handler, str(self.builder.root), recursive=True)
        self._observer.start()
        logger.info("Watching %s for changes...", self.builder.root)

    def stop(self) -> None:
        self._observer.stop()
        self._observer.join()
        self.handler.cancel()
        logger.info("Watcher stopped.")
