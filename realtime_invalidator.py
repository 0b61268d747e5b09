import threading
import time
from pathlib import Path
from typing import Any

from loguru import logger
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from el_navigator import constants as cs
from el_navigator import logs as ls
from el_navigator.config import settings
from el_navigator.services.assistant import ExpressionAssistant
from el_navigator.types_defs import Clock
from el_navigator.utils.path_utils import is_ignored_path


class JavaChangeEventHandler(FileSystemEventHandler):
    def __init__(
        self,
        assistant: ExpressionAssistant,
        debounce_seconds: float | None = None,
        max_wait_seconds: float | None = None,
        clock: Clock = time.monotonic,
    ):
        self.assistant = assistant
        self.debounce_seconds = (
            settings.WATCH_DEBOUNCE_SECONDS
            if debounce_seconds is None
            else debounce_seconds
        )
        self.max_wait_seconds = (
            settings.WATCH_MAX_WAIT_SECONDS
            if max_wait_seconds is None
            else max_wait_seconds
        )
        self.debounce_enabled = self.debounce_seconds > 0
        self.clock = clock

        self.lock = threading.Lock()
        self.timer: threading.Timer | None = None
        self.first_event_time: float | None = None
        self.pending_events: list[tuple[str, str]] = []
        logger.info(ls.WATCHER_ACTIVE)

    def _is_relevant(self, path_str: str) -> bool:
        path = Path(path_str)
        return path.name.lower().endswith(cs.JAVA_EXT) and not is_ignored_path(path)

    def _event_paths(self, event: Any) -> list[str]:
        paths = [str(event.src_path)]
        if event.event_type == cs.EventType.MOVED and getattr(event, "dest_path", ""):
            paths.append(str(event.dest_path))
        return paths

    def dispatch(self, event: Any) -> None:
        if event.is_directory or event.event_type not in cs.WATCHED_EVENT_TYPES:
            return
        relevant = [
            path for path in self._event_paths(event) if self._is_relevant(path)
        ]
        if not relevant:
            return

        if not self.debounce_enabled:
            self._invalidate([(event.event_type, relevant[0])])
            return

        with self.lock:
            now = self.clock()
            if self.first_event_time is None:
                self.first_event_time = now
            self.pending_events.append((event.event_type, relevant[0]))
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None

            # (H) A steady stream of saves still flushes once max_wait has elapsed
            if now - self.first_event_time < self.max_wait_seconds:
                logger.debug(
                    ls.WATCHER_DEBOUNCED.format(
                        event_type=event.event_type,
                        path=relevant[0],
                        seconds=self.debounce_seconds,
                    )
                )
                self.timer = threading.Timer(self.debounce_seconds, self.flush)
                self.timer.daemon = True
                self.timer.start()
                return

        self.flush()

    def flush(self) -> None:
        with self.lock:
            events = self.pending_events
            self.pending_events = []
            self.first_event_time = None
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None
        if events:
            self._invalidate(events)

    def _invalidate(self, events: list[tuple[str, str]]) -> None:
        event_type, path = events[-1]
        logger.warning(ls.WATCHER_CHANGE.format(event_type=event_type, path=path))
        self.assistant.invalidate()

    def stop(self) -> None:
        with self.lock:
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None
            self.pending_events = []
            self.first_event_time = None


def start_watcher(
    assistant: ExpressionAssistant,
    workspace_path: str | Path,
    debounce_seconds: float | None = None,
    max_wait_seconds: float | None = None,
) -> tuple[BaseObserver, JavaChangeEventHandler]:
    """Invalidate the host's assistant whenever Java sources under the
    workspace change. The observer runs on its own thread until
    `stop_watcher` is called.
    """
    workspace = Path(workspace_path).resolve()
    event_handler = JavaChangeEventHandler(
        assistant,
        debounce_seconds=debounce_seconds,
        max_wait_seconds=max_wait_seconds,
    )
    observer = Observer()
    observer.schedule(event_handler, str(workspace), recursive=True)
    observer.daemon = True
    observer.start()
    logger.info(ls.WATCHER_STARTED.format(path=workspace))
    return observer, event_handler


def stop_watcher(observer: BaseObserver, event_handler: JavaChangeEventHandler) -> None:
    observer.stop()
    event_handler.stop()
    observer.join()
    logger.info(ls.WATCHER_STOPPED)
