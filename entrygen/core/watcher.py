"""Re-generation of entries on component file changes.

Used in the dev environment only. A watchdog observer reports file events
under src/; every relevant event requests a full generation pass, which a
worker thread runs. Passes never overlap: requests that arrive while a pass
runs are coalesced into a single follow-up pass.
"""

import enum
import logging
import os
import threading
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .discovery import is_component_path
from .errors import EntryGenError
from .generator import EntryGenerator

logger = logging.getLogger(__name__)


class SingleFlight:
    """Runs a function on a worker thread, at most one invocation at a time.

    request() never blocks: it marks a run as pending and wakes the worker.
    The pending flag is a single bit, so any number of requests made while
    the function runs collapse into exactly one follow-up run.
    """

    def __init__(self, fn: Callable[[], None], name: str = "single-flight"):
        self._fn = fn
        self._name = name
        self._cond = threading.Condition()
        self._running = False
        self._pending = False
        self._stopping = False
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        with self._cond:
            return self._running

    @property
    def pending(self) -> bool:
        with self._cond:
            return self._pending

    def start(self) -> None:
        """Start the background worker thread."""
        with self._cond:
            if self._thread is not None:
                logger.warning(f"{self._name} worker already running")
                return
            self._stopping = False
            self._thread = threading.Thread(target=self._run_loop, daemon=True, name=self._name)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the worker after the run in progress, if any."""
        with self._cond:
            thread, self._thread = self._thread, None
            self._stopping = True
            self._cond.notify_all()
        if thread is not None:
            thread.join(timeout=timeout)

    def request(self) -> bool:
        """Schedule one run of the function.

        Returns:
            True if a new run was scheduled, False if the request was folded
            into a run that is already pending
        """
        with self._cond:
            if self._pending:
                return False
            self._pending = True
            self._cond.notify_all()
            return True

    def run_pending(self) -> int:
        """Run the function on the calling thread until nothing is pending.

        Returns immediately when another thread is already running it.

        Returns:
            Number of runs performed
        """
        runs = 0
        while True:
            with self._cond:
                if self._running or not self._pending or self._stopping:
                    return runs
                self._pending = False
                self._running = True
            try:
                self._fn()
            finally:
                with self._cond:
                    self._running = False
                    self._cond.notify_all()
            runs += 1

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until nothing is running or pending.

        Returns:
            False if the timeout expired first
        """
        with self._cond:
            return self._cond.wait_for(lambda: not self._running and not self._pending, timeout)

    def _run_loop(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopping or (self._pending and not self._running))
                if self._stopping:
                    return
            try:
                self.run_pending()
            except Exception as e:
                logger.error(f"{self._name} run failed: {e}", exc_info=True)


class WatchState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class WatchController:
    """Re-runs entry generation when component files change.

    Created and modified components always trigger a pass. Deleted
    components only trigger one when they are in the current component
    table, so removing a component of another app is ignored.

    Passes run on the controller's own worker thread. Event handlers only
    flag a pass as pending, so events keep flowing while a pass runs and
    a burst of them collapses into one follow-up pass.
    """

    def __init__(self, generator: EntryGenerator):
        self.generator = generator
        self._flight = SingleFlight(self._run_pass, name="entrygen-watch")
        self._observer: Optional[Observer] = None

    @property
    def project_dir(self) -> str:
        return self.generator.config.project_dir

    @property
    def state(self) -> WatchState:
        return WatchState.SCANNING if self._flight.running else WatchState.IDLE

    def start(self) -> None:
        """Start the pass worker and watch the project's src/ directory."""
        if self._observer is not None:
            logger.warning("Watch controller already running")
            return

        watch_dir = os.path.join(self.project_dir, "src")
        if not os.path.isdir(watch_dir):
            logger.warning(f"{watch_dir} does not exist, watching {self.project_dir} instead")
            watch_dir = self.project_dir

        self._flight.start()
        self._observer = Observer()
        self._observer.schedule(_ComponentEventHandler(self), watch_dir, recursive=True)
        self._observer.start()
        logger.info(f"Watching {watch_dir} for component changes")

    def stop(self) -> None:
        """Stop watching, then stop the pass worker."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5.0)
        self._observer = None
        self._flight.stop()
        logger.info("Watch controller stopped")

    def on_added(self, file_path: str) -> bool:
        return self._trigger_if_component(file_path)

    def on_changed(self, file_path: str) -> bool:
        return self._trigger_if_component(file_path)

    def on_removed(self, file_path: str) -> bool:
        """Request a pass if a tracked component was removed.

        Returns:
            True if a pass was requested
        """
        file_path = os.path.abspath(file_path)
        tracked = self.generator.config.vue_components
        prefix = file_path + os.sep
        if file_path not in tracked and not any(p.startswith(prefix) for p in tracked):
            logger.debug(f"Ignoring removal of untracked path {file_path}")
            return False
        self.request_pass(f"removed {file_path}")
        return True

    def request_pass(self, reason: str = "") -> None:
        """Flag a pass as pending without waiting for it."""
        if not self._flight.request():
            logger.debug(f"Pass already pending, coalescing: {reason}")
        elif reason:
            logger.debug(f"Re-generating entries: {reason}")

    def flush(self) -> int:
        """Run pending passes on the calling thread instead of the worker.

        Returns:
            Number of passes run
        """
        return self._flight.run_pending()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no pass is running or pending."""
        return self._flight.wait_idle(timeout)

    def _trigger_if_component(self, file_path: str) -> bool:
        file_path = os.path.abspath(file_path)
        if not is_component_path(file_path, self.project_dir):
            return False
        self.request_pass(f"changed {file_path}")
        return True

    def _run_pass(self) -> None:
        try:
            self.generator.generate()
        except EntryGenError as e:
            logger.error(f"Entry generation failed: {e}")
        except Exception as e:
            logger.error(f"Entry generation failed: {e}", exc_info=True)


class _ComponentEventHandler(FileSystemEventHandler):
    """Forwards watchdog file events to a WatchController."""

    def __init__(self, controller: WatchController):
        super().__init__()
        self._controller = controller

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._controller.on_added(os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._controller.on_changed(os.fsdecode(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        # A removed directory may have held tracked components
        self._controller.on_removed(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if self._controller.on_removed(os.fsdecode(event.src_path)):
            return
        if not event.is_directory:
            self._controller.on_added(os.fsdecode(event.dest_path))
