"""
Startup heartbeat

Emits a "still starting" line at a fixed delay on a background thread
while a startup is in flight.
"""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

Waiter = Callable[[threading.Event, float], bool]


def _wait_on_event(cancelled: threading.Event, timeout: float) -> bool:
    """Block until cancelled or the timeout elapses. True means cancelled."""
    return cancelled.wait(timeout)


class HeartbeatScheduler:
    """
    Periodic "still in progress" signal on a daemon thread

    Each cycle waits ``interval`` seconds on the cancel event, then fires.
    The next wait only begins after the firing completes (fixed delay), so
    a slow log handler can never cause overlapping firings. A firing emits
    only while ``is_active()`` returns True; otherwise it is a silent no-op
    and the loop keeps going until ``stop()``.

    Example:
        starting = threading.Event()
        starting.set()
        heartbeat = HeartbeatScheduler(starting.is_set, message="Server is starting...")
        heartbeat.start()
        ...
        starting.clear()
        heartbeat.stop()
    """

    def __init__(
        self,
        is_active: Callable[[], bool],
        interval: float = 1.0,
        message: str = "Server is starting...",
        name: str = "cluster-starting",
        emit: Callable[[str], None] | None = None,
        waiter: Waiter | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.message = message
        self.name = name
        self._is_active = is_active
        self._emit = emit or logger.info
        self._wait = waiter or _wait_on_event
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the heartbeat thread (at most once per scheduler)"""
        with self._lock:
            if self._thread is not None:
                logger.warning("Heartbeat already started")
                return
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        logger.debug(f"Heartbeat started (interval={self.interval}s)")

    def stop(self) -> None:
        """
        Cancel all pending and future firings

        Returns once the worker has exited: a firing already in progress
        completes first, none begins afterwards. Safe to call before
        ``start()`` and more than once.
        """
        self._cancelled.set()
        with self._lock:
            thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join()
        logger.debug("Heartbeat stopped")

    def _run(self) -> None:
        while not self._wait(self._cancelled, self.interval):
            if self._cancelled.is_set():
                break
            self._fire()

    def _fire(self) -> None:
        if not self._is_active():
            return
        try:
            self._emit(self.message)
        except Exception as e:
            logger.warning(f"Heartbeat emit failed: {e}")
