"""
Cancellable delayed calls.

Schedulers hand out handles with cancel(); RetryTimer keeps at most one
pending call at a time (scheduling again cancels the previous one).
"""

from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol


class TaskHandle(Protocol):
    def cancel(self) -> None: ...


class TaskScheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TaskHandle: ...


class ThreadTimerScheduler:
    """
    Runs callbacks on daemon threading.Timer threads.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class RetryTimer:
    """
    Single-slot delayed call.

    At most one callback is ever pending: schedule() replaces (and
    cancels) any pending one, cancel() clears it.
    """

    def __init__(self, scheduler: Optional[TaskScheduler] = None):
        self.scheduler = scheduler or ThreadTimerScheduler()
        self._lock = threading.Lock()
        self._token: Optional[object] = None
        self._handle: Optional[TaskHandle] = None

    @property
    def pending(self) -> bool:
        return self._token is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        token = object()

        def _fire() -> None:
            with self._lock:
                if self._token is not token:
                    return
                self._token = None
                self._handle = None
            callback()

        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._token = token
            self._handle = None

        handle = self.scheduler.call_later(delay, _fire)
        with self._lock:
            if self._token is token:
                self._handle = handle

    def cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._token = None
            self._handle = None
