"""Keyed one-shot timers used to debounce UI input.

A UI toolkit can pass its own ``after``/``after_cancel`` pair (Tk, a NiceGUI
timer wrapper, ...); without one, ``threading.Timer`` is used. Scheduling a
key again cancels the pending callback for that key, which is what coalesces
a burst of keystrokes into one lookup.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..domain.ports import SchedulerPort

ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]


def _thread_schedule(delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_ms / 1000.0, callback)
    timer.daemon = True
    timer.start()
    return timer


def _thread_cancel(token: threading.Timer) -> None:
    token.cancel()


@dataclass
class TimerHandle:
    """Timer token associated with a single debounce channel.

    Attributes:
        key: Channel key (for example ``city-search``).
        token: Token returned by the underlying scheduler implementation.
    """
    key: str
    token: Any


class Debouncer(SchedulerPort):
    """Manage per-key timers on top of a schedule/cancel pair."""

    def __init__(self, schedule: Optional[ScheduleFn] = None, cancel: Optional[CancelFn] = None) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
        """
        self._schedule = schedule or _thread_schedule
        self._cancel = cancel or _thread_cancel
        self._handles: Dict[str, TimerHandle] = {}
        self._lock = threading.Lock()

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` for ``key``, replacing any pending one."""
        delay = max(1, int(delay_ms))
        self.cancel(key)
        handle = TimerHandle(key=key, token=None)

        def fire() -> None:
            with self._lock:
                if self._handles.get(key) is not handle:
                    return
                del self._handles[key]
            callback()

        # registered before the timer starts so an immediate fire can clear it
        with self._lock:
            self._handles[key] = handle
        handle.token = self._schedule(delay, fire)

    def cancel(self, key: str) -> None:
        with self._lock:
            handle = self._handles.pop(key, None)
        if handle is not None and handle.token is not None:
            self._cancel(handle.token)

    def cancel_all(self) -> None:
        with self._lock:
            keys = list(self._handles)
        for key in keys:
            self.cancel(key)

    def pending(self, key: str) -> bool:
        with self._lock:
            return key in self._handles


__all__ = ["Debouncer", "TimerHandle"]
