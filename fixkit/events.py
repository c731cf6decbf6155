"""Session events and a resettable one-shot timer that raises them."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from enum import IntEnum
from typing import Callable, Optional, Union


class Event(IntEnum):
    """Timer-driven session events."""

    PEER_TIMEOUT = 0
    NEED_HEARTBEAT = 1
    LOGON_TIMEOUT = 2
    LOGOUT_TIMEOUT = 3


class EventTimer:
    """Runs a task on a background thread each time an armed deadline passes.

    The timer starts disarmed; ``reset`` arms it, and it fires once per arming.
    """

    def __init__(self, task: Callable[[], None]) -> None:
        self._task = task
        self._cond = threading.Condition()
        self._deadline: Optional[float] = None
        self._stopped = False
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._stopped:
                    if self._deadline is None:
                        self._cond.wait()
                        continue
                    remaining = self._deadline - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(remaining)
                if self._stopped:
                    return
                self._deadline = None
            self._task()

    @property
    def stopped(self) -> bool:
        """True once the timer has been stopped and its thread has exited."""
        return self._stopped and not self._thread.is_alive()

    def reset(self, timeout: Union[timedelta, float]) -> None:
        """Arm the timer to fire after ``timeout``, replacing any pending deadline."""
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
        with self._cond:
            if self._stopped:
                return
            self._deadline = time.monotonic() + seconds
            self._cond.notify_all()

    def stop(self) -> None:
        """Stop the timer and wait for its thread; safe to call more than once."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def __enter__(self) -> "EventTimer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()