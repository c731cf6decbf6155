"""A log that prints messages and events to standard output."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import IO, Any, Optional

from fixkit.log import Log, LogFactory, SessionID


class ScreenLog(Log):
    """Prints each record with a UTC timestamp and a prefix."""

    def __init__(self, prefix: str, stream: Optional[IO[str]] = None) -> None:
        self.prefix = prefix
        self._stream = stream

    def _print(self, kind: str, text: str) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f +0000 UTC")
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"<{stamp}, {self.prefix}, {kind}>\n  ({text})\n")

    def on_incoming(self, message: bytes) -> None:
        self._print("incoming", bytes(message).decode("utf-8", "replace"))

    def on_outgoing(self, message: bytes) -> None:
        self._print("outgoing", bytes(message).decode("utf-8", "replace"))

    def on_event(self, text: str) -> None:
        self._print("event", text)

    def on_eventf(self, fmt: str, *args: Any) -> None:
        super().on_eventf(fmt, *args)


class ScreenLogFactory(LogFactory):
    """Creates screen logs prefixed with GLOBAL or the session identifier."""

    def create(self) -> ScreenLog:
        return ScreenLog("GLOBAL")

    def create_session_log(self, session_id: SessionID) -> ScreenLog:
        return ScreenLog(str(session_id))