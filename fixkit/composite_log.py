"""A log that fans every record out to several logs."""

from __future__ import annotations

from typing import Any, Iterable, List

from fixkit.log import Log, LogFactory, SessionID


class CompositeLog(Log):
    """Forwards every record to each of its logs in order."""

    def __init__(self, logs: Iterable[Log]) -> None:
        self.logs: List[Log] = list(logs)

    def on_incoming(self, message: bytes) -> None:
        for log in self.logs:
            log.on_incoming(message)

    def on_outgoing(self, message: bytes) -> None:
        for log in self.logs:
            log.on_outgoing(message)

    def on_event(self, text: str) -> None:
        for log in self.logs:
            log.on_event(text)

    def on_eventf(self, fmt: str, *args: Any) -> None:
        for log in self.logs:
            log.on_eventf(fmt, *args)


class CompositeLogFactory(LogFactory):
    """Creates composite logs from several log factories."""

    def __init__(self, factories: Iterable[LogFactory]) -> None:
        self.factories: List[LogFactory] = list(factories)

    def create(self) -> CompositeLog:
        return CompositeLog([factory.create() for factory in self.factories])

    def create_session_log(self, session_id: SessionID) -> CompositeLog:
        return CompositeLog(
            [factory.create_session_log(session_id) for factory in self.factories]
        )