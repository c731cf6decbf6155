"""Session identity and the interfaces for logging FIX messages and events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple


def format_event(fmt: str, args: Tuple[Any, ...]) -> str:
    """Apply printf-style arguments to an event format string."""
    return fmt % args if args else fmt


@dataclass(frozen=True)
class SessionID:
    """Identifies a FIX session between two counterparties."""

    begin_string: str = ""
    sender_comp_id: str = ""
    sender_sub_id: str = ""
    sender_location_id: str = ""
    target_comp_id: str = ""
    target_sub_id: str = ""
    target_location_id: str = ""
    qualifier: str = ""

    def __str__(self) -> str:
        def party(comp: str, sub: str, loc: str) -> str:
            text = comp
            if sub:
                text += "/" + sub
            if loc:
                text += "/" + loc
            return text

        text = (
            f"{self.begin_string}:"
            f"{party(self.sender_comp_id, self.sender_sub_id, self.sender_location_id)}->"
            f"{party(self.target_comp_id, self.target_sub_id, self.target_location_id)}"
        )
        if self.qualifier:
            text += ":" + self.qualifier
        return text


class Log(ABC):
    """Receives incoming and outgoing FIX messages and session events."""

    @abstractmethod
    def on_incoming(self, message: bytes) -> None:
        """Record an incoming FIX message."""

    @abstractmethod
    def on_outgoing(self, message: bytes) -> None:
        """Record an outgoing FIX message."""

    @abstractmethod
    def on_event(self, text: str) -> None:
        """Record a session event."""

    def on_eventf(self, fmt: str, *args: Any) -> None:
        """Record a session event built from a printf-style format."""
        self.on_event(format_event(fmt, args))


class LogFactory(ABC):
    """Creates the global log and per-session logs."""

    @abstractmethod
    def create(self) -> Log:
        """Create the global log."""

    @abstractmethod
    def create_session_log(self, session_id: SessionID) -> Log:
        """Create the log for one session."""