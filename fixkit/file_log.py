"""Logs that append messages and events to files."""

from __future__ import annotations

import os
import threading
from datetime import datetime, timezone
from typing import IO, Any, Dict, Mapping, Optional

from fixkit.log import Log, LogFactory, SessionID


def session_id_filename_prefix(session_id: SessionID) -> str:
    """The file name prefix used for a session's log files."""
    sender = "_".join(
        part
        for part in (
            session_id.sender_comp_id,
            session_id.sender_sub_id,
            session_id.sender_location_id,
        )
        if part
    ) if (session_id.sender_sub_id or session_id.sender_location_id) else session_id.sender_comp_id
    target = "_".join(
        part
        for part in (
            session_id.target_comp_id,
            session_id.target_sub_id,
            session_id.target_location_id,
        )
        if part
    ) if (session_id.target_sub_id or session_id.target_location_id) else session_id.target_comp_id
    parts = [session_id.begin_string, sender, target]
    if session_id.qualifier:
        parts.append(session_id.qualifier)
    return "-".join(parts)


def open_or_create_file(path: str, mode: int = 0o664) -> IO[bytes]:
    """Open a file for reading and writing, creating it if necessary."""
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT, mode)
    except OSError as exc:
        raise OSError(f"error opening or creating file: {path}: {exc}") from exc
    return os.fdopen(fd, "r+b")


class FileLog(Log):
    """Appends timestamped lines to an event file and a message file."""

    def __init__(self, prefix: str, log_path: str) -> None:
        os.makedirs(log_path, exist_ok=True)
        self.event_path = os.path.join(log_path, prefix + ".event.current.log")
        self.message_path = os.path.join(log_path, prefix + ".messages.current.log")
        self._lock = threading.Lock()
        self._event_file: Optional[IO[str]] = open(self.event_path, "a", encoding="utf-8")
        try:
            self._message_file: Optional[IO[str]] = open(
                self.message_path, "a", encoding="utf-8"
            )
        except OSError:
            self._event_file.close()
            raise

    @staticmethod
    def _write(stream: Optional[IO[str]], text: str) -> None:
        if stream is None:
            raise ValueError("log is closed")
        stamp = datetime.now(timezone.utc).strftime("%Y/%m/%d %H:%M:%S.%f")
        line = f"{stamp} {text}"
        if not line.endswith("\n"):
            line += "\n"
        stream.write(line)
        stream.flush()

    def on_incoming(self, message: bytes) -> None:
        with self._lock:
            self._write(self._message_file, bytes(message).decode("utf-8", "replace"))

    def on_outgoing(self, message: bytes) -> None:
        with self._lock:
            self._write(self._message_file, bytes(message).decode("utf-8", "replace"))

    def on_event(self, text: str) -> None:
        with self._lock:
            self._write(self._event_file, text)

    def on_eventf(self, fmt: str, *args: Any) -> None:
        super().on_eventf(fmt, *args)

    def close(self) -> None:
        """Close both files; safe to call more than once."""
        with self._lock:
            for stream in (self._event_file, self._message_file):
                if stream is not None:
                    stream.close()
            self._event_file = None
            self._message_file = None

    def __enter__(self) -> "FileLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FileLogFactory(LogFactory):
    """Creates file logs under configured directories."""

    def __init__(
        self, global_log_path: str, session_log_paths: Optional[Mapping[SessionID, str]] = None
    ) -> None:
        if not global_log_path:
            raise ValueError("FileLogPath is required")
        paths: Dict[SessionID, str] = dict(session_log_paths or {})
        for session_id, path in paths.items():
            if not path:
                raise ValueError(f"FileLogPath is required for {session_id}")
        self.global_log_path = global_log_path
        self.session_log_paths = paths

    def create(self) -> FileLog:
        return FileLog("GLOBAL", self.global_log_path)

    def create_session_log(self, session_id: SessionID) -> FileLog:
        path = self.session_log_paths.get(session_id)
        if path is None:
            raise LookupError(f"logger not defined for {session_id}")
        return FileLog(session_id_filename_prefix(session_id), path)