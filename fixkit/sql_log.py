"""A log that stores messages and events in SQL tables."""

from __future__ import annotations

import itertools
import logging
import re
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, List, Mapping, Optional

from fixkit.log import Log, LogFactory, SessionID

_logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\?")

Placeholder = Callable[[int], str]
Connector = Callable[[str], Any]

MESSAGES_TABLE = "messages_log"
EVENTS_TABLE = "event_log"


def sql_string(raw: str, placeholder: Optional[Placeholder]) -> str:
    """Replace each ``?`` in a statement with the driver's numbered placeholder."""
    if placeholder is None:
        return raw
    counter = itertools.count()
    return _PLACEHOLDER.sub(lambda _match: placeholder(next(counter)), raw)


def postgres_placeholder(index: int) -> str:
    """The PostgreSQL placeholder for the zero-based parameter ``index``."""
    return f"${index + 1}"


def _sqlite_connector(data_source_name: str) -> sqlite3.Connection:
    return sqlite3.connect(data_source_name, check_same_thread=False, isolation_level=None)


class SqlLog(Log):
    """Inserts each record as a row tagged with the session identity."""

    def __init__(
        self, session_id: SessionID, connection: Any, placeholder: Optional[Placeholder] = None
    ) -> None:
        self.session_id = session_id
        self.placeholder = placeholder
        self._db = connection

    def _connection(self) -> Any:
        if self._db is None:
            raise RuntimeError("log is closed")
        return self._db

    def _session_values(self) -> tuple:
        s = self.session_id
        return (
            s.begin_string,
            s.qualifier,
            s.sender_comp_id,
            s.sender_sub_id,
            s.sender_location_id,
            s.target_comp_id,
            s.target_sub_id,
            s.target_location_id,
        )

    def _insert(self, table: str, value: str) -> None:
        statement = sql_string(
            f"INSERT INTO {table} ("
            "time, beginstring, session_qualifier, "
            "sendercompid, sendersubid, senderlocid, "
            "targetcompid, targetsubid, targetlocid, text) "
            "VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            self.placeholder,
        )
        stamp = datetime.now(timezone.utc).isoformat()
        try:
            db = self._connection()
            cursor = db.cursor()
            try:
                cursor.execute(statement, (stamp, *self._session_values(), value))
            finally:
                cursor.close()
            db.commit()
        except Exception:
            _logger.exception("failed to insert into %s", table)

    def on_incoming(self, message: bytes) -> None:
        self._insert(MESSAGES_TABLE, bytes(message).decode("utf-8", "replace"))

    def on_outgoing(self, message: bytes) -> None:
        self._insert(MESSAGES_TABLE, bytes(message).decode("utf-8", "replace"))

    def on_event(self, text: str) -> None:
        self._insert(EVENTS_TABLE, text)

    def on_eventf(self, fmt: str, *args: Any) -> None:
        super().on_eventf(fmt, *args)

    def iterate(self, table: str) -> Iterator[str]:
        """Yield the text of every row of ``table`` belonging to this session."""
        statement = sql_string(
            f"SELECT text FROM {table} "
            "WHERE beginstring=? AND session_qualifier=? "
            "AND sendercompid=? AND sendersubid=? AND senderlocid=? "
            "AND targetcompid=? AND targetsubid=? AND targetlocid=?",
            self.placeholder,
        )
        cursor = self._connection().cursor()
        try:
            cursor.execute(statement, self._session_values())
            for (text,) in cursor:
                yield text
        finally:
            cursor.close()

    def entries(self, table: str) -> List[str]:
        """Every text of ``table`` belonging to this session."""
        return list(self.iterate(table))

    def close(self) -> None:
        """Close the database connection; safe to call more than once."""
        if self._db is not None:
            self._db.close()
            self._db = None

    def __enter__(self) -> "SqlLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class SqlLogFactory(LogFactory):
    """Creates SQL logs.

    ``sessions`` maps each configured session to its data source name; with
    ``dynamic_sessions`` an unknown session falls back to the global one.
    """

    def __init__(
        self,
        data_source_name: str,
        driver: str = "sqlite3",
        sessions: Optional[Mapping[SessionID, str]] = None,
        dynamic_sessions: bool = False,
        connector: Optional[Connector] = None,
    ) -> None:
        if not driver:
            raise ValueError("SQLLogDriver is required")
        if not data_source_name:
            raise ValueError("SQLLogDataSourceName is required")
        if connector is None:
            if driver != "sqlite3":
                raise ValueError(f"unsupported sql driver without a connector: {driver}")
            connector = _sqlite_connector
        self.driver = driver
        self.data_source_name = data_source_name
        self.sessions = dict(sessions or {})
        self.dynamic_sessions = dynamic_sessions
        self._connector = connector

    def _new_log(self, session_id: SessionID, data_source_name: str) -> SqlLog:
        placeholder = postgres_placeholder if self.driver in ("postgres", "pgx") else None
        connection = self._connector(data_source_name)
        try:
            cursor = connection.cursor()
            try:
                cursor.execute("SELECT 1")
            finally:
                cursor.close()
        except Exception:
            connection.close()
            raise
        return SqlLog(session_id, connection, placeholder)

    def create(self) -> SqlLog:
        return self._new_log(SessionID(), self.data_source_name)

    def create_session_log(self, session_id: SessionID) -> SqlLog:
        data_source_name = self.sessions.get(session_id)
        if data_source_name is None:
            if not self.dynamic_sessions:
                raise LookupError(f"unknown session: {session_id}")
            data_source_name = self.data_source_name
        return self._new_log(session_id, data_source_name)