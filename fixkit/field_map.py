"""An ordered, thread-safe collection of FIX fields keyed by tag."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Union

from fixkit.fieldvalues import FixBoolean, FixInt, FixString, FixUTCTimestamp

TAG_BEGIN_STRING = 8
TAG_BODY_LENGTH = 9
TAG_CHECK_SUM = 10

_SOH = b"\x01"

TagOrder = Callable[[int], Any]


class FieldMapError(Exception):
    """A field could not be read from a field map."""

    def __init__(self, message: str, tag: int) -> None:
        super().__init__(message)
        self.tag = tag


class FieldMissingError(FieldMapError, LookupError):
    """The requested tag is not present."""

    def __init__(self, tag: int) -> None:
        super().__init__("Conditionally Required Field Missing", tag)


class IncorrectDataFormatError(FieldMapError, ValueError):
    """The tag is present but its value cannot be parsed as requested."""

    def __init__(self, tag: int) -> None:
        super().__init__("Incorrect data format for value", tag)


def normal_field_order(tag: int) -> int:
    """Sort key placing tags in ascending numeric order."""
    return tag


@dataclass(frozen=True)
class _TagValue:
    tag: int
    value: bytes

    @property
    def encoded(self) -> bytes:
        return str(self.tag).encode("ascii") + b"=" + self.value + _SOH

    def total(self) -> int:
        return sum(self.encoded)

    def length(self) -> int:
        return len(self.encoded)


class FieldMap:
    """A collection of FIX fields that make up (part of) a message."""

    def __init__(self, ordering: TagOrder = normal_field_order) -> None:
        self._lock = threading.RLock()
        self._lookup: Dict[int, List[_TagValue]] = {}
        self._order: List[int] = []
        self._ordering = ordering

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, int) and self.has(tag)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lookup)

    def tags(self) -> List[int]:
        """All tags present, in no particular order."""
        with self._lock:
            return list(self._lookup)

    def has(self, tag: int) -> bool:
        """True if the tag is present."""
        with self._lock:
            return tag in self._lookup

    def get_bytes(self, tag: int) -> bytes:
        """The raw value of a tag."""
        with self._lock:
            entry = self._lookup.get(tag)
            if entry is None:
                raise FieldMissingError(tag)
            return entry[0].value

    def get_field(self, tag: int, field_type: Any) -> Any:
        """Parse the value of a tag with ``field_type.read``."""
        raw = self.get_bytes(tag)
        try:
            return field_type.read(raw)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise IncorrectDataFormatError(tag) from exc

    def get_bool(self, tag: int) -> bool:
        """The value of a Y/N field."""
        return bool(self.get_field(tag, FixBoolean))

    def get_int(self, tag: int) -> int:
        """The value of an int field."""
        return int(self.get_field(tag, FixInt))

    def get_time(self, tag: int) -> datetime:
        """The value of a UTC timestamp field."""
        return self.get_field(tag, FixUTCTimestamp).time

    def get_string(self, tag: int) -> str:
        """The value of a string field."""
        return str(self.get_field(tag, FixString))

    def set_bytes(self, tag: int, value: Union[bytes, bytearray]) -> "FieldMap":
        """Set the raw value of a tag, replacing any previous value."""
        with self._lock:
            if tag not in self._lookup:
                self._order.append(tag)
            self._lookup[tag] = [_TagValue(tag, bytes(value))]
        return self

    def set_field(self, tag: int, value: Any) -> "FieldMap":
        """Set a tag from any value with a ``write`` method."""
        return self.set_bytes(tag, value.write())

    def set_bool(self, tag: int, value: bool) -> "FieldMap":
        """Set a Y/N field."""
        return self.set_field(tag, FixBoolean(bool(value)))

    def set_int(self, tag: int, value: int) -> "FieldMap":
        """Set an int field."""
        return self.set_field(tag, FixInt(value))

    def set_string(self, tag: int, value: str) -> "FieldMap":
        """Set a string field."""
        return self.set_field(tag, FixString(value))

    def remove(self, tag: int) -> None:
        """Remove a tag if present."""
        with self._lock:
            if self._lookup.pop(tag, None) is not None:
                self._order.remove(tag)

    def clear(self) -> None:
        """Remove every field."""
        with self._lock:
            self._lookup.clear()
            self._order.clear()

    def copy_into(self, other: "FieldMap") -> None:
        """Overwrite ``other`` with a copy of this map, ordering included."""
        with self._lock:
            lookup = {tag: list(values[:1]) for tag, values in self._lookup.items()}
            order = list(self._order)
            ordering = self._ordering
        with other._lock:
            other._lookup = lookup
            other._order = order
            other._ordering = ordering

    def sorted_tags(self) -> List[int]:
        """The present tags in this map's field order."""
        with self._lock:
            self._order.sort(key=self._ordering)
            return list(self._order)

    def write(self) -> bytes:
        """Encode every field as tag=value<SOH>, in field order."""
        with self._lock:
            return b"".join(
                tv.encoded
                for tag in self.sorted_tags()
                for tv in self._lookup.get(tag, ())
            )

    def total(self) -> int:
        """Byte sum of every field except the checksum."""
        with self._lock:
            return sum(
                tv.total()
                for values in self._lookup.values()
                for tv in values
                if tv.tag != TAG_CHECK_SUM
            )

    def length(self) -> int:
        """Encoded length of every field except BeginString, BodyLength and CheckSum."""
        excluded = (TAG_BEGIN_STRING, TAG_BODY_LENGTH, TAG_CHECK_SUM)
        with self._lock:
            return sum(
                tv.length()
                for values in self._lookup.values()
                for tv in values
                if tv.tag not in excluded
            )