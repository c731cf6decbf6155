"""Typed FIX field values and their wire encodings."""

from __future__ import annotations

import decimal
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview, str]

_DIGITS = frozenset(b"0123456789")
_FLOAT_CHARS = _DIGITS | frozenset(b".-")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_TIMESTAMP_PATTERN = re.compile(
    r"(\d{4})(\d{2})(\d{2})-(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
)


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def parse_uint(data: BytesLike) -> int:
    """Parse an unsigned decimal integer made of ASCII digits only."""
    raw = _as_bytes(data)
    if not raw:
        raise ValueError("empty bytes")
    if not raw.isdigit():
        raise ValueError("invalid format")
    return int(raw)


def atoi(data: BytesLike) -> int:
    """Parse a signed decimal integer as it appears in FIX int fields."""
    raw = _as_bytes(data)
    if raw[:1] == b"-":
        return -parse_uint(raw[1:])
    return parse_uint(raw)


class TimestampPrecision(IntEnum):
    """Precision used when writing a UTC timestamp."""

    MILLIS = 0
    SECONDS = 1
    MICROS = 2
    NANOS = 3


@dataclass(frozen=True)
class FixBoolean:
    """A FIX Boolean value, encoded as Y or N."""

    value: bool = False

    def __bool__(self) -> bool:
        return self.value

    @classmethod
    def read(cls, data: BytesLike) -> "FixBoolean":
        raw = _as_bytes(data)
        if raw == b"Y":
            return cls(True)
        if raw == b"N":
            return cls(False)
        raise ValueError(f"Invalid Value for bool: {raw.decode('latin-1')}")

    def write(self) -> bytes:
        return b"Y" if self.value else b"N"


class FixBytes(bytes):
    """A raw FIX field value."""

    @classmethod
    def read(cls, data: BytesLike) -> "FixBytes":
        return cls(_as_bytes(data))

    def write(self) -> bytes:
        return bytes(self)


class FixString(str):
    """A FIX string value."""

    @classmethod
    def read(cls, data: BytesLike) -> "FixString":
        return cls(_as_bytes(data).decode("utf-8", "surrogateescape"))

    def write(self) -> bytes:
        return str(self).encode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class FixDecimal:
    """An arbitrary precision decimal written with a fixed number of places."""

    value: decimal.Decimal = field(default_factory=decimal.Decimal)
    scale: int = 0

    @classmethod
    def read(cls, data: BytesLike) -> "FixDecimal":
        text = _as_bytes(data).decode("latin-1")
        if not _DECIMAL_PATTERN.fullmatch(text):
            raise ValueError(f"can't convert {text} to decimal")
        return cls(decimal.Decimal(text))

    def write(self) -> bytes:
        value = decimal.Decimal(self.value)
        parts = value.as_tuple()
        exponent = parts.exponent if isinstance(parts.exponent, int) else 0
        precision = len(parts.digits) + abs(exponent) + abs(self.scale) + 2
        with decimal.localcontext() as ctx:
            ctx.prec = max(28, precision)
            quantum = decimal.Decimal(1).scaleb(-self.scale)
            rounded = value.quantize(quantum, rounding=decimal.ROUND_HALF_UP)
        return format(rounded, "f").encode("ascii")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(decimal.Decimal(repr(value)).normalize(), "f")


class FixFloat(float):
    """A FIX float value; a leading plus sign and exponents are rejected."""

    @classmethod
    def read(cls, data: BytesLike) -> "FixFloat":
        raw = _as_bytes(data)
        text = raw.decode("latin-1")
        if not raw or not set(raw) <= _FLOAT_CHARS:
            raise ValueError(f"invalid value {text}")
        return cls(float(text))

    def write(self) -> bytes:
        return _format_float(float(self)).encode("ascii")


class FixInt(int):
    """A FIX int value."""

    @classmethod
    def read(cls, data: BytesLike) -> "FixInt":
        return cls(atoi(data))

    def write(self) -> bytes:
        return str(int(self)).encode("ascii")


_FRACTION_DIGITS = {
    17: (TimestampPrecision.SECONDS, 0),
    21: (TimestampPrecision.MILLIS, 3),
    24: (TimestampPrecision.MICROS, 6),
    27: (TimestampPrecision.NANOS, 9),
}


@dataclass(frozen=True)
class FixUTCTimestamp:
    """A FIX UTC timestamp.

    ``extra_nanos`` holds the nanoseconds beyond the microsecond resolution of
    ``time`` (0 to 999).
    """

    time: datetime
    precision: TimestampPrecision = TimestampPrecision.MILLIS
    extra_nanos: int = 0

    @classmethod
    def read(cls, data: BytesLike) -> "FixUTCTimestamp":
        text = _as_bytes(data).decode("latin-1")
        error = ValueError(f"Invalid Value for Timestamp: {text}")
        layout = _FRACTION_DIGITS.get(len(text))
        match = _TIMESTAMP_PATTERN.fullmatch(text)
        if layout is None or match is None:
            raise error
        precision, digits = layout
        fraction = match.group(7) or ""
        if len(fraction) != digits:
            raise error
        nanos = int(fraction.ljust(9, "0")) if fraction else 0
        year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
        try:
            moment = datetime(
                year, month, day, hour, minute, second, nanos // 1000, tzinfo=timezone.utc
            )
        except ValueError as exc:
            raise error from exc
        return cls(moment, precision, nanos % 1000)

    def write(self) -> bytes:
        moment = self.time
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        else:
            moment = moment.astimezone(timezone.utc)
        text = moment.strftime("%Y%m%d-%H:%M:%S")
        if self.precision is TimestampPrecision.SECONDS:
            pass
        elif self.precision is TimestampPrecision.MICROS:
            text += f".{moment.microsecond:06d}"
        elif self.precision is TimestampPrecision.NANOS:
            text += f".{moment.microsecond * 1000 + self.extra_nanos:09d}"
        else:
            text += f".{moment.microsecond // 1000:03d}"
        return text.encode("ascii")