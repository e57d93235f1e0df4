"""
Moment primitive helpers (pure).

`datetime.datetime` is the moment every `Date` wraps. This module supplies the
pieces of moment behavior that `datetime` does not provide on its own:

- Calendar-field carry: out-of-range month/day values roll over into adjacent
  months/years instead of raising.
- Rounding and truncation to a duration, measured from the zero moment.
- Unix-timestamp construction with integer arithmetic.
- A versioned binary layout for moments.

Binary layout (big-endian), shared with Go's `time.Time.MarshalBinary`:
- v1 (15 bytes): version 0x01, int64 seconds since 0001-01-01T00:00:00Z,
  int32 nanoseconds, int16 zone offset in minutes (-1 means UTC).
- v2 (16 bytes): v1 followed by an int8 seconds part of the zone offset.
"""

from __future__ import annotations

import struct
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, timezone, tzinfo
from typing import Optional

from .config import get_local_zone

CANONICAL_ZONE = timezone.utc
ZERO_MOMENT = datetime(1, 1, 1, tzinfo=CANONICAL_ZONE)
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=CANONICAL_ZONE)

_BINARY_V1 = 1
_BINARY_V2 = 2
_BINARY_HEADER = struct.Struct(">qih")
_UTC_OFFSET_MINUTES = -1


class MomentBinaryError(ValueError):
    """Raised when a binary moment payload cannot be decoded."""


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero (-25 / 24 == -1, -23 / 24 == 0)."""

    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def carry(year: int, month: int, day: int) -> tuple[int, int, int]:
    """
    Apply calendar-field carry to (year, month, day).

    Month is normalized first, then the day is applied as an offset from the
    first of that month:
    - carry(2024, 13, 1) == (2025, 1, 1)
    - carry(2024, 1, 32) == (2024, 2, 1)
    - carry(2024, 3, 0) == (2024, 2, 29)

    Raises OverflowError if the result falls outside datetime's year range.
    """

    year_delta, month_index = divmod(month - 1, 12)
    year += year_delta
    if not MINYEAR <= year <= MAXYEAR:
        raise OverflowError(f"year {year} is out of range")

    first = date(year, month_index + 1, 1)
    carried = first + timedelta(days=day - 1)
    return carried.year, carried.month, carried.day


def midnight(year: int, month: int, day: int) -> datetime:
    """Midnight in the canonical zone for the carried (year, month, day)."""

    year, month, day = carry(year, month, day)
    return datetime(year, month, day, tzinfo=CANONICAL_ZONE)


def add_calendar(moment: datetime, years: int, months: int, days: int) -> datetime:
    """Field-wise calendar addition with carry; time of day and zone are kept."""

    year, month, day = carry(moment.year + years, moment.month + months, moment.day + days)
    return moment.replace(year=year, month=month, day=day)


def _since_zero(moment: datetime) -> timedelta:
    if moment.tzinfo is None:
        return moment - ZERO_MOMENT.replace(tzinfo=None)
    return moment - ZERO_MOMENT


def truncate(moment: datetime, duration: timedelta) -> datetime:
    """Round down to a multiple of duration since the zero moment."""

    if duration <= timedelta(0):
        return moment
    return moment - _since_zero(moment) % duration


def round(moment: datetime, duration: timedelta) -> datetime:  # noqa: A001
    """Round to the nearest multiple of duration since the zero moment; halfway rounds up."""

    if duration <= timedelta(0):
        return moment
    remainder = _since_zero(moment) % duration
    if remainder + remainder < duration:
        return moment - remainder
    return moment + (duration - remainder)


def from_unix(seconds: int, nanoseconds: int = 0, tz: Optional[tzinfo] = None) -> datetime:
    """
    Moment for a Unix timestamp, seen in `tz`.

    When `tz` is None the configured local zone is used (see config.get_local_zone).
    Nanoseconds below microsecond precision are dropped.
    """

    moment = UNIX_EPOCH + timedelta(seconds=seconds, microseconds=nanoseconds // 1000)
    return moment.astimezone(tz if tz is not None else get_local_zone())


def encode_binary(moment: datetime) -> bytes:
    """Encode a moment using the versioned binary layout. Naive moments are encoded as UTC."""

    if moment.tzinfo is None or moment.tzinfo is CANONICAL_ZONE:
        offset_seconds = _UTC_OFFSET_MINUTES * 60
        utc_moment = moment.replace(tzinfo=CANONICAL_ZONE)
    else:
        offset = moment.utcoffset()
        offset_seconds = int(offset.total_seconds()) if offset is not None else 0
        utc_moment = moment

    since = utc_moment - ZERO_MOMENT
    seconds = since.days * 86400 + since.seconds
    nanoseconds = since.microseconds * 1000

    offset_minutes = trunc_div(offset_seconds, 60)
    offset_remainder = offset_seconds - offset_minutes * 60

    payload = bytes([_BINARY_V1 if offset_remainder == 0 else _BINARY_V2])
    payload += _BINARY_HEADER.pack(seconds, nanoseconds, offset_minutes)
    if offset_remainder:
        payload += struct.pack(">b", offset_remainder)
    return payload


def decode_binary(data: bytes) -> datetime:
    """
    Decode a moment produced by encode_binary (or any producer of the same layout).

    The result carries the encoded zone offset: UTC for offset -1, otherwise a
    fixed-offset timezone.
    """

    if not data:
        raise MomentBinaryError("decode_binary: no data")

    version = data[0]
    if version not in (_BINARY_V1, _BINARY_V2):
        raise MomentBinaryError("decode_binary: unsupported version")

    expected = 1 + _BINARY_HEADER.size + (1 if version == _BINARY_V2 else 0)
    if len(data) != expected:
        raise MomentBinaryError("decode_binary: invalid length")

    seconds, nanoseconds, offset_minutes = _BINARY_HEADER.unpack_from(data, 1)
    offset_seconds = offset_minutes * 60
    if version == _BINARY_V2:
        offset_seconds += struct.unpack_from(">b", data, 1 + _BINARY_HEADER.size)[0]

    try:
        moment = ZERO_MOMENT + timedelta(seconds=seconds, microseconds=nanoseconds // 1000)
        if offset_seconds == _UTC_OFFSET_MINUTES * 60:
            return moment
        return moment.astimezone(timezone(timedelta(seconds=offset_seconds)))
    except (OverflowError, ValueError) as exc:
        raise MomentBinaryError("decode_binary: moment out of range") from exc


__all__ = [
    "CANONICAL_ZONE",
    "MomentBinaryError",
    "UNIX_EPOCH",
    "ZERO_MOMENT",
    "add_calendar",
    "carry",
    "decode_binary",
    "encode_binary",
    "from_unix",
    "midnight",
    "round",
    "trunc_div",
    "truncate",
]
