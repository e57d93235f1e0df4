"""
Date: a calendar date backed by a UTC-midnight datetime.

A `Date` wraps a single `datetime` moment and guarantees:
- The moment is always midnight (hour, minute, second, microsecond are 0).
- The moment's zone is always UTC; zone-changing methods return the same Date.
- Two Dates are equal when their (year, month, day) are equal.

Every entry path (construction, datetime conversion, parsing, Unix timestamps,
text/JSON/binary decoding) goes through `from_datetime`, which keeps only the
wall-clock (year, month, day) of its input.

Out-of-range month/day values never raise; they carry into adjacent
months/years (Date(2024, 13, 1) is 2025-01-01).

Text form is ISO 8601 calendar date: YYYY-MM-DD.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as _date
from datetime import datetime, timedelta, tzinfo
from enum import IntEnum
from typing import Optional, Union

from .config import get_local_zone
from .moment import (
    CANONICAL_ZONE,
    UNIX_EPOCH,
    ZERO_MOMENT,
    add_calendar,
    decode_binary,
    encode_binary,
    from_unix,
    midnight,
    trunc_div,
)
from .moment import round as round_moment
from .moment import truncate as truncate_moment

logger = logging.getLogger(__name__)

ISO8601_DATE = "%Y-%m-%d"

LONG_MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ONE_DAY = timedelta(days=1)
_ISO8601_DATE_TEXT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_MICROSECONDS_PER_HOUR = 3_600_000_000


class NotAJSONStringError(ValueError):
    """Raised when a JSON payload for a Date is not a quoted string."""


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def __str__(self) -> str:
        return LONG_MONTH_NAMES[self - 1]


def _repr_date(year: int, month: int, day: int) -> str:
    if 1 <= month <= 12:
        month_text = LONG_MONTH_NAMES[month - 1]
    else:
        # datetime-backed Dates always have a month in 1..12.
        month_text = str(month)
    return f"Date({year}, {month_text}, {day})"


@dataclass(frozen=True, slots=True, eq=False, init=False, repr=False)
class Date:
    """
    Calendar date (year, month, day) with no time of day and no zone.

    Immutable: every operation returns a new Date. The unmarshal_* methods are
    the only operations that replace a Date's value in place.
    """

    _moment: datetime

    def __init__(self, year: int = 1, month: int = 1, day: int = 1) -> None:
        object.__setattr__(self, "_moment", midnight(year, month, day))

    def _assign(self, other: Date) -> None:
        object.__setattr__(self, "_moment", other._moment)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_datetime(cls, value: _date) -> Date:
        """Date of a datetime (or date), keeping only its wall-clock year, month and day."""

        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls, tz: Optional[tzinfo] = None) -> Date:
        """Current date in `tz`, or in the configured local zone."""

        return now(tz)

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def date(self) -> tuple[int, Month, int]:
        """Return (year, month, day)."""

        return self._moment.year, Month(self._moment.month), self._moment.day

    @property
    def year(self) -> int:
        return self._moment.year

    @property
    def month(self) -> Month:
        return Month(self._moment.month)

    @property
    def day(self) -> int:
        return self._moment.day

    # Always midnight: the clock accessors below always return 0.

    def clock(self) -> tuple[int, int, int]:
        """Return (hour, minute, second); always (0, 0, 0)."""

        return self._moment.hour, self._moment.minute, self._moment.second

    @property
    def hour(self) -> int:
        return self._moment.hour

    @property
    def minute(self) -> int:
        return self._moment.minute

    @property
    def second(self) -> int:
        return self._moment.second

    @property
    def microsecond(self) -> int:
        return self._moment.microsecond

    @property
    def nanosecond(self) -> int:
        return self._moment.microsecond * 1000

    def weekday(self) -> int:
        """Day of the week, Monday == 0 ... Sunday == 6."""

        return self._moment.weekday()

    def isoweekday(self) -> int:
        """Day of the week, Monday == 1 ... Sunday == 7."""

        return self._moment.isoweekday()

    def iso_week(self) -> tuple[int, int]:
        """Return the ISO 8601 (year, week number)."""

        iso = self._moment.isocalendar()
        return iso[0], iso[1]

    def year_day(self) -> int:
        """Day of the year, 1 through 365 (366 in leap years)."""

        return self._moment.timetuple().tm_yday

    def is_zero(self) -> bool:
        """True for the zero Date, 0001-01-01."""

        return self._moment == ZERO_MOMENT

    def to_datetime(self) -> datetime:
        """The underlying moment: midnight UTC on this date."""

        return self._moment

    def to_date(self) -> _date:
        return self._moment.date()

    # ------------------------------------------------------------------
    # Zone
    # ------------------------------------------------------------------

    def location(self) -> tzinfo:
        """Zone of the underlying moment; always UTC."""

        return self._moment.tzinfo  # type: ignore[return-value]

    def zone(self) -> tuple[str, int]:
        """Return (zone name, offset in seconds east of UTC); always ("UTC", 0)."""

        offset = self._moment.utcoffset() or timedelta(0)
        return self._moment.tzname() or "", int(offset.total_seconds())

    def zone_bounds(self) -> tuple[Optional[datetime], Optional[datetime]]:
        """Start and end of the zone period in effect; UTC has no transitions, so (None, None)."""

        return None, None

    def is_dst(self) -> bool:
        return bool(self._moment.dst())

    # Always returns the receiver unchanged. Kept so a Date can stand in for a
    # datetime; a Date's zone never changes.
    def in_location(self, tz: Optional[tzinfo]) -> Date:
        return self

    # Always returns the receiver unchanged.
    def astimezone(self, tz: Optional[tzinfo] = None) -> Date:
        return self

    # Always returns the receiver unchanged.
    def local(self) -> Date:
        return self

    # Always returns the receiver unchanged.
    def utc(self) -> Date:
        return self

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def equal(self, other: Date) -> bool:
        """True if year, month and day are the same for both Dates."""

        return self.date() == other.date()

    def before(self, other: Date) -> bool:
        return self._moment < other._moment

    def after(self, other: Date) -> bool:
        return self._moment > other._moment

    def compare(self, other: Date) -> int:
        """Return -1 if self is before other, +1 if after, 0 if the same date."""

        if self._moment < other._moment:
            return -1
        if self._moment > other._moment:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.equal(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return not self.equal(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.before(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return not self.after(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.after(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return not self.before(other)

    def __hash__(self) -> int:
        return hash((self._moment.year, self._moment.month, self._moment.day))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, duration: timedelta) -> Date:
        """
        Add a duration, counted in whole days.

        The duration is converted to whole hours (truncated toward zero), then
        divided by 24 truncating toward zero: 50 hours adds 2 days, -25 hours
        subtracts 1 day, and anything shorter than 24 hours in either direction
        returns the same Date.

        Prefer add_date for calendar arithmetic.
        """

        hours = trunc_div(duration // timedelta(microseconds=1), _MICROSECONDS_PER_HOUR)
        return self.add_date(0, 0, trunc_div(hours, 24))

    def add_date(self, years: int = 0, months: int = 0, days: int = 0) -> Date:
        """
        Add years, months and days field-wise, with calendar carry.

        Date(2024, 1, 31).add_date(0, 1, 0) is 2024-03-02 (February 31st carried).
        """

        return from_datetime(add_calendar(self._moment, years, months, days))

    def sub(self, other: Date) -> timedelta:
        """Span between two Dates; always a whole number of days."""

        return self._moment - other._moment

    def round(self, duration: timedelta) -> Date:
        """
        Round to a multiple of duration since the zero Date.

        Any duration shorter than one day returns the same Date.
        """

        if duration < _ONE_DAY:
            return self
        return from_datetime(round_moment(self._moment, duration))

    def truncate(self, duration: timedelta) -> Date:
        """
        Round down to a multiple of duration since the zero Date.

        Any duration shorter than one day returns the same Date.
        """

        if duration < _ONE_DAY:
            return self
        return from_datetime(truncate_moment(self._moment, duration))

    def __add__(self, other: object) -> Date:
        if not isinstance(other, timedelta):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> Union[Date, timedelta]:
        if isinstance(other, Date):
            return self.sub(other)
        if isinstance(other, timedelta):
            return self.add(-other)
        return NotImplemented

    # ------------------------------------------------------------------
    # Unix timestamps
    # ------------------------------------------------------------------

    def unix(self) -> int:
        return (self._moment - UNIX_EPOCH) // timedelta(seconds=1)

    def unix_milli(self) -> int:
        return (self._moment - UNIX_EPOCH) // timedelta(milliseconds=1)

    def unix_micro(self) -> int:
        return (self._moment - UNIX_EPOCH) // timedelta(microseconds=1)

    def unix_nano(self) -> int:
        return self.unix_micro() * 1000

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def isoformat(self) -> str:
        """YYYY-MM-DD; the year is not padded, month and day are two digits."""

        return f"{self._moment.year}-{self._moment.month:02d}-{self._moment.day:02d}"

    def format(self, layout: str) -> str:
        """Format with a strftime layout."""

        return self._moment.strftime(layout)

    strftime = format

    def append_format(self, buf: bytearray, layout: str) -> bytearray:
        """Append the formatted Date to buf and return buf."""

        buf.extend(self.format(layout).encode())
        return buf

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return self.format(format_spec)

    def __str__(self) -> str:
        """YYYY-MM-DD with the year zero-padded to four digits."""

        return f"{self._moment.year:04d}-{self._moment.month:02d}-{self._moment.day:02d}"

    def __repr__(self) -> str:
        return _repr_date(self._moment.year, self._moment.month, self._moment.day)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def marshal_text(self) -> bytes:
        return self.isoformat().encode()

    def unmarshal_text(self, data: Union[bytes, str]) -> None:
        """
        Replace this Date with the ISO 8601 date in data.

        Raises:
            ValueError: If data is not in YYYY-MM-DD form.
        """

        text = data.decode() if isinstance(data, (bytes, bytearray)) else data
        self._assign(parse_iso8601(text))

    def marshal_json(self) -> bytes:
        return b'"' + self.marshal_text() + b'"'

    def unmarshal_json(self, data: Union[bytes, str]) -> None:
        """
        Replace this Date with the quoted ISO 8601 date in data.

        A JSON null leaves the Date untouched; it does not reset it to zero.

        Raises:
            NotAJSONStringError: If data is not a quoted string.
            ValueError: If the quoted text is not in YYYY-MM-DD form.
        """

        raw = data.encode() if isinstance(data, str) else bytes(data)
        if raw == b"null":
            logger.debug("Date.unmarshal_json: null payload, keeping %s", self)
            return

        if len(raw) < 2 or raw[:1] != b'"' or raw[-1:] != b'"':
            raise NotAJSONStringError("Date.unmarshal_json: input is not a JSON string")
        self._assign(parse_iso8601(raw[1:-1].decode()))

    def marshal_binary(self) -> bytes:
        """Binary moment encoding of the underlying midnight-UTC datetime."""

        return encode_binary(self._moment)

    def unmarshal_binary(self, data: bytes) -> None:
        """
        Replace this Date with a binary-encoded moment.

        Any time of day or zone offset in the payload is discarded; only the
        wall-clock (year, month, day) of the encoded moment is kept.

        Raises:
            MomentBinaryError: If data is not a valid binary moment.
        """

        decoded = decode_binary(data)
        if decoded.time() != datetime.min.time() or decoded.tzinfo is not CANONICAL_ZONE:
            logger.debug("Date.unmarshal_binary: discarding time and zone of %s", decoded.isoformat())
        self._assign(from_datetime(decoded))

    def __getstate__(self) -> bytes:
        return self.marshal_binary()

    def __setstate__(self, state: bytes) -> None:
        self.unmarshal_binary(state)


def new_date(year: int, month: int, day: int) -> Date:
    """Date for year, month and day; out-of-range values carry."""

    return Date(year, month, day)


def from_datetime(value: _date) -> Date:
    """Date of a datetime (or date), keeping only its wall-clock year, month and day."""

    return Date.from_datetime(value)


def now(tz: Optional[tzinfo] = None) -> Date:
    """Current date in `tz`, or in the configured local zone."""

    return from_datetime(datetime.now(tz if tz is not None else get_local_zone()))


def parse(layout: str, value: str) -> Date:
    """
    Parse value with a strptime layout. Any time of day or offset in the input is ignored.

    Raises:
        ValueError: Propagated from datetime.strptime.
    """

    return from_datetime(datetime.strptime(value, layout))


def parse_iso8601(value: str) -> Date:
    """
    Parse a YYYY-MM-DD date: four-digit year, two-digit month and day, nothing else.

    Raises:
        ValueError: If value does not match the layout exactly, or is not a valid date.
    """

    if not _ISO8601_DATE_TEXT.fullmatch(value):
        raise ValueError(f"time data {value!r} does not match format {ISO8601_DATE!r}")
    return parse(ISO8601_DATE, value)


def parse_in_location(layout: str, value: str, tz: tzinfo) -> Date:
    """
    Parse value with a strptime layout, reading zone-less input as wall-clock time in tz.

    Raises:
        ValueError: Propagated from datetime.strptime.
    """

    parsed = datetime.strptime(value, layout)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return from_datetime(parsed)


def unix(sec: int, nsec: int = 0, tz: Optional[tzinfo] = None) -> Date:
    """Date of a Unix timestamp in `tz`, or in the configured local zone."""

    return from_datetime(from_unix(sec, nsec, tz))


def unix_milli(msec: int, tz: Optional[tzinfo] = None) -> Date:
    seconds, milliseconds = divmod(msec, 1000)
    return from_datetime(from_unix(seconds, milliseconds * 1_000_000, tz))


def unix_micro(usec: int, tz: Optional[tzinfo] = None) -> Date:
    seconds, microseconds = divmod(usec, 1_000_000)
    return from_datetime(from_unix(seconds, microseconds * 1000, tz))


__all__ = [
    "Date",
    "ISO8601_DATE",
    "LONG_MONTH_NAMES",
    "Month",
    "NotAJSONStringError",
    "from_datetime",
    "new_date",
    "now",
    "parse",
    "parse_in_location",
    "parse_iso8601",
    "unix",
    "unix_micro",
    "unix_milli",
]
