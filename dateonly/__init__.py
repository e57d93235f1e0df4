"""
dateonly: calendar dates (year, month, day) with no time of day and no zone.

Exchanged as ISO 8601 calendar dates (YYYY-MM-DD); arithmetic and formatting
delegate to datetime.
"""

from .date import (
    ISO8601_DATE,
    LONG_MONTH_NAMES,
    Date,
    Month,
    NotAJSONStringError,
    from_datetime,
    new_date,
    now,
    parse,
    parse_in_location,
    parse_iso8601,
    unix,
    unix_micro,
    unix_milli,
)
from .moment import MomentBinaryError

__version__ = "1.0.0"

__all__ = [
    "Date",
    "ISO8601_DATE",
    "LONG_MONTH_NAMES",
    "Month",
    "MomentBinaryError",
    "NotAJSONStringError",
    "__version__",
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
