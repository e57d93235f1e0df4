"""
Pydantic field type for Date.

Usage:

    class Booking(BaseModel):
        check_in: DateField

- Accepts a Date, a datetime/date (time of day and zone dropped) or a
  YYYY-MM-DD string.
- JSON output is the YYYY-MM-DD string: {"check_in":"2024-06-05"}.
- Python-mode dumps keep the Date object.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from .date import Date, from_datetime, parse_iso8601


def coerce_date(value: Any) -> Date:
    """
    Build a Date from a field value.

    Raises:
        ValueError: If value is not a Date, date/datetime or YYYY-MM-DD string
            (pydantic reports it as a ValidationError).
    """

    if isinstance(value, Date):
        return value
    if isinstance(value, date):
        return from_datetime(value)
    if isinstance(value, str):
        return parse_iso8601(value)
    raise ValueError(f"cannot build a Date from {type(value).__name__}")


DateField = Annotated[
    Date,
    PlainValidator(coerce_date),
    PlainSerializer(Date.isoformat, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "format": "date"}),
]

__all__ = ["DateField", "coerce_date"]
