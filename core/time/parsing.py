"""
Wegesa Core Time — Wire Parsing
=================================
ISO-8601 strings in, typed values out. Naive datetimes are read
as UTC; bare dates stay dates.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any


def parse_datetime(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"{field_name} must be an ISO-8601 datetime.") from exc
    else:
        raise ValueError(f"{field_name} must be an ISO-8601 datetime.")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        # Accept full timestamps too; the form sends 'YYYY-MM-DD'.
        text = value.strip().split("T")[0]
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"{field_name} must be an ISO-8601 date.") from exc
    raise ValueError(f"{field_name} must be an ISO-8601 date.")
