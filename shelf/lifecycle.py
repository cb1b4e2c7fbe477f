# shelf/lifecycle.py
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from dateutil import parser as date_parser

from shelf.exceptions import InvalidStatus, ValidationError


class ReadingStatus(str, Enum):
    want_to_read = "want_to_read"
    reading = "reading"
    finished = "finished"
    dnf = "dnf"


STATUS_LABELS = {
    ReadingStatus.want_to_read: "Want to Read",
    ReadingStatus.reading: "Currently Reading",
    ReadingStatus.finished: "Finished",
    ReadingStatus.dnf: "Did Not Finish",
}


def normalize_status(status: Union[ReadingStatus, str, None]) -> ReadingStatus:
    """Convert user input into a ReadingStatus.

    Accepts enum members and strings in any case with surrounding whitespace.

    Raises:
        InvalidStatus: If the value is not one of the four lifecycle statuses
    """
    if isinstance(status, ReadingStatus):
        return status
    if isinstance(status, str):
        try:
            return ReadingStatus(status.strip().lower())
        except ValueError:
            pass
    raise InvalidStatus(status)


def status_label(status: Union[ReadingStatus, str]) -> str:
    """Human readable label; unknown values are returned unchanged"""
    try:
        return STATUS_LABELS[normalize_status(status)]
    except InvalidStatus:
        return str(status)


def coerce_date(value: Any) -> Optional[date]:
    """Normalize a date-ish value to a date.

    Empty strings and None become None, datetimes are truncated to their date
    and strings are parsed with dateutil. Unparseable strings become None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date_parser.parse(value).date()
        except (ValueError, OverflowError, TypeError):
            return None
    return None


def _current(record: Any, field: str) -> Any:
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def apply_status_transition(
    record: Any,
    new_status: Union[ReadingStatus, str],
    today: Union[date, datetime, str],
) -> Dict[str, Any]:
    """Compute the field updates for moving a library record to a new status.

    Args:
        record: The existing record (model, dict or None if it does not exist yet)
        new_status: Target reading status
        today: The caller's current date

    Returns:
        Dictionary of fields to set. Always contains ``status``; date fields are
        only present when they change. A value of None means the field is cleared.

    Raises:
        InvalidStatus: If new_status is not a known status
        ValidationError: If today is not a date
    """
    status = normalize_status(new_status)
    current_date = coerce_date(today)
    if current_date is None:
        raise ValidationError(f"Invalid current date: {today!r}")
    today = current_date
    updates: Dict[str, Any] = {"status": status.value}

    current_status = _current(record, "status")
    if isinstance(current_status, ReadingStatus):
        current_status = current_status.value

    if status is ReadingStatus.reading:
        if record is None or current_status != ReadingStatus.reading.value:
            updates["start_date"] = today
        if record is not None:
            updates["finish_date"] = None
    elif status is ReadingStatus.finished:
        if coerce_date(_current(record, "start_date")) is None:
            updates["start_date"] = today
        updates["finish_date"] = today

    return updates
