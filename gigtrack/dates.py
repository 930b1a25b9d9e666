"""Calendar date parsing for record dates."""

import re
from datetime import date, datetime
from typing import Union

from .errors import InvalidRecordError

DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_record_date(value: Union[str, date]) -> date:
    """
    Parse a record's date into a calendar date.

    Accepts ISO 'YYYY-MM-DD' strings (the stored format), full ISO
    timestamps and date objects. Timestamps are reduced to their calendar
    day so comparisons never drift across time zones. Anything else,
    including a valid date followed by junk, is rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if DATE_ONLY.match(text):
                return date.fromisoformat(text)
            if "T" in text:
                # fromisoformat only understands a trailing 'Z' from 3.11 on
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise InvalidRecordError(f"Invalid record date: {value!r}")
