import pandas as pd
from datetime import datetime, timezone, date as dt_date
from typing import Any


def normalise_datetime(value: Any) -> datetime:
    """
    Convert input to a timezone-aware datetime.datetime object.
    Supports datetimes, dates, pandas Timestamps and strings such as
    '2026-01-20T00:00:00Z', '2026-01-20 08:00', '2026/01/20', etc.

    Naive values are taken to be UTC.
    """
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    elif isinstance(value, datetime):
        pass
    elif isinstance(value, dt_date):
        value = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            # pandas handles all common formats using dateutil.parser under the hood
            value = pd.to_datetime(value.strip(), errors="raise").to_pydatetime()
        except Exception as e:
            raise ValueError(f"Could not parse datetime string '{value}': {e}")
    else:
        raise ValueError(f"Unsupported datetime type: {type(value)}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
