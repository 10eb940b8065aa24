from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], float]

HOUR_SECONDS = 3600
DAY_SECONDS = 24 * HOUR_SECONDS


def iso_from_ts(ts: float) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    dt = datetime.fromtimestamp(float(ts), tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def ts_from_iso(value: str) -> Optional[float]:
    try:
        dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def utc_date(ts: float) -> date:
    return datetime.fromtimestamp(float(ts), tz=timezone.utc).date()
