from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DATE_KEY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def date_key(moment: date | datetime | None = None, tz: tzinfo | None = None) -> str:
    """Return the local calendar-day key (``YYYY-MM-DD``) for ``moment``.

    Aware datetimes are converted to ``tz`` first (the process timezone when
    ``tz`` is None), so an instant late in the evening west of UTC keeps its
    local date instead of rolling over to the UTC one. Naive datetimes are
    taken as already local. ``None`` means now.
    """
    if moment is None:
        moment = datetime.now(tz) if tz is not None else datetime.now()
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(tz)
        moment = moment.date()
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def today_key(tz: tzinfo | None = None) -> str:
    return date_key(None, tz)


def parse_date_key(key: str) -> date:
    value = str(key or "").strip()
    if not DATE_KEY_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid date key: {key!r}")
    return date.fromisoformat(value)


def shift_key(key: str, days: int) -> str:
    return date_key(parse_date_key(key) + timedelta(days=days))


def month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}-"


def resolve_timezone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using server local time.", name)
        return None
