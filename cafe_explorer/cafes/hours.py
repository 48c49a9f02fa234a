"""
Business-hours evaluation.

Hours tables map each weekday name to free text. Three shapes are understood:
``"Closed"``, ``"24 Hours"`` and ranges such as ``"7:00 AM - 10:00 PM"``.
Anything else is reported as unparseable and treated as closed.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo

from ..config import DEFAULT_APP_CONFIG
from .models import WEEKDAYS, BusinessStatus, WeeklyHours

_RANGE_RE = re.compile(
    r"(\d{1,2}):(\d{2})\s*(AM|PM)\s*-\s*(\d{1,2}):(\d{2})\s*(AM|PM)",
    re.IGNORECASE,
)

HoursTable = WeeklyHours | Mapping[str, str]


class HoursKind(str, Enum):
    RANGE = "range"
    CLOSED = "closed"
    ALL_DAY = "all_day"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class HoursEntry:
    kind: HoursKind
    open_minutes: int | None = None
    close_minutes: int | None = None

    def is_open_at(self, minutes: int) -> bool:
        if self.kind is HoursKind.ALL_DAY:
            return True
        if self.kind is not HoursKind.RANGE:
            # closed and unparseable entries both fail closed
            return False
        if self.close_minutes < self.open_minutes:
            return minutes >= self.open_minutes or minutes <= self.close_minutes
        return self.open_minutes <= minutes <= self.close_minutes


def _to_minutes(hour: str, minute: str, period: str) -> int:
    h = int(hour)
    m = int(minute)
    if period.upper() == "PM" and h != 12:
        h += 12
    elif period.upper() == "AM" and h == 12:
        h = 0
    return h * 60 + m


def parse_hours(text: str | None) -> HoursEntry:
    """Classify a single day's hours text."""
    if not text or not text.strip():
        return HoursEntry(HoursKind.CLOSED)
    normalized = text.strip().lower()
    if normalized == "closed":
        return HoursEntry(HoursKind.CLOSED)
    if normalized == "24 hours":
        return HoursEntry(HoursKind.ALL_DAY)

    match = _RANGE_RE.search(text)
    if not match:
        return HoursEntry(HoursKind.UNPARSEABLE)

    open_h, open_m, open_p, close_h, close_m, close_p = match.groups()
    return HoursEntry(
        HoursKind.RANGE,
        open_minutes=_to_minutes(open_h, open_m, open_p),
        close_minutes=_to_minutes(close_h, close_m, close_p),
    )


def current_time(timezone: str | None = None) -> datetime:
    """Return "now" in the configured timezone, or server local time."""
    tz_name = DEFAULT_APP_CONFIG.timezone if timezone is None else timezone
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def _entry_for(hours: HoursTable, day: str) -> HoursEntry:
    if isinstance(hours, WeeklyHours):
        return parse_hours(hours.for_day(day))
    return parse_hours(hours.get(day))


def is_open_now(hours: HoursTable, now: datetime | None = None) -> bool:
    now = now or current_time()
    day = WEEKDAYS[now.weekday()]
    return _entry_for(hours, day).is_open_at(now.hour * 60 + now.minute)


def get_business_status(hours: HoursTable, now: datetime | None = None) -> BusinessStatus:
    """Describe whether a café is open and, if not, when it next opens."""
    now = now or current_time()
    if is_open_now(hours, now):
        return BusinessStatus(is_open=True, status="Open now")

    today = now.weekday()
    minutes = now.hour * 60 + now.minute

    entry = _entry_for(hours, WEEKDAYS[today])
    if entry.kind is HoursKind.RANGE and entry.open_minutes > minutes:
        return BusinessStatus(is_open=False, status="Closed", next_change="Opens later today")

    for offset in range(1, 8):
        day = WEEKDAYS[(today + offset) % 7]
        if _entry_for(hours, day).kind in (HoursKind.RANGE, HoursKind.ALL_DAY):
            if offset == 1:
                label = "Opens tomorrow"
            else:
                label = f"Opens {day.capitalize()}"
            return BusinessStatus(is_open=False, status="Closed", next_change=label)

    return BusinessStatus(is_open=False, status="Closed")
