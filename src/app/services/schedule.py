"""
Weekly monitoring schedule: normalization, validation and window lookup.

Periods are stored as {day: [{"inicio": "HH:MM", "fim": "HH:MM"}, ...]}
keyed by short Portuguese day names. Offsets are minutes east of UTC.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from config import ApplicationConfig

DAY_KEYS = ["seg", "ter", "qua", "qui", "sex", "sab", "dom"]

DAY_ALIASES = {
    "segunda": "seg",
    "terca": "ter",
    "quarta": "qua",
    "quinta": "qui",
    "sexta": "sex",
    "sabado": "sab",
    "domingo": "dom",
}

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class ScheduleError(ValueError):
    pass


@dataclass
class ScheduleWindow:
    index: int
    inicio: str
    fim: str
    start_utc: datetime
    end_utc: datetime


def parse_hhmm(value: str) -> int:
    """Minutes since midnight."""
    if not isinstance(value, str):
        raise ScheduleError(f"Invalid time: {value!r}")
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ScheduleError(f"Invalid time: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def normalize_day_key(key: str) -> str:
    normalized = key.strip().lower()
    normalized = DAY_ALIASES.get(normalized, normalized)
    if normalized not in DAY_KEYS:
        raise ScheduleError(f"Invalid day: {key!r}")
    return normalized


def normalize_schedule(
    raw: Dict[str, list], max_minutes_per_day: Optional[int] = None
) -> Dict[str, List[dict]]:
    """
    Validate and normalize a weekly schedule.

    Raises:
        ScheduleError: malformed time, start >= end, overlap, or a day over the limit
    """
    if not isinstance(raw, dict):
        raise ScheduleError("Schedule must be an object keyed by day")
    if max_minutes_per_day is None:
        max_minutes_per_day = ApplicationConfig.MAX_SCHEDULE_MINUTES_PER_DAY

    grouped: Dict[str, list] = {}
    for key, periods in raw.items():
        day = normalize_day_key(key)
        if periods is None:
            periods = []
        if not isinstance(periods, list):
            raise ScheduleError(f"Periods for {day} must be a list")
        # Aliases of one day (seg, segunda) are validated together
        grouped.setdefault(day, []).extend(periods)

    result: Dict[str, List[dict]] = {}
    for day, periods in grouped.items():
        parsed = []
        for period in periods:
            if not isinstance(period, dict):
                raise ScheduleError(f"Invalid period on {day}")
            start = parse_hhmm(period.get("inicio"))
            end = parse_hhmm(period.get("fim"))
            if start >= end:
                raise ScheduleError(f"Period start must be before end on {day}")
            parsed.append((start, end, period["inicio"].strip(), period["fim"].strip()))

        parsed.sort(key=lambda p: p[0])
        for previous, current in zip(parsed, parsed[1:]):
            if current[0] < previous[1]:
                raise ScheduleError(f"Overlapping periods on {day}")

        total = sum(end - start for start, end, _, _ in parsed)
        if total > max_minutes_per_day:
            raise ScheduleError(
                f"Periods on {day} exceed {max_minutes_per_day // 60}h per day"
            )

        result[day] = [{"inicio": s, "fim": e} for _, _, s, e in parsed]

    return result


def local_now(now_utc: datetime, offset_minutes: int) -> datetime:
    return now_utc + timedelta(minutes=offset_minutes)


def day_key_for(local_date: date) -> str:
    return DAY_KEYS[local_date.weekday()]


def periods_for_day(periods: Dict[str, List[dict]], local_date: date) -> List[dict]:
    return list(periods.get(day_key_for(local_date), []))


def find_current_window(
    periods: Dict[str, List[dict]], now_utc: datetime, offset_minutes: int
) -> Optional[ScheduleWindow]:
    """First interval of today containing the local minute (inclusive bounds)."""
    local = local_now(now_utc, offset_minutes)
    minute_of_day = local.hour * 60 + local.minute
    midnight_local = datetime(local.year, local.month, local.day)

    for index, period in enumerate(periods_for_day(periods, local.date())):
        start = parse_hhmm(period["inicio"])
        end = parse_hhmm(period["fim"])
        if start <= minute_of_day <= end:
            return ScheduleWindow(
                index=index,
                inicio=period["inicio"],
                fim=period["fim"],
                start_utc=midnight_local + timedelta(minutes=start - offset_minutes),
                end_utc=midnight_local + timedelta(minutes=end - offset_minutes),
            )
    return None
