"""
Parsing of the free-text schedule cells.

A 'Meeting Patterns' cell looks roughly like:

    M-T-W-R-F | HH:MM AM - HH:MM AM | LOCATION

Start/End Date cells use the export's fixed MM-DD-YY format.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from coursecal.errors import DateError, PatternError, TimeError
from coursecal.model import WEEKDAYS, MeetingPattern, Weekday


DATE_FORMAT = "%m-%d-%y"
TIME_FORMAT = "%I:%M %p"


# ---------------------------------------------------------------------------
# Date / time helpers
# ---------------------------------------------------------------------------


def _parse_date(date_str: str) -> date:
    try:
        return datetime.strptime(date_str.strip(), DATE_FORMAT).date()
    except (ValueError, AttributeError) as e:
        raise DateError(date_str) from e


def _parse_time(time_str: str) -> time:
    try:
        return datetime.strptime(time_str.strip(), TIME_FORMAT).time()
    except (ValueError, AttributeError) as e:
        raise TimeError(time_str) from e


def convert_date(date_str: str) -> str:
    """
    Convert 'MM-DD-YY' -> 'YYYYMMDD'.
    """
    return _parse_date(date_str).strftime("%Y%m%d")


def convert_time(time_str: str) -> str:
    """
    Convert 'H:MM AM/PM' -> 'HHMMSS' (24-hour clock, seconds always 00).
    """
    return _parse_time(time_str).strftime("%H%M%S")


def resolve_start_date(date_str: str, valid_ordinals: Iterable[int]) -> str:
    """
    Convert 'MM-DD-YY' -> 'YYYYMMDD', moved forward to the first class day.

    The export's start date is the term start, which is not necessarily a day
    the course meets. A recurring event must start on a real occurrence, so the
    date advances (at most 6 days) until its weekday is one of valid_ordinals.
    If no day in that week matches, the original date is returned.
    """
    start = _parse_date(date_str)
    valid = set(valid_ordinals)

    candidate = start
    for _ in range(7):
        if candidate.weekday() in valid:
            return candidate.strftime("%Y%m%d")
        candidate += timedelta(days=1)
    return start.strftime("%Y%m%d")


# ---------------------------------------------------------------------------
# Meeting patterns
# ---------------------------------------------------------------------------


def _parse_weekdays(freq: str, raw: str) -> List[Weekday]:
    days: List[Weekday] = []
    for token in freq.split("-"):
        day = WEEKDAYS.get(token)
        if day is None:
            raise PatternError("unknown weekday token", raw, token)
        days.append(day)
    return days


def _parse_clock(token: str, raw: str) -> time:
    try:
        return _parse_time(token)
    except TimeError as e:
        raise PatternError("bad time", raw, token.strip()) from e


def parse_pattern(raw: str) -> Optional[MeetingPattern]:
    """
    Parse one 'Meeting Patterns' cell.

    Returns None for an empty cell: some courses (online, independent study)
    simply have no schedule in the export, which is not an error.
    """
    if raw == "":
        return None

    parts = raw.split("|")
    if len(parts) < 3:
        raise PatternError("too few segments", raw)

    weekdays = _parse_weekdays(parts[0].strip(), raw)

    times = parts[1].strip().split("-")
    if len(times) < 2:
        raise PatternError("too few times", raw, parts[1].strip())
    start_time = _parse_clock(times[0], raw)
    end_time = _parse_clock(times[1], raw)

    location = parts[2].strip()

    return MeetingPattern(
        weekdays=tuple(weekdays),
        start_time=start_time,
        end_time=end_time,
        location=location,
    )
