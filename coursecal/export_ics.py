"""
iCalendar (.ics) export.

Every course with a meeting pattern becomes ONE weekly recurring event
(RRULE) with a 15 minute reminder, importable into:
- Google Calendar
- Outlook
- Apple Calendar

Writing is fail-fast: the first course that cannot be parsed aborts the
document before the closing END:VCALENDAR line is written.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, TextIO

from coursecal.config import ConvertConfig
from coursecal.model import CalendarEvent, CourseRecord
from coursecal.parse import convert_date, parse_pattern, resolve_start_date


log = logging.getLogger(__name__)

CALENDAR_HEADER = "BEGIN:VCALENDAR\nVERSION:2.0\nCALSCALE:GREGORIAN\n"
CALENDAR_FOOTER = "END:VCALENDAR\n"

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def make_uid(description: str, by_day: str, domain: str) -> str:
    """
    Build a stable UID from the course description and its BYDAY list.

    Two courses with the same description and days get the same UID.
    """
    cleaned = _NON_ALNUM.sub("_", description + by_day)
    return f"{cleaned.strip('_')}@{domain}"


def _dtstamp(now: Optional[datetime]) -> str:
    stamp = now if now is not None else datetime.now(timezone.utc)
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone(timezone.utc)
    return stamp.strftime("%Y%m%dT%H%M%SZ")


# ---------------------------------------------------------------------------
# Event synthesis
# ---------------------------------------------------------------------------


def synthesize(
    course: CourseRecord,
    config: Optional[ConvertConfig] = None,
    now: Optional[datetime] = None,
) -> Optional[CalendarEvent]:
    """
    Turn one course into a CalendarEvent, or None if it has no meeting pattern.

    Raises PatternError, DateError or TimeError for malformed cells.
    """
    cfg = config if config is not None else ConvertConfig()

    pattern = parse_pattern(course.meeting_pattern)
    if pattern is None:
        log.debug("no meeting pattern for %r, skipped", course.description)
        return None

    until_date = convert_date(course.end_date)
    start_date = resolve_start_date(course.start_date, pattern.ordinals)
    by_day = pattern.by_day

    return CalendarEvent(
        uid=make_uid(course.description, by_day, cfg.uid_domain),
        dtstamp=_dtstamp(now),
        timezone=cfg.timezone,
        start_date=start_date,
        start_time=pattern.start_time.strftime("%H%M%S"),
        end_time=pattern.end_time.strftime("%H%M%S"),
        summary=course.description,
        location=pattern.location,
        by_day=by_day,
        until_date=until_date,
    )


def render_event(event: CalendarEvent) -> str:
    """
    Render one VEVENT block (LF line endings, fixed field order).
    """
    summary = _ics_escape(event.summary)
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.uid}",
        f"DTSTAMP:{event.dtstamp}",
        f"DTSTART;TZID={event.timezone}:{event.start_date}T{event.start_time}",
        f"DTEND;TZID={event.timezone}:{event.start_date}T{event.end_time}",
        f"SUMMARY:{summary}",
        f"LOCATION:{_ics_escape(event.location)}",
        f"RRULE:FREQ=WEEKLY;BYDAY={event.by_day};UNTIL={event.until}",
        "BEGIN:VALARM",
        "TRIGGER:-PT15M",
        "ACTION:DISPLAY",
        f"DESCRIPTION:Reminder - {summary} starts soon",
        "END:VALARM",
        "END:VEVENT",
    ]
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Document writer
# ---------------------------------------------------------------------------


def write_calendar(
    courses: Iterable[CourseRecord],
    out: TextIO,
    config: Optional[ConvertConfig] = None,
    now: Optional[datetime] = None,
) -> int:
    """
    Write a complete VCALENDAR document to `out`. Returns number of events written.

    On the first error the exception propagates and the footer is NOT written;
    whatever already went to `out` must be treated as invalid.
    """
    # one timestamp for the whole document
    stamp = now if now is not None else datetime.now(timezone.utc)

    out.write(CALENDAR_HEADER)
    count = 0
    for course in courses:
        event = synthesize(course, config, stamp)
        if event is None:
            continue
        out.write(render_event(event))
        count += 1
    out.write(CALENDAR_FOOTER)

    log.info("wrote %d events", count)
    return count


def render_calendar(
    courses: Iterable[CourseRecord],
    config: Optional[ConvertConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the whole document in memory.
    """
    buf = io.StringIO()
    write_calendar(courses, buf, config, now)
    return buf.getvalue()


def export_courses_to_ics(
    courses: Iterable[CourseRecord],
    out_path: str | Path,
    config: Optional[ConvertConfig] = None,
) -> int:
    """
    Export courses to an .ics file. Returns number of exported events.

    The document is rendered completely before the file is touched, so a
    parsing error never leaves a truncated calendar on disk.
    """
    buf = io.StringIO()
    n = write_calendar(courses, buf, config)

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    # keep LF line endings exactly as rendered
    with out.open("w", encoding="utf-8", newline="") as fh:
        fh.write(buf.getvalue())
    return n
