"""
Central data model definitions used across the project.

This module defines the canonical structure of the objects passed between
the stages of a conversion so that:
- the row extractor, the pattern parser and the ICS writer share field names
- the fixed weekday table lives in exactly one place
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class CourseRecord:
    """
    One row of the course table after column resolution.

    All fields are plain strings; meeting_pattern may be empty
    (the export leaves it blank for courses without a fixed schedule).
    """

    description: str
    meeting_pattern: str
    start_date: str
    end_date: str


@dataclass(frozen=True)
class Weekday:
    """
    A supported class day: its one-letter export code, its RRULE BYDAY code
    and its ordinal as returned by date.weekday() (Monday == 0).
    """

    letter: str
    ical: str
    ordinal: int


# Saturday and Sunday never appear in the export, so they are not accepted.
WEEKDAYS: Mapping[str, Weekday] = MappingProxyType(
    {
        "M": Weekday("M", "MO", 0),
        "T": Weekday("T", "TU", 1),
        "W": Weekday("W", "WE", 2),
        "R": Weekday("R", "TH", 3),
        "F": Weekday("F", "FR", 4),
    }
)


@dataclass(frozen=True)
class MeetingPattern:
    """
    Parsed form of a 'Meeting Patterns' cell such as
    'M-W-F | 10:00 AM - 10:50 AM | Room 201'.

    weekdays keeps the order (and any repeats) of the raw text.
    """

    weekdays: Tuple[Weekday, ...]
    start_time: time
    end_time: time
    location: str

    @property
    def by_day(self) -> str:
        return ",".join(d.ical for d in self.weekdays)

    @property
    def ordinals(self) -> frozenset[int]:
        return frozenset(d.ordinal for d in self.weekdays)


@dataclass(frozen=True)
class CalendarEvent:
    """
    One weekly recurring VEVENT, with every value already formatted for ICS:
    dates as YYYYMMDD, times as HHMMSS, dtstamp as YYYYMMDDTHHMMSSZ.
    """

    uid: str
    dtstamp: str
    timezone: str
    start_date: str
    start_time: str
    end_time: str
    summary: str
    location: str
    by_day: str
    until_date: str

    @property
    def until(self) -> str:
        # include the last class on the boundary date
        return f"{self.until_date}T235959"
