"""
coursecal: turn a "View My Courses" .xlsx export into a weekly .ics calendar.
"""

from coursecal.errors import (
    ColumnNotFound,
    ConfigError,
    CoursecalError,
    DateError,
    PatternError,
    TimeError,
    WorkbookError,
)

__all__ = [
    "ColumnNotFound",
    "ConfigError",
    "CoursecalError",
    "DateError",
    "PatternError",
    "TimeError",
    "WorkbookError",
]
