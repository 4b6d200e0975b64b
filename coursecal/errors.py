"""
Error types raised while converting a course export into a calendar.

All errors derive from CoursecalError (a ValueError), so callers can catch
the whole family at one place. Parsing is deterministic: none of these are
worth retrying.
"""

from __future__ import annotations

from typing import Optional


class CoursecalError(ValueError):
    """Base class for every conversion error."""


class ColumnNotFound(CoursecalError):
    """A required column header is missing from the worksheet."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unable to find column: {name}")
        self.name = name


class PatternError(CoursecalError):
    """
    A 'Meeting Patterns' cell could not be parsed.

    `reason` is a short fixed phrase ("too few segments", "unknown weekday token",
    "too few times", "bad time"), `pattern` the raw cell text and `token`
    the offending piece of it, if any.
    """

    def __init__(self, reason: str, pattern: str, token: Optional[str] = None) -> None:
        msg = f"unable to parse 'Meeting Patterns' {pattern!r}: {reason}"
        if token is not None:
            msg += f" ({token!r})"
        super().__init__(msg)
        self.reason = reason
        self.pattern = pattern
        self.token = token


class DateError(CoursecalError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid date (expected MM-DD-YY): {value!r}")
        self.value = value


class TimeError(CoursecalError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid time (expected H:MM AM/PM): {value!r}")
        self.value = value


class WorkbookError(CoursecalError):
    """The input file is not a readable .xlsx workbook."""


class ConfigError(CoursecalError):
    """Invalid conversion settings (unknown timezone, empty UID domain, ...)."""
