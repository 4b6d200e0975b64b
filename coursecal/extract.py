"""
Row extraction (worksheet rows -> CourseRecord list).

- Finds the header row of the "View My Courses" table
- Resolves the column index of every known header
- Builds exactly ONE CourseRecord per data row

Important rules:
- The first row that contains any known header is THE header row
- A row shorter than the highest required column ends the table
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from coursecal.errors import ColumnNotFound
from coursecal.model import CourseRecord


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Column names
# ---------------------------------------------------------------------------

MEETING_COL = "Meeting Patterns"
DESC_COL = "Course Listing"
START_DATE_COL = "Start Date"
END_DATE_COL = "End Date"
INSTRUCTOR_COL = "Instructor"

# Order matters: ColumnNotFound always reports the first missing name.
REQUIRED_COLUMNS: Tuple[str, ...] = (MEETING_COL, DESC_COL, START_DATE_COL, END_DATE_COL)
OPTIONAL_COLUMNS: Tuple[str, ...] = (INSTRUCTOR_COL,)


# ---------------------------------------------------------------------------
# Header detection
# ---------------------------------------------------------------------------


def find_columns(rows: Sequence[Sequence[str]]) -> Tuple[Dict[str, int], int]:
    """
    Locate the header row and resolve column indices.

    Returns (columns, data_start) where columns maps every resolved name
    (all required names, plus optional ones that were found) to its index
    and data_start is the index of the first row after the header.

    Raises ColumnNotFound if a required name is not in the header row.
    """
    known = REQUIRED_COLUMNS + OPTIONAL_COLUMNS
    found: Dict[str, Optional[int]] = {name: None for name in known}
    data_start: Optional[int] = None

    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if cell in found:
                # a repeated header further right wins
                found[cell] = j
                data_start = i + 1
        if data_start is not None:
            break

    if data_start is None:
        raise ColumnNotFound(REQUIRED_COLUMNS[0])

    for name in REQUIRED_COLUMNS:
        if found[name] is None:
            raise ColumnNotFound(name)

    columns = {name: idx for name, idx in found.items() if idx is not None}
    log.debug("header row %d, columns %s", data_start - 1, columns)
    return columns, data_start


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_courses(rows: Sequence[Sequence[str]]) -> List[CourseRecord]:
    """
    Turn worksheet rows into CourseRecords, in table order.
    """
    columns, data_start = find_columns(rows)

    meeting_col = columns[MEETING_COL]
    desc_col = columns[DESC_COL]
    start_col = columns[START_DATE_COL]
    end_col = columns[END_DATE_COL]
    instructor_col = columns.get(INSTRUCTOR_COL)

    last_required = max(columns[name] for name in REQUIRED_COLUMNS)

    courses: List[CourseRecord] = []
    for row in rows[data_start:]:
        # The table ends at the first short row; anything below is not course data.
        if len(row) <= last_required:
            break

        description = row[desc_col]
        if instructor_col is not None and instructor_col < len(row) and row[instructor_col]:
            description = f"{description} - {row[instructor_col]}"

        courses.append(
            CourseRecord(
                description=description,
                meeting_pattern=row[meeting_col],
                start_date=row[start_col],
                end_date=row[end_col],
            )
        )

    log.info("extracted %d courses", len(courses))
    return courses
