"""
Workbook reading (.xlsx -> rows of strings).

Only the first worksheet is read. Cells are converted to the text the export
shows, so the rest of the pipeline deals with strings only.
"""

from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, BinaryIO, List, Sequence, Union

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from coursecal.errors import WorkbookError


log = logging.getLogger(__name__)

Source = Union[str, Path, bytes, BinaryIO]


def cell_text(value: Any) -> str:
    """
    Convert one cell value to display text.

    Dates use the export's MM-DD-YY format, times the H:MM AM/PM clock
    used in meeting patterns.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%m-%d-%y")
    if isinstance(value, date):
        return value.strftime("%m-%d-%y")
    if isinstance(value, time):
        hour = value.hour % 12 or 12
        return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _trim_row(values: Sequence[Any]) -> List[str]:
    """
    Convert a row and drop trailing empty cells, so len(row) is the width
    up to the last filled cell.
    """
    row = [cell_text(v) for v in values]
    while row and row[-1] == "":
        row.pop()
    return row


def read_rows(source: Source) -> List[List[str]]:
    """
    Read all rows of the first worksheet.

    source may be a path or the raw bytes / binary stream of an .xlsx file.
    Raises WorkbookError if the data is not a readable workbook; a missing
    file raises FileNotFoundError as usual.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    # a broken archive member surfaces as ParseError (a SyntaxError) or ValueError/TypeError
    try:
        wb = openpyxl.load_workbook(source, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, SyntaxError, ValueError, TypeError) as e:
        raise WorkbookError(f"Unable to read workbook: {e}") from e

    try:
        if not wb.worksheets:
            raise WorkbookError("Workbook has no worksheets")
        ws = wb.worksheets[0]
        rows = [_trim_row(values) for values in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    log.debug("read %d rows from sheet %r", len(rows), ws.title)
    return rows
