"""
Tests for reading .xlsx workbooks into rows of strings.

Workbooks are written with openpyxl into a temporary directory, so these
tests never depend on a real export.
"""

import io
import tempfile
import unittest
import zipfile
from datetime import date, datetime, time
from pathlib import Path

import openpyxl

from coursecal.errors import WorkbookError
from coursecal.extract import extract_courses
from coursecal.workbook import cell_text, read_rows


MANIFEST = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Override PartName="/xl/workbook.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>'
    "</Types>"
)


def _zip(members: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, text in members.items():
            zf.writestr(name, text)
    return buf.getvalue()


def _save(rows: list[list], path: Path, extra_sheet: bool = False) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "View My Courses"
    for row in rows:
        ws.append(row)
    if extra_sheet:
        other = wb.create_sheet("Other")
        other.append(["Course Listing", "Meeting Patterns", "Start Date", "End Date"])
    wb.save(path)
    return path


class TestCellText(unittest.TestCase):
    def test_conversions(self) -> None:
        self.assertEqual(cell_text(None), "")
        self.assertEqual(cell_text("Room 201"), "Room 201")
        self.assertEqual(cell_text(datetime(2025, 1, 6, 0, 0)), "01-06-25")
        self.assertEqual(cell_text(date(2025, 5, 2)), "05-02-25")
        self.assertEqual(cell_text(time(14, 5)), "2:05 PM")
        self.assertEqual(cell_text(time(0, 30)), "12:30 AM")
        self.assertEqual(cell_text(3.0), "3")
        self.assertEqual(cell_text(2.5), "2.5")
        self.assertEqual(cell_text(7), "7")


class TestReadRows(unittest.TestCase):
    def test_reads_first_sheet_and_trims_trailing_cells(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = _save(
                [
                    ["My Enrolled Courses"],
                    ["Course Listing", "Instructor", "Meeting Patterns", "Start Date", "End Date"],
                    ["CS 2102", "Jane Doe", "M-W-F | 10:00 AM - 10:50 AM | Room 201", datetime(2025, 1, 6), date(2025, 5, 2)],
                    ["Total", None, None],
                ],
                Path(d) / "courses.xlsx",
                extra_sheet=True,
            )
            rows = read_rows(p)

        self.assertEqual(rows[0], ["My Enrolled Courses"])
        self.assertEqual(rows[2][3:], ["01-06-25", "05-02-25"])
        self.assertEqual(rows[3], ["Total"])

    def test_bytes_source_roundtrip_into_courses(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = _save(
                [
                    ["Course Listing", "Meeting Patterns", "Start Date", "End Date"],
                    ["MA 1021", "T-R | 2:00 PM - 3:15 PM | Gym", "01-06-25", "05-02-25"],
                    [],
                    ["Notes", "ignored", "x", "y"],
                ],
                Path(d) / "courses.xlsx",
            )
            data = p.read_bytes()

        courses = extract_courses(read_rows(data))
        self.assertEqual(len(courses), 1)
        self.assertEqual(courses[0].description, "MA 1021")
        self.assertEqual(courses[0].start_date, "01-06-25")

    def test_not_a_workbook(self) -> None:
        with self.assertRaises(WorkbookError):
            read_rows(b"definitely not a zip file")

    def test_malformed_manifest(self) -> None:
        with self.assertRaises(WorkbookError):
            read_rows(_zip({"[Content_Types].xml": "not xml <<<"}))

    def test_garbage_workbook_part(self) -> None:
        with self.assertRaises(WorkbookError):
            read_rows(_zip({"[Content_Types].xml": MANIFEST, "xl/workbook.xml": "garbage"}))

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(FileNotFoundError):
                read_rows(Path(d) / "missing.xlsx")


if __name__ == "__main__":
    unittest.main()
