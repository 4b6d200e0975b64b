"""
Tests for the CLI entry point.

These tests focus on:
- End-to-end conversion of a small workbook to a file and to stdout
- Nonzero exit codes (and no output file) for every kind of failure
"""

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

import openpyxl

from coursecal.cli import build_parser, main


HEADER = ["Course Listing", "Instructor", "Meeting Patterns", "Start Date", "End Date"]


def _workbook(path: Path, rows: list[list[str]]) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["View My Courses"])
    ws.append(HEADER)
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


def _run(argv: list[str]) -> tuple[int, str, str]:
    """
    Run main() and return (exit code, stdout, stderr).
    """
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code if isinstance(e.code, int) else 1
        else:
            raise AssertionError("main() did not raise SystemExit")
    return code, out.getvalue(), err.getvalue()


class TestCLI(unittest.TestCase):
    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args([])
        self.assertEqual(args.file, "View_My_Courses.xlsx")
        self.assertEqual(args.output, "")
        self.assertEqual(args.timezone, "America/New_York")
        self.assertEqual(args.uid_domain, "wpi.edu")

    def test_export_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = _workbook(
                Path(d) / "courses.xlsx",
                [
                    ["CS 2102", "Jane Doe", "M-W-F | 10:00 AM - 10:50 AM | Room 201", "01-06-25", "05-02-25"],
                    ["ID 2050", "", "", "01-06-25", "05-02-25"],
                ],
            )
            out = Path(d) / "schedule.ics"
            code, stdout, stderr = _run(["-f", str(src), "-o", str(out)])

            self.assertEqual(code, 0)
            self.assertEqual(stdout, "")
            self.assertIn("Exported 1 events", stderr)
            text = out.read_text(encoding="utf-8")
            self.assertIn("SUMMARY:CS 2102 - Jane Doe", text)
            self.assertIn("UID:CS_2102_Jane_DoeMO_WE_FR@wpi.edu", text)
            self.assertTrue(text.endswith("END:VCALENDAR\n"))

    def test_export_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = _workbook(
                Path(d) / "courses.xlsx",
                [["MA 1021", "", "T-R | 2:00 PM - 3:15 PM | Gym", "01-06-25", "05-02-25"]],
            )
            code, stdout, _ = _run(["-f", str(src), "-o", "-", "--timezone", "America/Chicago"])

        self.assertEqual(code, 0)
        self.assertTrue(stdout.startswith("BEGIN:VCALENDAR\n"))
        self.assertIn("DTSTART;TZID=America/Chicago:20250107T140000", stdout)

    def test_bad_pattern_exits_nonzero_without_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = _workbook(
                Path(d) / "courses.xlsx",
                [["PE 1001", "", "S-M | 10:00 AM - 10:50 AM | Gym", "01-06-25", "05-02-25"]],
            )
            out = Path(d) / "schedule.ics"
            code, _, stderr = _run(["-f", str(src), "-o", str(out)])

            self.assertEqual(code, 1)
            self.assertIn("unknown weekday token", stderr)
            self.assertFalse(out.exists())

    def test_missing_column_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            wb = openpyxl.Workbook()
            wb.active.append(["Course Listing", "Start Date", "End Date"])
            src = Path(d) / "courses.xlsx"
            wb.save(src)
            code, _, stderr = _run(["-f", str(src)])

        self.assertEqual(code, 1)
        self.assertIn("Unable to find column: Meeting Patterns", stderr)

    def test_missing_input_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            code, _, stderr = _run(["-f", str(Path(d) / "nope.xlsx")])
        self.assertEqual(code, 1)
        self.assertIn("nope.xlsx", stderr)

    def test_unknown_timezone_exits_nonzero(self) -> None:
        code, _, stderr = _run(["--timezone", "Mars/Olympus_Mons"])
        self.assertEqual(code, 1)
        self.assertIn("Unknown timezone", stderr)


if __name__ == "__main__":
    unittest.main()
