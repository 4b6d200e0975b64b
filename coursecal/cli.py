"""
CLI (Command Line Interface).

Converts a Workday "View My Courses" export into an .ics calendar:

    coursecal                                  # View_My_Courses.xlsx -> stdout
    coursecal -f courses.xlsx -o schedule.ics
    coursecal -f courses.xlsx --timezone America/Chicago --uid-domain example.edu

Note:
- The calendar goes to stdout unless -o is given, so all status and error
  messages are printed to stderr.
- The output file is only created once the whole calendar rendered successfully.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from coursecal.config import DEFAULT_INPUT, DEFAULT_TIMEZONE, DEFAULT_UID_DOMAIN, ConvertConfig
from coursecal.errors import CoursecalError
from coursecal.export_ics import export_courses_to_ics, render_calendar
from coursecal.extract import extract_courses
from coursecal.workbook import read_rows


err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _report_error(msg: str) -> None:
    err_console.print(f"Error: {msg}", style="bold red", markup=False)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cmd_export(cfg: ConvertConfig) -> int:
    """
    Read the workbook, convert it and write the calendar to the configured destination.
    """
    rows = read_rows(cfg.input_path)
    courses = extract_courses(rows)

    if cfg.output_path is None:
        text = render_calendar(courses, cfg)
        sys.stdout.write(text)
        sys.stdout.flush()
        return 0

    n = export_courses_to_ics(courses, cfg.output_path, cfg)
    err_console.print(f"Exported {n} events to: {cfg.output_path}", markup=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="coursecal",
        description="Export a Workday 'View My Courses' .xlsx schedule to an .ics calendar",
    )
    parser.add_argument(
        "-f", "--file", type=str, default=str(DEFAULT_INPUT), help="Excel file containing schedule info"
    )
    parser.add_argument(
        "-o", "--output", type=str, default="", help="ics output file (default: stdout, '-' for stdout)"
    )
    parser.add_argument(
        "--timezone", type=str, default=DEFAULT_TIMEZONE, help=f"TZID for all events (default: {DEFAULT_TIMEZONE})"
    )
    parser.add_argument(
        "--uid-domain", type=str, default=DEFAULT_UID_DOMAIN, help=f"UID suffix (default: {DEFAULT_UID_DOMAIN})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, runs the export,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        cfg = ConvertConfig.from_args(args).validate()
        code = _cmd_export(cfg)
    except CoursecalError as e:
        _report_error(str(e))
        raise SystemExit(1)
    except OSError as e:
        _report_error(f"{e.strerror or e}: {e.filename}" if e.filename else str(e))
        raise SystemExit(1)

    raise SystemExit(code)
