"""
Host-embeddable entry point.

process_file() takes the raw bytes of an uploaded .xlsx file and returns either
the .ics document as bytes or an error string. Every call starts from fresh
state; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from coursecal.config import ConvertConfig
from coursecal.errors import CoursecalError
from coursecal.export_ics import render_calendar
from coursecal.extract import extract_courses
from coursecal.workbook import read_rows


log = logging.getLogger(__name__)


def process_file(data: Optional[bytes], config: Optional[ConvertConfig] = None) -> Union[bytes, str]:
    """
    Convert workbook bytes to .ics bytes; on failure return "error: <message>".
    """
    if not data:
        return "missing file data"

    cfg = config if config is not None else ConvertConfig()
    try:
        cfg.validate()
        rows = read_rows(bytes(data))
        courses = extract_courses(rows)
        text = render_calendar(courses, cfg)
    except CoursecalError as e:
        log.debug("conversion failed: %s", e)
        return f"error: {e}"

    return text.encode("utf-8")
