"""
Conversion settings.

Everything a conversion run needs to know besides the rows themselves is
carried in one ConvertConfig value that is passed in explicitly. There is no
module-level mutable state, so two runs never influence each other.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from coursecal.errors import ConfigError


DEFAULT_INPUT = Path("View_My_Courses.xlsx")
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_UID_DOMAIN = "wpi.edu"


@dataclass(frozen=True)
class ConvertConfig:
    """
    input_path:  workbook to read
    output_path: .ics destination, None means standard output
    timezone:    IANA zone used as TZID for every DTSTART/DTEND
    uid_domain:  suffix appended to every UID after '@'
    """

    input_path: Path = field(default=DEFAULT_INPUT)
    output_path: Optional[Path] = None
    timezone: str = DEFAULT_TIMEZONE
    uid_domain: str = DEFAULT_UID_DOMAIN

    def validate(self) -> "ConvertConfig":
        """
        Check the settings and return self, so it can be chained.
        """
        tz = (self.timezone or "").strip()
        if not tz:
            raise ConfigError("Timezone must not be empty")
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone!r}") from e

        if not (self.uid_domain or "").strip():
            raise ConfigError("UID domain must not be empty")
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ConvertConfig":
        """
        Build a config from parsed CLI arguments. An output of '' or '-' means stdout.
        """
        out = (getattr(args, "output", None) or "").strip()
        return cls(
            input_path=Path(getattr(args, "file", None) or DEFAULT_INPUT),
            output_path=Path(out) if out and out != "-" else None,
            timezone=(getattr(args, "timezone", None) or DEFAULT_TIMEZONE).strip(),
            uid_domain=(getattr(args, "uid_domain", None) or DEFAULT_UID_DOMAIN).strip(),
        )
