"""Exception hierarchy.

File-level parse failures derive from :class:`TraceParseError` and carry the
offending path and line number so a batch report can point at the exact row.
Everything also derives from ``ValueError`` where the failure is caused by bad
input, so callers that only know the builtin type still catch it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SatraceError(Exception):
    """Base class for every error raised by satrace."""


class TraceParseError(SatraceError, ValueError):
    """A trace file could not be parsed. The whole file is rejected."""

    def __init__(self, message: str, path: Optional[Path] = None, line_no: Optional[int] = None):
        self.path = path
        self.line_no = line_no
        where = ""
        if path is not None:
            where = f"{path}"
            if line_no is not None:
                where += f":{line_no}"
            where += ": "
        super().__init__(f"{where}{message}")


class MalformedHeader(TraceParseError):
    """Header line missing, too short, or lacking a required key."""


class ShortDataLine(TraceParseError):
    """A data row has fewer tokens than the requested value column."""


class NumericParseError(TraceParseError):
    """A token that must be numeric is not."""


class TraceShapeError(TraceParseError):
    """``index`` and ``content`` lengths disagree."""


class InvalidRange(SatraceError, ValueError):
    """A field-range token is malformed or does not fit the trace."""


class EmptyTraceStatistic(SatraceError, ValueError):
    """A statistic was requested on a trace without samples."""


class FilenameDatetimeError(SatraceError, ValueError):
    """The file name does not start with a ``YYYYMMDD_HHMMSS`` stamp."""


class OptionsError(SatraceError, ValueError):
    """Run options are inconsistent. Raised before any file is opened."""


class ConfigError(SatraceError):
    """YAML configuration file unreadable or of the wrong shape."""


# Not raised: the reader keeps the trace and records this text as a warning.
MISSING_TERMINATOR = "data has no '#' terminator line; trace kept as read"
