from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from satrace.errors import MISSING_TERMINATOR, MalformedHeader, NumericParseError, ShortDataLine
from satrace.ingest.frequency import build_frequency_index
from satrace.ingest.header import parse_config_line, unit_of
from satrace.models.trace import CENTER_KEY, Trace

log = logging.getLogger(__name__)

TERMINATOR_PREFIX = "#"


@dataclass(frozen=True)
class TraceReaderConfig:
    """
    value_column:
      0-based whitespace column of each data row holding the dB value.
      Column 0 is usually the point number, column 1 the level.
    encoding:
      text encoding of the dump; undecodable bytes are replaced.
    """
    value_column: int = 1
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if int(self.value_column) < 0:
            raise ValueError(f"value_column must be >= 0, got {self.value_column}")


class TraceReader:
    """
    Reads one spectrum-analyzer dump into a :class:`Trace`.

    Format::

        <stamp>;<clear>;<key> <value...>;<key> <value...>;...;
        <col0> <col1> ... <colN>
        ...
        # <anything>

    Contract:
      - The first line is always the header (Header state), every following
        line is data (Body state) until a line starting with '#'.
      - A short, blank or non-numeric data row rejects the whole file; nothing read so far
        is returned.
      - End of file without the '#' line keeps the trace and records a warning.
    """

    def __init__(self, config: TraceReaderConfig | None = None):
        self.config = config or TraceReaderConfig()

    def read(self, path: str | Path) -> Trace:
        fp = Path(path)
        col = int(self.config.value_column)

        with fp.open("r", encoding=self.config.encoding, errors="replace") as f:
            header = f.readline()
            if not header.strip():
                raise MalformedHeader("file is empty or header line is blank", path=fp, line_no=1)
            config = parse_config_line(header, path=fp)
            index = build_frequency_index(config, path=fp)

            content: List[float] = []
            terminated = False
            for line_no, line in enumerate(f, start=2):
                if line.startswith(TERMINATOR_PREFIX):
                    terminated = True
                    break
                tokens = line.split()
                if len(tokens) <= col:
                    raise ShortDataLine(
                        f"row has {len(tokens)} column(s), value column {col} requested",
                        path=fp,
                        line_no=line_no,
                    )
                try:
                    content.append(float(tokens[col]))
                except ValueError:
                    raise NumericParseError(
                        f"column {col} value {tokens[col]!r} is not numeric", path=fp, line_no=line_no
                    ) from None

        warnings: List[str] = []
        if not terminated:
            log.debug("%s: %s", fp, MISSING_TERMINATOR)
            warnings.append(MISSING_TERMINATOR)

        trace = Trace(
            config=config,
            content=content,
            index=index,
            unit=unit_of(config.get(CENTER_KEY, "")),
            source_path=fp,
            warnings=tuple(warnings),
        )
        log.debug("%s: %d point(s), unit=%r", fp, trace.points, trace.unit)
        return trace


def read_trace(path: str | Path, value_column: int = 1) -> Trace:
    """Shortcut for ``TraceReader(TraceReaderConfig(value_column)).read(path)``."""
    return TraceReader(TraceReaderConfig(value_column=value_column)).read(path)
