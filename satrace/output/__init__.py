from .rows import format_row, parse_datetime
from .writers import write_csv, write_stdout

__all__ = [
    "format_row",
    "parse_datetime",
    "write_csv",
    "write_stdout",
]
