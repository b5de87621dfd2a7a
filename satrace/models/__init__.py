from .results import FileResult, OutRow
from .trace import Trace

__all__ = [
    "FileResult",
    "OutRow",
    "Trace",
]
