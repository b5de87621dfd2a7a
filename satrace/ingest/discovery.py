from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Iterable, List

log = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


def _has_magic(pattern: str) -> bool:
    return any(c in _GLOB_CHARS for c in pattern)


def expand_filenames(patterns: Iterable[str]) -> List[str]:
    """
    Turn command-line arguments into a list of existing trace files.

    Shells such as cmd.exe pass '*.txt' through unexpanded, so wildcard patterns
    are expanded here (sorted, non-recursive unless '**' is used). Plain names are
    kept as given. Anything that is not an existing regular file is dropped with a
    log line. Duplicates keep their first position.
    """
    out: List[str] = []
    seen = set()
    for pat in patterns:
        if _has_magic(pat):
            matches = sorted(glob.glob(pat, recursive="**" in pat))
            if not matches:
                log.warning("pattern %r matched no file", pat)
        else:
            matches = [pat]

        for m in matches:
            if not Path(m).is_file():
                log.warning("skipping %s: not a file", m)
                continue
            if m in seen:
                continue
            seen.add(m)
            out.append(m)
    return out
