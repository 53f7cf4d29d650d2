"""Generator-based file reading, readability checks, and glob expansion."""

import glob
import os
from typing import Generator

from loggio.errors import SourceUnreadableError


def check_readable(filepath: str) -> None:
    """Raise SourceUnreadableError unless *filepath* is a readable regular file."""
    if not os.path.isfile(filepath) or not os.access(filepath, os.R_OK):
        raise SourceUnreadableError(filepath)


def read_lines(filepath: str, encoding: str = "utf-8") -> Generator[str, None, None]:
    """Yield each line of *filepath* in file order, without its line terminator."""
    with open(filepath, "r", encoding=encoding, errors="replace", newline="") as f:
        for line in f:
            yield line.rstrip("\r\n")


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, deduplicate, and validate that files exist.

    Raises SourceUnreadableError if a non-glob path isn't a readable file.
    Raises SourceUnreadableError if expansion produces zero files.
    """
    expanded = []
    seen = set()

    for raw in raw_paths:
        if any(c in raw for c in ("*", "?", "[")):
            candidates = sorted(p for p in glob.glob(raw) if os.path.isfile(p))
        else:
            check_readable(raw)
            candidates = [raw]
        for path in candidates:
            if path not in seen:
                seen.add(path)
                expanded.append(path)

    if not expanded:
        raise SourceUnreadableError(", ".join(raw_paths) or "<no paths>")

    return expanded
