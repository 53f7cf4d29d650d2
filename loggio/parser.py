"""Log line parser — compiled regex per supported format, records as plain dicts."""

import re
from typing import Callable

from loggio.errors import UnsupportedFormatError

APACHE_COMBINED = "APACHE_COMBINED"

# LogFormat "%h %l %u %t \"%r\" %>s %b \"%{Referer}i\" \"%{User-agent}i\"" combined
# followed by up to two trailing tokens.
APACHE_COMBINED_PATTERN = re.compile(
    r'^(\S+) (\S+) (\S+) '
    r'\[([\w:/]+\s[+\-]\d{4})\] '
    r'"(\S+)\s?(\S+)?\s?(\S+)?" '
    r'(\d{3}|-) (\d+|-)'
    r'\s?"?([^"]*)"?\s?"?([^"]*)?"?'
    r'\s?(\S+)?\s?(\S+)?$',
    re.ASCII,
)

# Sentinel used by the grammar for "not applicable".
SENTINEL = "-"

# Regex group -> record field. Group 2 (identity) and group 10 (Referer header)
# are matched but not stored.
APACHE_COMBINED_FIELDS = (
    (1, "ip"),
    (3, "userId"),
    (4, "time"),
    (5, "method"),
    (6, "referer"),
    (7, "protocol"),
    (8, "statusCode"),
    (9, "size"),
    (11, "userAgent"),
    (12, "extra1"),
    (13, "extra2"),
)

LogRecord = dict[str, str | int]


def _parse_apache_combined(line: str) -> LogRecord | None:
    match = APACHE_COMBINED_PATTERN.match(line)
    if not match:
        return None

    record: LogRecord = {"raw": line}
    for group, name in APACHE_COMBINED_FIELDS:
        value = match.group(group)
        if not value:
            continue
        # Only userId drops the sentinel; statusCode and size keep a literal "-".
        if name == "userId" and value == SENTINEL:
            continue
        record[name] = value
    return record


_PARSERS: dict[str, Callable[[str], LogRecord | None]] = {
    APACHE_COMBINED: _parse_apache_combined,
}

SUPPORTED_FORMATS = tuple(_PARSERS)


def get_parser(fmt: str) -> Callable[[str], LogRecord | None]:
    """Return the line parser for *fmt*. Raises UnsupportedFormatError."""
    try:
        return _PARSERS[fmt]
    except (KeyError, TypeError):
        raise UnsupportedFormatError(fmt) from None


def parse_line(line: str, fmt: str = APACHE_COMBINED) -> LogRecord | None:
    """Parse a single log line into a record dict. Returns None for unparseable lines."""
    return get_parser(fmt)(line.rstrip("\r\n"))
