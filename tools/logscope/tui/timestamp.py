"""
Timestamp extraction for plain-text log lines.

This module pulls the leading timestamp out of a log line and turns it
into a comparable instant. It is the only place that knows what the
"wire format" of a log line looks like.

Expected Line Format:
    <YYYY-MM-DD> <HH:MM:SS[.ffffff]> <anything else...>

    2023-05-03 10:25:50.262116     src/main.rs INFO  - main - start
    2023-05-03 10:25:50,262116 [worker] WARN retrying

Design Decisions:
    - Instants are plain integers (microseconds since the Unix epoch, UTC)
      so records stay small and compare without datetime overhead
    - Timestamps without an explicit zone are read as UTC
    - Comma decimal separators (Python's logging default) are accepted
    - Fractions of up to nine digits are read; anything below a
      microsecond is truncated
    - Every failure raises a subclass of ExtractionError so loaders can
      fail fast on the first line that cannot be placed in time
"""

import datetime
import re
from typing import Optional

# Marker appended to every candidate so strptime yields an aware datetime
UTC_MARKER = " +0000"

# Accepted patterns, tried in order against the candidate
TIMESTAMP_PATTERNS = [
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S %z",
]

# strptime's %f stops at microseconds; digits past the sixth are dropped
SUBMICRO_FRACTION = re.compile(r"([.,]\d{6})\d{1,3}$")

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
ONE_MICROSECOND = datetime.timedelta(microseconds=1)


class ExtractionError(ValueError):
    """
    A log line could not be assigned an instant.

    Attributes:
        line: The offending line text (or timestamp candidate).
        line_number: 0-based line number within its file, filled in by
                     the merge engine when it annotates a whole file.
    """

    reason = "line does not have a timestamp"

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(line)
        self.line = line
        self.line_number = line_number

    def __str__(self) -> str:
        where = "" if self.line_number is None else f" at line {self.line_number + 1}"
        return f"{self.reason}{where}: {self.line!r}"


class MissingDate(ExtractionError):
    """The line has no date token (empty or blank line)."""

    reason = "missing date"


class MissingTime(ExtractionError):
    """The line has a date token but no time token."""

    reason = "missing time"


class UnparseableTimestamp(ExtractionError):
    """The date and time tokens do not match any accepted pattern."""

    reason = "unparseable timestamp"


def extract_prefix(line: str) -> str:
    """
    Return the timestamp candidate at the start of a log line.

    The candidate is the first two whitespace-separated tokens joined by
    a single space (date token + time token).

    Args:
        line: One log line without its trailing newline.

    Returns:
        str: The candidate, e.g. "2023-05-03 10:25:50.262116".

    Raises:
        MissingDate: The line has no tokens at all.
        MissingTime: The line has only one token.
    """
    # maxsplit=2 keeps us from splitting the (possibly long) message body
    tokens = line.split(None, 2)

    if not tokens:
        raise MissingDate(line)
    if len(tokens) < 2:
        raise MissingTime(line)

    return f"{tokens[0]} {tokens[1]}"


def _parse_with_patterns(candidate: str) -> Optional[datetime.datetime]:
    """Try each accepted pattern in order; None if nothing matches."""
    for pattern in TIMESTAMP_PATTERNS:
        try:
            return datetime.datetime.strptime(candidate + UTC_MARKER, pattern)
        except ValueError:
            continue
    return None


def parse(candidate: str) -> int:
    """
    Parse a timestamp candidate into microseconds since the epoch (UTC).

    The candidate is tried as-is first. If no pattern matches, commas are
    normalized to dots (``10:25:50,262116`` -> ``10:25:50.262116``) and the
    patterns are tried once more. Fractions longer than six digits are cut
    to microseconds first.

    Args:
        candidate: Date and time tokens joined by a space.

    Returns:
        int: Signed microsecond instant. Negative for pre-epoch dates.

    Raises:
        UnparseableTimestamp: No pattern matched either form.

    Example:
        >>> parse("2023-05-03 10:25:50.262116")
        1683109550262116
    """
    trimmed = SUBMICRO_FRACTION.sub(r"\1", candidate)
    parsed = _parse_with_patterns(trimmed)

    if parsed is None and "," in trimmed:
        parsed = _parse_with_patterns(trimmed.replace(",", "."))

    if parsed is None:
        raise UnparseableTimestamp(candidate)

    # Integer division of timedeltas is exact, unlike .timestamp() floats
    return (parsed - EPOCH) // ONE_MICROSECOND


def line_timestamp(line: str) -> int:
    """Return the instant of a log line; raises ExtractionError on failure."""
    try:
        return parse(extract_prefix(line))
    except UnparseableTimestamp:
        # Report the whole line, not just the candidate
        raise UnparseableTimestamp(line) from None
