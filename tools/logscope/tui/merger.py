"""
Record merging for time-ordered log display.

This module turns indexed files into timestamped Records and merges the
per-file Record sequences into one stream ordered by timestamp.

Purpose:
    Each log file is already in time order on its own. Interleaving them
    is therefore a classic merge of sorted sequences, done on Records only
    so no line text is copied while the global order is built.

Design Decisions:
    - Fail fast: one line without a usable timestamp rejects the whole
      file, since a file that cannot be placed in time cannot be merged
    - Ties go to the left argument, and files are folded left in load
      order, so on equal timestamps the earlier-loaded file comes first
    - The fold is kept as a fold; with three or more files sharing one
      timestamp the result is deterministic but not a symmetric k-way merge
"""

from typing import Iterable, List

from .line_index import LineIndex
from .model import Record
from .timestamp import ExtractionError, line_timestamp


def annotate(index: LineIndex, file_id: int) -> List[Record]:
    """
    Build one Record per line of an indexed file.

    Args:
        index: The file's line index.
        file_id: Position of the file in load order.

    Returns:
        List[Record]: Records in line order.

    Raises:
        ExtractionError: The first line whose timestamp cannot be read,
                         with its line_number filled in.
    """
    records = []
    for i in range(index.line_count()):
        try:
            timestamp = line_timestamp(index.line_at(i))
        except ExtractionError as exc:
            exc.line_number = i
            raise
        records.append(Record(timestamp, file_id, i))
    return records


def merge(left: List[Record], right: List[Record]) -> List[Record]:
    """
    Merge two timestamp-sorted Record lists into one.

    Standard two-pointer merge. When timestamps are equal the left record
    is emitted first.

    Args:
        left: Sorted records; wins ties.
        right: Sorted records.

    Returns:
        List[Record]: len(left) + len(right) records, non-decreasing by
                      timestamp.

    Example:
        >>> a = [Record(0, 0, 0), Record(30, 0, 1)]
        >>> b = [Record(7, 1, 0), Record(30, 1, 1)]
        >>> [(r.timestamp, r.file_id) for r in merge(a, b)]
        [(0, 0), (7, 1), (30, 0), (30, 1)]
    """
    result = []
    i = j = 0
    left_len, right_len = len(left), len(right)

    while i < left_len and j < right_len:
        if left[i].timestamp <= right[j].timestamp:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1

    # At most one side still has records; they are already in order
    result.extend(left[i:])
    result.extend(right[j:])
    return result


def merge_all(sequences: Iterable[List[Record]]) -> List[Record]:
    """
    Left-fold merge of per-file sequences in load order.

    Computes merge(merge(merge(f0, f1), f2), ...). An empty input yields
    an empty list.
    """
    merged: List[Record] = []
    for records in sequences:
        merged = merge(merged, records)
    return merged
