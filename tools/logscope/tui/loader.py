"""
Concurrent loading of the selected log files.

This module reads every selected file, indexes it, timestamps every line
and merges the results into one TextView.

Architecture:
    - One asyncio task per file; the blocking read runs in a worker
      thread via asyncio.to_thread, so reads of several files overlap
    - asyncio.gather joins the tasks; results come back in spawn order
    - asyncio.run drives the whole fan-out from synchronous UI code, which
      blocks until every file is done. This is the only place the viewer
      waits on anything.

Ordering:
    Paths are loaded in sorted order and the n-th spawned task gets
    file_id n. The order in which tasks complete has no effect on the
    merged result.
"""

import asyncio
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..utils.applog import AppLogger
from .line_index import LineIndex
from .merger import annotate, merge_all
from .model import Record
from .timestamp import ExtractionError
from .viewport import TextView


class LoadError(Exception):
    """
    A load operation failed; the previous state stays in effect.

    Attributes:
        path: The file that caused the failure.
        cause: The underlying OSError or ExtractionError.
    """

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"cannot load {self.path}: {cause}")

    @property
    def is_io_error(self) -> bool:
        return isinstance(self.cause, OSError)


async def load_file(path: Path, file_id: int) -> Tuple[LineIndex, List[Record]]:
    """
    Read, index and annotate one file.

    Args:
        path: File to load.
        file_id: The id its records will carry.

    Returns:
        Tuple of the file's LineIndex and its Records in line order.

    Raises:
        LoadError: The file cannot be read or a line has no timestamp.
    """
    try:
        index = await asyncio.to_thread(LineIndex.from_path, path)
    except OSError as exc:
        raise LoadError(path, exc) from exc

    try:
        records = annotate(index, file_id)
    except ExtractionError as exc:
        raise LoadError(path, exc) from exc

    return index, records


async def load_files(paths: List[Path]) -> List[Tuple[LineIndex, List[Record]]]:
    """Load every path concurrently; results are in the order of paths."""
    tasks = [
        asyncio.create_task(load_file(path, file_id))
        for file_id, path in enumerate(paths)
    ]
    try:
        return await asyncio.gather(*tasks)
    except LoadError:
        # Let the remaining reads finish before the error leaves the loop
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def build_view(
    paths: Iterable[Union[str, Path]],
    height: int,
    logger: Optional[AppLogger] = None,
) -> TextView:
    """
    Load the given files and return a TextView over their merged lines.

    Blocks until every file has been read, indexed and annotated. Either
    the complete view is returned or nothing is.

    Args:
        paths: Files to merge; duplicates are loaded once.
        height: Number of rows the view shows at a time.
        logger: Diagnostic logger; disabled when omitted.

    Returns:
        TextView: Positioned at the first line.

    Raises:
        LoadError: Any file could not be read or timestamped.
    """
    logger = logger or AppLogger.disabled()
    ordered = sorted({Path(p) for p in paths}, key=str)

    logger.info("loader", f"loading {len(ordered)} files")
    try:
        loaded = asyncio.run(load_files(ordered))
    except LoadError as exc:
        logger.error("loader", str(exc))
        raise

    indexes = [index for index, _records in loaded]
    merged = merge_all(records for _index, records in loaded)

    for path, index in zip(ordered, indexes):
        logger.info("loader", f"{path}: {index.line_count()} lines")
    logger.info("loader", f"lines merged, total count={len(merged)}")

    return TextView(ordered, indexes, merged, height)
