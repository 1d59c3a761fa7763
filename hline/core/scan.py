"""Scan a stream for a pattern while printing all of it."""

from __future__ import annotations

from typing import Optional

from hline.core.printer import Printer
from hline.core.searcher import Searcher
from hline.core.sink import DEFAULT_MATCH_COLOR, ContextPrintingSink


def scan_pattern(
    reader,
    pattern: str,
    printer: Optional[Printer] = None,
    match_color: str = DEFAULT_MATCH_COLOR,
) -> bool:
    """Print everything ``reader`` yields, highlighting lines matching ``pattern``.

    The pattern is not anchored, so a match anywhere in a line highlights the
    whole line: ``[a-z]`` matches ``123abc456``. Use ``^`` or ``$`` to anchor.

    Returns:
        True if the whole input was printed, False if printing stopped early
        because the output pipe was closed.

    Raises:
        PatternError: ``pattern`` is not a valid regular expression.
        PrintFailedError: writing the output failed.
        OSError: reading from ``reader`` failed.
    """
    searcher = Searcher(passthru=True)
    sink = ContextPrintingSink(printer, match_color=match_color)
    finish = searcher.search_reader(pattern, reader, sink)
    return not finish.stopped_early


__all__ = ["scan_pattern"]
