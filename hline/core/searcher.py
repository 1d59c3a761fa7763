"""Line-oriented regular expression searcher that reports lines to a sink.

Before reading, the searcher calls ``Sink.begin``. It then reads a byte stream
line by line and hands every matching line to ``Sink.matched``. With ``passthru`` enabled, every other line is handed to
``Sink.context`` as well, so a sink sees the whole input exactly once and in
order. A sink returns False from any callback to stop the search.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Protocol, Union

from hline.errors import PatternError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
LINE_TERMINATOR = b"\n"

# Matching runs on text; undecodable bytes become lone surrogates so the
# line can still be searched and is restored unchanged on output.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class SinkMatch:
    """A line that matched the pattern, terminator included."""

    line: bytes
    line_number: Optional[int]


@dataclass(frozen=True)
class SinkContext:
    """A line that did not match, reported because passthru is enabled."""

    line: bytes
    line_number: Optional[int]


@dataclass(frozen=True)
class SinkFinish:
    """Summary of a finished (or stopped) search."""

    lines_searched: int
    matches: int
    byte_count: int
    stopped_early: bool


class Sink(Protocol):
    def begin(self, searcher: "Searcher") -> bool:
        ...

    def matched(self, searcher: "Searcher", sink_match: SinkMatch) -> bool:
        ...

    def context(self, searcher: "Searcher", sink_context: SinkContext) -> bool:
        ...


class Searcher:
    """Search byte streams line by line for a regular expression."""

    def __init__(self, passthru: bool = False, line_number: bool = True) -> None:
        self.passthru = passthru
        self.line_number = line_number

    def search_reader(
        self,
        pattern: Union[str, Pattern[str]],
        reader,
        sink: Sink,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> SinkFinish:
        """Search everything ``reader`` yields and report lines to ``sink``.

        Args:
            pattern: Regular expression, as a string or compiled pattern. It is
                searched for anywhere in a line; the line terminator is not
                part of the searched text.
            reader: Object with a ``read(size) -> bytes`` method.
            sink: Told when the search begins, then receives matched lines
                and, with passthru, all other lines.
            chunk_size: Number of bytes requested from ``reader`` per read.

        Raises:
            PatternError: ``pattern`` does not compile.
            OSError: reading from ``reader`` failed.
        """
        matcher = compile_pattern(pattern)
        if not sink.begin(self):
            logger.debug("Sink declined to start the search")
            return SinkFinish(0, 0, 0, True)

        lines_searched = 0
        matches = 0
        byte_count = 0
        for line in iter_lines(reader, chunk_size):
            lines_searched += 1
            line_number = lines_searched if self.line_number else None

            if matcher.search(_line_text(line)) is not None:
                matches += 1
                keep_going = sink.matched(self, SinkMatch(line, line_number))
            elif self.passthru:
                keep_going = sink.context(self, SinkContext(line, line_number))
            else:
                keep_going = True

            byte_count += len(line)
            if not keep_going:
                logger.debug(f"Sink stopped the search after line {lines_searched}")
                return SinkFinish(lines_searched, matches, byte_count, True)

        return SinkFinish(lines_searched, matches, byte_count, False)

    def search_slice(
        self, pattern: Union[str, Pattern[str]], data: bytes, sink: Sink
    ) -> SinkFinish:
        """Search an in-memory byte string."""
        return self.search_reader(pattern, io.BytesIO(data), sink)


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as err:
        raise PatternError(f"invalid pattern {pattern!r}: {err}") from err


def iter_lines(reader, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the lines of ``reader`` with their terminators attached.

    The last line is yielded without a terminator if the input does not end
    with one. Empty input yields nothing.
    """
    pending = bytearray()
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        pending.extend(chunk)

        start = 0
        while True:
            end = pending.find(LINE_TERMINATOR, start)
            if end == -1:
                break
            yield bytes(pending[start : end + 1])
            start = end + 1
        del pending[:start]

    if pending:
        yield bytes(pending)


def _line_text(line: bytes) -> str:
    if line.endswith(b"\r\n"):
        line = line[:-2]
    elif line.endswith(LINE_TERMINATOR):
        line = line[:-1]
    return line.decode(TEXT_ENCODING, TEXT_ERRORS)


__all__ = [
    "Searcher",
    "Sink",
    "SinkMatch",
    "SinkContext",
    "SinkFinish",
    "compile_pattern",
    "iter_lines",
]
