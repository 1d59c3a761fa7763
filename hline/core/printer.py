"""Printers that write scan output, plain or colorized.

Print failures are raised as :class:`~hline.errors.PrintError` subclasses so
callers can tell a closed downstream pipe (``BrokenPipePrintError``), which
should end output quietly, apart from any other i/o failure.
"""

from __future__ import annotations

import errno
import sys
from typing import BinaryIO, Protocol

import click

from hline.core.lines import line_split
from hline.errors import BrokenPipePrintError, OtherPrintError, PrintError

OUTPUT_ENCODING = "utf-8"
# Keeps bytes that were not valid UTF-8 on input identical on output.
OUTPUT_ERRORS = "surrogateescape"

# BrokenPipeError already covers EPIPE and ESHUTDOWN. Writing to a pipe whose
# reader has gone away fails with EINVAL on Windows instead.
_EXTRA_BROKEN_PIPE_ERRNOS = (
    frozenset({errno.EINVAL}) if sys.platform == "win32" else frozenset()
)


class Printer(Protocol):
    """Something that can print scan output."""

    def print(self, text: str) -> None:
        """Print ``text`` as is.

        Raises:
            BrokenPipePrintError: the output consumer has gone away.
            OtherPrintError: any other i/o failure.
        """
        ...

    def colored_print(self, color: str, text: str) -> None:
        """Print ``text`` in the given foreground color.

        Implementations should color each line separately and leave line
        terminators uncolored; :func:`colored_line_split` does this.

        Raises:
            BrokenPipePrintError: the output consumer has gone away.
            OtherPrintError: any other i/o failure.
        """
        ...


def classify_io_error(err: OSError) -> PrintError:
    """Wrap ``err`` in the :class:`PrintError` subclass matching its cause."""
    if isinstance(err, BrokenPipeError) or err.errno in _EXTRA_BROKEN_PIPE_ERRNOS:
        return BrokenPipePrintError(err)
    return OtherPrintError(err)


def colored_line_split(color: str, text: str) -> str:
    """Color every line of ``text`` with the reset placed before its terminator.

    Empty lines are left as just their terminator, with no color codes.
    """
    parts = []
    for content, terminator in line_split(text):
        if content:
            parts.append(click.style(content, fg=color))
        parts.append(terminator or "")
    return "".join(parts)


class StreamPrinter:
    """Printer that writes encoded text to a binary stream, flushing each time."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    @classmethod
    def stdout(cls) -> "StreamPrinter":
        return cls(click.get_binary_stream("stdout"))

    def print(self, text: str) -> None:
        data = text.encode(OUTPUT_ENCODING, OUTPUT_ERRORS)
        try:
            self.stream.write(data)
            self.stream.flush()
        except OSError as err:
            raise classify_io_error(err) from err

    def colored_print(self, color: str, text: str) -> None:
        self.print(colored_line_split(color, text))


__all__ = [
    "Printer",
    "StreamPrinter",
    "classify_io_error",
    "colored_line_split",
]
