"""Line splitting that keeps track of the terminator each line ended with."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple


def line_split(text: str) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield ``(content, terminator)`` pairs for every line of ``text``.

    Works like ``str.splitlines`` but reports the terminator each line was
    split on (``"\\n"`` or ``"\\r\\n"``), so joining ``content + terminator``
    for every pair gives back the original string. The final pair never has
    a terminator; when ``text`` ends with a newline it is ``("", None)``.
    A lone ``"\\r"`` is not treated as a line break.
    """
    pieces = text.split("\n")
    last = len(pieces) - 1

    for idx, piece in enumerate(pieces):
        if idx == last:
            yield piece, None
        elif piece.endswith("\r"):
            yield piece[:-1], "\r\n"
        else:
            yield piece, "\n"


__all__ = ["line_split"]
