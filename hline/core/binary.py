"""Guess whether a byte stream is human-readable UTF-8 text.

The heuristic follows ``less``: decode a short prefix of the stream, count
characters that were not valid UTF-8 or that fall in a table of control and
reserved code points, and call the stream binary once that count passes a
small threshold.

Less is Copyright (C) 1984-2018 Mark Nudelman and distributed under the Less
License; the code point table below is taken from its ``ubin.uni``.
"""

from __future__ import annotations

import logging
from typing import Protocol, Tuple

logger = logging.getLogger(__name__)

BINARY_CHAR_THRESHOLD = 5
BUFFER_CHECK_AMOUNT = 255

REPLACEMENT_CHARACTER = "\ufffd"

# Inclusive (start, end) code point ranges.
BINARY_CODEPOINT_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x0000, 0x0007),  # Cc
    (0x000B, 0x000B),  # Cc
    (0x000E, 0x001F),  # Cc
    (0x007F, 0x009F),  # Cc
    (0x2028, 0x2028),  # Zl
    (0x2029, 0x2029),  # Zp
    (0xD800, 0xD800),  # Cs
    (0xDB7F, 0xDB80),  # Cs
    (0xDBFF, 0xDC00),  # Cs
    (0xDFFF, 0xDFFF),  # Cs
    (0xE000, 0xE000),  # Co
    (0xF8FF, 0xF8FF),  # Co
    (0xF0000, 0xF0000),  # Co
    (0xFFFFD, 0xFFFFD),  # Co
    (0x100000, 0x100000),  # Co
    (0x10FFFD, 0x10FFFD),  # Co
)


class SupportsRead(Protocol):
    """Protocol for objects that support read operations."""

    def read(self, n: int) -> bytes:
        ...


def is_likely_utf8(source: SupportsRead) -> bool:
    """Return True if the start of ``source`` decodes as UTF-8 with few errors.

    Performs a single read of at most ``BUFFER_CHECK_AMOUNT`` bytes.
    """
    text = _read_prefix(source)
    replaced = sum(1 for char in text if was_utf8_char_replaced(char))
    logger.debug(f"Prefix of {len(text)} chars has {replaced} invalid UTF-8 sequences")
    return replaced <= BINARY_CHAR_THRESHOLD


def is_likely_binary(source: SupportsRead) -> bool:
    """Return True if the start of ``source`` looks like binary data.

    Performs a single read of at most ``BUFFER_CHECK_AMOUNT`` bytes. Both
    invalid UTF-8 sequences and binary code points count against the text.
    """
    text = _read_prefix(source)
    binary_chars = sum(
        1 for char in text if was_utf8_char_replaced(char) or is_binary_char(char)
    )
    logger.debug(f"Prefix of {len(text)} chars has {binary_chars} binary chars")
    return binary_chars > BINARY_CHAR_THRESHOLD


def was_utf8_char_replaced(char: str) -> bool:
    """Check whether ``char`` is the marker the decoder put in for bad input."""
    return char == REPLACEMENT_CHARACTER


def is_binary_char(char: str) -> bool:
    codepoint = ord(char)
    return any(start <= codepoint <= end for start, end in BINARY_CODEPOINT_RANGES)


def _read_prefix(source: SupportsRead) -> str:
    data = source.read(BUFFER_CHECK_AMOUNT) or b""
    return data.decode("utf-8", errors="replace")


__all__ = [
    "BINARY_CHAR_THRESHOLD",
    "BUFFER_CHECK_AMOUNT",
    "is_likely_utf8",
    "is_likely_binary",
    "is_binary_char",
    "was_utf8_char_replaced",
]
