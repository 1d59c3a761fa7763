"""hline: print a stream, highlighting the lines that match a pattern."""

from __future__ import annotations

__version__ = "0.3.0"

from hline.core.binary import is_likely_binary, is_likely_utf8
from hline.core.recorder import ReadRecorder
from hline.core.scan import scan_pattern

__all__ = [
    "ReadRecorder",
    "is_likely_binary",
    "is_likely_utf8",
    "scan_pattern",
    "__version__",
]
