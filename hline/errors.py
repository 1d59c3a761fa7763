"""Exceptions raised by hline."""

from __future__ import annotations


class HlineError(Exception):
    """Base exception for hline errors."""

    pass


class PrintError(HlineError):
    """Raised when a printer fails to write its output."""

    def __init__(self, io_error: OSError) -> None:
        super().__init__(str(io_error))
        self.io_error = io_error


class BrokenPipePrintError(PrintError):
    """Raised when the output consumer has closed its end of the pipe."""

    pass


class OtherPrintError(PrintError):
    """Raised for any print failure that is not a broken pipe."""

    pass


class SearchError(HlineError):
    """Raised when a search cannot be carried out."""

    pass


class PatternError(SearchError):
    """Raised when the search pattern is not a valid regular expression."""

    pass


class PrintFailedError(SearchError):
    """Raised by the printing sink when its printer fails with an i/o error."""

    def __init__(self, io_error: OSError) -> None:
        super().__init__(f"Print failure: {io_error}")
        self.io_error = io_error


class InputError(HlineError):
    """Raised when the input file cannot be opened for scanning."""

    pass


class PassthruNotEnabledError(AssertionError):
    """Raised when the printing sink is driven by a searcher without passthru."""

    pass


__all__ = [
    "HlineError",
    "PrintError",
    "BrokenPipePrintError",
    "OtherPrintError",
    "SearchError",
    "PatternError",
    "PrintFailedError",
    "InputError",
    "PassthruNotEnabledError",
]
