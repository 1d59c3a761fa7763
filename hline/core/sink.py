"""Search sink that prints every line, highlighting the ones that matched."""

from __future__ import annotations

import logging
from typing import Optional

from hline.core.printer import Printer, StreamPrinter
from hline.core.searcher import (
    TEXT_ENCODING,
    TEXT_ERRORS,
    Searcher,
    SinkContext,
    SinkMatch,
)
from hline.errors import (
    BrokenPipePrintError,
    PrintError,
    PassthruNotEnabledError,
    PrintFailedError,
)

logger = logging.getLogger(__name__)

DEFAULT_MATCH_COLOR = "bright_red"
PASSTHRU_ERROR_MSG = "passthru is not enabled on the given searcher"


class ContextPrintingSink:
    """Print matched lines in color and context lines as they are.

    Must be driven by a searcher with passthru enabled, otherwise lines that
    do not match would never reach the output.
    """

    def __init__(
        self,
        printer: Optional[Printer] = None,
        match_color: str = DEFAULT_MATCH_COLOR,
    ) -> None:
        self.printer = printer if printer is not None else StreamPrinter.stdout()
        self.match_color = match_color

    def begin(self, searcher: Searcher) -> bool:
        self._validate_searcher(searcher)
        return True

    def matched(self, searcher: Searcher, sink_match: SinkMatch) -> bool:
        self._validate_searcher(searcher)
        text = sink_match.line.decode(TEXT_ENCODING, TEXT_ERRORS)
        try:
            self.printer.colored_print(self.match_color, text)
        except PrintError as err:
            return self._handle_print_error(err)
        return True

    def context(self, searcher: Searcher, sink_context: SinkContext) -> bool:
        self._validate_searcher(searcher)
        text = sink_context.line.decode(TEXT_ENCODING, TEXT_ERRORS)
        try:
            self.printer.print(text)
        except PrintError as err:
            return self._handle_print_error(err)
        return True

    @staticmethod
    def _validate_searcher(searcher: Searcher) -> None:
        if not searcher.passthru:
            raise PassthruNotEnabledError(PASSTHRU_ERROR_MSG)

    @staticmethod
    def _handle_print_error(err: PrintError) -> bool:
        # A closed pipe is not a failure; there is just nowhere left to print.
        if isinstance(err, BrokenPipePrintError):
            logger.debug(f"Output pipe closed, stopping search: {err}")
            return False
        raise PrintFailedError(err.io_error) from err


__all__ = ["ContextPrintingSink", "DEFAULT_MATCH_COLOR", "PASSTHRU_ERROR_MSG"]
