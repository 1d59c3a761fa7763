"""Command-line interface entrypoint for hline."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import click
from pydantic import ValidationError

from hline import __version__
from hline.config import get_config
from hline.core.scan import scan_pattern
from hline.errors import InputError, SearchError
from hline.options import ScanOptions
from hline.utils.input import open_input, should_treat_as_binary

EXIT_OPEN_FAILED = 2
EXIT_SCAN_FAILED = 3
EXIT_PEEK_FAILED = 4
EXIT_BINARY_INPUT = 5
# sysexits EX_USAGE
EXIT_USAGE = 64

_log_handler: Optional[logging.Handler] = None


def setup_logging(level: str) -> None:
    """Send hline's log records to stderr at the given level."""
    global _log_handler
    logger = logging.getLogger("hline")
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logger.setLevel(numeric_level)

    if _log_handler is not None:
        logger.removeHandler(_log_handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    _log_handler = handler


def print_error(message: object) -> None:
    click.echo(f"{click.style('error:', fg='bright_red')} {message}", err=True)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter does not fail flushing it on exit."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        # stdout is not backed by a file descriptor
        pass
    finally:
        os.close(devnull)


@click.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
    },
    epilog=(
        "Exit codes: 0 success, 2 input not opened, 3 search or print failure, "
        "4 input not readable for the binary check, 5 input looks binary, "
        "64 usage error."
    ),
)
@click.argument("pattern")
@click.argument("filename", required=False)
@click.option(
    "-i",
    "--ignore-case",
    is_flag=True,
    help="Ignore case when matching. Matching is case-sensitive otherwise.",
)
@click.option(
    "-b",
    "--ok-if-binary",
    is_flag=True,
    help="Treat the input as text, even if it may be a binary file.",
)
@click.option(
    "--color",
    "match_color",
    default=None,
    help="Color for matching lines (default: bright_red).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.version_option(__version__, prog_name="hl")
@click.pass_context
def cli(
    ctx: click.Context,
    pattern: str,
    filename: Optional[str],
    ignore_case: bool,
    ok_if_binary: bool,
    match_color: Optional[str],
    verbose: bool,
) -> None:
    """Highlight lines of FILENAME that match PATTERN.

    Every line is printed; lines matching the regular expression PATTERN are
    highlighted. PATTERN is not anchored, so use ^ or $ to anchor it. Reads
    standard input if FILENAME is omitted or is -.
    """
    config = get_config()
    setup_logging("DEBUG" if verbose else config.logging.log_level)

    try:
        options = ScanOptions(
            pattern=pattern,
            filename=filename,
            ignore_case=ignore_case,
            ok_if_binary=ok_if_binary or config.input.ok_if_binary,
            match_color=match_color or config.colors.match,
        )
    except ValidationError as err:
        messages = "; ".join(error["msg"] for error in err.errors())
        raise click.UsageError(messages, ctx=ctx) from err

    try:
        opened = open_input(options.filename)
    except InputError as err:
        print_error(f"Failed to open input file: {err}")
        ctx.exit(EXIT_OPEN_FAILED)

    try:
        if not options.ok_if_binary:
            _reject_binary_input(ctx, opened)

        try:
            completed = scan_pattern(
                opened, options.effective_pattern, match_color=options.match_color
            )
        except (SearchError, OSError) as err:
            print_error(err)
            ctx.exit(EXIT_SCAN_FAILED)
    finally:
        opened.close()

    if not completed:
        _silence_stdout()


def _reject_binary_input(ctx: click.Context, opened) -> None:
    try:
        is_binary = should_treat_as_binary(opened)
    except OSError as err:
        print_error(f"failed to peek file: {err}")
        ctx.exit(EXIT_PEEK_FAILED)

    if is_binary:
        print_error(
            "Input file may be a binary file. Pass -b to ignore this and scan anyway."
        )
        ctx.exit(EXIT_BINARY_INPUT)


def main() -> None:
    try:
        exit_code = cli.main(standalone_mode=False)
    except click.ClickException as err:
        err.show()
        if isinstance(err, click.UsageError):
            exit_code = EXIT_USAGE
        else:
            exit_code = err.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        exit_code = 1
    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
