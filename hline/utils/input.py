"""Open the input to scan and check whether it is safe to treat as text."""

from __future__ import annotations

import logging
import os
import stat
from typing import BinaryIO, Optional, Union

import click

from hline.core.binary import is_likely_binary
from hline.core.recorder import ReadRecorder
from hline.errors import InputError

logger = logging.getLogger(__name__)

STDIN_NAME = "-"

OpenedInput = Union[ReadRecorder, BinaryIO]


def open_input(filename: Optional[str]) -> OpenedInput:
    """Open ``filename`` for reading, or standard input if it is None or ``-``.

    Standard input is wrapped in a :class:`ReadRecorder` so its start can be
    inspected and replayed; files are returned as seekable binary files.

    Raises:
        InputError: the file could not be opened or is a directory.
    """
    if filename is None or filename == STDIN_NAME:
        return ReadRecorder(click.get_binary_stream("stdin"))

    try:
        file = open(filename, "rb")
    except OSError as err:
        raise InputError(str(err)) from err

    try:
        _assert_is_not_directory(file)
    except (OSError, InputError):
        file.close()
        raise
    return file


def should_treat_as_binary(opened: OpenedInput) -> bool:
    """Check whether ``opened`` looks binary, leaving it ready to be read again.

    Standard input is recorded while it is checked and then rewound to the
    start of the recording; files are simply seeked back to the start.

    Raises:
        OSError: reading (or seeking) the input failed.
    """
    if isinstance(opened, ReadRecorder):
        opened.start_recording()
        try:
            is_binary = is_likely_binary(opened)
        finally:
            opened.stop_recording()
            opened.rewind_to_start_of_recording()
    else:
        is_binary = is_likely_binary(opened)
        opened.seek(0)

    logger.debug(f"Input classified as {'binary' if is_binary else 'text'}")
    return is_binary


def _assert_is_not_directory(file: BinaryIO) -> None:
    # open() only refuses directories on some platforms
    if stat.S_ISDIR(os.fstat(file.fileno()).st_mode):
        raise InputError("is a directory")


__all__ = ["STDIN_NAME", "OpenedInput", "open_input", "should_treat_as_binary"]
