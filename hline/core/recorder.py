"""Record reads from a byte stream so they can be replayed after a rewind."""

from __future__ import annotations

import io
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ReadRecorder(io.RawIOBase):
    """Wrap a byte source and replay recorded reads without seeking it.

    This is useful when the wrapped source cannot seek, such as standard
    input. Reads made while recording are copied to an internal buffer;
    after :meth:`rewind_to_start_of_recording`, reads are served from that
    buffer first and fall through to the source once it runs out. The
    source is never asked for the same byte twice.

    Example::

        recorder = ReadRecorder(sys.stdin.buffer)
        recorder.start_recording()
        head = recorder.read(6)
        recorder.stop_recording()
        recorder.rewind_to_start_of_recording()
        everything = recorder.read()  # starts with ``head`` again

    The recorded data is dropped once a replay has passed its end and a
    further read has obtained new bytes from the source with recording
    stopped.
    """

    def __init__(self, source) -> None:
        super().__init__()
        self._source = source
        # read1 returns whatever is available instead of blocking for a full buffer
        self._read_source: Callable[[int], Optional[bytes]] = getattr(
            source, "read1", source.read
        )
        self._recorded = bytearray()
        self._cursor: Optional[int] = None
        self._recording = False

    def readable(self) -> bool:
        return True

    @property
    def recording(self) -> bool:
        return self._recording

    @property
    def replaying(self) -> bool:
        """True while a rewound cursor still has recorded bytes to serve."""
        return self._cursor is not None and self._cursor < len(self._recorded)

    @property
    def recorded_size(self) -> int:
        return len(self._recorded)

    def start_recording(self) -> None:
        """Copy every byte subsequently read from the source into the buffer."""
        self._recording = True

    def stop_recording(self) -> None:
        """Stop copying reads into the buffer. Recorded data is kept."""
        self._recording = False

    def rewind_to_start_of_recording(self) -> None:
        """Serve the next reads from the start of the recorded data.

        Like ``seek(0)``, but relative to the start of the recording rather
        than the stream. Valid on an empty recording.
        """
        self._cursor = 0

    def readinto(self, buffer) -> int:
        """Fill ``buffer`` from the recording first, then from the source.

        Only bytes that came from the source are recorded. When not recording,
        a read that obtains new source bytes after a replay has been used up
        drops the recording.
        """
        with memoryview(buffer) as raw_view, raw_view.cast("B") as view:
            replayed = self._copy_from_recording(view)

            fetched = b""
            if replayed < len(view):
                fetched = self._read_source(len(view) - replayed) or b""
                view[replayed : replayed + len(fetched)] = fetched

        if self._recording:
            self._recorded.extend(fetched)
        elif self._should_drop_recording(len(fetched)):
            self._drop_recording()

        return replayed + len(fetched)

    def _copy_from_recording(self, view: memoryview) -> int:
        if self._cursor is None or self._cursor >= len(self._recorded):
            return 0

        start = self._cursor
        count = min(len(view), len(self._recorded) - start)
        view[:count] = self._recorded[start : start + count]
        self._cursor = start + count
        return count

    def _cursor_out_of_recording_bounds(self) -> bool:
        if self._cursor is None:
            return False
        return self._cursor >= len(self._recorded)

    def _should_drop_recording(self, fetched_from_source: int) -> bool:
        # Reaching the end of the recording is not enough: the caller may
        # rewind and replay again. Only drop once new data has been read.
        return fetched_from_source > 0 and self._cursor_out_of_recording_bounds()

    def _drop_recording(self) -> None:
        logger.debug(f"Dropping {len(self._recorded)} recorded bytes after replay")
        self._recorded = bytearray()
        self._cursor = None


__all__ = ["ReadRecorder"]
