from __future__ import annotations

import io
import re

import pytest

from hline.core.searcher import Searcher, SinkContext, SinkMatch, iter_lines
from hline.errors import PatternError, SearchError


class _RecordingSink:
    def __init__(self, stop_after: int | None = None, start: bool = True) -> None:
        self.events: list[tuple[str, bytes, int | None]] = []
        self.stop_after = stop_after
        self.start = start
        self.began = 0

    def begin(self, searcher: Searcher) -> bool:
        self.began += 1
        return self.start

    def matched(self, searcher: Searcher, sink_match: SinkMatch) -> bool:
        self.events.append(("match", sink_match.line, sink_match.line_number))
        return self._keep_going()

    def context(self, searcher: Searcher, sink_context: SinkContext) -> bool:
        self.events.append(("context", sink_context.line, sink_context.line_number))
        return self._keep_going()

    def _keep_going(self) -> bool:
        return self.stop_after is None or len(self.events) < self.stop_after


class _TrickleReader:
    """Hands out a few bytes per read, like a slow pipe."""

    def __init__(self, data: bytes, step: int) -> None:
        self._stream = io.BytesIO(data)
        self._step = step

    def read(self, n: int) -> bytes:
        return self._stream.read(min(n, self._step))


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"", []),
        (b"one", [b"one"]),
        (b"one\n", [b"one\n"]),
        (b"one\r\ntwo\n\nthree", [b"one\r\n", b"two\n", b"\n", b"three"]),
    ],
)
def test_iter_lines_keeps_terminators(data: bytes, expected: list) -> None:
    assert list(iter_lines(io.BytesIO(data))) == expected


def test_iter_lines_joins_lines_split_across_reads() -> None:
    data = b"alpha\nbeta gamma\r\ndelta\n"
    assert list(iter_lines(_TrickleReader(data, 3), chunk_size=4)) == [
        b"alpha\n",
        b"beta gamma\r\n",
        b"delta\n",
    ]


def test_passthru_reports_matches_and_context_in_order() -> None:
    sink = _RecordingSink()
    finish = Searcher(passthru=True).search_slice("beta", b"alpha\nbeta\ngamma\n", sink)

    assert sink.events == [
        ("context", b"alpha\n", 1),
        ("match", b"beta\n", 2),
        ("context", b"gamma\n", 3),
    ]
    assert finish.lines_searched == 3
    assert finish.matches == 1
    assert finish.byte_count == len(b"alpha\nbeta\ngamma\n")
    assert not finish.stopped_early


def test_without_passthru_only_matches_are_reported() -> None:
    sink = _RecordingSink()
    Searcher().search_slice("a", b"abc\nxyz\ncba\n", sink)
    assert [kind for kind, _, _ in sink.events] == ["match", "match"]


def test_pattern_is_not_anchored() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True).search_slice("[a-z]", b"123abc456\n789\n", sink)
    assert [kind for kind, _, _ in sink.events] == ["match", "context"]


def test_anchors_apply_per_line_without_terminator() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True).search_slice("^end$", b"end\r\nthe end\nend", sink)
    assert [kind for kind, _, _ in sink.events] == ["match", "context", "match"]


def test_inline_case_insensitive_flag() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True).search_slice("(?i)error", b"ERROR here\nfine\n", sink)
    assert sink.events[0][0] == "match"


def test_accepts_compiled_pattern() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True).search_slice(re.compile("b+"), b"abba\n", sink)
    assert sink.events == [("match", b"abba\n", 1)]


def test_sink_can_stop_the_search() -> None:
    sink = _RecordingSink(stop_after=2)
    finish = Searcher(passthru=True).search_slice("x", b"x\nx\nx\nx\n", sink)

    assert len(sink.events) == 2
    assert finish.stopped_early
    assert finish.lines_searched == 2


def test_begin_is_called_once_before_reading() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True).search_slice("a", b"a\nb\n", sink)
    assert sink.began == 1


def test_sink_can_decline_to_start() -> None:
    class _UnreadableReader:
        def read(self, n: int) -> bytes:
            raise AssertionError("reader should not be touched")

    sink = _RecordingSink(start=False)
    finish = Searcher(passthru=True).search_reader("a", _UnreadableReader(), sink)

    assert finish.stopped_early
    assert finish.lines_searched == 0
    assert sink.events == []


def test_line_numbers_can_be_disabled() -> None:
    sink = _RecordingSink()
    Searcher(passthru=True, line_number=False).search_slice("a", b"a\nb\n", sink)
    assert all(line_number is None for _, _, line_number in sink.events)


def test_invalid_pattern_raises_pattern_error() -> None:
    sink = _RecordingSink()
    with pytest.raises(PatternError, match="invalid pattern") as exc_info:
        Searcher(passthru=True).search_slice("(unclosed", b"text\n", sink)

    assert isinstance(exc_info.value, SearchError)
    assert isinstance(exc_info.value.__cause__, re.error)
    assert sink.events == []


def test_read_errors_propagate() -> None:
    class _FailingReader:
        def read(self, n: int) -> bytes:
            raise OSError("read failed")

    with pytest.raises(OSError, match="read failed"):
        Searcher(passthru=True).search_reader("x", _FailingReader(), _RecordingSink())
