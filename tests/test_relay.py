from __future__ import annotations

import io
import subprocess

from getset.executor.relay import OutputRelay, RelayLine, Stream


class _BrokenPipe:
    """Yields the given lines, then fails the way a closed pipe does."""

    def __init__(self, lines: list[bytes]) -> None:
        self._lines = list(lines)

    def readline(self) -> bytes:
        if self._lines:
            return self._lines.pop(0)
        raise OSError("read failed")


def _by_stream(lines: list[RelayLine], stream: Stream) -> list[str]:
    return [line.text for line in lines if line.stream is stream]


def test_lines_are_tagged_and_stripped() -> None:
    relay = OutputRelay(io.BytesIO(b"one\r\ntwo\n"), io.BytesIO(b"oops\n"))

    lines = list(relay)

    assert _by_stream(lines, Stream.STDOUT) == ["one", "two"]
    assert _by_stream(lines, Stream.STDERR) == ["oops"]


def test_same_stream_order_is_preserved() -> None:
    proc = subprocess.Popen(
        ["sh", "-c", "echo a; echo x >&2; echo b; echo y >&2; echo c"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    with proc:
        lines = list(OutputRelay(proc.stdout, proc.stderr))
        proc.wait()

    assert _by_stream(lines, Stream.STDOUT) == ["a", "b", "c"]
    assert _by_stream(lines, Stream.STDERR) == ["x", "y"]


def test_unbalanced_streams_do_not_deadlock() -> None:
    # Far more than a pipe buffer on stdout while stderr stays quiet
    proc = subprocess.Popen(
        ["sh", "-c", "i=0; while [ $i -lt 20000 ]; do echo line$i; i=$((i+1)); done; echo done >&2"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    with proc:
        lines = list(OutputRelay(proc.stdout, proc.stderr))
        proc.wait()

    out = _by_stream(lines, Stream.STDOUT)
    assert len(out) == 20000
    assert out[0] == "line0"
    assert out[-1] == "line19999"
    assert _by_stream(lines, Stream.STDERR) == ["done"]


def test_read_error_ends_only_that_stream() -> None:
    relay = OutputRelay(_BrokenPipe([b"first\n"]), io.BytesIO(b"e1\ne2\n"))

    lines = list(relay)

    assert _by_stream(lines, Stream.STDOUT) == ["first"]
    assert _by_stream(lines, Stream.STDERR) == ["e1", "e2"]


def test_undecodable_bytes_are_replaced() -> None:
    relay = OutputRelay(io.BytesIO(b"caf\xe9\n"), io.BytesIO(b""))

    assert list(relay) == [RelayLine(Stream.STDOUT, "caf\ufffd")]


def test_final_line_without_newline_is_delivered() -> None:
    relay = OutputRelay(io.BytesIO(b"partial"), io.BytesIO(b""))

    assert [line.text for line in relay] == ["partial"]


def test_empty_streams_yield_nothing() -> None:
    assert list(OutputRelay(io.BytesIO(b""), io.BytesIO(b""))) == []
