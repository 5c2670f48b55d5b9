from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import IO, Iterator

logger = logging.getLogger(__name__)


class Stream(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class RelayLine:
    stream: Stream
    text: str


class _EndOfStream:
    def __init__(self, stream: Stream) -> None:
        self.stream = stream


class OutputRelay:
    def __init__(self, stdout: IO[bytes], stderr: IO[bytes]) -> None:
        self._pipes = {Stream.STDOUT: stdout, Stream.STDERR: stderr}
        self._queue: queue.Queue[RelayLine | _EndOfStream] = queue.Queue()
        self._started = False

    def __iter__(self) -> Iterator[RelayLine]:
        if self._started:
            raise RuntimeError("OutputRelay can only be iterated once")
        self._started = True

        readers = [
            threading.Thread(
                target=self._read,
                args=(pipe, stream),
                name=f"relay-{stream.value}",
                daemon=True,
            )
            for stream, pipe in self._pipes.items()
        ]
        for reader in readers:
            reader.start()

        pending = len(readers)
        try:
            while pending:
                item = self._queue.get()
                if isinstance(item, _EndOfStream):
                    pending -= 1
                    continue
                yield item
        finally:
            for reader in readers:
                reader.join()

    def _read(self, pipe: IO[bytes], stream: Stream) -> None:
        try:
            for raw in iter(pipe.readline, b""):
                text = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                self._queue.put(RelayLine(stream, text))
        except (OSError, ValueError) as exc:
            # A broken stream ends quietly, the other one keeps going
            logger.debug("Stopped reading %s: %s", stream.value, exc)
        finally:
            self._queue.put(_EndOfStream(stream))
