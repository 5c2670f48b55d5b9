from __future__ import annotations

import fcntl
import logging
import os
import pty
import subprocess
import termios
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from .relay import OutputRelay
from .types import ExecutionOutcome, SpawnError, WaitError

if TYPE_CHECKING:
    from getset.console import Console

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "sh"


class ExecutionMode(Enum):
    PTY = "pty"
    PIPED = "piped"

    @classmethod
    def detect(cls, stream: TextIO) -> ExecutionMode:
        try:
            interactive = stream.isatty()
        except (AttributeError, ValueError):
            interactive = False
        return cls.PTY if interactive else cls.PIPED


class ExecutionStrategy(ABC):
    @abstractmethod
    def execute(self, command: str) -> ExecutionOutcome: ...


class PipedStrategy(ExecutionStrategy):
    def __init__(self, console: Console, shell: str = DEFAULT_SHELL):
        self.console = console
        self.shell = shell

    def execute(self, command: str) -> ExecutionOutcome:
        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                [self.shell, "-c", command],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise SpawnError(command, exc, elapsed=time.monotonic() - start) from exc

        with proc:
            for line in OutputRelay(proc.stdout, proc.stderr):
                self.console.relay(line)
            try:
                returncode = proc.wait()
            except OSError as exc:
                raise WaitError(
                    command, exc, elapsed=time.monotonic() - start
                ) from exc

        elapsed = time.monotonic() - start
        return ExecutionOutcome(returncode == 0, elapsed, returncode)


class PtyStrategy(ExecutionStrategy):
    def __init__(self, fallback: ExecutionStrategy, shell: str = DEFAULT_SHELL):
        self.fallback = fallback
        self.shell = shell

    def execute(self, command: str) -> ExecutionOutcome:
        try:
            leader_fd, follower_fd = pty.openpty()
        except OSError as exc:
            logger.debug("No pseudo-terminal available (%s), using pipes", exc)
            return self.fallback.execute(command)

        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                [self.shell, "-c", command],
                start_new_session=True,
                preexec_fn=lambda: fcntl.ioctl(follower_fd, termios.TIOCSCTTY, 0),
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Spawn on pseudo-terminal failed (%s), using pipes", exc)
            proc = None
        finally:
            # The child holds its own reference to the terminal
            os.close(follower_fd)

        if proc is None:
            os.close(leader_fd)
            return self.fallback.execute(command)

        try:
            returncode = proc.wait()
        except OSError as exc:
            raise WaitError(command, exc, elapsed=time.monotonic() - start) from exc
        finally:
            os.close(leader_fd)

        elapsed = time.monotonic() - start
        return ExecutionOutcome(returncode == 0, elapsed, returncode)


def build_strategy(
    mode: ExecutionMode, console: Console, shell: str = DEFAULT_SHELL
) -> ExecutionStrategy:
    piped = PipedStrategy(console, shell=shell)
    match mode:
        case ExecutionMode.PTY:
            return PtyStrategy(piped, shell=shell)
        case ExecutionMode.PIPED:
            return piped
        case _:
            raise AssertionError("Unreachable")
