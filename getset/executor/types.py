import signal
from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionOutcome:
    success: bool
    elapsed: float
    returncode: int | None = None


@dataclass(frozen=True)
class RunResult:
    title: str
    duration_s: float


class ExecutionError(Exception):
    def __init__(self, message: str, *, elapsed: float = 0.0) -> None:
        super().__init__(message)
        self.elapsed = elapsed


class SpawnError(ExecutionError):
    def __init__(self, command: str, cause: BaseException, *, elapsed: float = 0.0):
        super().__init__(f"Failed to spawn command: {cause}", elapsed=elapsed)
        self.command = command
        self.cause = cause


class WaitError(ExecutionError):
    def __init__(self, command: str, cause: BaseException, *, elapsed: float = 0.0):
        super().__init__(f"Failed to wait for command: {cause}", elapsed=elapsed)
        self.command = command
        self.cause = cause


class CommandFailed(ExecutionError):
    def __init__(self, title: str, returncode: int | None, *, elapsed: float = 0.0):
        self.title = title
        self.returncode = returncode
        super().__init__(
            f"'{title}' {describe_status(returncode)}", elapsed=elapsed
        )


def describe_status(returncode: int | None) -> str:
    if returncode is None:
        return "exited with non-zero status"
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"terminated by signal {name}"
    return f"exited with status {returncode}"
