from .relay import OutputRelay, RelayLine, Stream
from .runner import CommandRunner
from .strategy import (
    ExecutionMode,
    ExecutionStrategy,
    PipedStrategy,
    PtyStrategy,
    build_strategy,
)
from .types import (
    CommandFailed,
    ExecutionError,
    ExecutionOutcome,
    RunResult,
    SpawnError,
    WaitError,
)

__all__ = [
    "OutputRelay",
    "RelayLine",
    "Stream",
    "CommandRunner",
    "ExecutionMode",
    "ExecutionStrategy",
    "PipedStrategy",
    "PtyStrategy",
    "build_strategy",
    "CommandFailed",
    "ExecutionError",
    "ExecutionOutcome",
    "RunResult",
    "SpawnError",
    "WaitError",
]
