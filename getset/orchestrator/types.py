from dataclasses import dataclass, field

from getset.executor.types import RunResult


@dataclass(frozen=True)
class RunSummary:
    results: list[RunResult] = field(default_factory=list)
    total_s: float = 0.0


class OrchestratorError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class NoMatchError(OrchestratorError):
    def __init__(self, step: str):
        super().__init__(f"No steps found matching '{step}'")
        self.step = step
