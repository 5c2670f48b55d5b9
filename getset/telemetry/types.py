from dataclasses import dataclass
from typing import Protocol


class Telemetry(Protocol):
    def notify_start(self) -> None: ...

    def notify_error(self, elapsed: float, message: str) -> None: ...

    def notify_complete(self, elapsed: float) -> None: ...


@dataclass(frozen=True)
class Globals:
    user_shell: str
    github_username: str
    git_email: str


class TelemetryError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
