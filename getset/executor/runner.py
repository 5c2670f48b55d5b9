from __future__ import annotations

from typing import TYPE_CHECKING

from getset.config import CommandEntry

from .strategy import ExecutionStrategy
from .types import CommandFailed, ExecutionError

if TYPE_CHECKING:
    from getset.console import Console


class CommandRunner:
    def __init__(
        self, strategy: ExecutionStrategy, console: Console, *, verbose: bool = False
    ):
        self.strategy = strategy
        self.console = console
        self.verbose = verbose

    def run(self, entry: CommandEntry) -> float:
        self.console.command_start(entry, verbose=self.verbose)

        try:
            outcome = self.strategy.execute(entry.command)
        except ExecutionError as exc:
            self.console.command_finish(entry, exc.elapsed, success=False)
            raise

        self.console.command_finish(entry, outcome.elapsed, outcome.success)

        if not outcome.success:
            raise CommandFailed(entry.title, outcome.returncode, elapsed=outcome.elapsed)

        return outcome.elapsed
