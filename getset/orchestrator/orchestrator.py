from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Sequence

from getset.config import CommandEntry
from getset.executor import CommandRunner, ExecutionError, RunResult
from getset.telemetry import Telemetry

from .types import NoMatchError, RunSummary

if TYPE_CHECKING:
    from getset.console import Console

logger = logging.getLogger(__name__)


def select_commands(
    entries: Sequence[CommandEntry], step: str | None
) -> list[CommandEntry]:
    if step is None:
        return list(entries)

    needle = step.lower()
    matches = [entry for entry in entries if needle in entry.title.lower()]

    if not matches:
        raise NoMatchError(step)

    return matches


class Orchestrator:
    def __init__(
        self,
        runner: CommandRunner,
        console: Console,
        telemetry: Telemetry | None = None,
    ):
        self.runner = runner
        self.console = console
        self.telemetry = telemetry

    def run(
        self,
        entries: Sequence[CommandEntry],
        *,
        step: str | None = None,
        report: bool = False,
    ) -> RunSummary:
        start = time.monotonic()
        self._notify(lambda t: t.notify_start())

        selected = select_commands(entries, step)
        if step is not None and len(selected) > 1:
            self.console.matches(step, selected)

        results: list[RunResult] = []

        for entry in selected:
            try:
                duration = self.runner.run(entry)
            except ExecutionError as exc:
                elapsed = time.monotonic() - start
                self.console.echo(err=True)
                self.console.error("A command failed")
                if self.runner.verbose:
                    self.console.detail(str(exc))
                self._notify(lambda t: t.notify_error(elapsed, str(exc)))
                raise

            results.append(RunResult(entry.title, duration))

        total = time.monotonic() - start
        self.console.all_set(total)

        if report:
            self.console.report(results, total)

        self._notify(lambda t: t.notify_complete(total))

        return RunSummary(results, total)

    def _notify(self, call: Callable[[Telemetry], None]) -> None:
        if self.telemetry is None:
            return
        try:
            call(self.telemetry)
        except Exception as exc:
            # Tracking must never change the outcome of a run
            logger.warning("Telemetry call failed: %s", exc)
