from __future__ import annotations

import sys
from typing import Sequence, TextIO

import click

from getset.config import CommandEntry
from getset.executor.relay import RelayLine, Stream
from getset.executor.types import RunResult


def _secs(value: float) -> str:
    return f"{value:.2f}s"


class Console:
    def __init__(self, out: TextIO | None = None, err: TextIO | None = None):
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def echo(self, message: str = "", *, err: bool = False) -> None:
        click.echo(message, file=self.err if err else self.out)

    def relay(self, line: RelayLine) -> None:
        # Child output is written untouched, its own colors included
        target = self.out if line.stream is Stream.STDOUT else self.err
        target.write(line.text + "\n")
        target.flush()

    def command_start(self, entry: CommandEntry, *, verbose: bool = False) -> None:
        self.echo(
            f"{click.style('===>', bold=True, dim=True)} "
            f"{click.style(entry.title, bold=True, dim=True)}"
        )
        if verbose:
            self.echo(click.style(entry.command, fg="yellow", dim=True))

    def command_finish(self, entry: CommandEntry, elapsed: float, success: bool) -> None:
        glyph = click.style("✓", fg="green") if success else click.style("✗", fg="red")
        self.echo(
            f"{click.style('└──▶', dim=True)} {glyph} "
            f"{click.style(entry.title, bold=True)} "
            f"{click.style(f'({_secs(elapsed)})', dim=True)}"
        )

    def matches(self, step: str, entries: Sequence[CommandEntry]) -> None:
        self.echo(
            f"{click.style('Info:', fg='cyan', bold=True)} "
            f"Found {len(entries)} steps matching '{step}':"
        )
        for i, entry in enumerate(entries, start=1):
            self.echo(f"  {i}. {click.style(entry.title, fg='cyan')}")
        self.echo()

    def error(self, message: str) -> None:
        self.echo(f"{click.style('Error:', fg='red', bold=True)} {message}", err=True)

    def detail(self, message: str) -> None:
        self.echo(click.style(message, fg="red"), err=True)

    def all_set(self, total: float) -> None:
        self.echo()
        self.echo(f"🎯 All set! {click.style(f'({_secs(total)})', dim=True)}")

    def report(self, results: Sequence[RunResult], total: float) -> None:
        self.echo()
        self.echo(click.style("📊 Report", bold=True))
        for result in results:
            self.echo(
                f"{click.style('├──▶', dim=True)} "
                f"{click.style(_secs(result.duration_s), dim=True)} {result.title}"
            )
        self.echo(
            f"{click.style('└─▶', dim=True)} "
            f"{click.style(_secs(total), dim=True, bold=True)} "
            f"{click.style('Total', bold=True)}"
        )
