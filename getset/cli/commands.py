from __future__ import annotations

import argparse
import os
import sys

from getset.config import Config, ConfigError, load_config
from getset.console import Console
from getset.executor import (
    CommandRunner,
    ExecutionError,
    ExecutionMode,
    build_strategy,
)
from getset.orchestrator import Orchestrator, OrchestratorError
from getset.telemetry import PlatformXClient, Telemetry, get_globals

from .args import build_parser
from .log import setup_logging

# 128 + SIGPIPE, what a shell reports for a writer whose reader went away
BROKEN_PIPE_EXIT = 141


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    console = Console()

    try:
        return cmd_run(args, console)

    except (ConfigError, OrchestratorError) as exc:
        console.error(str(exc))
        return 2

    except ExecutionError:
        return 1

    except KeyboardInterrupt:
        return 130

    except BrokenPipeError:
        _silence_stdout()
        return BROKEN_PIPE_EXIT


def cmd_run(args: argparse.Namespace, console: Console) -> int:
    config = load_config(args.file)

    mode = ExecutionMode.detect(sys.stdout)
    strategy = build_strategy(mode, console)
    runner = CommandRunner(strategy, console, verbose=args.verbose)
    orchestrator = Orchestrator(runner, console, telemetry=_telemetry_for(config))

    orchestrator.run(config.commands, step=args.step, report=args.report)
    return 0


def _telemetry_for(config: Config) -> Telemetry | None:
    if config.platformx is None:
        return None
    return PlatformXClient(config.platformx, get_globals())


def _silence_stdout() -> None:
    # Nothing may reach the closed pipe afterwards, the exit-time flush included
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, ValueError, OSError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def main() -> None:
    sys.exit(run_cli())
