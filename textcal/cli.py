"""textcal command line.

Commands:
  interactive          prompt for calendar commands until 'exit'
  headless FILE        run the calendar commands in FILE, one per line

Settings come from --config, $TEXTCAL_CONFIG, or ~/.config/textcal/config.yaml.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from core.cli_errors import ExitCode
from core.cli_framework import CLIApp

from . import __version__
from .config import Settings, load_settings
from .interpreter import CommandInterpreter
from .session import run_headless, run_interactive

app = CLIApp(
    "textcal",
    "In-memory calendar driven by text commands",
    version=__version__,
    epilog=(
        "Command language:\n"
        "  create event <name> from <start> to <end> [repeats <days> for <N> times|until <datetime>]\n"
        "  create event <name> on <date> [repeats <days> for <N> times|until <date>] [--autodecline]\n"
        "  edit event(s) <property> <name> [from <start> [to <end>]] with <value>\n"
        "  print events on <date> | print events from <start> to <end>\n"
        "  show status on <datetime> | export cal <file> | export googlecsv <file>\n"
        "Days: M T W R F S U (R = Thursday, U = Sunday)"
    ),
)


def _settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(getattr(args, "config", None))
    if not getattr(args, "verbose", False):
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _interpreter(args: argparse.Namespace, settings: Settings) -> CommandInterpreter:
    auto_decline = settings.auto_decline or bool(getattr(args, "autodecline", False))
    return CommandInterpreter(writer=args._output, auto_decline=auto_decline)


@app.command("interactive", help="Prompt for commands until 'exit'")
@app.argument("--autodecline", action="store_true", help="Reject every conflicting event")
def cmd_interactive(args: argparse.Namespace) -> int:
    settings = _settings(args)
    run_interactive(_interpreter(args, settings), prompt=settings.prompt)
    return ExitCode.SUCCESS


@app.command("headless", help="Run commands from a file")
@app.argument("file", help="Text file with one command per line")
@app.argument("--autodecline", action="store_true", help="Reject every conflicting event")
@app.argument("--no-echo", action="store_true", help="Do not echo each command before running it")
def cmd_headless(args: argparse.Namespace) -> int:
    settings = _settings(args)
    echo = settings.echo_commands and not args.no_echo
    run_headless(_interpreter(args, settings), args.file, echo=echo)
    return ExitCode.SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    return app.run(argv)
