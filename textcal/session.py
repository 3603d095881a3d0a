"""Line-reading front ends: interactive prompt and headless batch file."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from core.cli_errors import NotFoundError

from .interpreter import CommandInterpreter

LOG = logging.getLogger(__name__)

EXIT_WORD = "exit"
BANNER = "Calendar App Interactive Mode. Type 'exit' to quit."


def _is_exit(line: str) -> bool:
    return line.strip().lower() == EXIT_WORD


def run_lines(interpreter: CommandInterpreter, lines: Iterable[str], *, echo: bool = True) -> int:
    """Run lines until ``exit`` or end of input. Returns the number of failed commands."""
    failures = 0
    writer = interpreter.writer
    for raw in lines:
        line = raw.rstrip("\r\n")
        if echo:
            writer.print(f"> {line}")
        if _is_exit(line):
            writer.print("Exiting.")
            break
        if not line.strip():
            continue
        if not interpreter.execute(line).ok():
            failures += 1
    LOG.debug("batch finished with %d failed command(s)", failures)
    return failures


def run_headless(interpreter: CommandInterpreter, path: str, *, echo: bool = True) -> int:
    """Run every command in ``path``; a failing command does not stop the batch."""
    p = Path(path)
    if not p.is_file():
        raise NotFoundError(f"Command file not found: {p}", hint="textcal headless <commands.txt>")
    with open(p, encoding="utf-8") as fh:
        return run_lines(interpreter, fh, echo=echo)


def run_interactive(
    interpreter: CommandInterpreter,
    stdin: Optional[TextIO] = None,
    *,
    prompt: str = "> ",
) -> int:
    """Prompt for commands until ``exit`` or end of input. Returns the number of failed commands."""
    source = stdin or sys.stdin
    writer = interpreter.writer
    writer.print(BANNER)
    failures = 0
    while True:
        writer.write(prompt)
        raw = source.readline()
        if not raw:
            writer.print("")
            writer.print("Exiting.")
            break
        line = raw.rstrip("\r\n")
        if _is_exit(line):
            writer.print("Exiting.")
            break
        if not line.strip():
            continue
        if not interpreter.execute(line).ok():
            failures += 1
    return failures
