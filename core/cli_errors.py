"""Standardized CLI error codes and error handling.

Every error that can end a CLI invocation derives from ``CLIError`` so the
entry point can map it to a stable exit code.
"""
from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, TextIO


class ExitCode(IntEnum):
    """Standard CLI exit codes."""
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 6
    INTERRUPTED = 130  # Standard for Ctrl+C


@dataclass
class CLIError(Exception):
    """CLI error with exit code and message."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    """Configuration-related error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


class NotFoundError(CLIError):
    """Resource not found error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NOT_FOUND, hint)


def handle_error(error: BaseException, verbose: bool = False, stream: Optional[TextIO] = None) -> int:
    """Report an exception and return the exit code to use.

    Args:
        error: The exception to handle.
        verbose: If True, print stack trace for unexpected errors.
        stream: Where to write the report (default stderr).

    Returns:
        Exit code to use.
    """
    out = stream or sys.stderr
    if isinstance(error, CLIError):
        print(f"Error: {error.message}", file=out)
        if error.hint:
            print(f"Hint: {error.hint}", file=out)
        return int(error.code)

    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=out)
        return int(ExitCode.INTERRUPTED)

    # Unexpected error
    print(f"Error: {error}", file=out)
    if verbose:
        traceback.print_exception(type(error), error, error.__traceback__, file=out)
    return int(ExitCode.ERROR)
