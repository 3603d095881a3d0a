"""CLI output sink.

Commands never write to ``sys.stdout`` directly; they receive an
``OutputWriter`` so that interactive, batch, and test runs can point output at
any text stream.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TextIO


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    quiet: bool = False
    file: Optional[TextIO] = None
    error_file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout

    @property
    def error_stream(self) -> TextIO:
        """Warnings and errors follow ``file`` when one is given."""
        return self.error_file or self.file or sys.stderr


class OutputWriter:
    """Handles output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @classmethod
    def to_stream(cls, stream: TextIO, **kwargs: Any) -> "OutputWriter":
        """Writer sending both normal and error output to ``stream``."""
        return cls(OutputConfig(file=stream, **kwargs))

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def write(self, text: str) -> None:
        """Write without a trailing newline (prompts)."""
        if self.config.quiet:
            return
        stream = self.config.stream
        stream.write(text)
        stream.flush()

    def print_lines(self, lines: Sequence[str]) -> None:
        for line in lines:
            self.print(line)

    def print_error(self, message: str) -> None:
        print(f"Error: {message}", file=self.config.error_stream)

    def print_warning(self, message: str) -> None:
        print(f"Warning: {message}", file=self.config.error_stream)
