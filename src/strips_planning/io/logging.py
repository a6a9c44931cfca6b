"""Define a shared console and output sinks receiving planner diagnostics."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()


class OutputLevel(str, Enum):
    """Severity of a diagnostic message sent to an output sink."""

    INFO = "info"
    ERROR = "error"


class OutputSink(ABC):
    """A destination for planner diagnostics (progress messages and reported errors)."""

    @abstractmethod
    def write(self, message: str, level: OutputLevel = OutputLevel.INFO) -> None:
        """Write a single diagnostic message to the sink.

        :param message: Text of the message
        :param level: Severity of the message (defaults to INFO)
        """


class ConsoleSink(OutputSink):
    """Output sink that prints messages to the shared rich console."""

    def write(self, message: str, level: OutputLevel = OutputLevel.INFO) -> None:
        """Print the message to the console, highlighting errors."""
        if level == OutputLevel.ERROR:
            console.print(f"[bold red]ERROR:[/bold red] {message}", highlight=False)
        else:
            console.print(message, highlight=False)


class LoggingSink(OutputSink):
    """Output sink that forwards messages to a standard library logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        """Initialize the sink with the logger to forward to (defaults to this module's)."""
        self.target = target or logger

    def write(self, message: str, level: OutputLevel = OutputLevel.INFO) -> None:
        """Forward the message to the logger at the matching severity."""
        if level == OutputLevel.ERROR:
            self.target.error(message)
        else:
            self.target.info(message)


class BufferSink(OutputSink):
    """Output sink that keeps every message in memory, in the order written."""

    def __init__(self) -> None:
        """Initialize an empty buffer of messages."""
        self.messages: list[tuple[OutputLevel, str]] = []

    def write(self, message: str, level: OutputLevel = OutputLevel.INFO) -> None:
        """Append the message to the buffer."""
        self.messages.append((level, message))

    @property
    def errors(self) -> list[str]:
        """Retrieve the text of all error messages written to the buffer."""
        return [text for level, text in self.messages if level == OutputLevel.ERROR]

    @property
    def infos(self) -> list[str]:
        """Retrieve the text of all informational messages written to the buffer."""
        return [text for level, text in self.messages if level == OutputLevel.INFO]
