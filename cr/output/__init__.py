"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .workflow import (
    CommandFailureReporter,
    CommandOutputSink,
    FailureReporter,
    FileOutputSink,
    MockFailureReporter,
    MockOutputSink,
    OutputSink,
)

__all__ = [
    "CommandFailureReporter",
    "CommandOutputSink",
    "ConsoleProtocol",
    "FailureReporter",
    "FileOutputSink",
    "MockConsole",
    "MockFailureReporter",
    "MockOutputSink",
    "OutputSink",
    "RichConsole",
    "Style",
]
