"""
Progress reporters.
"""
import sys
from typing import List, Protocol, TextIO


class Reporter(Protocol):
    """Line oriented progress sink."""

    def write_line(self, message: str) -> None: ...


class ConsoleReporter:
    """Writes progress lines to a stream (stdout by default)."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream

    def write_line(self, message: str) -> None:
        print(message, file=self.stream or sys.stdout, flush=True)


class MemoryReporter:
    """Collects progress lines in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def write_line(self, message: str) -> None:
        self.lines.append(message)
