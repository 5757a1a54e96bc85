"""
Narration Sinks

Destinations for narration lines. The CLI writes to stdout through a
StreamSink; tests collect lines with a ListSink.
"""

import sys
from abc import ABC, abstractmethod
from typing import Iterable, Optional, TextIO


class NarrationSink(ABC):
    """Receives narration lines in emission order."""

    @abstractmethod
    def emit(self, line: str) -> None:
        """Write one line (without trailing newline)."""
        pass

    def emit_all(self, lines: Iterable[str]) -> int:
        """Write every line; returns how many were written."""
        count = 0
        for line in lines:
            self.emit(line)
            count += 1
        return count


class StreamSink(NarrationSink):
    """Writes lines to a text stream, stdout by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, line: str) -> None:
        self.stream.write(line + "\n")


class ListSink(NarrationSink):
    """Collects lines in memory."""

    def __init__(self):
        self.lines: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)
