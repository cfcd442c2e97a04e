"""Pass-through text writer that counts what goes through it."""
from __future__ import annotations

from typing import Iterable, TextIO


class CountingWriter:
    """Forward writes to ``output`` while counting the characters written.

    Nothing is buffered, so the count can be read at any point without a
    second pass over the written text.
    """

    def __init__(self, output: TextIO) -> None:
        self._output = output
        self._count = 0

    @property
    def character_count(self) -> int:
        return self._count

    def count(self) -> int:
        return self._count

    @property
    def encoding(self) -> str | None:
        return getattr(self._output, "encoding", None)

    def write(self, text: str) -> int:
        self._count += len(text)
        self._output.write(text)
        return len(text)

    def writelines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._output.flush()
