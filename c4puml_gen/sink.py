# c4puml_gen/sink.py
from __future__ import annotations

from typing import Iterable, TextIO

from .constants import INDENT


class LineSink:
    """Append-only line buffer for one view render.

    Callers build each line completely before calling write(), so a failing
    render never leaves half a line behind.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, line: str = "", depth: int = 0) -> None:
        self._lines.append(f"{INDENT * depth}{line}" if line else "")

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n" if self._lines else ""

    def flush_to(self, stream: TextIO) -> None:
        stream.write(self.getvalue())
        stream.flush()
