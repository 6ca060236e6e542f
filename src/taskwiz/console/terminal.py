# src/taskwiz/console/terminal.py

from __future__ import annotations

import logging

from ..core.ports import LineReader, LineWriter

logger = logging.getLogger(__name__)

CONTINUE_PROMPT = "\nPress Enter to continue..."


def _stdin_line() -> str:
    return input("")


class ConsoleIO:
    """
    Line-oriented prompt/response primitives.

    Every blocking read goes through `ask` or `pause`; both raise EOFError
    when input is exhausted. A line that cannot be decoded reads as empty,
    so it is rejected like any other invalid answer.
    """

    def __init__(self, read: LineReader | None = None, write: LineWriter | None = None) -> None:
        self._read = read or _stdin_line
        self._write = write or print

    def _read_line(self) -> str:
        try:
            return self._read()
        except UnicodeDecodeError as e:
            logger.debug("Undecodable input line: %s", e)
            return ""

    def say(self, text: str) -> None:
        self._write(text)

    def ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line().strip()

    def pause(self) -> None:
        """Block for a single acknowledgment before moving on."""
        self._write(CONTINUE_PROMPT)
        self._read_line()
