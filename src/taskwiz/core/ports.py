# src/taskwiz/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session depends on Protocols instead of concrete implementations.
This keeps the store and the terminal swappable and makes testing easier.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

LineReader = Callable[[], str]
# Returns one line of user input (without prompt). Raises EOFError at end of input.

LineWriter = Callable[[str], None]


class TaskRepo(Protocol):
    """Task persistence: CRUD by identifier, insertion-ordered listing."""

    def list(self) -> list[Any]: ...
    def create(self, fields: Mapping[str, Any]) -> Any: ...
    def get(self, task_id: int) -> Any: ...
    def update(self, task: Any, fields: Mapping[str, Any]) -> Any: ...
    def delete(self, task: Any) -> Any: ...
