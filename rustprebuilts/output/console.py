"""Console output abstraction.

Commands and services print through `ConsoleProtocol` so tests can swap
in `MockConsole` and assert on what was shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from rich.console import Console

__all__ = ["ConsoleProtocol", "MockConsole", "RichConsole", "Style"]


class Style(Enum):
    DEFAULT = ""
    DIM = "dim"
    INFO = "cyan"
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "bold red"
    HEADER = "bold"


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def header(self, title: str) -> None: ...

    def print_json(self, data: str) -> None: ...


class RichConsole:
    """Console backed by rich. Errors and warnings go to stderr."""

    def __init__(self, *, no_color: bool = False) -> None:
        self._out = Console(highlight=False, no_color=no_color, soft_wrap=True)
        self._err = Console(stderr=True, highlight=False, no_color=no_color, soft_wrap=True)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=style.value or None, markup=False)

    def success(self, message: str) -> None:
        self._out.print(message, style=Style.SUCCESS.value, markup=False)

    def warning(self, message: str) -> None:
        self._err.print(f"warning: {message}", style=Style.WARNING.value, markup=False)

    def error(self, message: str) -> None:
        self._err.print(f"error: {message}", style=Style.ERROR.value, markup=False)

    def header(self, title: str) -> None:
        self._out.print(title, style=Style.HEADER.value, markup=False)

    def print_json(self, data: str) -> None:
        self._out.print_json(data)


@dataclass
class MockConsole:
    """Records every message as (kind, text)."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.messages.append(("print", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def header(self, title: str) -> None:
        self.messages.append(("header", title))

    def print_json(self, data: str) -> None:
        self.messages.append(("json", data))

    def texts(self, kind: str | None = None) -> list[str]:
        return [text for k, text in self.messages if kind is None or k == kind]
