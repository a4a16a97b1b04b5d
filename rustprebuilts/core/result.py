"""Minimal Ok/Err result type.

Services return `Result[T, E]` instead of raising for expected failures;
CLI commands pattern-match on it and map errors to exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]
