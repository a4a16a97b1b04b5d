"""Process exit codes shared by all commands."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1  # bad arguments, unknown module type
    ENV_ERROR = 2  # missing directories, broken config
    BUILD_ERROR = 3  # prebuilt lookup or patch failure
    IO_ERROR = 4
