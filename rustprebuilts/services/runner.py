from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

__all__ = ["CommandRunner", "DefaultCommandRunner"]


class CommandRunner(Protocol):
    def run(self, args: list[str], *, stdin: Path | None = None) -> int: ...


class DefaultCommandRunner:
    """Runs commands with inherited stdout/stderr; returns the exit status.

    Raises OSError when `stdin` cannot be opened or the command cannot start.
    """

    def run(self, args: list[str], *, stdin: Path | None = None) -> int:
        if stdin is None:
            return subprocess.run(args, check=False).returncode
        with stdin.open("rb") as f:
            return subprocess.run(args, stdin=f, check=False).returncode
