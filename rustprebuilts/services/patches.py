"""Apply the tracked patches to a freshly uploaded toolchain.

Patches are applied in filename order (name them `0001-...`, `0002-...`)
with `patch -p<strip> -d <target>`. There is no rollback: re-running
against an already patched tree fails in `patch` itself.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from rustprebuilts.core.result import Err, Ok, Result
from rustprebuilts.output.console import Style
from rustprebuilts.services.base import BaseService
from rustprebuilts.services.runner import CommandRunner, DefaultCommandRunner

if TYPE_CHECKING:
    from rustprebuilts.core.config import Config
    from rustprebuilts.output.console import ConsoleProtocol
    from rustprebuilts.platform.detection import BuildOS

__all__ = ["PatchError", "PatchService", "list_patches", "patch_command"]


@dataclass(frozen=True, slots=True)
class PatchError:
    kind: Literal["patches_missing", "target_missing", "patch_failed", "io_error"]
    message: str
    returncode: int = 1


def list_patches(patches_dir: Path) -> list[Path]:
    """Patch files in `patches_dir`, sorted by name. Subdirectories are skipped."""
    return sorted((p for p in patches_dir.iterdir() if p.is_file()), key=lambda p: p.name)


def patch_command(target: Path, strip: int) -> list[str]:
    return ["patch", f"-p{strip}", "-d", str(target)]


class PatchService(BaseService):
    def __init__(
        self,
        *,
        build_os: BuildOS,
        config: Config,
        console: ConsoleProtocol,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(build_os=build_os, config=config, console=console)
        self._runner = runner or DefaultCommandRunner()

    def apply(
        self,
        target: Path,
        *,
        patches_dir: Path | None = None,
        strip: int | None = None,
        keep_going: bool = False,
        dry_run: bool = False,
    ) -> Result[list[Path], PatchError]:
        """Apply every patch to `target`.

        Stops at the first failing patch unless `keep_going` is set; then
        the status of the last patch decides the result.
        """
        patches_dir = patches_dir or Path(self._config.patches.dir)
        strip = self._config.patches.strip if strip is None else strip

        if not patches_dir.is_dir():
            return Err(PatchError("patches_missing", f"patches directory not found: {patches_dir}"))
        if not target.is_dir():
            return Err(PatchError("target_missing", f"target directory not found: {target}"))

        patches = list_patches(patches_dir)
        cmd = patch_command(target, strip)

        self._console.print(f"Applying patches to {target}")
        applied: list[Path] = []
        last_failure: PatchError | None = None

        for patch in patches:
            self._console.print(f"----- Applying {patch}")
            if dry_run:
                self._console.print(f"{shlex.join(cmd)} < {patch}", Style.DIM)
                continue

            try:
                code = self._runner.run(cmd, stdin=patch)
            except OSError as e:
                return Err(PatchError("io_error", f"{patch.name}: {e}"))

            if code == 0:
                applied.append(patch)
                last_failure = None
                continue

            if code < 0:
                message = f"{patch.name}: patch killed by signal {-code}"
            else:
                message = f"{patch.name}: patch exited with code {code}"
            last_failure = PatchError("patch_failed", message, returncode=code)
            if not keep_going:
                return Err(last_failure)
            self._console.warning(last_failure.message)

        if last_failure is not None:
            return Err(last_failure)
        return Ok(applied)
