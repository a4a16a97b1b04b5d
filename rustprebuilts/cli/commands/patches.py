"""apply-patches - apply tracked patches to an uploaded toolchain."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from rustprebuilts.cli.commands._helpers import patch_error_exit_code
from rustprebuilts.cli.context import build_context
from rustprebuilts.core.errors import ErrorCode
from rustprebuilts.core.result import Err, Ok
from rustprebuilts.services.patches import PatchService


def apply_patches(
    target: Optional[Path] = typer.Argument(None, help="Toolchain directory, e.g. 1.81.0"),
    patches_dir: Optional[Path] = typer.Option(None, "--patches", help="Patches directory"),
    strip: Optional[int] = typer.Option(None, "--strip", "-p", min=0, help="Path strip depth"),
    keep_going: bool = typer.Option(False, "--keep-going", help="Continue after a failed patch"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Apply every patch in the patches directory, in filename order."""
    if target is None:
        typer.echo("Usage: rust-prebuilts apply-patches [path_to_patch]", err=True)
        typer.echo("Example: rust-prebuilts apply-patches 1.81.0", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx = build_context()
    service = PatchService(build_os=ctx.build_os, config=ctx.config, console=ctx.console)

    result = service.apply(
        target, patches_dir=patches_dir, strip=strip, keep_going=keep_going, dry_run=dry_run
    )
    match result:
        case Err(e):
            ctx.console.error(e.message)
            raise typer.Exit(code=patch_error_exit_code(e))
        case Ok(applied):
            if not dry_run:
                ctx.console.success(f"Applied {len(applied)} patches")
