"""List the supported prebuilt targets."""

from __future__ import annotations

from typing import Optional

import typer

from rustprebuilts.cli.context import build_context
from rustprebuilts.core.versions import resolve_version
from rustprebuilts.output.console import Style
from rustprebuilts.prebuilts.props import rust_lib_dir
from rustprebuilts.prebuilts.targets import TARGETS


def targets(
    host: Optional[str] = typer.Option(None, "--host", help="Build host: linux|linux_musl|darwin"),
) -> None:
    """Show every target and where its libraries are looked up."""
    ctx = build_context(host=host)
    rust_dir = rust_lib_dir(resolve_version(ctx.config.version))

    ctx.console.header(f"build host: {ctx.build_os.value}")
    for t in TARGETS:
        marker = "*" if t.build_os is ctx.build_os else " "
        style = Style.DEFAULT if t.build_os is ctx.build_os else Style.DIM
        ctx.console.print(
            f"{marker} {t.key:<20} {t.family}/{rust_dir}/{t.triple}/lib  ({t.dylib_extension})",
            style,
        )
