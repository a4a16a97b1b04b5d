"""Describe commands - show what prebuilt modules resolve to."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from rustprebuilts.cli.commands._helpers import exit_on_describe_error
from rustprebuilts.cli.context import build_context
from rustprebuilts.core.result import Err, Ok
from rustprebuilts.core.versions import VERSION_ENV_VAR
from rustprebuilts.host.module import PropertyMap
from rustprebuilts.output.console import ConsoleProtocol, Style
from rustprebuilts.prebuilts.modules import (
    FILEGROUP_MODULE_TYPE,
    LIBRARY_MODULE_TYPE,
    STATIC_LIBRARY_MODULE_TYPE,
)
from rustprebuilts.services.describe import DescribeService


def _print_library(name: str, props: PropertyMap, console: ConsoleProtocol) -> None:
    console.header(name)
    targets = props.get("target")
    if not isinstance(targets, dict):
        targets = {}
    enabled = [(key, t) for key, t in targets.items() if isinstance(t, dict) and t.get("enabled")]
    if not enabled:
        console.print("no targets for this build host", Style.DIM)
        return

    for key, target in enabled:
        console.print(f"  {key}")
        console.print(f"    suffix:    {target.get('suffix', '')}")
        for link_dir in target.get("link_dirs", []):
            console.print(f"    link_dir:  {link_dir}", Style.DIM)
        for kind in ("rlib", "dylib"):
            srcs = target.get(kind, {}).get("srcs", [])
            for src in srcs:
                console.print(f"    {kind + ':':<10} {src}")


def describe(
    name: str = typer.Argument(..., help="Module name, e.g. libstd or prebuilt_libstd.rust_sysroot"),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Prebuilts root (module directory)"),
    static: bool = typer.Option(False, "--static", help="Sysroot static library (rlib only)"),
    host: Optional[str] = typer.Option(None, "--host", help="Build host: linux|linux_musl|darwin"),
    version: Optional[str] = typer.Option(None, "--rust-version", help="Toolchain version override"),
    as_json: bool = typer.Option(False, "--json", help="Print properties as JSON"),
) -> None:
    """Locate the prebuilt rlib/dylib for a sysroot library."""
    ctx = build_context(host=host)
    environ = {VERSION_ENV_VAR: version} if version else None

    service = DescribeService(
        build_os=ctx.build_os, config=ctx.config, console=ctx.console, environ=environ
    )
    type_name = STATIC_LIBRARY_MODULE_TYPE if static else LIBRARY_MODULE_TYPE

    match service.describe(type_name, name, root=root):
        case Err(error):
            exit_on_describe_error(error, ctx.console)
        case Ok(props):
            if as_json:
                ctx.console.print_json(json.dumps(props))
            else:
                _print_library(name, props, ctx.console)


def filegroup(
    name: str = typer.Argument(..., help="Filegroup module name"),
    srcs: list[str] = typer.Argument(..., help="Paths relative to the host's rustlib triple dir"),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Prebuilts root (module directory)"),
    host: Optional[str] = typer.Option(None, "--host", help="Build host: linux|linux_musl|darwin"),
    as_json: bool = typer.Option(False, "--json", help="Print properties as JSON"),
) -> None:
    """Resolve toolchain filegroup sources for the build host."""
    ctx = build_context(host=host)
    service = DescribeService(build_os=ctx.build_os, config=ctx.config, console=ctx.console)

    match service.describe(FILEGROUP_MODULE_TYPE, name, root=root, properties={"toolchain_srcs": srcs}):
        case Err(error):
            exit_on_describe_error(error, ctx.console)
        case Ok(props):
            if as_json:
                ctx.console.print_json(json.dumps(props))
                return
            resolved = props.get("srcs")
            for src in resolved if isinstance(resolved, list) else []:
                ctx.console.print(str(src))
