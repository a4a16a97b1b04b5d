"""Shared state for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from rustprebuilts.core.config import Config, find_config, load_config
from rustprebuilts.core.errors import ErrorCode
from rustprebuilts.core.result import Err, Ok
from rustprebuilts.output.console import ConsoleProtocol, RichConsole
from rustprebuilts.platform.detection import BuildOS, detect_build_os, parse_build_os


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    build_os: BuildOS
    console: ConsoleProtocol


def build_context(*, host: str | None = None) -> CLIContext:
    """Load config and resolve the build host; exits on bad input."""
    console = RichConsole()

    config = Config()
    path = find_config()
    if path is not None:
        match load_config(path):
            case Err(e):
                console.error(f"{e.path}: {e.message}")
                raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
            case Ok(loaded):
                config = loaded

    if host is None:
        build_os = detect_build_os()
    else:
        parsed = parse_build_os(host)
        if parsed is None:
            console.error(f"unknown build host: {host}")
            console.print("Available: linux, linux_musl, darwin")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        build_os = parsed

    return CLIContext(config=config, build_os=build_os, console=console)
