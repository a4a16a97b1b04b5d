from __future__ import annotations

from typing import NoReturn

import typer

from rustprebuilts.core.errors import ErrorCode
from rustprebuilts.output.console import ConsoleProtocol, Style
from rustprebuilts.services.describe import DescribeError
from rustprebuilts.services.patches import PatchError


def exit_on_describe_error(error: DescribeError, console: ConsoleProtocol) -> NoReturn:
    console.error(error.message)
    if error.kind == "unknown_module_type":
        console.print(f"Available: {', '.join(error.details)}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    for detail in error.details:
        console.print(f"  {detail}", Style.DIM)
    if error.kind == "root_missing":
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    raise typer.Exit(code=int(ErrorCode.BUILD_ERROR))


def patch_error_exit_code(error: PatchError) -> int:
    """Exit code for a failed patch run.

    A patch tool that exited normally passes its own status through; one
    killed by a signal (negative status) maps to BUILD_ERROR.
    """
    match error.kind:
        case "patch_failed":
            return error.returncode if error.returncode > 0 else int(ErrorCode.BUILD_ERROR)
        case "io_error":
            return int(ErrorCode.IO_ERROR)
        case _:
            return int(ErrorCode.ENV_ERROR)
