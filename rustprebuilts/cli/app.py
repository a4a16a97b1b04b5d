from __future__ import annotations

import typer

from rustprebuilts import __version__
from rustprebuilts.cli.commands.describe import describe, filegroup
from rustprebuilts.cli.commands.patches import apply_patches
from rustprebuilts.cli.commands.targets import targets

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
)


# Commands
app.command()(describe)
app.command()(filegroup)
app.command()(targets)
app.command(name="apply-patches")(apply_patches)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Locate prebuilt Rust sysroot libraries and patch toolchain drops."""


def main() -> None:
    app()
