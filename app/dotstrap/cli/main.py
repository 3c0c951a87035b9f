"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from dotstrap import __version__
from dotstrap.cli.commands import container, history, init, setup
from dotstrap.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="dotstrap",
    help="Bootstrap a development environment on Debian-based systems.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotstrap version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """dotstrap - Development environment bootstrap.

    Installs packages, shell plugins and toolchains, and copies your
    dotfiles into place. Every step is idempotent.
    """
    configure_logging(verbose=verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(setup.app, name="setup")
app.add_typer(init.app, name="init")
app.add_typer(history.app, name="history")
app.add_typer(container.app, name="container")


if __name__ == "__main__":
    app()
