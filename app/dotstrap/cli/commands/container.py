"""Container command implementation.

Builds the test image and runs the container variant of the setup in it.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotstrap.core.container import IMAGE_NAME, ContainerError, run_container_test
from dotstrap.utils.formatting import print_error, print_info, print_warning
from dotstrap.utils.shell import command_exists

app = typer.Typer(
    help="Test the setup in a Docker container.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def container(
    ctx: typer.Context,
    context: Annotated[
        Path,
        typer.Option(
            "--context",
            "-c",
            help="Project directory containing the Dockerfile.",
            file_okay=False,
        ),
    ] = Path("."),
    tag: Annotated[
        str,
        typer.Option(
            "--tag",
            "-t",
            help="Image tag used with plain docker.",
        ),
    ] = IMAGE_NAME,
) -> None:
    """Build the test container and run the setup inside it.

    Uses docker-compose when installed, otherwise docker. The project
    directory is mounted into the container so edits are picked up
    without a rebuild.
    """
    if ctx.invoked_subcommand is not None:
        return

    print_info("Starting dotfiles container test")
    if not command_exists("zsh"):
        print_warning("zsh is not installed on the host. This will not affect container testing.")

    print_info("Building container environment...")
    try:
        code = run_container_test(context, tag)
    except ContainerError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if code != 0:
        print_error(f"Container command exited with code {code}")
        raise typer.Exit(code=code)
