"""Init command implementation.

Writes the default profile to disk so it can be edited.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotstrap.core.paths import get_profile_path
from dotstrap.core.profile import ProfileError, profile_exists, save_profile
from dotstrap.models.profile import Profile
from dotstrap.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Write the default profile for editing.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_profile(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the profile (default: ~/.config/dotstrap/profile.toml).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing profile.",
        ),
    ] = False,
) -> None:
    """Write the default profile.

    The profile lists the packages, plugins and upstream URLs that
    `dotstrap setup` provisions. Edit it to customise the setup.
    """
    if ctx.invoked_subcommand is not None:
        return

    path = output or get_profile_path()

    if profile_exists(path) and not force:
        print_error(f"Profile already exists: {path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_profile(Profile(), path)
    except ProfileError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Profile written to {saved}")
