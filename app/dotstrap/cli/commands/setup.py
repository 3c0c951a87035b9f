"""Setup command implementation.

Provisions the development environment: packages, shell framework,
plugins, toolchains and configuration files.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotstrap.cli.display import create_results_table, print_completion, print_run_summary
from dotstrap.core.preflight import PreflightError, run_preflight
from dotstrap.core.profile import ProfileError, resolve_profile
from dotstrap.core.runner import record_run, run_plan
from dotstrap.models.profile import Variant
from dotstrap.operators.apt import AptOperator
from dotstrap.steps.base import StepContext
from dotstrap.steps.plan import build_plan
from dotstrap.utils.formatting import configure_logging, console, print_error, print_info

app = typer.Typer(
    help="Set up the development environment.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def setup(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-d",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    no_backup: Annotated[
        bool,
        typer.Option(
            "--no-backup",
            "-n",
            help="Skip backing up existing configurations.",
        ),
    ] = False,
    container: Annotated[
        bool,
        typer.Option(
            "--container",
            help="Lightweight container variant (no heavy builds or toolchains).",
        ),
    ] = False,
    profile_path: Annotated[
        Path | None,
        typer.Option(
            "--profile",
            "-p",
            help="Profile file (default: ~/.config/dotstrap/profile.toml if present).",
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
    """Set up the development environment.

    Installs git, zsh, oh-my-zsh and its plugins, CLI tools, neovim,
    Node.js, Go, Rust, LazyVim and TPM, and copies .zshrc and .tmux.conf
    into your home directory. Each step is skipped when its target is
    already present, so the command is safe to re-run.

    Examples:
        dotstrap setup                # Full host setup
        dotstrap setup --dry-run      # Show what would be done
        dotstrap setup -n             # Overwrite configs without backups
        dotstrap setup --container    # Container test variant
    """
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    verbose = verbose or bool(obj.get("verbose", False))
    if verbose:
        configure_logging(verbose=True)

    try:
        package_manager = run_preflight()
    except PreflightError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        profile = resolve_profile(profile_path)
    except ProfileError as e:
        print_error(f"Failed to load profile: {e}")
        raise typer.Exit(code=1) from e

    variant: Variant = "container" if container else "host"
    if variant == "container":
        print_info("Starting container test environment setup...")
        print_info("Running in container-optimized mode")
    else:
        print_info("Starting environment setup...")

    step_ctx = StepContext(
        profile=profile,
        apt=AptOperator(package_manager, verbose=verbose),
        variant=variant,
        dry_run=dry_run,
        backup=not no_backup,
        verbose=verbose,
    )

    report = run_plan(build_plan(profile, variant), step_ctx)
    record_run(report, command=_command_string(variant, dry_run, no_backup))

    if verbose or not report.success:
        console.print()
        console.print(create_results_table(report.results, dry_run=dry_run))
    print_run_summary(report)

    if report.error is not None:
        print_error(f"Step '{report.error.step}' failed: {report.error}")
        print_info("Fix the problem above and re-run; completed steps will be skipped.")
        raise typer.Exit(code=1)

    console.print()
    print_completion(report)


def _command_string(variant: Variant, dry_run: bool, no_backup: bool) -> str:
    parts = ["dotstrap", "setup"]
    if variant == "container":
        parts.append("--container")
    if dry_run:
        parts.append("--dry-run")
    if no_backup:
        parts.append("--no-backup")
    return " ".join(parts)
