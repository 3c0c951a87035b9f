"""CLI commands for dotstrap.

This package contains all subcommand implementations.
"""

from dotstrap.cli.commands import container, history, init, setup

__all__ = ["container", "history", "init", "setup"]
