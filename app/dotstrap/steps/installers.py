"""Steps that run upstream installer scripts.

The scripts are fetched with curl and piped to a shell, exactly as their
upstream documentation suggests. Nothing is pinned or checksummed beyond
the nvm release tag in the URL.
"""

from __future__ import annotations

import logging
import shlex

from dotstrap.core.paths import get_cargo_bin_dir, get_nvm_dir, get_oh_my_zsh_dir
from dotstrap.steps.base import Step, StepContext
from dotstrap.utils.shell import command_exists

logger = logging.getLogger(__name__)


def fetch_script(ctx: StepContext, url: str, *curl_opts: str) -> str:
    """Download an installer script and return its text.

    Args:
        ctx: Run context.
        url: Script URL.
        curl_opts: Extra curl options placed before the URL.

    Raises:
        StepError: If the download fails.
    """
    logger.debug("Fetching %s", url)
    # The script is the payload, never streamed.
    return ctx.run(["curl", "-fsSL", *curl_opts, url], capture=True).stdout


class OhMyZshStep(Step):
    """Install oh-my-zsh unattended unless ~/.oh-my-zsh exists.

    ``--unattended`` keeps the installer from changing the login shell and
    from exec'ing into zsh at the end.
    """

    @property
    def name(self) -> str:
        return "oh-my-zsh"

    @property
    def description(self) -> str:
        return "Installing oh-my-zsh"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return get_oh_my_zsh_dir().is_dir()

    def apply(self, ctx: StepContext) -> None:
        script = fetch_script(ctx, ctx.profile.sources.oh_my_zsh)
        env: dict[str, str] = {"RUNZSH": "no", "CHSH": "no"}
        if ctx.variant == "container":
            # The installer probes ZSH_VERSION; there is no zsh parent process here.
            env["ZSH_VERSION"] = "5.8"
        ctx.run(["sh", "-c", script, "", "--unattended"], env=env)


class NodeStep(Step):
    """Install nvm and the latest LTS Node.js.

    Satisfied when node is on PATH or nvm already manages a node version
    (nvm only adds node to PATH in shells that source nvm.sh).
    """

    @property
    def name(self) -> str:
        return "node"

    @property
    def description(self) -> str:
        return "Installing Node.js"

    def is_satisfied(self, ctx: StepContext) -> bool:
        if command_exists("node"):
            return True
        versions = get_nvm_dir() / "versions" / "node"
        return versions.is_dir() and any(versions.iterdir())

    def apply(self, ctx: StepContext) -> None:
        script = fetch_script(ctx, ctx.profile.sources.nvm)
        ctx.run(["bash"], input=script)

        nvm_dir = get_nvm_dir()
        nvm_sh = shlex.quote(str(nvm_dir / "nvm.sh"))
        ctx.run(
            ["bash", "-c", f". {nvm_sh} && nvm install --lts"],
            env={"NVM_DIR": str(nvm_dir)},
        )


class RustStep(Step):
    """Install the Rust toolchain with rustup unless rustc is available."""

    @property
    def name(self) -> str:
        return "rust"

    @property
    def description(self) -> str:
        return "Installing Rust"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return command_exists("rustc") or (get_cargo_bin_dir() / "rustc").exists()

    def apply(self, ctx: StepContext) -> None:
        script = fetch_script(ctx, ctx.profile.sources.rustup, "--proto", "=https", "--tlsv1.2")
        ctx.run(["sh", "-s", "--", "-y"], input=script)
