"""Ordered step lists for the host and container variants."""

from __future__ import annotations

from dotstrap.core.paths import get_nvim_config_dir, get_tpm_dir, get_zsh_plugin_dir
from dotstrap.models.profile import Profile, Variant
from dotstrap.steps.base import Step
from dotstrap.steps.clone import GitCloneStep, TpmStep
from dotstrap.steps.dotfiles import DotfilesStep
from dotstrap.steps.installers import NodeStep, OhMyZshStep, RustStep
from dotstrap.steps.neovim import NeovimBuildStep
from dotstrap.steps.packages import PackageStep, SystemUpdateStep, package_steps


def build_plan(profile: Profile, variant: Variant = "host") -> list[Step]:
    """Build the ordered list of steps for a setup run.

    Host: update and upgrade, base packages, zsh, oh-my-zsh, dotfiles,
    zsh plugins, CLI tools, neovim, Node.js, language packages, Rust,
    LazyVim and TPM.

    Container: the same minus the toolchains and LazyVim, with a
    lighter tool list and the neovim build reported as skipped.

    Args:
        profile: Package names and upstream URLs.
        variant: "host" or "container".

    Returns:
        Steps in execution order.
    """
    packages = profile.packages
    sources = profile.sources
    is_container = variant == "container"

    steps: list[Step] = [SystemUpdateStep(variant)]
    steps += package_steps(packages.base, packages.commands)
    steps.append(PackageStep(packages.shell, packages.commands_for(packages.shell)))
    steps.append(OhMyZshStep())
    steps.append(DotfilesStep())
    steps += [
        GitCloneStep(
            plugin,
            url,
            get_zsh_plugin_dir(plugin),
            f"Installing {plugin} plugin",
        )
        for plugin, url in sources.zsh_plugins.items()
    ]
    steps += package_steps(profile.tools_for(variant), packages.commands)
    steps.append(NeovimBuildStep(skip_reason="container mode" if is_container else None))

    if not is_container:
        steps.append(NodeStep())
        steps += package_steps(packages.languages, packages.commands)
        steps.append(RustStep())
        steps.append(
            GitCloneStep(
                "lazyvim",
                sources.lazyvim,
                get_nvim_config_dir(),
                "Installing Lazyvim Configurations",
            )
        )

    steps.append(TpmStep(sources.tpm, get_tpm_dir()))
    return steps
