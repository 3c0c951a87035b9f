"""Profile models describing what a setup run provisions.

The profile holds the package names and upstream URLs the setup steps
work from. Every field defaults to the stock workstation setup, so an
absent or partial profile.toml still yields a complete run.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

# Type alias for the two setup variants
Variant = Literal["host", "container"]

# A single APT package name, never empty and never containing whitespace
PackageName = Annotated[str, StringConstraints(min_length=1, pattern=r"^\S+$")]

OH_MY_ZSH_INSTALLER = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
NVM_INSTALLER = "https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.5/install.sh"
RUSTUP_INSTALLER = "https://sh.rustup.rs"
NEOVIM_REPO = "https://github.com/neovim/neovim.git"
LAZYVIM_REPO = "https://github.com/LazyVim/starter.git"
TPM_REPO = "https://github.com/tmux-plugins/tpm"
DOTFILES_REPO = "https://github.com/moabdelazem/dotfiles.git"


def _default_zsh_plugins() -> dict[str, str]:
    return {
        "zsh-syntax-highlighting": "https://github.com/zsh-users/zsh-syntax-highlighting.git",
        "zsh-autosuggestions": "https://github.com/zsh-users/zsh-autosuggestions.git",
    }


def _default_commands() -> dict[str, list[str]]:
    # Packages whose executable is not named after the package.
    return {
        "golang": ["go"],
        "bat": ["bat", "batcat"],
    }


class PackagesConfig(BaseModel):
    """APT packages installed by the setup.

    Attributes:
        base: Basic dependencies installed first.
        shell: Interactive shell package.
        tools: CLI tools for the host variant.
        container_tools: Lightweight CLI tools for the container variant.
        build_deps: Toolchain needed to build neovim from source.
        languages: Language toolchains installed from APT.
        commands: Package name -> executables proving it is installed.
    """

    model_config = ConfigDict(extra="forbid")

    base: Annotated[
        list[PackageName],
        Field(description="Basic dependencies"),
    ] = ["git", "curl", "wget"]
    shell: Annotated[PackageName, Field(description="Shell package")] = "zsh"
    tools: Annotated[
        list[PackageName],
        Field(description="Host CLI tools"),
    ] = ["fzf", "bat", "tmux", "tree"]
    container_tools: Annotated[
        list[PackageName],
        Field(description="Container CLI tools"),
    ] = ["tmux", "tree"]
    build_deps: Annotated[
        list[PackageName],
        Field(description="Neovim build dependencies"),
    ] = [
        "ninja-build",
        "gettext",
        "libtool",
        "libtool-bin",
        "autoconf",
        "automake",
        "cmake",
        "g++",
        "pkg-config",
        "unzip",
        "curl",
        "doxygen",
    ]
    languages: Annotated[
        list[PackageName],
        Field(description="APT language toolchains"),
    ] = ["golang"]
    commands: Annotated[
        dict[str, list[str]],
        Field(default_factory=_default_commands, description="Executables per package"),
    ]

    def commands_for(self, package: str) -> list[str]:
        """Get the executables whose presence means ``package`` is installed.

        Args:
            package: APT package name.

        Returns:
            Executable names; the package name itself when no mapping exists.
        """
        return self.commands.get(package) or [package]


class SourcesConfig(BaseModel):
    """Upstream installer scripts and repositories.

    None of these are pinned or checksummed.
    """

    model_config = ConfigDict(extra="forbid")

    oh_my_zsh: Annotated[str, Field(description="oh-my-zsh installer script")] = OH_MY_ZSH_INSTALLER
    nvm: Annotated[str, Field(description="nvm installer script")] = NVM_INSTALLER
    rustup: Annotated[str, Field(description="rustup installer script")] = RUSTUP_INSTALLER
    neovim: Annotated[str, Field(description="neovim git repository")] = NEOVIM_REPO
    lazyvim: Annotated[str, Field(description="LazyVim starter repository")] = LAZYVIM_REPO
    tpm: Annotated[str, Field(description="Tmux Plugin Manager repository")] = TPM_REPO
    zsh_plugins: Annotated[
        dict[str, str],
        Field(default_factory=_default_zsh_plugins, description="oh-my-zsh plugin repositories"),
    ]

    @field_validator("zsh_plugins")
    @classmethod
    def validate_plugin_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Plugin names become directories under the oh-my-zsh plugins dir."""
        for name in v:
            if not name or "/" in name or name in (".", ".."):
                msg = f"Invalid zsh plugin name: {name!r}"
                raise ValueError(msg)
        return v


class DotfilesConfig(BaseModel):
    """Where the shell and tmux configs come from.

    The host variant clones ``repo``; the container variant copies from
    ``local_dir`` (the project checkout mounted into the container).
    Both file maps go from a source file name to a path relative to home.
    """

    model_config = ConfigDict(extra="forbid")

    repo: Annotated[str, Field(description="Dotfiles git repository")] = DOTFILES_REPO
    local_dir: Annotated[str, Field(description="Local dotfiles directory")] = "~/dotfiles"
    repo_files: Annotated[
        dict[str, str],
        Field(description="Repository file -> home-relative target"),
    ] = {".zshrc": ".zshrc", ".tmux.conf": ".tmux.conf"}
    local_files: Annotated[
        dict[str, str],
        Field(description="Local file -> home-relative target"),
    ] = {"zshrc": ".zshrc", "tmux.conf": ".tmux.conf"}

    @field_validator("repo_files", "local_files")
    @classmethod
    def validate_relative_targets(cls, v: dict[str, str]) -> dict[str, str]:
        """Targets must stay inside the home directory."""
        for target in v.values():
            if not target or target.startswith("/") or ".." in target.split("/"):
                msg = f"Dotfile target must be a path relative to home: {target!r}"
                raise ValueError(msg)
        return v


class Profile(BaseModel):
    """Complete description of a setup run's inputs.

    Attributes:
        packages: APT packages to install.
        sources: Upstream installers and repositories.
        dotfiles: Configuration file sources.
    """

    model_config = ConfigDict(extra="forbid")

    packages: Annotated[PackagesConfig, Field(default_factory=PackagesConfig)]
    sources: Annotated[SourcesConfig, Field(default_factory=SourcesConfig)]
    dotfiles: Annotated[DotfilesConfig, Field(default_factory=DotfilesConfig)]

    def tools_for(self, variant: Variant) -> list[str]:
        """Get the CLI tool list for a setup variant."""
        if variant == "container":
            return self.packages.container_tools
        return self.packages.tools
