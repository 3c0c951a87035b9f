"""Path management for dotstrap.

Two families of paths live here:

- dotstrap's own files, following the XDG Base Directory Specification
  (config: ~/.config/dotstrap/, state: ~/.local/state/dotstrap/,
  cache: ~/.cache/dotstrap/).
- The targets the setup steps provision in the user's home directory
  (shell and tmux configs, oh-my-zsh, plugin directories, toolchains).

Everything is resolved lazily so that HOME and the XDG/ZSH_CUSTOM/NVM_DIR
overrides are honoured at call time.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dotstrap"
HISTORY_FILENAME = "history.jsonl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dotstrap/ (or XDG_CONFIG_HOME/dotstrap/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/dotstrap/ (or XDG_STATE_HOME/dotstrap/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_cache_dir() -> Path:
    """Get the cache directory path.

    Scratch checkouts (dotfiles repository, neovim sources) are created here.

    Returns:
        Path to ~/.cache/dotstrap/ (or XDG_CACHE_HOME/dotstrap/).
    """
    return _get_xdg_dir("XDG_CACHE_HOME", ".cache")


def get_profile_path() -> Path:
    """Get the default profile file path.

    Returns:
        Path to ~/.config/dotstrap/profile.toml.
    """
    return get_config_dir() / "profile.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/dotstrap/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_history_path() -> Path:
    """Get the run history file path.

    Returns:
        Path to ~/.local/state/dotstrap/history.jsonl.
    """
    return get_state_dir() / HISTORY_FILENAME


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")


def ensure_cache_dir() -> Path:
    """Create the cache directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_cache_dir(), "cache")


# =============================================================================
# Provisioning targets in the home directory
# =============================================================================


def get_tmux_conf_path() -> Path:
    return Path.home() / ".tmux.conf"


def get_oh_my_zsh_dir() -> Path:
    """Get the oh-my-zsh installation directory (~/.oh-my-zsh)."""
    return Path.home() / ".oh-my-zsh"


def get_zsh_custom_dir() -> Path:
    """Get the oh-my-zsh custom directory.

    Honours ZSH_CUSTOM the same way oh-my-zsh does.

    Returns:
        Path to $ZSH_CUSTOM or ~/.oh-my-zsh/custom.
    """
    custom = os.environ.get("ZSH_CUSTOM")
    if custom:
        return Path(custom)
    return get_oh_my_zsh_dir() / "custom"


def get_zsh_plugin_dir(name: str) -> Path:
    """Get the directory a given oh-my-zsh plugin is cloned into."""
    return get_zsh_custom_dir() / "plugins" / name


def get_tpm_dir() -> Path:
    """Get the Tmux Plugin Manager directory (~/.tmux/plugins/tpm)."""
    return Path.home() / ".tmux" / "plugins" / "tpm"


def get_nvim_config_dir() -> Path:
    """Get the neovim configuration directory (~/.config/nvim).

    Deliberately not routed through XDG_CONFIG_HOME: the LazyVim starter is
    always cloned into the conventional location.
    """
    return Path.home() / ".config" / "nvim"


def get_nvm_dir() -> Path:
    """Get the nvm installation directory ($NVM_DIR or ~/.nvm)."""
    nvm_dir = os.environ.get("NVM_DIR")
    if nvm_dir:
        return Path(nvm_dir)
    return Path.home() / ".nvm"


def get_cargo_bin_dir() -> Path:
    """Get the rustup/cargo binary directory (~/.cargo/bin)."""
    return Path.home() / ".cargo" / "bin"


def expand_user_path(value: str) -> Path:
    """Expand ``~`` and environment variables in a configured path."""
    return Path(os.path.expandvars(value)).expanduser()
