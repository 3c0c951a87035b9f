"""Unit tests for path management."""

from pathlib import Path

import pytest
from dotstrap.core.paths import (
    APP_NAME,
    ensure_cache_dir,
    expand_user_path,
    get_cache_dir,
    get_config_dir,
    get_history_path,
    get_nvim_config_dir,
    get_nvm_dir,
    get_profile_path,
    get_state_dir,
    get_tpm_dir,
    get_zsh_plugin_dir,
)


class TestXdgDirectories:
    """Tests for dotstrap's own XDG directories."""

    def test_defaults_under_home(self, home: Path) -> None:
        assert get_config_dir() == home / ".config" / APP_NAME
        assert get_state_dir() == home / ".local" / "state" / APP_NAME
        assert get_cache_dir() == home / ".cache" / APP_NAME

    def test_xdg_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_CONFIG_HOME replaces ~/.config."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert get_config_dir() == tmp_path / "xdg" / APP_NAME
        assert get_profile_path() == tmp_path / "xdg" / APP_NAME / "profile.toml"

    def test_history_path(self, home: Path) -> None:
        assert get_history_path() == home / ".local" / "state" / APP_NAME / "history.jsonl"

    def test_ensure_cache_dir_creates(self, home: Path) -> None:
        path = ensure_cache_dir()

        assert path.is_dir()
        assert path == home / ".cache" / APP_NAME

    def test_ensure_dir_failure_raises_runtime_error(self, home: Path) -> None:
        """A file in the way of the directory is reported as RuntimeError."""
        (home / ".cache").write_text("not a directory")

        with pytest.raises(RuntimeError, match="Cannot create cache directory"):
            ensure_cache_dir()


class TestHomeTargets:
    """Tests for provisioning targets in the home directory."""

    def test_plugin_dir_default(self, home: Path) -> None:
        expected = home / ".oh-my-zsh" / "custom" / "plugins" / "zsh-autosuggestions"
        assert get_zsh_plugin_dir("zsh-autosuggestions") == expected

    def test_plugin_dir_honours_zsh_custom(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ZSH_CUSTOM", str(tmp_path / "custom"))

        assert get_zsh_plugin_dir("x") == tmp_path / "custom" / "plugins" / "x"

    def test_tpm_dir(self, home: Path) -> None:
        assert get_tpm_dir() == home / ".tmux" / "plugins" / "tpm"

    def test_nvim_config_ignores_xdg(
        self, home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert get_nvim_config_dir() == home / ".config" / "nvim"

    def test_nvm_dir(self, home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_nvm_dir() == home / ".nvm"

        monkeypatch.setenv("NVM_DIR", str(tmp_path / "nvm"))
        assert get_nvm_dir() == tmp_path / "nvm"

    def test_expand_user_path(self, home: Path) -> None:
        assert expand_user_path("~/dotfiles") == home / "dotfiles"
