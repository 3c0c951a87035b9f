"""Pytest configuration and shared fixtures.

Every test runs with HOME pointed at a temporary directory and the XDG,
ZSH_CUSTOM and NVM_DIR overrides removed, so nothing touches the real
home directory.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dotstrap.models.profile import Profile
from dotstrap.operators.apt import AptOperator
from dotstrap.steps.base import StepContext
from dotstrap.utils.shell import CommandResult


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for var in ("XDG_CONFIG_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME", "ZSH_CUSTOM", "NVM_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home_dir


@pytest.fixture
def ok_result() -> CommandResult:
    """Successful command result."""
    return CommandResult(stdout="", stderr="", returncode=0)


@pytest.fixture
def mock_apt(ok_result: CommandResult) -> MagicMock:
    """AptOperator double whose commands all succeed."""
    apt = MagicMock(spec=AptOperator)
    apt.command = "apt-get"
    apt.update.return_value = ok_result
    apt.upgrade.return_value = ok_result
    apt.install.return_value = ok_result
    return apt


@pytest.fixture
def step_ctx(mock_apt: MagicMock) -> StepContext:
    """Host run context with default profile and a mocked package manager."""
    return StepContext(profile=Profile(), apt=mock_apt)


@pytest.fixture
def dry_ctx(mock_apt: MagicMock) -> StepContext:
    """Dry-run host context."""
    return StepContext(profile=Profile(), apt=mock_apt, dry_run=True)
