"""Profile file I/O operations.

This module provides functions for loading and saving profile files
in TOML format with proper validation using Pydantic models.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from dotstrap.core.paths import ensure_config_dir, get_profile_path
from dotstrap.models.profile import Profile


class ProfileError(Exception):
    """Base exception for profile-related errors."""


class ProfileNotFoundError(ProfileError):
    """Raised when profile file is not found."""


class ProfileParseError(ProfileError):
    """Raised when profile file cannot be parsed."""


class ProfileValidationError(ProfileError):
    """Raised when profile content is invalid."""


def load_profile(path: Path | None = None) -> Profile:
    """Load and validate a profile from a TOML file.

    Args:
        path: Path to the profile file. If None, uses default profile path.

    Returns:
        Validated Profile object.

    Raises:
        ProfileNotFoundError: If the profile file doesn't exist.
        ProfileParseError: If the TOML syntax is invalid.
        ProfileValidationError: If the content doesn't match the schema.
    """
    profile_path = path or get_profile_path()

    if not profile_path.exists():
        raise ProfileNotFoundError(f"Profile not found: {profile_path}")

    try:
        with open(profile_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ProfileParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ProfileError(f"Failed to read profile: {e}") from e

    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid profile content: {e}") from e


def resolve_profile(path: Path | None = None) -> Profile:
    """Load the profile, falling back to built-in defaults.

    An explicitly requested path must exist. The default location is
    optional: when no profile.toml has been written, the stock setup
    is used.

    Args:
        path: Explicit profile path, or None for the default location.

    Returns:
        Validated Profile object.

    Raises:
        ProfileError: If the profile cannot be loaded.
    """
    if path is None and not get_profile_path().exists():
        return Profile()
    return load_profile(path)


def save_profile(profile: Profile, path: Path | None = None) -> Path:
    """Save a profile to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        profile: The Profile object to save.
        path: Path to save the profile. If None, uses default profile path.

    Returns:
        Path where the profile was saved.

    Raises:
        ProfileError: If the file cannot be written.
    """
    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise ProfileError(str(e)) from e
    profile_path = path or get_profile_path()
    data = _profile_to_dict(profile)

    tmp_path: Path | None = None
    try:
        profile_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=profile_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(profile_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ProfileError(f"Failed to write profile: {e}") from e

    return profile_path


def profile_exists(path: Path | None = None) -> bool:
    """Check if a profile file exists.

    Args:
        path: Path to check. If None, uses default profile path.
    """
    return (path or get_profile_path()).exists()


def _profile_to_dict(profile: Profile) -> dict[str, Any]:
    """Convert a Profile to a dictionary suitable for TOML serialization."""
    return profile.model_dump(mode="json", exclude_none=True)
