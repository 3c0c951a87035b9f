"""Console color theme.

The bundled ``data/theme.toml`` holds two tables: ``[colors]`` for the
general palette (messages, tables) and ``[status]`` for the word printed
after each step's progress line. A ``theme.toml`` in the config
directory may override any subset of either table.
"""

import logging
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from rich.theme import Theme

from dotstrap.core.paths import get_theme_path

logger = logging.getLogger(__name__)

THEME_TABLES = ("colors", "status")


def _check_hex(value: str) -> str:
    digits = value.strip().removeprefix("#")
    if not value.strip().startswith("#") or len(digits) not in (3, 6):
        msg = f"expected #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color {value!r}"
        raise ValueError(msg) from None
    return value.strip()


HexColor = Annotated[str, AfterValidator(_check_hex)]


class PaletteColors(BaseModel):
    """General palette for messages and tables."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"


class StatusColors(BaseModel):
    """Colors of the step status words ("Done", "Already installed", ...)."""

    model_config = ConfigDict(extra="forbid")

    done: HexColor = "#03b971"
    present: HexColor = "#f5b332"
    dry_run: HexColor = "#f5b332"
    skipped: HexColor = "#b2bec3"


class ThemeConfig(BaseModel):
    """Complete console theme."""

    model_config = ConfigDict(extra="forbid")

    colors: Annotated[PaletteColors, Field(default_factory=PaletteColors)]
    status: Annotated[StatusColors, Field(default_factory=StatusColors)]


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped inside the package."""
    return resources.files("dotstrap.data").joinpath("theme.toml")  # type: ignore[return-value]


def _read_theme_tables(path: Path) -> dict[str, dict[str, Any]] | None:
    """Read the theme tables from a TOML file.

    Args:
        path: Theme file.

    Returns:
        Table name -> color mapping for every table present, or None if
        the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        print(f"Warning: Failed to parse {path}: {e}", file=sys.stderr)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    tables: dict[str, dict[str, Any]] = {}
    for name in THEME_TABLES:
        table = data.get(name)
        if table is None:
            continue
        if not isinstance(table, dict):
            logger.warning("Ignoring non-table '%s' in %s", name, path)
            continue
        tables[name] = table
    return tables


def load_theme() -> ThemeConfig:
    """Load the bundled theme with the user's overrides applied.

    Invalid overrides are reported and the stock theme is used instead.
    """
    merged = _read_theme_tables(Path(get_bundled_theme_path()))
    if merged is None:
        logger.error("Bundled theme missing - installation may be corrupted")
        merged = {}

    user_path = get_theme_path()
    overrides = _read_theme_tables(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        for name, table in overrides.items():
            merged[name] = {**merged.get(name, {}), **table}

    try:
        return ThemeConfig.model_validate(merged)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeConfig()


def get_rich_theme(config: ThemeConfig | None = None) -> Theme:
    """Build the Rich theme used by the shared consoles.

    Every palette and status color becomes a style of the same name;
    ``warning`` and ``error`` are bold, and ``bold_header`` is added for
    table headers.
    """
    config = config or load_theme()

    styles: dict[str, str] = {
        **config.colors.model_dump(),
        **config.status.model_dump(),
    }
    styles["warning"] = f"bold {config.colors.warning}"
    styles["error"] = f"bold {config.colors.error}"
    styles["bold_header"] = f"bold {config.colors.header}"
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
