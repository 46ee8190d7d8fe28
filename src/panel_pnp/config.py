"""
Configuration file support for panel-pnp.

Provides hierarchical configuration loading from:
1. Project config: .panel-pnp.toml or panel-pnp.toml in project root
2. User config: ~/.config/panel-pnp/config.toml

Project config overrides user config, which overrides the defaults.
"""

import sys
import warnings
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".panel-pnp.toml", "panel-pnp.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "panel-pnp" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "transform": {"precision", "roll_rotation_base", "decimal_places"},
}

ROLL_ROTATION_BASES = (180, 360)


@dataclass
class TransformConfig:
    """Unit transform configuration."""

    precision: int = 28
    roll_rotation_base: int = 360
    decimal_places: int | None = None

    @property
    def roll_rotation_base_decimal(self) -> Decimal:
        return Decimal(self.roll_rotation_base)


@dataclass
class Config:
    """Merged configuration from all sources."""

    transform: TransformConfig = field(default_factory=TransformConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


class ConfigError(ConfigurationError):
    """Configuration file errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file is unreadable or the TOML is invalid
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info

    Raises:
        ConfigError: If a value has the wrong type or is out of range
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "transform" in data:
        transform_data = data["transform"]
        _warn_unknown_keys(transform_data, KNOWN_KEYS["transform"], "transform", source)

        if "precision" in transform_data:
            precision = _require_int(transform_data, "transform.precision", source)
            if precision < 1:
                raise ConfigError(
                    f"transform.precision must be >= 1, got {precision}",
                    context={"file": source},
                )
            config.transform.precision = precision
            sources["transform.precision"] = source
        if "roll_rotation_base" in transform_data:
            base = _require_int(transform_data, "transform.roll_rotation_base", source)
            if base not in ROLL_ROTATION_BASES:
                raise ConfigError(
                    f"transform.roll_rotation_base must be one of {ROLL_ROTATION_BASES}, got {base}",
                    context={"file": source},
                )
            config.transform.roll_rotation_base = base
            sources["transform.roll_rotation_base"] = source
        if "decimal_places" in transform_data:
            places = _require_int(transform_data, "transform.decimal_places", source)
            if places < 0:
                raise ConfigError(
                    f"transform.decimal_places must be >= 0, got {places}",
                    context={"file": source},
                )
            config.transform.decimal_places = places
            sources["transform.decimal_places"] = source


def _require_int(data: dict[str, Any], dotted_key: str, source: str) -> int:
    value = data[dotted_key.rsplit(".", 1)[-1]]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"{dotted_key} must be an integer, got {value!r}",
            context={"file": source},
        )
    return value


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# panel-pnp configuration file
# Place as .panel-pnp.toml in project root or ~/.config/panel-pnp/config.toml for user defaults

[transform]
# Decimal precision (significant digits) used while building unit positions
# precision = 28

# Base of the rotation correction for roll-flipped sides: rotation = base - rotation
# Allowed values: 360, 180
# roll_rotation_base = 360

# Round results to this many decimal places (unset = no rounding)
# decimal_places = 6
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
