"""
Configuration Loading Functions.

Handles loading DocForge configuration from YAML or JSON files and
applying environment variable overrides.

Configuration precedence: 1. Env vars, 2. Config file, 3. Defaults
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from docforge.core.exceptions import ConfigValidationError
from docforge.core.logging import get_logger

if TYPE_CHECKING:
    from docforge.core.config import Config

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAMES = ("docforge.yaml", "docforge.yml", "conf.json")

_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])
_FALSE_VALUES = frozenset(["0", "false", "no", "off"])


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles nested structures including:
    - Strings with ${VAR_NAME} or ${VAR_NAME:default} syntax
    - Nested dictionaries
    - Nested lists

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        # Match ${VAR_NAME} or ${VAR_NAME:default} pattern
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    # Return primitives (int, float, bool, None) unchanged
    return value


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """
    Get boolean from environment variable.

    Args:
        name: Environment variable name.
        default: Value returned when unset or unrecognised.

    Returns:
        Parsed boolean or default.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean value for {name}={value}: Returning default {default}")
    return default


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    """
    use_longname = get_env_bool("DOCFORGE_USE_LONGNAME_IN_NAV")
    if use_longname is not None:
        config.nav.use_longname_in_nav = use_longname

    phabricator = os.environ.get("DOCFORGE_PHABRICATOR_BASE_URL")
    if phabricator:
        config.links.phabricator_base_url = phabricator

    include_private = get_env_bool("DOCFORGE_INCLUDE_PRIVATE")
    if include_private is not None:
        config.output.include_private = include_private
    return config


def _read_config_file(config_path: Path) -> dict:
    """Parse a YAML or JSON config file into a dictionary.

    Raises:
        ConfigValidationError: If the file cannot be parsed or is not a mapping
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigValidationError(
            f"Could not parse config file {config_path}: {e}", value=str(config_path)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Config file {config_path} must contain a mapping", value=str(config_path)
        )
    return data


def find_config_file(base_path: Optional[Path] = None) -> Optional[Path]:
    """Return the first default config file present in base_path, if any."""
    base_path = base_path or Path.cwd()
    for filename in DEFAULT_CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from a YAML or JSON file with environment overrides.

    Args:
        config_path: Path to config file. Defaults to the first of
            docforge.yaml, docforge.yml or conf.json in base_path.
        base_path: Directory searched when config_path is not given.

    Returns:
        Config object with all settings.

    Raises:
        ConfigValidationError: If the file exists but is malformed
    """
    # Lazy import to avoid circular dependency
    from docforge.core.config import Config

    if config_path is None:
        config_path = find_config_file(base_path)
    if config_path is None or not config_path.exists():
        logger.debug("No config file found, using defaults")
        return _apply_env_overrides(Config())

    data = _read_config_file(config_path)
    config = Config.from_dict(data)
    logger.debug("Loaded configuration", path=str(config_path))
    return _apply_env_overrides(config)
