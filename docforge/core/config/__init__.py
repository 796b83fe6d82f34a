"""
Configuration Management for DocForge.

Public API
----------
    from docforge.core.config import Config, load_config
    from docforge.core.config import LinkConfig, NavConfig, OutputConfig

Architecture
------------
    config/
    ├── sections.py      # NavConfig, LinkConfig, OutputConfig
    └── config.py        # Main Config class

Loading functions live in docforge.core.config_loaders and are re-exported
here.
"""

from docforge.core.config.config import Config
from docforge.core.config.sections import (
    DEFAULT_PHABRICATOR_BASE_URL,
    LinkConfig,
    NavConfig,
    OutputConfig,
)
from docforge.core.config_loaders import expand_env_vars, load_config

__all__ = [
    "Config",
    "DEFAULT_PHABRICATOR_BASE_URL",
    "LinkConfig",
    "NavConfig",
    "OutputConfig",
    "expand_env_vars",
    "load_config",
]
