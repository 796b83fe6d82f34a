"""
Main configuration class for DocForge.

This module provides the Config dataclass that aggregates all section
configs and handles validation and parsing from YAML or jsdoc conf.json.

Architecture Context
--------------------
Configuration sits at the Core layer and is consumed by the publish
pipeline and the CLI. The Config object is created once per run:

    docforge.yaml / conf.json
           ↓
    load_config() → Config object
           ↓
    Passed to: PublishPipeline, LinkExpander, build_nav

Configuration Hierarchy
-----------------------
    Config
    ├── NavConfig      # use_longname_in_nav
    ├── LinkConfig     # phabricator_base_url, link_map
    └── OutputConfig   # output_source_files, main_page_title, include_private

Two input dialects are accepted:

    # docforge.yaml
    nav:
      use_longname_in_nav: true
    links:
      phabricator_base_url: https://phabricator.example.org/
      link_map:
        jQuery: https://api.jquery.com/

    # jsdoc conf.json (templates block)
    {"templates": {"default": {"useLongnameInNav": true},
                   "betterlinks": {"phabricator": "https://..."},
                   "wmf": {"linkMap": {"jQuery": "https://api.jquery.com/"}}}}
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from docforge.core.config.sections import (
    DEFAULT_PHABRICATOR_BASE_URL,
    LinkConfig,
    NavConfig,
    OutputConfig,
)
from docforge.core.exceptions import ConfigValidationError


@dataclass
class Config:
    """Main DocForge configuration."""

    nav: NavConfig = field(default_factory=NavConfig)
    links: LinkConfig = field(default_factory=LinkConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ConfigValidationError: If a field has the wrong type
        """
        if not isinstance(self.nav.use_longname_in_nav, bool):
            raise ConfigValidationError(
                "nav.use_longname_in_nav must be a boolean",
                field="nav.use_longname_in_nav",
                value=self.nav.use_longname_in_nav,
            )
        if not isinstance(self.links.phabricator_base_url, str):
            raise ConfigValidationError(
                "links.phabricator_base_url must be a string",
                field="links.phabricator_base_url",
                value=self.links.phabricator_base_url,
            )
        self._validate_link_map(self.links.link_map)

    @staticmethod
    def _validate_link_map(link_map: Any) -> None:
        """Check that link_map maps strings to strings."""
        if not isinstance(link_map, dict):
            raise ConfigValidationError(
                "links.link_map must be a mapping", field="links.link_map", value=link_map
            )
        for longname, url in link_map.items():
            if not isinstance(longname, str) or not isinstance(url, str):
                raise ConfigValidationError(
                    f"links.link_map entry {longname!r} must map to a URL string",
                    field="links.link_map",
                    value=url,
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"{cls_type.__name__} section must be a mapping", value=data
            )
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from a sectioned dictionary (docforge.yaml layout).

        A dictionary with a top-level "templates" key is treated as a jsdoc
        conf.json and handed to from_jsdoc_conf().
        """
        # Import here to avoid circular dependency
        from docforge.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})
        if "templates" in data:
            return cls.from_jsdoc_conf(data)

        links = cls._filter_fields(LinkConfig, data.get("links"))
        # An empty or null ticket base means the default tracker
        if not links.get("phabricator_base_url"):
            links.pop("phabricator_base_url", None)

        return cls(
            nav=NavConfig(**cls._filter_fields(NavConfig, data.get("nav"))),
            links=LinkConfig(**links),
            output=OutputConfig(**cls._filter_fields(OutputConfig, data.get("output"))),
        )

    @classmethod
    def from_jsdoc_conf(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from a jsdoc conf.json dictionary.

        Reads templates.default, templates.betterlinks and templates.wmf;
        unknown template keys are ignored.
        """
        templates = data.get("templates") or {}
        default = templates.get("default") or {}
        betterlinks = templates.get("betterlinks") or {}
        wmf = templates.get("wmf") or {}

        nav = NavConfig(
            use_longname_in_nav=default.get("useLongnameInNav", False),
        )
        links = LinkConfig(
            phabricator_base_url=betterlinks.get("phabricator") or DEFAULT_PHABRICATOR_BASE_URL,
            link_map=dict(wmf.get("linkMap") or {}),
        )
        output = OutputConfig(
            output_source_files=default.get("outputSourceFiles", True) is not False,
        )
        opts = data.get("opts") or {}
        if opts.get("mainpagetitle"):
            output.main_page_title = opts["mainpagetitle"]
        access = opts.get("access") or []
        if isinstance(access, str):
            access = [access]
        output.include_private = "all" in access or "private" in access
        return cls(nav=nav, links=links, output=output)
