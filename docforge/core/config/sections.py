"""
Section configuration classes for navigation, linking and page output.

Each dataclass maps to one top-level section of docforge.yaml. Defaults
reproduce the behaviour of the stock template, so an empty file (or no
file at all) is a valid configuration.
"""

from dataclasses import dataclass, field
from typing import Dict

DEFAULT_PHABRICATOR_BASE_URL = "https://phabricator.wikimedia.org/"


@dataclass
class NavConfig:
    """Navigation sidebar configuration."""

    use_longname_in_nav: bool = False  # Show full long names instead of short names


@dataclass
class LinkConfig:
    """Cross-reference and autolinking configuration."""

    # Base for T123-style ticket links; ignored unless it is an absolute URL
    phabricator_base_url: str = DEFAULT_PHABRICATOR_BASE_URL
    # Long name -> external URL, registered as aliases before any doclet
    link_map: Dict[str, str] = field(default_factory=dict)


@dataclass
class OutputConfig:
    """Page planning configuration."""

    output_source_files: bool = True
    main_page_title: str = "Main Page"
    include_private: bool = False
