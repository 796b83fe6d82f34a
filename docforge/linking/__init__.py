"""Cross-reference resolution: registry, expander, shortnames and resolver."""

from docforge.linking.expander import LinkExpander, base_longname, module_root
from docforge.linking.registry import (
    GLOBAL_LONGNAME,
    INDEX_LONGNAME,
    LinkRegistry,
    scope_punctuation,
)
from docforge.linking.resolver import LinkResolver
from docforge.linking.shortnames import (
    ShortnameReport,
    add_link_map_aliases,
    add_shortname_aliases,
    shorten,
)

__all__ = [
    "GLOBAL_LONGNAME",
    "INDEX_LONGNAME",
    "LinkExpander",
    "LinkRegistry",
    "LinkResolver",
    "ShortnameReport",
    "add_link_map_aliases",
    "add_shortname_aliases",
    "base_longname",
    "module_root",
    "scope_punctuation",
    "shorten",
]
