"""
Alias/Shortname Disambiguator.

Every long name with an inner-scope separator gets a short alias:

    module:mw/Api~Options  →  Options

An alias is only published when exactly one long name produces it and no
mapping already exists under that string. Ambiguous aliases are reported on
the run's warning stream and registered for none of their long names.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from docforge.core.logging import PublishLogger, get_logger
from docforge.linking.registry import LinkRegistry

logger = get_logger(__name__)

AMBIGUOUS_SHORTNAME = "ambiguous-shortname"


def shorten(longname: str) -> Optional[str]:
    """
    Derive the shortname candidate for a long name.

    Returns:
        Everything after the first ``~``, or None when there is no ``~``
        or nothing follows it
    """
    _, sep, rest = longname.partition("~")
    if not sep or not rest:
        return None
    return rest


@dataclass
class ShortnameReport:
    """Outcome of one disambiguation pass."""

    registered: Dict[str, str] = field(default_factory=dict)
    ambiguous: Dict[str, List[str]] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)


def add_shortname_aliases(
    registry: LinkRegistry, log: Optional[PublishLogger] = None
) -> ShortnameReport:
    """
    Publish unique shortnames into the registry as aliases.

    Args:
        registry: Registry holding every long name of the run
        log: Warning stream for ambiguous shortnames

    Returns:
        ShortnameReport with registered aliases (alias → long name),
        ambiguous aliases (alias → producing long names) and aliases
        skipped because the string was already mapped
    """
    report = ShortnameReport()
    snapshot = registry.items()

    producers: Dict[str, List[str]] = {}
    for longname, _ in snapshot:
        short = shorten(longname)
        if short is not None:
            producers.setdefault(short, []).append(longname)
    counts = Counter({short: len(names) for short, names in producers.items()})

    for longname, url in snapshot:
        short = shorten(longname)
        if short is None:
            continue
        if counts[short] > 1:
            if short not in report.ambiguous:
                report.ambiguous[short] = producers[short]
                message = f"Ambiguous shortname: {short}"
                if log is not None:
                    log.warn(AMBIGUOUS_SHORTNAME, message, subject=short)
                else:
                    logger.warning(message)
            continue
        if registry.register_alias(short, url):
            report.registered[short] = longname
        else:
            report.skipped.append(short)

    logger.debug(
        "Shortname aliases added",
        registered=len(report.registered),
        ambiguous=len(report.ambiguous),
        skipped=len(report.skipped),
    )
    return report


def add_link_map_aliases(registry: LinkRegistry, link_map: Mapping[str, str]) -> int:
    """
    Pre-seed aliases pointing at external documentation.

    Must run before any doclet is registered so the mapped names win.

    Returns:
        Number of aliases added
    """
    added = 0
    for name, url in link_map.items():
        if registry.register_alias(name, url):
            added += 1
    return added
