"""Grouping of doclets into the categories shown in navigation and pages."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from docforge.doclets.models import Doclet, Tutorial

_EDGE_QUOTES_RE = re.compile(r'(^"|"$)')

GLOBAL_KINDS = ("member", "function", "constant", "typedef")


def strip_quotes(name: str) -> str:
    """Remove one leading and one trailing double quote."""
    return _EDGE_QUOTES_RE.sub("", name)


@dataclass
class Members:
    """Doclets by category, each in input order."""

    classes: List[Doclet] = field(default_factory=list)
    externals: List[Doclet] = field(default_factory=list)
    events: List[Doclet] = field(default_factory=list)
    globals: List[Doclet] = field(default_factory=list)
    mixins: List[Doclet] = field(default_factory=list)
    modules: List[Doclet] = field(default_factory=list)
    namespaces: List[Doclet] = field(default_factory=list)
    interfaces: List[Doclet] = field(default_factory=list)
    tutorials: List[Tutorial] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return {
            "classes": len(self.classes),
            "externals": len(self.externals),
            "events": len(self.events),
            "globals": len(self.globals),
            "mixins": len(self.mixins),
            "modules": len(self.modules),
            "namespaces": len(self.namespaces),
            "interfaces": len(self.interfaces),
            "tutorials": len(self.tutorials),
        }


def get_members(doclets: Iterable[Doclet]) -> Members:
    """
    Categorize doclets by kind.

    External names lose their surrounding quotes. Globals are top-level
    members, functions, constants and typedefs, except module exports.
    """
    members = Members()
    by_kind = {
        "class": members.classes,
        "external": members.externals,
        "event": members.events,
        "mixin": members.mixins,
        "module": members.modules,
        "namespace": members.namespaces,
        "interface": members.interfaces,
    }
    for doclet in doclets:
        if doclet.kind in by_kind:
            if doclet.kind == "external" and doclet.name:
                doclet.name = strip_quotes(doclet.name)
            by_kind[doclet.kind].append(doclet)
        elif doclet.kind in GLOBAL_KINDS and doclet.memberof is None:
            if not doclet.is_module_export:
                members.globals.append(doclet)
    return members
