"""
Navigation Tree Builder.

Builds the sidebar from the categorized members:

    Home
    Modules      (own seen-set)
    Externals    ┐
    Namespaces   │
    Classes      │ one shared seen-set: a symbol listed in an
    Interfaces   │ earlier section is not repeated in a later one
    Events       │
    Mixins       ┘
    Tutorials    (own seen-set)

Sections with no entries are left out.
"""

from __future__ import annotations

import html
import itertools
import re
from typing import Callable, Iterable, List, Optional, Set, Tuple, Union

from docforge.core.logging import get_logger
from docforge.doclets.models import Doclet, Tutorial
from docforge.linking.resolver import LinkResolver
from docforge.navigation.members import Members, strip_quotes
from docforge.navigation.tree import NavNode, NavTree

logger = get_logger(__name__)

HOME_LABEL = "Home"
_NAMESPACE_DISPLAY_RE = re.compile(r"\b(module|event):")

NavEntry = Union[Doclet, Tutorial]


def display_name(doclet: Doclet, use_longname: bool) -> str:
    """Nav text for a doclet, without ``module:`` / ``event:`` prefixes."""
    name = (doclet.longname if use_longname else doclet.name) or doclet.longname or ""
    return _NAMESPACE_DISPLAY_RE.sub("", name)


class NavBuilder:
    """Assemble a NavTree using a resolver for entry links."""

    def __init__(self, resolver: LinkResolver, use_longname_in_nav: bool = False) -> None:
        self.resolver = resolver
        self.use_longname_in_nav = use_longname_in_nav
        self._ids = itertools.count()

    def _next_id(self) -> int:
        return next(self._ids)

    def _doclet_item(self, doclet: Doclet, transform: Callable[[str], str]) -> NavNode:
        longname = doclet.longname or ""
        text = html.escape(transform(display_name(doclet, self.use_longname_in_nav)))
        return NavNode(
            node_id=self._next_id(),
            href=self.resolver.registry.resolve(longname),
            markup=self.resolver.linkto(longname, text),
            sub=True,
        )

    def _plain_item(self, name: Optional[str]) -> NavNode:
        return NavNode(node_id=self._next_id(), markup=html.escape(name or ""), sub=True)

    def _tutorial_item(self, tutorial: Tutorial) -> NavNode:
        return NavNode(
            node_id=self._next_id(),
            href=self.resolver.registry.tutorial_url(tutorial.name),
            markup=self.resolver.tutorial_link(tutorial.name),
            sub=True,
        )

    def _section(
        self,
        heading: str,
        entries: Iterable[NavEntry],
        seen: Set[str],
        transform: Callable[[str], str] = lambda name: name,
    ) -> Optional[NavNode]:
        section_id = self._next_id()
        children: List[NavNode] = []
        for entry in entries:
            if isinstance(entry, Tutorial):
                if entry.name in seen:
                    continue
                children.append(self._tutorial_item(entry))
                seen.add(entry.name)
            elif not entry.longname:
                children.append(self._plain_item(entry.name))
            elif entry.longname not in seen:
                children.append(self._doclet_item(entry, transform))
                seen.add(entry.longname)
        if not children:
            return None
        return NavNode(node_id=section_id, label=heading, children=tuple(children))

    def build(self, members: Members) -> NavTree:
        """
        Build the navigation tree for a run.

        Args:
            members: Categorized doclets and the top-level tutorials

        Returns:
            Immutable NavTree
        """
        items: List[NavNode] = [
            NavNode(
                node_id=self._next_id(),
                label=HOME_LABEL,
                href=self.resolver.registry.index_url or "index.html",
            )
        ]
        seen: Set[str] = set()
        sections: Tuple[Tuple[str, Iterable[NavEntry], Set[str], Callable[[str], str]], ...] = (
            ("Modules", members.modules, set(), str),
            ("Externals", members.externals, seen, strip_quotes),
            ("Namespaces", members.namespaces, seen, str),
            ("Classes", members.classes, seen, str),
            ("Interfaces", members.interfaces, seen, str),
            ("Events", members.events, seen, str),
            ("Mixins", members.mixins, seen, str),
            ("Tutorials", members.tutorials, set(), str),
        )
        for heading, entries, seen_set, transform in sections:
            with self.resolver.context("navigation"):
                section = self._section(heading, entries, seen_set, transform)
            if section is not None:
                items.append(section)

        tree = NavTree(tuple(items))
        logger.debug("Navigation built", sections=len(items) - 1)
        return tree


def build_nav(
    members: Members, resolver: LinkResolver, use_longname_in_nav: bool = False
) -> NavTree:
    """Build the navigation tree; see NavBuilder."""
    return NavBuilder(resolver, use_longname_in_nav).build(members)
