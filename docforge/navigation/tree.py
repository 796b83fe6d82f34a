"""
Navigation tree.

The tree is built once per run and never changes. Highlighting the
current page produces a ``NavView``: the same tree plus the frozenset of
node ids to mark. Rendering a view always builds new output, so the
markup or dicts handed to one page cannot affect another.

Rendered shape::

    <ol>
      <li class="nav__item"><a href="index.html">Home</a></li>
      <li class="nav__item is-on"><a>Classes</a>
        <ul class="nav__sub-items">
          <li class="nav__sub-item is-on"><a href="Foo.html">Foo</a></li>
        </ul>
      </li>
    </ol>
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple

CURRENT_CLASS = "is-on"
ITEM_CLASS = "nav__item"
SUB_ITEM_CLASS = "nav__sub-item"
SUB_LIST_CLASS = "nav__sub-items"


@dataclass(frozen=True)
class NavNode:
    """
    One list item of the navigation.

    Attributes:
        node_id: Identifier unique within the tree
        label: Heading text (section and Home items)
        href: Link target, or None for plain items and bare headings
        markup: Pre-rendered inner HTML (entry items)
        sub: Whether this is an entry inside a section
        children: Entries of a section
    """

    node_id: int
    label: str = ""
    href: Optional[str] = None
    markup: Optional[str] = None
    sub: bool = False
    children: Tuple["NavNode", ...] = ()

    def walk(self) -> Iterator["NavNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


class NavTree:
    """Immutable navigation tree with per-page views."""

    def __init__(self, items: Tuple[NavNode, ...]) -> None:
        self.items = items
        self._parents: Dict[int, Optional[int]] = {}
        for item in items:
            self._index(item, None)

    def _index(self, node: NavNode, parent: Optional[int]) -> None:
        self._parents[node.node_id] = parent
        for child in node.children:
            self._index(child, node.node_id)

    def nodes(self) -> Iterator[NavNode]:
        for item in self.items:
            yield from item.walk()

    def section_labels(self) -> List[str]:
        """Labels of the top-level items, in order."""
        return [item.label for item in self.items]

    def find_section(self, label: str) -> Optional[NavNode]:
        for item in self.items:
            if item.label == label:
                return item
        return None

    def highlighted_ids(self, filename: str) -> FrozenSet[int]:
        """Ids of every item linking to filename, plus their ancestors."""
        marked = set()
        for node in self.nodes():
            if node.href != filename:
                continue
            node_id: Optional[int] = node.node_id
            while node_id is not None and node_id not in marked:
                marked.add(node_id)
                node_id = self._parents.get(node_id)
        return frozenset(marked)

    def view(self, filename: str) -> "NavView":
        return NavView(self, self.highlighted_ids(filename))

    def nav_function(self) -> Callable[[str], str]:
        """Return ``nav(filename) -> html`` for page templates."""

        def nav(filename: str) -> str:
            return self.view(filename).to_html()

        return nav


@dataclass(frozen=True)
class NavView:
    """A navigation tree as seen from one page."""

    tree: NavTree
    highlighted: FrozenSet[int]

    def is_on(self, node: NavNode) -> bool:
        return node.node_id in self.highlighted

    def _item_html(self, node: NavNode) -> str:
        classes = [SUB_ITEM_CLASS if node.sub else ITEM_CLASS]
        if self.is_on(node):
            classes.append(CURRENT_CLASS)
        if node.markup is not None:
            inner = node.markup
        else:
            href = f' href="{html.escape(node.href)}"' if node.href else ""
            inner = f"<a{href}>{html.escape(node.label)}</a>"
        if node.children:
            inner += (
                f'<ul class="{SUB_LIST_CLASS}">'
                + "".join(self._item_html(child) for child in node.children)
                + "</ul>"
            )
        return f'<li class="{" ".join(classes)}">{inner}</li>'

    def to_html(self) -> str:
        return "<ol>" + "".join(self._item_html(item) for item in self.tree.items) + "</ol>"

    def _item_dict(self, node: NavNode) -> Dict[str, Any]:
        return {
            "label": node.label,
            "href": node.href,
            "html": node.markup,
            "sub": node.sub,
            "is_on": self.is_on(node),
            "children": [self._item_dict(child) for child in node.children],
        }

    def to_dict(self) -> List[Dict[str, Any]]:
        """Plain nested structure; a new copy on every call."""
        return [self._item_dict(item) for item in self.tree.items]
