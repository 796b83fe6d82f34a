"""Sidebar navigation: member grouping, tree building and page views."""

from docforge.navigation.builder import NavBuilder, build_nav, display_name
from docforge.navigation.members import Members, get_members, strip_quotes
from docforge.navigation.tree import NavNode, NavTree, NavView

__all__ = [
    "Members",
    "NavBuilder",
    "NavNode",
    "NavTree",
    "NavView",
    "build_nav",
    "display_name",
    "get_members",
    "strip_quotes",
]
