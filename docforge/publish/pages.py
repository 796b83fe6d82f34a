"""
Page planning.

Decides which pages a run produces, their titles, output filenames and
the records each one renders. Writing the pages is up to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from docforge.doclets.models import Doclet, Tutorial
from docforge.linking.registry import LinkRegistry
from docforge.navigation.members import Members
from docforge.publish.sources import SourceFile

# Page title prefix per container group, in the order pages are planned
CONTAINER_TITLES = (
    ("modules", "Module"),
    ("classes", "Class"),
    ("namespaces", "Namespace"),
    ("mixins", "Mixin"),
    ("externals", "External"),
    ("interfaces", "Interface"),
)


@dataclass
class PagePlan:
    """One output page."""

    title: str
    filename: str
    docs: List[Any] = field(default_factory=list)
    resolve_links: bool = True
    kind: str = "container"


def attach_module_symbols(doclets: Iterable[Doclet], modules: Iterable[Doclet]) -> None:
    """
    Attach the classes and functions a module exports to the module doclet.

    A symbol sharing its long name with a module is that module's export.
    Copies are attached (symbols without a description are skipped, except
    classes) and class/function display names become ``(require("foo"))``.
    """
    symbols: Dict[str, List[Doclet]] = {}
    for symbol in doclets:
        if symbol.longname:
            symbols.setdefault(symbol.longname, []).append(symbol)

    for module in modules:
        found = symbols.get(module.longname or "")
        if not found:
            continue
        attached: List[Doclet] = []
        for symbol in found:
            if not (symbol.description or symbol.kind == "class"):
                continue
            symbol = symbol.model_copy(deep=True)
            if symbol.kind in ("class", "function") and symbol.name:
                symbol.name = symbol.name.replace("module:", '(require("', 1) + '"))'
            attached.append(symbol)
        module.modules = attached


def _find(doclets: Iterable[Doclet], longname: str) -> List[Doclet]:
    return [d for d in doclets if d.longname == longname]


def plan_pages(
    registry: LinkRegistry,
    members: Members,
    doclets: List[Doclet],
    tutorials: Tutorial,
    source_files: Optional[Dict[str, SourceFile]] = None,
    main_page_title: str = "Main Page",
) -> List[PagePlan]:
    """
    List every page of the run, in generation order.

    Source pages come first so other pages can link to them, then Global
    (only when there are globals), Home, one page per container long name
    (aliases own no page) and one per tutorial.
    """
    pages: List[PagePlan] = []

    for source in (source_files or {}).values():
        if source.filename is None:
            continue
        pages.append(
            PagePlan(
                title=f"Source: {source.shortened}",
                filename=source.filename,
                docs=[{"kind": "source", "path": source.resolved}],
                resolve_links=False,
                kind="source",
            )
        )

    if members.globals and registry.global_url:
        pages.append(
            PagePlan("Global", registry.global_url, [{"kind": "globalobj"}], kind="global")
        )

    home_docs: List[Any] = [d for d in doclets if d.kind == "package"]
    home_docs.append({"kind": "mainpage", "longname": main_page_title})
    home_docs.extend(d for d in doclets if d.kind == "file")
    pages.append(PagePlan("Home", registry.index_url or "index.html", home_docs, kind="index"))

    for longname, url in registry.items():
        if registry.is_alias(longname):
            continue
        for group, prefix in CONTAINER_TITLES:
            found = _find(getattr(members, group), longname)
            if found:
                pages.append(PagePlan(f"{prefix}: {found[0].name}", url, found))

    for tutorial in tutorials.walk():
        filename = registry.tutorial_url(tutorial.name)
        if filename:
            pages.append(
                PagePlan(
                    f"Tutorial: {tutorial.display_title}",
                    filename,
                    [tutorial],
                    kind="tutorial",
                )
            )

    return pages
