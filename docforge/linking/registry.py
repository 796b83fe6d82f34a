"""
Long-name Registry.

Bidirectional bookkeeping between a symbol's long name and the URL of
its generated output (``file.html`` or ``file.html#fragment``).

Architecture Context
--------------------
The registry is the only mutable state shared between publish stages.
It is created once per run and passed explicitly to every stage:

    LinkRegistry
    ├── reserve_defaults()      index.html / global.html claimed first
    ├── register()              first registration wins, later ones ignored
    ├── register_alias()        shortnames and linkMap entries
    ├── create_link()           canonical URL for a doclet
    └── unique_filename()       collision-free output filenames

Write-once Contract
-------------------
A long name maps to exactly one URL for the whole run. ``register`` on an
existing key is a silent no-op, because doclets may legitimately be visited
more than once. Aliases are second class: they never overwrite a mapping
and are tracked separately so page planning can skip them.

Stages run one after another on a single thread; a concurrent caller would
need to serialize writes and keep first-registration-wins.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Optional, Set, Tuple
from urllib.parse import quote

from docforge.core.logging import get_logger
from docforge.doclets.models import CONTAINER_KINDS, Doclet, Tutorial

logger = get_logger(__name__)

FILE_EXTENSION = ".html"
GLOBAL_LONGNAME = "global"
INDEX_LONGNAME = "index"

# Kinds whose names carry a "kind:" namespace prefix
NAMESPACE_KINDS = ("module", "event", "external")

SCOPE_TO_PUNC: Dict[str, str] = {
    "inner": "~",
    "instance": "#",
    "static": ".",
}

_NAMESPACE_PREFIX_RE = re.compile(r"^(" + "|".join(NAMESPACE_KINDS) + r"):")
_UNSAFE_FILENAME_CHARS_RE = re.compile(r"[\\/?*:|'\"<>]")
_VARIATION_RE = re.compile(r"\([\s\S]*\)$")
_LEADING_DOT_OR_DASH_RE = re.compile(r"^[.-]")
_FAKE_CONTAINER_RE = re.compile(r"([^\s:]+):")

# Characters encodeURI leaves alone
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def scope_punctuation(scope: Optional[str]) -> str:
    """Return the long-name separator for a scope ("" when unknown)."""
    return SCOPE_TO_PUNC.get(scope or "", "")


class LinkRegistry:
    """
    Long name → URL store for one documentation run.

    Example:
        registry = LinkRegistry()
        registry.reserve_defaults()
        url = registry.create_link(doclet)
        registry.register(doclet.longname, url)
        registry.resolve("Foo#bar")  # "Foo.html#bar"
    """

    def __init__(self) -> None:
        self._urls: Dict[str, str] = {}
        self._aliases: Set[str] = set()
        self._files: Dict[str, str] = {}
        self._ids: Dict[str, Dict[str, str]] = {}
        self._longname_ids: Dict[str, str] = {}
        self._tutorial_titles: Dict[str, str] = {}
        self._tutorial_urls: Dict[str, str] = {}
        self.index_url: Optional[str] = None
        self.global_url: Optional[str] = None

    # === Core mapping ===

    def register(self, longname: str, url: str) -> bool:
        """
        Store a long name → URL mapping.

        Args:
            longname: Canonical identifier
            url: Output URL (filename or filename#fragment)

        Returns:
            True if stored, False if the long name was already mapped
        """
        if longname in self._urls:
            return False
        self._urls[longname] = url
        return True

    def register_alias(self, name: str, url: str) -> bool:
        """
        Store a second-class alias for a URL.

        Never overwrites an existing mapping.

        Returns:
            True if the alias was added
        """
        if name in self._urls:
            return False
        self._urls[name] = url
        self._aliases.add(name)
        return True

    def resolve(self, longname: str) -> Optional[str]:
        """Return the URL for a long name or alias, if registered."""
        return self._urls.get(longname)

    def is_alias(self, name: str) -> bool:
        """Whether name was registered as an alias rather than a long name."""
        return name in self._aliases

    def longnames(self) -> List[str]:
        """Snapshot of every registered key, in registration order."""
        return list(self._urls)

    def items(self) -> List[Tuple[str, str]]:
        """Snapshot of every (key, url) pair, in registration order."""
        return list(self._urls.items())

    @property
    def aliases(self) -> Set[str]:
        """Copy of the alias set."""
        return set(self._aliases)

    def __contains__(self, longname: object) -> bool:
        return longname in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.longnames())

    # === Filenames ===

    def unique_filename(self, name: Optional[str]) -> str:
        """
        Claim a collision-free output filename derived from name.

        Filenames are compared case-insensitively; collisions get
        underscores appended until unique.

        Example:
            registry.unique_filename("module:foo/bar~baz")  # "module-foo_bar-baz.html"
        """
        basename = _NAMESPACE_PREFIX_RE.sub(r"\1-", name or "")
        basename = _UNSAFE_FILENAME_CHARS_RE.sub("_", basename)
        basename = basename.replace("~", "-").replace("#", "_")
        basename = _VARIATION_RE.sub("", basename)
        basename = _LEADING_DOT_OR_DASH_RE.sub("", basename)
        basename = basename or "_"

        # No hidden-looking or underscore-led filenames
        if basename[0] == "_":
            basename = "-" + basename

        key = basename.lower()
        while key in self._files:
            basename += "_"
            key = basename.lower()
        self._files[key] = name or ""
        return basename + FILE_EXTENSION

    def reserve_defaults(self) -> None:
        """
        Claim the index and global filenames before any doclet is seen.

        "index" is deliberately not registered as a long name: a real
        symbol may be called "index" and must still resolve to its own page.
        """
        if self.index_url is None:
            self.index_url = self.unique_filename(INDEX_LONGNAME)
        if self.global_url is None:
            self.global_url = self.unique_filename(GLOBAL_LONGNAME)
            self.register(GLOBAL_LONGNAME, self.global_url)

    def _get_filename(self, longname: str) -> str:
        """Return the page filename for longname, claiming one if needed."""
        url = self._urls.get(longname)
        if url is None:
            url = self.unique_filename(longname)
            self.register(longname, url)
        return url.split("#", 1)[0]

    # === Fragments ===

    @staticmethod
    def format_name_for_link(doclet: Doclet) -> str:
        """Fragment text for a doclet that lives inside another page."""
        prefix = doclet.kind + ":" if doclet.kind in NAMESPACE_KINDS else ""
        name = prefix + (doclet.name or "") + (doclet.variation or "")
        punc = scope_punctuation(doclet.scope)
        if punc != "#":
            name = punc + name
        return name

    def _make_unique_id(self, filename: str, fragment: str) -> str:
        fragment = re.sub(r"\s", "", fragment)
        ids = self._ids.setdefault(filename, {})
        key = fragment.lower()
        while key in ids:
            fragment += "_"
            key = fragment.lower()
        ids[key] = fragment
        return fragment

    def _get_id(self, longname: str, filename: str, fragment: str) -> str:
        if longname in self._longname_ids:
            return self._longname_ids[longname]
        if not fragment:
            return ""
        fragment = self._make_unique_id(filename, fragment)
        self._longname_ids[longname] = fragment
        return fragment

    # === Links ===

    def create_link(self, doclet: Doclet) -> str:
        """
        Compute the canonical URL for a doclet.

        Container kinds and module exports get their own page. Everything
        else lives on its parent's page (or the global page) under a
        fragment that is unique within that page.
        """
        longname = doclet.longname or ""
        fake_container = None
        fragment = ""

        # A doclet whose long name implies its own page but whose kind
        # says otherwise (e.g. a module mistagged as a member)
        if doclet.kind not in CONTAINER_KINDS:
            match = _FAKE_CONTAINER_RE.match(longname)
            if match and match.group(1) in CONTAINER_KINDS:
                fake_container = match.group(1)

        if doclet.kind in CONTAINER_KINDS or doclet.is_module_export:
            filename = self._get_filename(longname)
        elif fake_container:
            filename = self._get_filename(doclet.memberof or longname)
            if doclet.name != doclet.longname:
                fragment = self._get_id(
                    longname, filename, self.format_name_for_link(doclet)
                )
        else:
            filename = self._get_filename(doclet.memberof or GLOBAL_LONGNAME)
            if doclet.name != doclet.longname or doclet.scope == "global":
                fragment = self._get_id(
                    longname, filename, self.format_name_for_link(doclet)
                )

        url = filename + ("#" + fragment if fragment else "")
        return quote(url, safe=_URI_SAFE)

    # === Tutorials ===

    def set_tutorials(self, root: Tutorial) -> None:
        """Record the tutorials that may be linked to."""
        self._tutorial_titles = {t.name: t.display_title for t in root.walk()}

    def tutorial_title(self, name: str) -> Optional[str]:
        """Return the display title of a known tutorial."""
        return self._tutorial_titles.get(name)

    def tutorial_url(self, name: str) -> Optional[str]:
        """
        Return the output filename of a tutorial.

        Returns:
            Filename, or None when no tutorial has that name
        """
        if name not in self._tutorial_titles:
            return None
        if name not in self._tutorial_urls:
            self._tutorial_urls[name] = self.unique_filename("tutorial-" + name)
        return self._tutorial_urls[name]
