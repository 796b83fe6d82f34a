"""
Link Resolver.

Turns long names and inline ``{@link}`` tags into HTML anchors using the
registry. This is the renderer-side half of cross-referencing: the
expander rewrites text into explicit tags, the resolver turns tags into
markup when a page is produced.

Unknown targets are never fatal. They render as escaped text and emit an
``unknown-link`` warning naming the target and the page or doclet being
processed (set with ``context()``).
"""

from __future__ import annotations

import html
import re
from contextlib import contextmanager
from typing import Iterator, List, Mapping, Optional, Tuple

from docforge.core.logging import PublishLogger, get_logger
from docforge.doclets.models import Doclet
from docforge.linking.patterns import INLINE_TAG_RE, SCHEME_RE
from docforge.linking.registry import LinkRegistry, scope_punctuation

logger = get_logger(__name__)

UNKNOWN_LINK = "unknown-link"
MISSING_TUTORIAL = "missing-tutorial"
UNKNOWN_CONTEXT = "<unknown>"

_LITERAL_RE = re.compile(r"^(null|undefined|true|false)$")
_PRIMITIVE_RE = re.compile(r"^(boolean|function|number|string)$")
_TYPE_APPLICATION_CHARS = re.compile(r"[<>|(){},\[\]]|\.<")
_TYPE_TOKEN_RE = re.compile(r"[A-Za-z_$][\w$]*(?:[.#~:/][\w$\-]+)*")
_HASH_RE = re.compile(r"^#.+")


class LinkResolver:
    """
    Resolve long names to anchors for one documentation run.

    Example:
        resolver = LinkResolver(registry, log)
        with resolver.context("mw.Api"):
            resolver.linkto("mw.Api#get", "get()")
            # '<a href="mw.Api.html#get">get()</a>'
    """

    def __init__(self, registry: LinkRegistry, log: Optional[PublishLogger] = None) -> None:
        self.registry = registry
        self.log = log
        self._context = UNKNOWN_CONTEXT

    # === Context ===

    @property
    def current_context(self) -> str:
        return self._context

    @contextmanager
    def context(self, name: Optional[str]) -> Iterator["LinkResolver"]:
        """Name the page or doclet being processed, for warnings."""
        previous = self._context
        self._context = name or UNKNOWN_CONTEXT
        try:
            yield self
        finally:
            self._context = previous

    def _warn(self, kind: str, message: str, subject: str) -> None:
        if self.log is not None:
            self.log.warn(kind, message, subject=subject)
        else:
            logger.warning(message)

    def _warn_unknown(self, target: str) -> None:
        self._warn(UNKNOWN_LINK, f"Unknown link {target} in {self._context}", target)

    # === Anchors ===

    @staticmethod
    def anchor(url: str, text: str, css_class: Optional[str] = None) -> str:
        """Build an anchor element; text is inserted as given."""
        class_attr = f' class="{html.escape(css_class)}"' if css_class else ""
        return f'<a href="{html.escape(url)}"{class_attr}>{text}</a>'

    def _lookup(self, longname: str, text: Optional[str], css_class: Optional[str],
                fragment_id: Optional[str]) -> Optional[str]:
        if SCHEME_RE.match(longname):
            return self.anchor(longname, text or html.escape(longname), css_class)
        url = self.registry.resolve(longname)
        if url is None:
            return None
        if fragment_id:
            url = url.split("#", 1)[0] + "#" + fragment_id
        return self.anchor(url, text or html.escape(longname), css_class)

    def _link_type_application(self, expression: str, css_class: Optional[str]) -> str:
        """Link each name inside a type expression such as ``Array.<Foo>``."""
        parts: List[str] = []
        position = 0
        for match in _TYPE_TOKEN_RE.finditer(expression):
            parts.append(html.escape(expression[position:match.start()]))
            token = match.group(0)
            linked = self._lookup(token, None, css_class, None)
            if linked is None:
                self._warn_unknown(token)
                linked = html.escape(token)
            parts.append(linked)
            position = match.end()
        parts.append(html.escape(expression[position:]))
        return "".join(parts)

    def linkto(
        self,
        longname: str,
        text: Optional[str] = None,
        css_class: Optional[str] = None,
        fragment_id: Optional[str] = None,
    ) -> str:
        """
        Render a link to a long name, URL or type expression.

        Args:
            longname: Target long name, URL or type expression
            text: Link text (HTML); defaults to the escaped target
            css_class: Optional class attribute
            fragment_id: Optional fragment replacing the target's own

        Returns:
            An anchor, a ``<code>`` literal, or escaped text when the
            target is unknown
        """
        if longname == "any":
            return longname
        if _LITERAL_RE.match(longname):
            return f"<code>{longname}</code>"
        if _PRIMITIVE_RE.match(longname):
            longname = longname[0].upper() + longname[1:]

        if not SCHEME_RE.match(longname) and _TYPE_APPLICATION_CHARS.search(longname):
            if longname not in self.registry:
                return self._link_type_application(longname, css_class)

        linked = self._lookup(longname, text, css_class, fragment_id)
        if linked is None:
            self._warn_unknown(longname)
            return text or html.escape(longname)
        return linked

    def tutorial_link(self, name: str, text: Optional[str] = None) -> str:
        """
        Render a link to a tutorial.

        Unknown tutorials render as ``<em class="disabled">Tutorial: name</em>``.
        """
        url = self.registry.tutorial_url(name)
        if url is None:
            self._warn(
                MISSING_TUTORIAL,
                f"Missing tutorial {name} in {self._context}",
                name,
            )
            return f'<em class="disabled">Tutorial: {html.escape(name)}</em>'
        title = text or html.escape(self.registry.tutorial_title(name) or name)
        return self.anchor(url, title)

    # === Inline tags ===

    @staticmethod
    def split_link_text(content: str) -> Tuple[str, Optional[str]]:
        """Split ``target|text`` or ``target text`` into its parts."""
        if "|" in content:
            target, text = content.split("|", 1)
        else:
            pieces = content.split(None, 1)
            target = pieces[0] if pieces else ""
            text = pieces[1] if len(pieces) > 1 else None
        target = target.strip()
        text = text.strip() if text is not None else None
        return target, text or None

    def _replace_inline_tag(self, match: "re.Match[str]") -> str:
        prefix_text, tag, content = match.group(1), match.group(2).lower(), match.group(3)
        if tag == "tutorial":
            return self.tutorial_link(content.strip(), prefix_text)

        target, text = self.split_link_text(content)
        text = prefix_text or text or target
        if tag == "linkcode":
            text = f"<code>{text}</code>"

        linked = self._lookup(target, text, None, None)
        if linked is None:
            self._warn_unknown(target)
            return text
        return linked

    def resolve_links(self, text: str) -> str:
        """Replace every inline link and tutorial tag in text with markup."""
        return INLINE_TAG_RE.sub(self._replace_inline_tag, text)

    # === Doclet helpers ===

    def hash_to_link(self, doclet: Doclet, hash_text: str) -> str:
        """
        Turn a ``#fragment`` reference into a link on the doclet's own page.

        Any other text is returned unchanged.
        """
        if not _HASH_RE.match(hash_text):
            return hash_text
        url = self.registry.resolve(doclet.longname or "") or self.registry.create_link(doclet)
        url = url.split("#", 1)[0] + hash_text
        return self.anchor(url, hash_text)

    def ancestor_links(self, doclet: Doclet, index: Mapping[str, Doclet]) -> List[str]:
        """
        Link every enclosing symbol of a doclet, outermost first.

        The innermost ancestor is suffixed with the scope punctuation that
        joins it to the doclet (``.``, ``#`` or ``~``).

        Args:
            doclet: The doclet whose ancestors to link
            index: Doclets by long name
        """
        chain: List[Doclet] = []
        seen = set()
        parent_name = doclet.memberof
        while parent_name and parent_name not in seen:
            seen.add(parent_name)
            parent = index.get(parent_name)
            if parent is None:
                break
            chain.append(parent)
            parent_name = parent.memberof
        chain.reverse()

        links = [
            self.linkto(p.longname or "", html.escape(p.name or p.longname or ""))
            for p in chain
        ]
        if links:
            links[-1] += scope_punctuation(doclet.scope)
        return links
