"""
Shorthand & URL Link Expander.

Rewrites documentation text so every reference is an explicit
``{@link target text}`` tag before the renderer resolves links.

Steps
-----
Applied in this order; each step skips markup produced by earlier ones:

1. Shorthand expansion
       {@link .foo}  in Base#bar   →  {@link Base.foo .foo}
       {@link #foo}  in Base.bar   →  {@link Base#foo #foo}
2. Bare-URL autolinking
       see https://example.com/docs  →  see {@link https://example.com/docs}
   URLs already inside a tag, after "@", or in an attribute value are kept.
3. Ticket autolinking (only when the base URL is absolute)
       T12345  →  {@link https://phabricator.wikimedia.org/T12345 T12345}
   Any capital-letter prefix counts (BUG42); an empty base means the default.

Running the expander on its own output changes nothing.

Field Walk
----------
process_doclet() visits the fields declared in docforge.doclets.fields.
``author`` and ``see`` are plain free text in most projects, so they are
only expanded when they already contain ``{@link``.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import Iterable, List, Optional, Sequence, Tuple

from docforge.core.config.sections import DEFAULT_PHABRICATOR_BASE_URL
from docforge.core.logging import get_logger
from docforge.doclets.fields import (
    LINK_ONLY_FIELDS,
    RECORD_TEXT_FIELDS,
    TEXT_FIELDS,
    FieldShape,
)
from docforge.doclets.models import Doclet
from docforge.linking.patterns import (
    ABSOLUTE_URL_RE,
    AUTOLINK_GUARD_RE,
    PROTECTED_SPAN_RE,
    SHORTHAND_LINK_RE,
    TICKET_RE,
    WEB_URL_RE,
)

logger = get_logger(__name__)


def base_longname(longname: str) -> str:
    """Portion of a long name before the first ``#`` or ``.``."""
    for index, char in enumerate(longname):
        if char in "#.":
            return longname[:index]
    return longname


def module_root(longname: str) -> str:
    """Portion of a long name before the first ``~``."""
    return longname.split("~", 1)[0]


def _protected_spans(text: str) -> Tuple[List[int], List[int]]:
    """Start and end offsets of inline tags and HTML tags in text."""
    starts: List[int] = []
    ends: List[int] = []
    for match in PROTECTED_SPAN_RE.finditer(text):
        starts.append(match.start())
        ends.append(match.end())
    return starts, ends


def _inside(spans: Tuple[List[int], List[int]], position: int) -> bool:
    starts, ends = spans
    index = bisect_right(starts, position) - 1
    return index >= 0 and position < ends[index]


class LinkExpander:
    """
    Expand shorthand references, bare URLs and ticket IDs in doclet text.

    Example:
        expander = LinkExpander()
        expander.expand_text("Like {@link #size}.", "Map#get")
        # "Like {@link Map#size #size}."
    """

    def __init__(self, ticket_base_url: Optional[str] = DEFAULT_PHABRICATOR_BASE_URL) -> None:
        """
        Initialize the expander.

        Args:
            ticket_base_url: Prefix for ticket links; empty values fall back
                to the Wikimedia Phabricator URL. Ticket autolinking is
                disabled when this is not an absolute http(s) URL.
        """
        self.ticket_base_url = ticket_base_url or DEFAULT_PHABRICATOR_BASE_URL
        self.tickets_enabled = bool(ABSOLUTE_URL_RE.match(self.ticket_base_url))
        if not self.tickets_enabled:
            logger.debug("Ticket autolinking disabled", base=self.ticket_base_url)

    # === Text ===

    def expand_shorthand(self, text: str, longname: str) -> str:
        """Rewrite ``{@link .x}`` / ``{@link #x}`` against the doclet's base name."""
        basename = base_longname(longname)
        return SHORTHAND_LINK_RE.sub(
            lambda m: "{@link " + basename + m.group(1) + m.group(2)
            + " " + m.group(1) + m.group(2) + "}",
            text,
        )

    def autolink_urls(self, text: str) -> str:
        """Wrap bare URLs in ``{@link}`` tags."""
        spans = _protected_spans(text)

        def replace(match: "re.Match[str]") -> str:
            url = match.group(0)
            if AUTOLINK_GUARD_RE.search(match.string, 0, match.start()):
                return url
            if _inside(spans, match.start()):
                return url
            return "{@link " + url + "}"

        return WEB_URL_RE.sub(replace, text)

    def autolink_tickets(self, text: str) -> str:
        """Wrap ticket IDs in ``{@link}`` tags pointing at the ticket base URL."""
        if not self.tickets_enabled:
            return text
        spans = _protected_spans(text)

        def replace(match: "re.Match[str]") -> str:
            task = match.group(0)
            if _inside(spans, match.start()):
                return task
            return "{@link " + self.ticket_base_url + task + " " + task + "}"

        return TICKET_RE.sub(replace, text)

    def expand_text(self, text: str, longname: str) -> str:
        """
        Run all three expansion steps on one text value.

        Args:
            text: Documentation text
            longname: Long name of the doclet the text belongs to

        Returns:
            Text with explicit references
        """
        text = self.expand_shorthand(text, longname)
        text = self.autolink_urls(text)
        return self.autolink_tickets(text)

    # === Doclets ===

    @staticmethod
    def expand_augments(augments: Sequence[str], longname: str) -> List[str]:
        """
        Qualify ``:Parent`` / ``~Parent`` against the current module.

        Example:
            expand_augments([":Base"], "module:ui~Widget")  # ["module:ui~Base"]
        """
        root = module_root(longname)
        return [
            root + "~" + name[1:] if name[:1] in (":", "~") else name
            for name in augments
        ]

    def _expand_field(self, field_name: str, text: str, longname: str) -> str:
        if field_name in LINK_ONLY_FIELDS and "{@link" not in text:
            return text
        return self.expand_text(text, longname)

    def _process_fields(self, record: object, descriptor: dict, field_prefix: str,
                        longname: str) -> None:
        for field_name, shape in descriptor.items():
            value = getattr(record, field_name, None)
            if value is None:
                continue
            # Records inherit the link-only rule of the field they sit in
            rule_name = field_prefix or field_name
            if shape is FieldShape.TEXT:
                setattr(record, field_name, self._expand_field(rule_name, value, longname))
            elif shape is FieldShape.TEXT_LIST:
                setattr(
                    record,
                    field_name,
                    [self._expand_field(rule_name, item, longname) for item in value],
                )
            elif shape is FieldShape.RECORD_LIST:
                for item in value:
                    self._process_fields(item, RECORD_TEXT_FIELDS, field_name, longname)

    def process_doclet(self, doclet: Doclet) -> Doclet:
        """
        Expand every text-bearing field of a doclet in place.

        Args:
            doclet: Doclet to rewrite

        Returns:
            The same doclet, for chaining
        """
        longname = doclet.longname or ""
        if doclet.augments:
            doclet.augments = self.expand_augments(doclet.augments, longname)
        self._process_fields(doclet, TEXT_FIELDS, "", longname)
        return doclet

    def process_all(self, doclets: Iterable[Doclet]) -> int:
        """Expand every doclet; returns the number processed."""
        count = 0
        for doclet in doclets:
            self.process_doclet(doclet)
            count += 1
        return count
