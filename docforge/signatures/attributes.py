"""Attribute badges shown next to symbol names and signature entries."""

import html
from typing import List, Sequence, Union

from docforge.doclets.models import Doclet, DocletItem

_SCOPED_KINDS = ("function", "member", "constant")


def signature_attributes(item: Union[Doclet, DocletItem]) -> List[str]:
    """
    Badges for one parameter or return entry.

    "opt" when optional, then "nullable" / "non-null" only when the
    nullability flag is explicitly set.
    """
    attributes: List[str] = []
    if getattr(item, "optional", None):
        attributes.append("opt")
    if item.nullable is True:
        attributes.append("nullable")
    elif item.nullable is False:
        attributes.append("non-null")
    return attributes


def get_attribs(doclet: Doclet) -> List[str]:
    """Badges for a symbol, in display order."""
    attribs: List[str] = []
    if doclet.is_async:
        attribs.append("async")
    if doclet.generator:
        attribs.append("generator")
    if doclet.virtual:
        attribs.append("abstract")
    if doclet.access and doclet.access != "public":
        attribs.append(doclet.access)
    if doclet.scope and doclet.scope not in ("instance", "global"):
        if doclet.kind in _SCOPED_KINDS:
            attribs.append(doclet.scope)
    if doclet.readonly is True and doclet.kind == "member":
        attribs.append("readonly")
    if doclet.kind == "constant":
        attribs.append("constant")
    if doclet.nullable is True:
        attribs.append("nullable")
    elif doclet.nullable is False:
        attribs.append("non-null")
    return attribs


def build_attribs_string(attribs: Sequence[str]) -> str:
    """Render badges as an escaped ``(a, b) `` string, or "" when empty."""
    if not attribs:
        return ""
    return html.escape("(" + ", ".join(attribs) + ") ")
