"""Doclet records, the text-field descriptor and input loading."""

from docforge.doclets.fields import (
    LINK_ONLY_FIELDS,
    RECORD_TEXT_FIELDS,
    TEXT_FIELDS,
    FieldShape,
)
from docforge.doclets.loader import load_doclets, load_tutorials, prune, sort_doclets
from docforge.doclets.models import (
    CONTAINER_KINDS,
    CodeMeta,
    Doclet,
    DocletItem,
    Example,
    Meta,
    Tutorial,
    TypeSpec,
)

__all__ = [
    "CONTAINER_KINDS",
    "CodeMeta",
    "Doclet",
    "DocletItem",
    "Example",
    "FieldShape",
    "LINK_ONLY_FIELDS",
    "Meta",
    "RECORD_TEXT_FIELDS",
    "TEXT_FIELDS",
    "Tutorial",
    "TypeSpec",
    "load_doclets",
    "load_tutorials",
    "prune",
    "sort_doclets",
]
