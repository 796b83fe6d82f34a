"""
Text-bearing doclet fields.

The link expander walks a fixed set of doclet fields. Instead of
inspecting values at runtime, each field is declared here with its
shape, and the walker dispatches on the declaration:

    TEXT          description, classdesc, summary
    TEXT_LIST     author, see
    RECORD_LIST   params, returns, yields, properties, exceptions

Records (DocletItem) carry their own text fields in RECORD_TEXT_FIELDS.
"""

from enum import Enum
from typing import Dict


class FieldShape(str, Enum):
    """Shape of a text-bearing field."""

    TEXT = "text"
    TEXT_LIST = "text_list"
    RECORD_LIST = "record_list"


TEXT_FIELDS: Dict[str, FieldShape] = {
    "author": FieldShape.TEXT_LIST,
    "classdesc": FieldShape.TEXT,
    "description": FieldShape.TEXT,
    "exceptions": FieldShape.RECORD_LIST,
    "params": FieldShape.RECORD_LIST,
    "properties": FieldShape.RECORD_LIST,
    "returns": FieldShape.RECORD_LIST,
    "see": FieldShape.TEXT_LIST,
    "summary": FieldShape.TEXT,
    "yields": FieldShape.RECORD_LIST,
}

RECORD_TEXT_FIELDS: Dict[str, FieldShape] = {
    "description": FieldShape.TEXT,
}

# Free-text fields only expanded when they already hold an explicit link
LINK_ONLY_FIELDS = frozenset(["author", "see"])
