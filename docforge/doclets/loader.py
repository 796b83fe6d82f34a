"""
Doclet Loading and Pruning.

Reads the doclet collection produced by ``jsdoc -X`` (a JSON array of
doclet objects) and the tutorial tree, and filters out doclets that
never appear in output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

from pydantic import ValidationError

from docforge.core.exceptions import DocletValidationError, InputError
from docforge.core.logging import get_logger
from docforge.doclets.models import Doclet, Tutorial

logger = get_logger(__name__)

DocletSource = Union[Path, str, Sequence[Any]]


def _read_json(path: Path) -> Any:
    """Read a JSON document, converting failures to InputError."""
    if not path.exists():
        raise InputError(f"Doclet file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"Doclet file {path} is not valid JSON: {e}") from e


def load_doclets(source: DocletSource) -> List[Doclet]:
    """
    Load doclets from a JSON file or an in-memory list.

    Args:
        source: Path to a jsdoc -X dump, or a sequence of dicts/Doclets

    Returns:
        Doclets in input order

    Raises:
        InputError: If the source is missing or not a JSON array
        DocletValidationError: If a record does not match the schema
    """
    if isinstance(source, (str, Path)):
        source = _read_json(Path(source))
    if not isinstance(source, (list, tuple)):
        raise InputError(
            f"Doclet input must be a list of records, got {type(source).__name__}"
        )

    doclets: List[Doclet] = []
    for index, record in enumerate(source):
        if isinstance(record, Doclet):
            doclets.append(record)
            continue
        if not isinstance(record, dict):
            raise DocletValidationError(
                f"Doclet record {index} is a {type(record).__name__}, not an object",
                index=index,
            )
        try:
            doclets.append(Doclet.model_validate(record))
        except ValidationError as e:
            raise DocletValidationError(
                f"Doclet record {index} is invalid: {e}", index=index
            ) from e
    logger.debug("Loaded doclets", count=len(doclets))
    return doclets


def load_tutorials(source: Union[Path, str, dict, None]) -> Tutorial:
    """
    Load the tutorial tree.

    Args:
        source: Path to a JSON file, a dict with "children", or None

    Returns:
        Root Tutorial (unnamed) whose children are the top-level tutorials
    """
    if source is None:
        return Tutorial(name="")
    if isinstance(source, (str, Path)):
        source = _read_json(Path(source))
    if isinstance(source, list):
        source = {"children": source}
    if not isinstance(source, dict):
        raise InputError("Tutorial input must be an object or a list of tutorials")
    try:
        return Tutorial.model_validate({"name": "", **source})
    except ValidationError as e:
        raise InputError(f"Tutorial tree is invalid: {e}") from e


def prune(doclets: Iterable[Doclet], include_private: bool = False) -> List[Doclet]:
    """
    Drop doclets that never produce output.

    Removes undocumented and @ignore'd doclets, members of anonymous
    scopes, and private doclets unless include_private is set.
    """
    kept: List[Doclet] = []
    for doclet in doclets:
        if doclet.undocumented or doclet.ignore:
            continue
        if doclet.memberof == "<anonymous>":
            continue
        if doclet.access == "private" and not include_private:
            continue
        kept.append(doclet)
    return kept


def sort_doclets(doclets: Iterable[Doclet]) -> List[Doclet]:
    """Order doclets by long name, then version, then since."""
    return sorted(
        doclets,
        key=lambda d: (d.longname or "", d.version or "", d.since or ""),
    )
