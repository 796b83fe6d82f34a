"""Source file bookkeeping for doclets and source pages."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from docforge.doclets.models import Doclet


@dataclass
class SourceFile:
    """A source file referenced by at least one doclet."""

    resolved: str
    shortened: Optional[str] = None
    filename: Optional[str] = None


def source_path(doclet: Doclet) -> Optional[str]:
    """Full source path of a doclet, or None when it has no location."""
    meta = doclet.meta
    if meta is None:
        return None
    if meta.path and meta.path != "null":
        return os.path.join(meta.path, meta.filename or "")
    return meta.filename


def common_prefix(paths: Iterable[str]) -> str:
    """
    Longest directory prefix shared by every path, with a trailing separator.

    Returns "" when the paths share nothing.
    """
    directories = [os.path.dirname(p) for p in paths]
    if not directories:
        return ""
    try:
        prefix = os.path.commonpath(directories)
    except ValueError:
        return ""
    if not prefix:
        return ""
    return prefix if prefix.endswith(os.sep) else prefix + os.sep


def shorten_paths(files: Dict[str, SourceFile], prefix: str) -> Dict[str, SourceFile]:
    """Strip prefix from every resolved path and use forward slashes."""
    for source in files.values():
        shortened = source.resolved
        if prefix and shortened.startswith(prefix):
            shortened = shortened[len(prefix):]
        source.shortened = shortened.replace("\\", "/")
    return files
