"""
Shared pytest fixtures and configuration for DocForge tests.

Fixture Organization
--------------------
- **registry / publish_log / resolver**: fresh linking state per test
- **make_doclet**: builds a Doclet from keyword fields
- **sample_records**: a small jsdoc -X style API (namespace, class,
  module, typedef, event, external, globals) as raw dicts
- **doclets_file / tutorials_file**: the same data written to JSON
"""

import copy
import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from docforge.core.logging import PublishLogger
from docforge.doclets.models import Doclet
from docforge.linking.registry import LinkRegistry
from docforge.linking.resolver import LinkResolver

_MAP_META = {"path": "/src/lib", "filename": "map.js", "lineno": 1}
_API_META = {"path": "/src/lib", "filename": "api.js", "lineno": 1}

SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {
        "longname": "mw",
        "name": "mw",
        "kind": "namespace",
        "scope": "global",
        "description": "Core namespace.",
        "meta": _MAP_META,
    },
    {
        "longname": "mw.Map",
        "name": "Map",
        "kind": "class",
        "memberof": "mw",
        "scope": "static",
        "classdesc": "Key/value store. See T1234.",
        "meta": _MAP_META,
    },
    {
        "longname": "mw.Map#get",
        "name": "get",
        "kind": "function",
        "memberof": "mw.Map",
        "scope": "instance",
        "description": "Like {@link #set}, but reads.",
        "params": [
            {"name": "key", "type": {"names": ["string"]}},
            {"name": "fallback", "optional": True},
        ],
        "returns": [{"type": {"names": ["mw.Map"]}}],
        "meta": _MAP_META,
    },
    {
        "longname": "mw.Map#options",
        "name": "options",
        "kind": "member",
        "memberof": "mw.Map",
        "scope": "instance",
        "description": "Options of the map.",
        "type": {"names": ["module:mw/Api~Options"]},
        "meta": _MAP_META,
    },
    {
        "longname": "mw.Map#event:change",
        "name": "change",
        "kind": "event",
        "memberof": "mw.Map",
        "scope": "instance",
        "description": "Fired on change.",
        "meta": _MAP_META,
    },
    {
        "longname": "mw.Map#_secret",
        "name": "_secret",
        "kind": "function",
        "memberof": "mw.Map",
        "scope": "instance",
        "access": "private",
        "meta": _MAP_META,
    },
    {
        "longname": "mw.config",
        "name": "config",
        "kind": "constant",
        "memberof": "mw",
        "scope": "static",
        "description": "Site configuration.",
        "meta": _MAP_META,
    },
    {
        "longname": "module:mw/Api",
        "name": "mw/Api",
        "kind": "module",
        "description": "API client module. Docs at https://www.mediawiki.org/wiki/API now.",
        "meta": _API_META,
    },
    {
        "longname": "module:mw/Api~Options",
        "name": "Options",
        "kind": "typedef",
        "memberof": "module:mw/Api",
        "scope": "inner",
        "description": "Request options.",
        "type": {"names": ["Object"]},
        "meta": _API_META,
    },
    {
        "longname": "module:mw/Api~request",
        "name": "request",
        "kind": "function",
        "memberof": "module:mw/Api",
        "scope": "inner",
        "description": "Send a request.",
        "meta": _API_META,
    },
    {
        "longname": "external:jQuery",
        "name": "jQuery",
        "kind": "external",
        "description": "The jQuery library.",
    },
    {
        "longname": "globalHelper",
        "name": "globalHelper",
        "kind": "function",
        "scope": "global",
        "description": "A global helper.",
        "meta": _API_META,
    },
    {
        "longname": "mw.Map#undocumentedThing",
        "name": "undocumentedThing",
        "kind": "member",
        "memberof": "mw.Map",
        "scope": "instance",
        "undocumented": True,
    },
]

SAMPLE_TUTORIALS: Dict[str, Any] = {
    "children": [
        {
            "name": "getting-started",
            "title": "Getting Started",
            "children": [{"name": "advanced", "title": "Advanced Use"}],
        }
    ]
}


@pytest.fixture
def registry() -> LinkRegistry:
    """Registry with index/global already reserved."""
    reg = LinkRegistry()
    reg.reserve_defaults()
    return reg


@pytest.fixture
def publish_log() -> PublishLogger:
    return PublishLogger("test")


@pytest.fixture
def resolver(registry: LinkRegistry, publish_log: PublishLogger) -> LinkResolver:
    return LinkResolver(registry, publish_log)


@pytest.fixture
def make_doclet() -> Callable[..., Doclet]:
    """Factory building a Doclet from keyword fields (``async`` via is_async)."""

    def _make(**fields: Any) -> Doclet:
        return Doclet.model_validate(fields)

    return _make


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Deep copy of the sample API records."""
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def sample_tutorials() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_TUTORIALS)


@pytest.fixture
def doclets_file(tmp_path: Path, sample_records: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "doclets.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


@pytest.fixture
def tutorials_file(tmp_path: Path, sample_tutorials: Dict[str, Any]) -> Path:
    path = tmp_path / "tutorials.json"
    path.write_text(json.dumps(sample_tutorials), encoding="utf-8")
    return path
