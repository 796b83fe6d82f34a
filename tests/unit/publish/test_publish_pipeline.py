"""Tests for the publish pipeline, page planning and source files."""

from __future__ import annotations

import pytest

from docforge.core.config import Config
from docforge.doclets.models import Example, Tutorial
from docforge.linking.shortnames import AMBIGUOUS_SHORTNAME
from docforge.publish import (
    PublishPipeline,
    SourceFile,
    attach_module_symbols,
    common_prefix,
    parse_example,
    publish,
    shorten_paths,
)


@pytest.fixture
def result(sample_records, sample_tutorials):
    tutorials = Tutorial.model_validate({"name": "", **sample_tutorials})
    return PublishPipeline(run_name="sample").run(sample_records, tutorials)


def _doclet(result, longname):
    return next(d for d in result.doclets if d.longname == longname)


class TestRegistration:
    """Every kept doclet resolves to its canonical URL."""

    def test_pruned_and_sorted(self, result) -> None:
        assert [d.longname for d in result.doclets] == [
            "external:jQuery",
            "globalHelper",
            "module:mw/Api",
            "module:mw/Api~Options",
            "module:mw/Api~request",
            "mw",
            "mw.Map",
            "mw.Map#event:change",
            "mw.Map#get",
            "mw.Map#options",
            "mw.config",
        ]

    @pytest.mark.parametrize(
        "longname,url",
        [
            ("external:jQuery", "external-jQuery.html"),
            ("globalHelper", "global.html#globalHelper"),
            ("module:mw/Api", "module-mw_Api.html"),
            ("module:mw/Api~Options", "module-mw_Api.html#~Options"),
            ("mw", "mw.html"),
            ("mw.Map", "mw.Map.html"),
            ("mw.Map#event:change", "mw.Map.html#event:change"),
            ("mw.Map#get", "mw.Map.html#get"),
            ("mw.config", "mw.html#.config"),
        ],
    )
    def test_urls(self, result, longname, url) -> None:
        assert result.registry.resolve(longname) == url

    def test_unique_shortnames_are_aliases(self, result) -> None:
        assert result.registry.resolve("Options") == "module-mw_Api.html#~Options"
        assert result.registry.resolve("request") == "module-mw_Api.html#~request"
        assert result.shortnames.registered == {
            "Options": "module:mw/Api~Options",
            "request": "module:mw/Api~request",
        }

    def test_no_warnings(self, result) -> None:
        assert result.warnings == []


class TestAnnotations:
    """Expanded text, signatures, ids and ancestors."""

    def test_ticket_and_shorthand_expanded(self, result) -> None:
        assert _doclet(result, "mw.Map").classdesc == (
            "Key/value store. See {@link https://phabricator.wikimedia.org/T1234 T1234}."
        )
        assert _doclet(result, "mw.Map#get").description == "Like {@link mw#set #set}, but reads."
        assert _doclet(result, "module:mw/Api").description == (
            "API client module. Docs at {@link https://www.mediawiki.org/wiki/API} now."
        )

    def test_function_signature(self, result) -> None:
        doclet = _doclet(result, "mw.Map#get")

        assert doclet.signature == (
            '<span class="signature">(key, fallback'
            '<span class="signature-attributes">opt</span>)</span>'
            '<span class="type-signature"> &rarr; {<a href="mw.Map.html">mw.Map</a>}</span>'
        )
        assert doclet.attribs == '<span class="type-signature"></span>'

    def test_constant_relabelled_as_member(self, result) -> None:
        doclet = _doclet(result, "mw.config")

        assert doclet.kind == "member"
        assert doclet.attribs == '<span class="type-signature">(static, constant) </span>'

    def test_member_type_signature_links_inner_type(self, result) -> None:
        assert _doclet(result, "mw.Map#options").signature == (
            '<span class="type-signature"> :<a href="module-mw_Api.html#~Options">'
            "module:mw/Api~Options</a></span>"
        )

    @pytest.mark.parametrize(
        "longname,expected", [("mw.Map#get", "get"), ("mw.Map", "Map"), ("mw.config", ".config")]
    )
    def test_ids(self, result, longname, expected) -> None:
        assert _doclet(result, longname).id == expected

    def test_ancestors(self, result) -> None:
        assert _doclet(result, "mw.Map#get").ancestors == [
            '<a href="mw.html">mw</a>',
            '<a href="mw.Map.html">Map</a>#',
        ]
        assert _doclet(result, "mw").ancestors == []

    def test_shortpath(self, result) -> None:
        assert _doclet(result, "mw.Map").meta.shortpath == "map.js"


class TestNavAndPages:
    """Navigation and page plans of the run."""

    def test_nav_sections(self, result) -> None:
        assert result.nav.section_labels() == [
            "Home",
            "Modules",
            "Externals",
            "Namespaces",
            "Classes",
            "Events",
            "Tutorials",
        ]

    def test_nav_function_highlights_page(self, result) -> None:
        markup = result.nav_function("mw.Map.html")

        assert '<li class="nav__sub-item is-on"><a href="mw.Map.html">Map</a></li>' in markup

    def test_page_titles_in_order(self, result) -> None:
        assert [p.title for p in result.pages] == [
            "Source: api.js",
            "Source: map.js",
            "Global",
            "Home",
            "External: jQuery",
            "Module: mw/Api",
            "Namespace: mw",
            "Class: Map",
            "Tutorial: Getting Started",
            "Tutorial: Advanced Use",
        ]

    def test_source_pages(self, result) -> None:
        page = result.page("map.js.html")

        assert page.kind == "source"
        assert page.resolve_links is False
        assert page.docs == [{"kind": "source", "path": "/src/lib/map.js"}]

    def test_home_page_has_main_page_record(self, result) -> None:
        assert result.page("index.html").docs == [{"kind": "mainpage", "longname": "Main Page"}]

    def test_module_page_attaches_exports(self, result) -> None:
        module = result.members.modules[0]

        assert [d.longname for d in module.modules] == ["module:mw/Api"]
        assert module.modules[0] is not module

    def test_summary(self, result) -> None:
        summary = result.summary()

        assert summary["doclets"] == 11
        assert summary["aliases"] == 2
        assert summary["pages"] == 10
        assert summary["warnings"] == 0


class TestConfiguration:
    """Config changes the run's output."""

    def test_no_source_pages(self, sample_records) -> None:
        config = Config.from_dict({"output": {"output_source_files": False}})

        result = publish(sample_records, config)

        assert not any(p.kind == "source" for p in result.pages)

    def test_include_private(self, sample_records) -> None:
        config = Config.from_dict({"output": {"include_private": True}})

        result = publish(sample_records, config)

        assert result.registry.resolve("mw.Map#_secret") == "mw.Map.html#_secret"

    def test_link_map_alias(self, sample_records) -> None:
        config = Config.from_dict({"links": {"link_map": {"Promise": "https://example.org/p"}}})

        result = publish(sample_records, config)

        assert result.registry.resolve("Promise") == "https://example.org/p"
        assert result.registry.is_alias("Promise") is True

    def test_custom_ticket_base(self, sample_records) -> None:
        config = Config.from_dict({"links": {"phabricator_base_url": "https://example.org/"}})

        result = publish(sample_records, config)

        assert "{@link https://example.org/T1234 T1234}" in _doclet(result, "mw.Map").classdesc

    def test_ambiguous_shortname_warning(self, sample_records) -> None:
        sample_records += [
            {"longname": "module:a~Foo", "name": "Foo", "kind": "typedef",
             "memberof": "module:a", "scope": "inner", "description": "A."},
            {"longname": "module:b~Foo", "name": "Foo", "kind": "typedef",
             "memberof": "module:b", "scope": "inner", "description": "B."},
        ]

        result = publish(sample_records)

        assert [w.kind for w in result.warnings] == [AMBIGUOUS_SHORTNAME]
        assert "Foo" not in result.registry


class TestHelpers:
    """Tests for example parsing, source paths and module symbols."""

    def test_parse_example_caption(self) -> None:
        example = parse_example("<caption>Basic use</caption>\nmap.get('a');")

        assert example == Example(caption="Basic use", code="map.get('a');")

    def test_parse_example_without_caption(self) -> None:
        assert parse_example("x();") == Example(caption="", code="x();")

    def test_common_prefix_and_shorten(self) -> None:
        files = {
            "/src/lib/a.js": SourceFile("/src/lib/a.js"),
            "/src/lib/ui/b.js": SourceFile("/src/lib/ui/b.js"),
        }

        prefix = common_prefix(files)
        shorten_paths(files, prefix)

        assert prefix == "/src/lib/"
        assert [f.shortened for f in files.values()] == ["a.js", "ui/b.js"]

    def test_common_prefix_empty(self) -> None:
        assert common_prefix([]) == ""

    def test_attach_module_symbols_renames_exports(self, make_doclet) -> None:
        module = make_doclet(longname="module:foo", name="foo", kind="module")
        export = make_doclet(
            longname="module:foo", name="module:foo", kind="function", description="Export."
        )
        undocumented = make_doclet(longname="module:foo", name="module:foo", kind="member")

        attach_module_symbols([module, export, undocumented], [module])

        assert [d.name for d in module.modules] == ['(require("foo"))']
        assert export.name == "module:foo"
