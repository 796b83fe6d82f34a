"""Tests for member grouping, nav building and per-page views."""

from __future__ import annotations

import pytest

from docforge.doclets.models import Tutorial
from docforge.navigation import Members, build_nav, display_name, get_members, strip_quotes


@pytest.fixture
def linked_resolver(resolver):
    registry = resolver.registry
    registry.register("mw", "mw.html")
    registry.register("mw.Map", "mw.Map.html")
    registry.register("module:mw/Api", "module-mw_Api.html")
    return resolver


@pytest.fixture
def members(make_doclet) -> Members:
    return Members(
        namespaces=[make_doclet(longname="mw", name="mw", kind="namespace")],
        classes=[make_doclet(longname="mw.Map", name="Map", kind="class", memberof="mw")],
        modules=[make_doclet(longname="module:mw/Api", name="mw/Api", kind="module")],
    )


class TestGetMembers:
    """Tests for get_members."""

    def test_categories_and_globals(self, make_doclet) -> None:
        doclets = [
            make_doclet(longname="mw", name="mw", kind="namespace"),
            make_doclet(longname="Foo", name="Foo", kind="class"),
            make_doclet(longname="external:jQuery", name='"jQuery"', kind="external"),
            make_doclet(longname="helper", name="helper", kind="function", scope="global"),
            make_doclet(longname="Foo#x", name="x", kind="member", memberof="Foo"),
            make_doclet(longname="module:foo", name="module:foo", kind="function"),
            make_doclet(longname="Cb", name="Cb", kind="typedef"),
        ]

        members = get_members(doclets)

        assert [d.longname for d in members.namespaces] == ["mw"]
        assert [d.longname for d in members.classes] == ["Foo"]
        assert members.externals[0].name == "jQuery"
        assert [d.longname for d in members.globals] == ["helper", "Cb"]
        assert members.counts()["globals"] == 2

    def test_strip_quotes(self) -> None:
        assert strip_quotes('"a.b"') == "a.b"
        assert strip_quotes("plain") == "plain"


class TestDisplayName:
    """Nav text strips namespace prefixes."""

    def test_short_name_by_default(self, make_doclet) -> None:
        doclet = make_doclet(longname="module:mw/Api", name="mw/Api", kind="module")

        assert display_name(doclet, False) == "mw/Api"

    def test_longname_prefixes_removed(self, make_doclet) -> None:
        doclet = make_doclet(
            longname="module:ui~Widget#event:change", name="change", kind="event"
        )

        assert display_name(doclet, True) == "ui~Widget#change"


class TestBuildNav:
    """Tests for section layout."""

    def test_section_order_and_empty_sections_omitted(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)

        assert tree.section_labels() == ["Home", "Modules", "Namespaces", "Classes"]
        assert tree.items[0].href == "index.html"

    def test_entry_markup(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)

        entry = tree.find_section("Classes").children[0]
        assert entry.href == "mw.Map.html"
        assert entry.markup == '<a href="mw.Map.html">Map</a>'

    def test_longname_in_nav(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver, use_longname_in_nav=True)

        assert tree.find_section("Classes").children[0].markup == (
            '<a href="mw.Map.html">mw.Map</a>'
        )

    def test_shared_seen_set_across_groups(self, linked_resolver, make_doclet) -> None:
        doclet = make_doclet(longname="mw", name="mw", kind="namespace")
        members = Members(namespaces=[doclet], classes=[doclet], modules=[doclet])

        tree = build_nav(members, linked_resolver)

        assert tree.section_labels() == ["Home", "Modules", "Namespaces"]

    def test_externals_share_seen_set_with_mixins(self, linked_resolver, make_doclet) -> None:
        doclet = make_doclet(longname="mw", name="mw", kind="namespace")
        members = Members(externals=[doclet], mixins=[doclet], modules=[doclet])

        tree = build_nav(members, linked_resolver)

        assert tree.section_labels() == ["Home", "Modules", "Externals"]

    def test_entry_without_longname_is_plain(self, linked_resolver, make_doclet) -> None:
        members = Members(classes=[make_doclet(name="<Anon>", kind="class")])

        tree = build_nav(members, linked_resolver)

        node = tree.find_section("Classes").children[0]
        assert node.markup == "&lt;Anon&gt;"
        assert node.href is None

    def test_tutorials_section(self, linked_resolver, sample_tutorials) -> None:
        root = Tutorial.model_validate({"name": "", **sample_tutorials})
        linked_resolver.registry.set_tutorials(root)

        tree = build_nav(Members(tutorials=root.children), linked_resolver)

        assert tree.section_labels() == ["Home", "Tutorials"]
        assert tree.find_section("Tutorials").children[0].markup == (
            '<a href="tutorial-getting-started.html">Getting Started</a>'
        )

    def test_no_warnings_for_registered_entries(self, linked_resolver, members, publish_log) -> None:
        build_nav(members, linked_resolver)

        assert publish_log.warnings == []


class TestNavView:
    """Per-page highlighting."""

    def test_highlights_entry_and_section(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)

        markup = tree.view("mw.Map.html").to_html()

        assert markup.startswith('<ol><li class="nav__item"><a href="index.html">Home</a></li>')
        assert (
            '<li class="nav__item is-on"><a>Classes</a><ul class="nav__sub-items">'
            '<li class="nav__sub-item is-on"><a href="mw.Map.html">Map</a></li></ul></li>'
        ) in markup
        assert markup.count("is-on") == 2

    def test_home_highlighted_on_index(self, linked_resolver, members) -> None:
        view = build_nav(members, linked_resolver).view("index.html")

        assert view.to_dict()[0]["is_on"] is True
        assert not any(item["is_on"] for item in view.to_dict()[1:])

    def test_views_are_independent(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)
        first = tree.view("mw.html").to_dict()

        first[2]["children"][0]["is_on"] = "tampered"
        first[2]["label"] = "tampered"
        second = tree.view("mw.Map.html").to_dict()

        assert second[2]["label"] == "Namespaces"
        assert second[2]["children"][0]["is_on"] is False
        assert tree.view("mw.html").to_dict()[2]["children"][0]["is_on"] is True

    def test_rendering_order_does_not_matter(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)
        nav = tree.nav_function()

        before = nav("mw.Map.html")
        nav("mw.html")
        nav("module-mw_Api.html")

        assert nav("mw.Map.html") == before

    def test_unknown_page_highlights_nothing(self, linked_resolver, members) -> None:
        tree = build_nav(members, linked_resolver)

        assert tree.highlighted_ids("nowhere.html") == frozenset()
