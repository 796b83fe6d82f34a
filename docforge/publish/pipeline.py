"""
Publish pipeline.

Runs every stage of a documentation run over an in-memory doclet
collection and returns what the renderer needs. Nothing is written to
disk here.

Stage order
-----------
    register    reserve index/global filenames, linkMap aliases, tutorials
    prune       drop hidden doclets, sort by long name
    expand      shorthand, URL and ticket links in every text field
    prepare     example captions, ``#hash`` see entries, source paths
    links       create_link() + register() for every doclet
    shortnames  unique inner-scope aliases
    signatures  ids, function signatures, attribs
    members     ancestors, member type signatures, grouping
    nav         navigation tree
    pages       module symbols, source files, page plans

The registry is the only shared mutable state; each stage finishes before
the next one starts.
"""

from __future__ import annotations

import re
import time
from typing import Dict, Iterable, List, Optional, Union

from docforge.core.config import Config
from docforge.core.exceptions import RegistryError
from docforge.core.logging import PublishLogger, get_logger
from docforge.doclets.loader import DocletSource, load_doclets, prune, sort_doclets
from docforge.doclets.models import Doclet, Example, Tutorial
from docforge.linking.expander import LinkExpander
from docforge.linking.registry import LinkRegistry
from docforge.linking.resolver import LinkResolver
from docforge.linking.shortnames import add_link_map_aliases, add_shortname_aliases
from docforge.navigation.builder import build_nav
from docforge.navigation.members import get_members
from docforge.publish.pages import attach_module_symbols, plan_pages
from docforge.publish.result import PublishResult
from docforge.publish.sources import SourceFile, common_prefix, shorten_paths, source_path
from docforge.signatures.synthesizer import SignatureSynthesizer

logger = get_logger(__name__)

_CAPTION_RE = re.compile(
    r"^\s*<caption>([\s\S]+?)</caption>(\s*[\n\r])([\s\S]+)$", re.IGNORECASE
)


def parse_example(example: Union[Example, str]) -> Example:
    """Split a leading ``<caption>…</caption>`` line off an example."""
    if isinstance(example, Example):
        return example
    match = _CAPTION_RE.match(example)
    if match:
        return Example(caption=match.group(1), code=match.group(3))
    return Example(caption="", code=example)


def prepare_doclets(doclets: Iterable[Doclet], resolver: LinkResolver) -> Dict[str, SourceFile]:
    """
    Reset attribs, parse examples, link ``#hash`` see entries and collect
    source files.

    Returns:
        Source files by full path, in first-seen order
    """
    source_files: Dict[str, SourceFile] = {}
    for doclet in doclets:
        doclet.attribs = ""
        if doclet.examples:
            doclet.examples = [parse_example(example) for example in doclet.examples]
        if doclet.see:
            doclet.see = [resolver.hash_to_link(doclet, item) for item in doclet.see]
        path = source_path(doclet)
        if path is not None and path not in source_files:
            source_files[path] = SourceFile(resolved=path)
    return source_files


class PublishPipeline:
    """
    Documentation run orchestration.

    Example:
        pipeline = PublishPipeline(load_config())
        result = pipeline.run(load_doclets("doclets.json"))
        nav = result.nav_function
        nav("Foo.html")
    """

    def __init__(self, config: Optional[Config] = None, run_name: str = "docs") -> None:
        self.config = config or Config()
        self.run_name = run_name

    # === Stages ===

    def _register_links(self, doclets: List[Doclet], registry: LinkRegistry,
                        source_files: Dict[str, SourceFile]) -> None:
        for doclet in doclets:
            if not doclet.longname:
                continue
            registry.register(doclet.longname, registry.create_link(doclet))
            path = source_path(doclet)
            if path is not None and doclet.meta is not None:
                shortened = source_files[path].shortened
                if shortened:
                    doclet.meta.shortpath = shortened

    def _add_signatures(self, doclets: List[Doclet], registry: LinkRegistry,
                        synthesizer: SignatureSynthesizer) -> int:
        signed = 0
        for doclet in doclets:
            if not doclet.longname:
                continue
            url = registry.resolve(doclet.longname)
            if url is None:
                raise RegistryError(f"No URL registered for {doclet.longname}")
            doclet.id = url.split("#")[-1] if "#" in url else doclet.name
            if synthesizer.add_signature(doclet):
                signed += 1
        return signed

    def _add_member_details(self, doclets: List[Doclet], resolver: LinkResolver,
                            synthesizer: SignatureSynthesizer) -> None:
        index: Dict[str, Doclet] = {}
        for doclet in doclets:
            if doclet.longname and doclet.longname not in index:
                index[doclet.longname] = doclet
        for doclet in doclets:
            with resolver.context(doclet.longname):
                doclet.ancestors = resolver.ancestor_links(doclet, index)
            synthesizer.add_type_signature(doclet)

    @staticmethod
    def _register_source_files(source_files: Dict[str, SourceFile],
                               registry: LinkRegistry) -> None:
        for source in source_files.values():
            shortened = source.shortened or source.resolved
            source.filename = registry.unique_filename(shortened)
            registry.register(shortened, source.filename)

    # === Run ===

    def run(
        self,
        doclets: DocletSource,
        tutorials: Optional[Tutorial] = None,
    ) -> PublishResult:
        """
        Run every publish stage.

        Args:
            doclets: Doclets, raw records, or a path to a jsdoc -X dump
            tutorials: Root of the tutorial tree

        Returns:
            PublishResult

        Raises:
            InputError: If the doclet input is missing or malformed
        """
        start = time.time()
        log = PublishLogger(self.run_name)
        registry = LinkRegistry()
        resolver = LinkResolver(registry, log)
        synthesizer = SignatureSynthesizer(resolver)
        tutorials = tutorials or Tutorial(name="")
        records = load_doclets(doclets)

        log.start_stage("register")
        registry.reserve_defaults()
        add_link_map_aliases(registry, self.config.links.link_map)
        registry.set_tutorials(tutorials)

        log.start_stage("prune")
        data = sort_doclets(prune(records, self.config.output.include_private))

        log.start_stage("expand")
        LinkExpander(self.config.links.phabricator_base_url).process_all(data)

        log.start_stage("prepare")
        source_files = prepare_doclets(data, resolver)
        if source_files:
            shorten_paths(source_files, common_prefix(source_files))

        log.start_stage("links")
        self._register_links(data, registry, source_files)

        log.start_stage("shortnames")
        shortnames = add_shortname_aliases(registry, log)

        log.start_stage("signatures")
        signed = self._add_signatures(data, registry, synthesizer)

        log.start_stage("members")
        self._add_member_details(data, resolver, synthesizer)
        members = get_members(data)
        members.tutorials = list(tutorials.children)

        log.start_stage("nav")
        nav = build_nav(members, resolver, self.config.nav.use_longname_in_nav)

        log.start_stage("pages")
        attach_module_symbols(
            [d for d in data if (d.longname or "").startswith("module:")],
            members.modules,
        )
        if self.config.output.output_source_files:
            self._register_source_files(source_files, registry)
        pages = plan_pages(
            registry,
            members,
            data,
            tutorials,
            source_files if self.config.output.output_source_files else None,
            self.config.output.main_page_title,
        )

        log.finish(doclets=len(data), signatures=signed, pages=len(pages))
        return PublishResult(
            doclets=data,
            registry=registry,
            resolver=resolver,
            members=members,
            nav=nav,
            pages=pages,
            tutorials=tutorials,
            source_files=source_files,
            shortnames=shortnames,
            warnings=list(log.warnings),
            processing_time_sec=time.time() - start,
        )


def publish(
    doclets: DocletSource,
    config: Optional[Config] = None,
    tutorials: Optional[Tutorial] = None,
) -> PublishResult:
    """Run a documentation run with a one-off pipeline."""
    return PublishPipeline(config).run(doclets, tutorials)
