"""Publish orchestration: pipeline, page planning and source files."""

from docforge.publish.pages import PagePlan, attach_module_symbols, plan_pages
from docforge.publish.pipeline import (
    PublishPipeline,
    parse_example,
    prepare_doclets,
    publish,
)
from docforge.publish.result import PublishResult
from docforge.publish.sources import SourceFile, common_prefix, shorten_paths, source_path

__all__ = [
    "PagePlan",
    "PublishPipeline",
    "PublishResult",
    "SourceFile",
    "attach_module_symbols",
    "common_prefix",
    "parse_example",
    "plan_pages",
    "prepare_doclets",
    "publish",
    "shorten_paths",
    "source_path",
]
