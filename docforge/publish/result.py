"""
Publish result.

Provides the PublishResult dataclass holding everything a renderer needs
after a documentation run.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from docforge.core.logging import PublishWarning
from docforge.doclets.models import Doclet, Tutorial
from docforge.linking.registry import LinkRegistry
from docforge.linking.resolver import LinkResolver
from docforge.linking.shortnames import ShortnameReport
from docforge.navigation.members import Members
from docforge.navigation.tree import NavTree
from docforge.publish.pages import PagePlan
from docforge.publish.sources import SourceFile


@dataclass
class PublishResult:
    """Result of one documentation run.

    Attributes:
        doclets: Pruned, sorted and annotated doclets
        registry: Long name → URL store, including aliases
        resolver: Link resolver bound to the registry and warning stream
        members: Doclets by category
        nav: Navigation tree; ``nav.nav_function()`` gives per-page markup
        pages: Planned output pages, in generation order
        tutorials: Root of the tutorial tree
        source_files: Source files by full path
        shortnames: Outcome of the shortname pass
        warnings: Every non-fatal warning, in emission order
        processing_time_sec: Wall time of the run
    """

    doclets: List[Doclet]
    registry: LinkRegistry
    resolver: LinkResolver
    members: Members
    nav: NavTree
    pages: List[PagePlan]
    tutorials: Tutorial
    source_files: Dict[str, SourceFile] = field(default_factory=dict)
    shortnames: Optional[ShortnameReport] = None
    warnings: List[PublishWarning] = field(default_factory=list)
    processing_time_sec: float = 0.0

    @property
    def nav_function(self) -> Callable[[str], str]:
        return self.nav.nav_function()

    def page(self, filename: str) -> Optional[PagePlan]:
        """Return the planned page with that filename, if any."""
        for plan in self.pages:
            if plan.filename == filename:
                return plan
        return None

    def summary(self) -> Dict[str, Any]:
        """Counts describing the run, for reports."""
        return {
            "doclets": len(self.doclets),
            "links": len(self.registry) - len(self.registry.aliases),
            "aliases": len(self.registry.aliases),
            "ambiguous_shortnames": len(self.shortnames.ambiguous) if self.shortnames else 0,
            "pages": len(self.pages),
            "nav_sections": len(self.nav.items) - 1,
            "warnings": len(self.warnings),
            "processing_time_sec": round(self.processing_time_sec, 3),
        }
