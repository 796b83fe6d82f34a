"""
Doclet Models.

Typed records for the documentation data produced by an external
doc-comment parser (jsdoc ``-X`` output). Field names follow the jsdoc
JSON dump so records load without translation; unknown keys are kept
as extra attributes.

The presentational outputs written by DocForge (signature, attribs, id,
ancestors) live on the same record but never overwrite the semantic
fields they are computed from.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Kinds that get their own output page
CONTAINER_KINDS = ("class", "module", "external", "namespace", "mixin", "interface")

DOCLET_KINDS = (
    "class",
    "function",
    "namespace",
    "module",
    "mixin",
    "interface",
    "external",
    "member",
    "constant",
    "typedef",
    "event",
    "file",
    "package",
)


class TypeSpec(BaseModel):
    """Set of type names declared for a symbol, parameter or return value."""

    model_config = ConfigDict(extra="allow")

    names: List[str] = Field(default_factory=list)


class DocletItem(BaseModel):
    """A parameter, return value, property or exception entry."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    type: Optional[TypeSpec] = None
    description: Optional[str] = None
    optional: Optional[bool] = None
    nullable: Optional[bool] = None
    variable: Optional[bool] = None
    defaultvalue: Any = None


class CodeMeta(BaseModel):
    """The source construct a doclet was captured from."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    type: Optional[str] = None


class Meta(BaseModel):
    """Source location of a doclet."""

    model_config = ConfigDict(extra="allow")

    path: Optional[str] = None
    filename: Optional[str] = None
    lineno: Optional[int] = None
    code: Optional[CodeMeta] = None
    shortpath: Optional[str] = None


class Example(BaseModel):
    """A code example with its optional caption."""

    caption: str = ""
    code: str = ""


class Doclet(BaseModel):
    """One documented symbol."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    longname: Optional[str] = None
    name: Optional[str] = None
    kind: Optional[str] = None
    scope: Optional[str] = None
    memberof: Optional[str] = None
    access: Optional[str] = None
    variation: Optional[str] = None
    version: Optional[str] = None
    since: Optional[str] = None

    # Free text subject to link expansion
    description: Optional[str] = None
    classdesc: Optional[str] = None
    summary: Optional[str] = None
    author: Optional[List[str]] = None
    see: Optional[List[str]] = None

    params: Optional[List[DocletItem]] = None
    returns: Optional[List[DocletItem]] = None
    yields: Optional[List[DocletItem]] = None
    properties: Optional[List[DocletItem]] = None
    exceptions: Optional[List[DocletItem]] = None
    type: Optional[TypeSpec] = None
    augments: Optional[List[str]] = None
    examples: Optional[List[Union[Example, str]]] = None
    meta: Optional[Meta] = None

    is_async: bool = Field(default=False, alias="async")
    generator: bool = False
    virtual: bool = False
    readonly: Optional[bool] = None
    nullable: Optional[bool] = None
    undocumented: bool = False
    ignore: bool = False

    # Presentational outputs
    signature: Optional[str] = None
    attribs: Optional[str] = None
    id: Optional[str] = None
    ancestors: List[str] = Field(default_factory=list)
    modules: Optional[List["Doclet"]] = None

    @field_validator("author", "see", mode="before")
    @classmethod
    def _coerce_text_list(cls, value: Any) -> Any:
        """jsdoc emits a bare string for some single-valued tags."""
        if isinstance(value, str):
            return [value]
        return value

    @property
    def is_container(self) -> bool:
        """Whether this doclet owns an output page."""
        return self.kind in CONTAINER_KINDS

    @property
    def is_module_export(self) -> bool:
        """Whether this doclet is the value of ``module.exports``.

        A class or function named ``module:foo`` that is not itself the
        module doclet documents the module's export.
        """
        return bool(
            self.longname
            and self.longname == self.name
            and self.longname.startswith("module:")
            and self.kind != "module"
        )

    @property
    def type_names(self) -> List[str]:
        """Declared type names, empty when untyped."""
        return list(self.type.names) if self.type else []


class Tutorial(BaseModel):
    """A node of the tutorial tree."""

    model_config = ConfigDict(extra="allow")

    name: str
    title: str = ""
    children: List["Tutorial"] = Field(default_factory=list)

    @property
    def display_title(self) -> str:
        """Title shown in navigation, falling back to the name."""
        return self.title or self.name

    def walk(self) -> List["Tutorial"]:
        """Return every descendant, depth first, parents before children."""
        found: List[Tutorial] = []
        for child in self.children:
            found.append(child)
            found.extend(child.walk())
        return found


Doclet.model_rebuild()
Tutorial.model_rebuild()
