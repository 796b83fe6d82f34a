"""
Signature & Attribute Synthesizer.

Computes display signatures for documented symbols:

    function  add(a, ...rest, d[opt]) → (nullable) {number}
    member    size :number

The signature parts are small immutable value objects so they can be
inspected (``str()`` gives plain text) before being rendered to the
jsdoc-compatible HTML the page templates expect (``to_html()``).

Only the presentational fields ``signature`` and ``attribs`` are written;
``params``, ``returns``, ``yields`` and ``type`` are read, never changed.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from docforge.doclets.models import Doclet, DocletItem
from docforge.linking.resolver import LinkResolver
from docforge.signatures.attributes import (
    build_attribs_string,
    get_attribs,
    signature_attributes,
)

_FUNCTION_CODE_RE = re.compile(r"[Ff]unction")


def needs_signature(doclet: Doclet) -> bool:
    """
    Whether a doclet gets a parameter/return signature.

    True for functions and classes, typedefs declared as a function type,
    and namespaces captured from a function expression.
    """
    if doclet.kind in ("function", "class"):
        return True
    if doclet.kind == "typedef":
        return any(name.lower() == "function" for name in doclet.type_names)
    if doclet.kind == "namespace":
        code = doclet.meta.code if doclet.meta else None
        return bool(code and code.type and _FUNCTION_CODE_RE.search(code.type))
    return False


@dataclass(frozen=True)
class ParamEntry:
    """One top-level parameter as shown in a signature."""

    name: str
    variable: bool = False
    attributes: Tuple[str, ...] = ()

    def __str__(self) -> str:
        text = ("..." if self.variable else "") + self.name
        if self.attributes:
            text += "[" + ", ".join(self.attributes) + "]"
        return text

    def to_html(self) -> str:
        text = ("&hellip;" if self.variable else "") + self.name
        if self.attributes:
            text += (
                '<span class="signature-attributes">'
                + ", ".join(self.attributes)
                + "</span>"
            )
        return text


@dataclass(frozen=True)
class ParamList:
    """Parenthesized parameter list."""

    params: Tuple[ParamEntry, ...] = ()

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.params]

    def __str__(self) -> str:
        return "(" + ", ".join(str(p) for p in self.params) + ")"

    def to_html(self) -> str:
        return "(" + ", ".join(p.to_html() for p in self.params) + ")"


@dataclass(frozen=True)
class TypeRef:
    """A type name and its rendered (linked or escaped) form."""

    name: str
    markup: str


@dataclass(frozen=True)
class ReturnSignature:
    """Return (or yield) badges and type union; empty when untyped."""

    attributes: Tuple[str, ...] = ()
    types: Tuple[TypeRef, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.types)

    def __str__(self) -> str:
        if not self.types:
            return ""
        badges = "(" + ", ".join(self.attributes) + ") " if self.attributes else ""
        return " → " + badges + "{" + "|".join(t.name for t in self.types) + "}"

    def to_html(self) -> str:
        if not self.types:
            return ""
        return (
            " &rarr; "
            + build_attribs_string(self.attributes)
            + "{"
            + "|".join(t.markup for t in self.types)
            + "}"
        )


@dataclass(frozen=True)
class TypeSignature:
    """Colon-prefixed type union of a member; empty when untyped."""

    types: Tuple[TypeRef, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.types)

    def __str__(self) -> str:
        return " :" + "|".join(t.name for t in self.types) if self.types else ""

    def to_html(self) -> str:
        inner = " :" + "|".join(t.markup for t in self.types) if self.types else ""
        return '<span class="type-signature">' + inner + "</span>"


@dataclass(frozen=True)
class FunctionSignature:
    """Parameter list plus return signature."""

    params: ParamList = field(default_factory=ParamList)
    returns: ReturnSignature = field(default_factory=ReturnSignature)

    def __str__(self) -> str:
        return str(self.params) + str(self.returns)

    def to_html(self) -> str:
        return (
            '<span class="signature">' + self.params.to_html() + "</span>"
            + '<span class="type-signature">' + self.returns.to_html() + "</span>"
        )


class SignatureSynthesizer:
    """
    Annotate doclets with display signatures and attribute badges.

    Type names are rendered through the resolver, so unknown types show
    up on the run's warning stream.
    """

    def __init__(self, resolver: LinkResolver) -> None:
        self.resolver = resolver

    def _type_refs(self, items: List[Optional[object]]) -> Tuple[TypeRef, ...]:
        refs: List[TypeRef] = []
        for item in items:
            type_spec = getattr(item, "type", None)
            if type_spec is None:
                continue
            for name in type_spec.names:
                refs.append(TypeRef(name, self.resolver.linkto(name, html.escape(name))))
        return tuple(refs)

    @staticmethod
    def param_list(doclet: Doclet) -> ParamList:
        """Top-level parameters only; dotted sub-parameter names are dropped."""
        entries = [
            ParamEntry(
                name=param.name,
                variable=bool(param.variable),
                attributes=tuple(signature_attributes(param)),
            )
            for param in doclet.params or []
            if param.name and "." not in param.name
        ]
        return ParamList(tuple(entries))

    def return_signature(self, doclet: Doclet) -> ReturnSignature:
        """Badges and types of the yields entries, else the returns entries."""
        source: List[DocletItem] = doclet.yields or doclet.returns or []
        attributes: List[str] = []
        for item in source:
            for attribute in signature_attributes(item):
                if attribute not in attributes:
                    attributes.append(attribute)
        return ReturnSignature(tuple(attributes), self._type_refs(list(source)))

    def type_signature(self, doclet: Doclet) -> TypeSignature:
        return TypeSignature(self._type_refs([doclet]))

    def function_signature(self, doclet: Doclet) -> FunctionSignature:
        return FunctionSignature(self.param_list(doclet), self.return_signature(doclet))

    @staticmethod
    def add_attribs(doclet: Doclet) -> None:
        """Write the attribute badge line."""
        doclet.attribs = (
            '<span class="type-signature">'
            + build_attribs_string(get_attribs(doclet))
            + "</span>"
        )

    def add_signature(self, doclet: Doclet) -> bool:
        """
        Write ``signature`` and ``attribs`` for a doclet that needs one.

        Returns:
            True if the doclet was annotated
        """
        if not needs_signature(doclet):
            return False
        with self.resolver.context(doclet.longname):
            doclet.signature = self.function_signature(doclet).to_html()
            self.add_attribs(doclet)
        return True

    def add_type_signature(self, doclet: Doclet) -> bool:
        """
        Append the member type signature for members and constants.

        Constants are relabelled as members afterwards, so they are listed
        and rendered alongside other members.

        Returns:
            True if the doclet was annotated
        """
        if doclet.kind not in ("member", "constant"):
            return False
        with self.resolver.context(doclet.longname):
            doclet.signature = (doclet.signature or "") + self.type_signature(doclet).to_html()
            self.add_attribs(doclet)
        if doclet.kind == "constant":
            doclet.kind = "member"
        return True
