"""Display signatures and attribute badges."""

from docforge.signatures.attributes import (
    build_attribs_string,
    get_attribs,
    signature_attributes,
)
from docforge.signatures.synthesizer import (
    FunctionSignature,
    ParamEntry,
    ParamList,
    ReturnSignature,
    SignatureSynthesizer,
    TypeRef,
    TypeSignature,
    needs_signature,
)

__all__ = [
    "FunctionSignature",
    "ParamEntry",
    "ParamList",
    "ReturnSignature",
    "SignatureSynthesizer",
    "TypeRef",
    "TypeSignature",
    "build_attribs_string",
    "get_attribs",
    "signature_attributes",
    "needs_signature",
]
