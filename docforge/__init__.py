"""DocForge - API documentation cross-reference and navigation engine.

This package turns a collection of parsed doclets into link-resolved
documentation data: expanded references, display signatures, a navigation
tree and a plan of pages for a renderer to write.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
