from __future__ import annotations

"""
Domain Error Types.

Exception hierarchy raised by the schema walker, the reference resolver
and the doctree template parser. The pipeline catches these per document
and converts them into failure records.
"""

from typing import Optional


class SchemaDocError(Exception):
    """Base class for all schemadoc failures."""


class InputPathError(SchemaDocError):
    """Raised when an input file or directory is missing."""


class SchemaParseError(SchemaDocError):
    """
    Raised when a schema document cannot be read or decoded.

    Attributes:
        path: Path of the offending document, if known.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ReferenceResolutionError(SchemaParseError):
    """
    Raised when a `$ref` target cannot be loaded.

    Attributes:
        ref: The raw reference string found in the schema.
    """

    def __init__(self, ref: str, path: str, reason: str):
        super().__init__(f"Cannot resolve $ref '{ref}' ({path}): {reason}", path=path)
        self.ref = ref


class CircularReferenceError(ReferenceResolutionError):
    """Raised when a `$ref` chain points back to a file already being resolved."""

    def __init__(self, ref: str, path: str):
        super().__init__(ref, path, "circular reference")


class TemplateSyntaxError(SchemaDocError):
    """Raised for malformed doctree markup (unbalanced or duplicate tags)."""
