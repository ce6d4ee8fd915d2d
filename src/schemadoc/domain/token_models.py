from __future__ import annotations

"""
Token Data Models.

A token is the documentation bundle produced for one schema object: its
headline metadata, required-field sets and the ordered property table.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# PROPERTY DESCRIPTORS
# -----------------------------------------------------------------------------

@dataclass
class PropertyDescriptor:
    """
    Documentation record for a single schema property.

    Attributes:
        name: Property key as declared in the parent schema.
        type: Display type label (e.g. 'string, null' or 'array[object]').
        description: Description text with format/pattern/enum annotations.
        allowed: Short allowed-values label.
        example: Synthesized example literal.
        required: Whether the parent lists the property as required.
    """
    name: str = ""
    type: str = ""
    description: str = ""
    allowed: str = ""
    example: str = ""
    required: bool = False

    def merge(self, **fields: Any) -> None:
        """Overlay the provided fields onto the descriptor."""
        for key, value in fields.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown property field '{key}'")
            setattr(self, key, value)


# -----------------------------------------------------------------------------
# TOKENS
# -----------------------------------------------------------------------------

@dataclass
class Token:
    """
    Named documentation entry for one schema object.

    Attributes:
        name: Unique token key within a parse run.
        title: Schema title.
        description: Schema description.
        type: Raw schema type.
        allowed: Normalized type label.
        required: Unconditionally required property names.
        required_one_of: Alternative required-sets from `oneOf`.
        required_any_of: Alternative required-sets from `anyOf`.
        props: Ordered mapping of property name to descriptor.
    """
    name: str
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    allowed: Optional[str] = None
    required: List[str] = field(default_factory=list)
    required_one_of: List[List[str]] = field(default_factory=list)
    required_any_of: List[List[str]] = field(default_factory=list)
    props: Dict[str, PropertyDescriptor] = field(default_factory=dict)

    @property
    def heading(self) -> str:
        return self.title or self.name
