from __future__ import annotations

"""
Schema Fragment Data Model.

Typed, immutable view over a JSON Schema object. Properties are kept as an
explicit ordered tuple so that the walker never depends on mapping
iteration of raw JSON objects.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from schemadoc.domain.errors import SchemaParseError

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaFragment:
    """
    A JSON Schema sub-document tagged by its declared types.

    Attributes:
        types: Declared types, normalized to a tuple.
        properties: Ordered (name, fragment) pairs.
        items: Fragment describing array elements.
        one_of: Alternative sub-schemas from `oneOf`.
        any_of: Alternative sub-schemas from `anyOf`.
        ref: Raw `$ref` string if the fragment is a reference.
        example: Explicit example value (meaningful when has_example is set).
    """
    types: Tuple[str, ...] = ()
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    enum: Tuple[Any, ...] = ()
    example: Any = None
    has_example: bool = False
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    items: Optional["SchemaFragment"] = None
    properties: Tuple[Tuple[str, "SchemaFragment"], ...] = ()
    has_properties: bool = False
    required: Tuple[str, ...] = ()
    one_of: Tuple["SchemaFragment", ...] = ()
    any_of: Tuple["SchemaFragment", ...] = ()
    ref: Optional[str] = None
    type_is_list: bool = field(default=False, compare=False)

    # -------------------------------------------------------------------------
    # TYPE PREDICATES
    # -------------------------------------------------------------------------

    def has_type(self, name: str) -> bool:
        return name in self.types

    @property
    def single_type(self) -> Optional[str]:
        """The declared type when it was given as a plain string."""
        if self.type_is_list or len(self.types) != 1:
            return None
        return self.types[0]

    @property
    def is_object(self) -> bool:
        return self.single_type == "object"

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any) -> "SchemaFragment":
        """
        Build a fragment tree from a decoded JSON object.

        Args:
            data: Decoded JSON value; must be a mapping.

        Returns:
            SchemaFragment: The typed fragment.

        Raises:
            SchemaParseError: If data (or a nested schema) is not an object.
        """
        if not isinstance(data, dict):
            raise SchemaParseError(
                f"Expected a JSON object for schema fragment, got {type(data).__name__}"
            )

        raw_type = data.get("type")
        if isinstance(raw_type, list):
            types = tuple(str(t) for t in raw_type)
        elif raw_type is None:
            types = ()
        else:
            types = (str(raw_type),)

        raw_props = data.get("properties")
        properties: List[Tuple[str, SchemaFragment]] = []
        if isinstance(raw_props, dict):
            for key, value in raw_props.items():
                properties.append((key, cls.from_dict(value)))

        raw_items = data.get("items")
        items = cls.from_dict(raw_items) if isinstance(raw_items, dict) else None

        raw_enum = data.get("enum")
        enum = tuple(raw_enum) if isinstance(raw_enum, list) else ()

        return cls(
            types=types,
            id=data.get("id"),
            title=data.get("title"),
            description=data.get("description"),
            format=data.get("format"),
            pattern=data.get("pattern"),
            enum=enum,
            example=data.get("example"),
            has_example="example" in data,
            minimum=data.get("minimum"),
            maximum=data.get("maximum"),
            items=items,
            properties=tuple(properties),
            has_properties=isinstance(raw_props, dict),
            required=_as_names(data.get("required")),
            one_of=_as_alternatives(data.get("oneOf")),
            any_of=_as_alternatives(data.get("anyOf")),
            ref=data.get("$ref"),
            type_is_list=isinstance(raw_type, list),
        )

    @classmethod
    def empty(cls) -> "SchemaFragment":
        return cls()


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_names(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value)


def _as_alternatives(value: Any) -> Tuple[SchemaFragment, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(SchemaFragment.from_dict(v) for v in value if isinstance(v, dict))

