from __future__ import annotations

"""
Example and Description Synthesizer.

Pure functions that turn a property's schema fragment into the display
values of its documentation row: type label, allowed-values label,
annotated description and a synthesized example literal.
"""

import json
from typing import Any, List

from schemadoc.domain.constants import (
    DEFAULT_BOOLEAN_EXAMPLE,
    DEFAULT_INTEGER_EXAMPLE,
    DEFAULT_NUMBER_EXAMPLE,
    DEFAULT_OBJECT_EXAMPLE,
    DEFAULT_STRING_EXAMPLE,
    EXAMPLE_TYPE_ORDER,
    LINE_BREAK,
    STRING_FORMAT_EXAMPLES,
)
from schemadoc.domain.schema_models import SchemaFragment

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def type_label(fragment: SchemaFragment) -> str:
    """
    Compute the display type of a fragment.

    Multiple types are joined with ', '. A plain 'array' type gets the
    bracketed item type appended, e.g. 'array[string]'.
    """
    if not fragment.types:
        return "any"
    label = ", ".join(fragment.types)
    if label == "array" and fragment.items is not None:
        label += f"[{', '.join(fragment.items.types) or 'any'}]"
    return label


def allowed_label(fragment: SchemaFragment) -> str:
    """
    Map a fragment to a short allowed-values label.

    Examples: 'enum', 'email', 'pattern', 'integer [0, 10]',
    'array of string', 'string or null'.
    """
    if fragment.enum:
        return "enum"
    if not fragment.types:
        return "any"
    return " or ".join(_allowed_for_type(fragment, t) for t in fragment.types)


def description_text(fragment: SchemaFragment) -> str:
    """Description with format, pattern and enum annotations appended."""
    description = fragment.description or ""
    if fragment.format:
        description += f"{LINE_BREAK}**format:** `{fragment.format}`"
    if fragment.pattern:
        description += f"{LINE_BREAK}**pattern:** `/{fragment.pattern}/`"
    if fragment.enum:
        joined = '"`, `"'.join(_literal(v) for v in fragment.enum)
        description += f'{LINE_BREAK}**one of:** `"{joined}"`'
    return description


def example_text(fragment: SchemaFragment) -> str:
    """
    Synthesize an example literal.

    An explicit `example` wins. Otherwise one fragment is produced per
    declared type, in a fixed type order, joined by a line break.
    """
    if fragment.has_example:
        if isinstance(fragment.example, str):
            return fragment.example
        return json.dumps(fragment.example)

    parts: List[str] = []
    for t in EXAMPLE_TYPE_ORDER:
        if fragment.has_type(t):
            parts.append(_example_for_type(fragment, t))
    return LINE_BREAK.join(parts)


def string_format_example(fragment: SchemaFragment) -> str:
    """Example literal for a string, chosen by its `format`."""
    if not fragment.format:
        return DEFAULT_STRING_EXAMPLE
    return STRING_FORMAT_EXAMPLES.get(fragment.format, DEFAULT_STRING_EXAMPLE)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _example_for_type(fragment: SchemaFragment, t: str) -> str:
    if t == "string":
        if fragment.enum:
            return f'"{_literal(fragment.enum[0])}"'
        return string_format_example(fragment)
    if t == "number":
        return _literal(fragment.enum[0]) if fragment.enum else DEFAULT_NUMBER_EXAMPLE
    if t == "integer":
        return _literal(fragment.enum[0]) if fragment.enum else DEFAULT_INTEGER_EXAMPLE
    if t == "boolean":
        return DEFAULT_BOOLEAN_EXAMPLE
    if t == "object":
        return DEFAULT_OBJECT_EXAMPLE
    # array
    if fragment.items is None:
        return "[]"
    item = example_text(fragment.items)
    return f"[{item}, {item}]"


def _allowed_for_type(fragment: SchemaFragment, t: str) -> str:
    if t == "string":
        if fragment.format:
            return fragment.format
        if fragment.pattern:
            return "pattern"
        return t
    if t in ("integer", "number"):
        if fragment.minimum is None and fragment.maximum is None:
            return t
        low = "" if fragment.minimum is None else _literal(fragment.minimum)
        high = "" if fragment.maximum is None else _literal(fragment.maximum)
        return f"{t} [{low}, {high}]"
    if t == "array" and fragment.items is not None:
        return f"array of {allowed_label(fragment.items)}"
    return t


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)
