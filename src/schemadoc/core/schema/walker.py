from __future__ import annotations

"""
JSON Schema Walker.

Flattens a schema document into the Token Store: one token for the
document itself plus one token per nested object-typed property. Parent
properties are fully registered before any child token is walked.
"""

import json
import logging
import os
from typing import List, Optional, Tuple

from schemadoc.core.schema.references import RefChain, ReferenceResolver
from schemadoc.core.schema.synthesizer import (
    allowed_label,
    description_text,
    example_text,
    type_label,
)
from schemadoc.core.tokens.store import TokenStore
from schemadoc.domain.constants import SCHEMA_EXTENSION
from schemadoc.domain.errors import SchemaParseError
from schemadoc.domain.schema_models import SchemaFragment

logger = logging.getLogger(__name__)

# Nested object awaiting its own token: (token name, fragment, ref chain)
SubToken = Tuple[str, SchemaFragment, RefChain]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_schema_file(file_path: str, store: Optional[TokenStore] = None) -> TokenStore:
    """
    Read one schema document and populate a Token Store from it.

    Args:
        file_path: Path to the JSON Schema file.
        store: Store to populate; a fresh one is created when omitted.

    Returns:
        TokenStore: The populated store.

    Raises:
        SchemaParseError: If the file cannot be read or decoded, or if a
            reference cannot be resolved. Tokens written before the failure
            stay in the store.
    """
    store = store if store is not None else TokenStore()
    abs_path = os.path.abspath(file_path)

    try:
        with open(abs_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SchemaParseError(f"Cannot read schema '{file_path}': {e}", path=abs_path) from e
    except ValueError as e:
        raise SchemaParseError(f"Invalid JSON in '{file_path}': {e}", path=abs_path) from e

    root = SchemaFragment.from_dict(data)
    walker = SchemaWalker(store, ReferenceResolver(os.path.dirname(abs_path)))
    walker.walk(root, default_token_name(abs_path), chain=(abs_path,))
    return store


def default_token_name(file_path: str) -> str:
    """Token name derived from a file name: 'user_account.v2.json' -> 'user account v2'."""
    base = os.path.basename(file_path)
    if base.endswith(SCHEMA_EXTENSION):
        base = base[: -len(SCHEMA_EXTENSION)]
    return base.replace("_", " ").replace(".", " ")

# -----------------------------------------------------------------------------
# WALKER
# -----------------------------------------------------------------------------

class SchemaWalker:
    """
    Recursive populator of a Token Store.

    Args:
        store: Destination for tokens.
        resolver: Reference resolver bound to the document directory.
    """

    def __init__(self, store: TokenStore, resolver: ReferenceResolver):
        self.store = store
        self.resolver = resolver

    def walk(self, root: SchemaFragment, fallback_name: str, chain: RefChain = ()) -> str:
        """
        Register the top-level token and everything nested below it.

        Args:
            root: Parsed document fragment.
            fallback_name: Token name used when the schema has no `id`.
            chain: Files already being expanded (normally the document itself).

        Returns:
            str: The top-level token name.
        """
        token_name = root.id or fallback_name
        logger.debug(f"Walking schema token '{token_name}'")

        self.store.set_attribute(token_name, "title", root.title)
        self.store.set_attribute(token_name, "description", root.description)
        if root.single_type is not None:
            self.store.set_attribute(token_name, "type", root.single_type)

        if root.has_properties:
            self._parse_properties(token_name, root, chain)
            self._parse_required(token_name, root)
        return token_name

    # -------------------------------------------------------------------------
    # INTERNAL STEPS
    # -------------------------------------------------------------------------

    def _parse_properties(self, token_name: str, fragment: SchemaFragment, chain: RefChain) -> None:
        """Register every property row, then walk nested objects."""
        sub_tokens: List[SubToken] = []

        for key, value in fragment.properties:
            value, value_chain = self.resolver.resolve(value, chain)

            if value.is_object:
                sub_tokens.append((key, value, value_chain))
            if value.items is not None and value.items.is_object:
                sub_tokens.append((key, value.items, value_chain))

            self.store.merge_property(
                token_name,
                key,
                type=type_label(value),
                description=description_text(value),
                allowed=allowed_label(value),
                example=example_text(value),
            )

        self._parse_sub_tokens(sub_tokens)

    def _parse_sub_tokens(self, sub_tokens: List[SubToken]) -> None:
        # Tokens are keyed by property name only; equal keys merge.
        for token_name, fragment, chain in sub_tokens:
            self.store.set_attribute(token_name, "title", fragment.title)
            self.store.set_attribute(token_name, "description", fragment.description)
            self.store.set_attribute(token_name, "type", ", ".join(fragment.types) or None)
            self.store.set_attribute(token_name, "allowed", allowed_label(fragment))

            if fragment.has_properties:
                self._parse_properties(token_name, fragment, chain)
                self._parse_required(token_name, fragment)

    def _parse_required(self, token_name: str, fragment: SchemaFragment) -> None:
        if fragment.required:
            self.store.set_required(token_name, list(fragment.required))
        for alternative in fragment.one_of:
            if alternative.required:
                self.store.add_alternative_required(token_name, "one_of", list(alternative.required))
        for alternative in fragment.any_of:
            if alternative.required:
                self.store.add_alternative_required(token_name, "any_of", list(alternative.required))
