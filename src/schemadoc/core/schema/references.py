from __future__ import annotations

"""
Schema Reference Resolver.

Dereferences `$ref` pointers eagerly, one level at a time. Local pointers
of the form `#/name` map to a sibling `name.json` next to the document
being parsed; remote URLs are accepted but never fetched. Every
resolution carries the chain of files currently being expanded so that a
reference cycle fails fast instead of recursing forever.
"""

import json
import logging
import os
from dataclasses import replace
from typing import Tuple

from schemadoc.domain.constants import SCHEMA_EXTENSION
from schemadoc.domain.errors import (
    CircularReferenceError,
    ReferenceResolutionError,
    SchemaParseError,
)
from schemadoc.domain.schema_models import SchemaFragment

logger = logging.getLogger(__name__)

RefChain = Tuple[str, ...]

_REMOTE_PREFIXES = ("http://", "https://")
_LOCAL_PREFIX = "#/"


class ReferenceResolver:
    """
    Resolves `$ref` fragments relative to one document directory.

    Args:
        base_dir: Directory of the document being parsed.
    """

    def __init__(self, base_dir: str):
        self.base_dir = os.path.abspath(base_dir)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def resolve(self, fragment: SchemaFragment, chain: RefChain = ()) -> Tuple[SchemaFragment, RefChain]:
        """
        Replace a reference fragment by its target, recursing into `items`.

        Args:
            fragment: Fragment to resolve.
            chain: Files already being expanded on the current walk path.

        Returns:
            Tuple[SchemaFragment, RefChain]: The resolved fragment and the
            chain extended with the file it was loaded from (if any).

        Raises:
            CircularReferenceError: If the target is already in chain.
            ReferenceResolutionError: If the target cannot be read or decoded.
        """
        if fragment.ref:
            if fragment.ref.startswith(_REMOTE_PREFIXES):
                logger.warning(f"Remote reference not fetched: {fragment.ref}")
                return SchemaFragment.empty(), chain

            target = self.ref_path(fragment.ref)
            if target in chain:
                raise CircularReferenceError(fragment.ref, target)
            chain = chain + (target,)
            fragment = self._load(fragment.ref, target)

        if fragment.items is not None:
            items, _ = self.resolve(fragment.items, chain)
            fragment = replace(fragment, items=items)

        return fragment, chain

    def ref_path(self, ref: str) -> str:
        """Map a local `$ref` to an absolute file path."""
        name = ref[len(_LOCAL_PREFIX):] if ref.startswith(_LOCAL_PREFIX) else ref
        if not name.endswith(SCHEMA_EXTENSION):
            name += SCHEMA_EXTENSION
        return os.path.abspath(os.path.join(self.base_dir, name))

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _load(self, ref: str, target: str) -> SchemaFragment:
        logger.debug(f"Resolving $ref '{ref}' -> {target}")
        try:
            with open(target, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ReferenceResolutionError(ref, target, e.strerror or str(e)) from e
        except ValueError as e:
            raise ReferenceResolutionError(ref, target, f"invalid JSON: {e}") from e

        try:
            return SchemaFragment.from_dict(data)
        except SchemaParseError as e:
            raise ReferenceResolutionError(ref, target, str(e)) from e
