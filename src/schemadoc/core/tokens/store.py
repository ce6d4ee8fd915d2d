from __future__ import annotations

"""
Token Store.

Append-oriented accumulator for documentation tokens. Tokens are created
lazily on first write; later writes merge into the existing entry instead
of replacing it. One store instance is owned by one document parse.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterator, List, Optional

from schemadoc.domain.token_models import PropertyDescriptor, Token

logger = logging.getLogger(__name__)

_SCALAR_ATTRIBUTES = ("title", "description", "type", "allowed")

_ALTERNATIVE_KINDS = {
    "one_of": "required_one_of",
    "any_of": "required_any_of",
}


class TokenStore:
    """
    Ordered mapping of token name to Token.

    Writes never remove information: scalar attributes ignore None values,
    required lists are replaced only by non-empty lists, alternative
    required-sets are appended and property descriptors are merged field
    by field.
    """

    def __init__(self) -> None:
        self._tokens: Dict[str, Token] = {}

    # -------------------------------------------------------------------------
    # WRITE API
    # -------------------------------------------------------------------------

    def token(self, name: str) -> Token:
        """Return the token called name, creating it on first access."""
        tok = self._tokens.get(name)
        if tok is None:
            tok = Token(name=name)
            self._tokens[name] = tok
            logger.debug(f"Token registered: {name}")
        return tok

    def set_attribute(self, name: str, key: str, value: Optional[str]) -> None:
        """
        Set a scalar attribute (title, description, type, allowed).

        Args:
            name: Token name.
            key: Attribute name.
            value: New value; None leaves the current value untouched.
        """
        if key not in _SCALAR_ATTRIBUTES:
            raise KeyError(f"Unknown token attribute '{key}'")
        tok = self.token(name)
        if value is not None:
            setattr(tok, key, value)

    def set_required(self, name: str, names: List[str]) -> None:
        """Record the required list and flag each listed property."""
        tok = self.token(name)
        if names:
            tok.required = list(names)
        for prop_name in names:
            self.merge_property(name, prop_name, required=True)

    def add_alternative_required(self, name: str, kind: str, names: List[str]) -> None:
        """
        Append one alternative required-set.

        Args:
            name: Token name.
            kind: 'one_of' or 'any_of'.
            names: Property names required by that alternative.
        """
        attr = _ALTERNATIVE_KINDS.get(kind)
        if attr is None:
            raise KeyError(f"Unknown alternative kind '{kind}'")
        getattr(self.token(name), attr).append(list(names))

    def merge_property(self, name: str, prop_name: str, **fields: Any) -> PropertyDescriptor:
        """Merge fields into the descriptor of prop_name on token name."""
        tok = self.token(name)
        descriptor = tok.props.get(prop_name)
        if descriptor is None:
            descriptor = PropertyDescriptor(name=prop_name)
            tok.props[prop_name] = descriptor
        descriptor.merge(**fields)
        return descriptor

    def reset(self) -> None:
        """Discard every accumulated token."""
        self._tokens.clear()

    # -------------------------------------------------------------------------
    # READ API
    # -------------------------------------------------------------------------

    def get(self, name: str) -> Optional[Token]:
        return self._tokens.get(name)

    def names(self) -> List[str]:
        return list(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(list(self._tokens.values()))

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        """Plain JSON-ready snapshot of the store."""
        return {name: asdict(tok) for name, tok in self._tokens.items()}
