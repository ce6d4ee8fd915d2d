from __future__ import annotations

"""
Markdown Generator.

Renders a populated Token Store into a single linear Markdown document:
one section per token with a heading, summary lines and a property table.
"""

import logging
import re
from typing import List

from schemadoc.core.tokens.store import TokenStore
from schemadoc.domain.constants import LINE_BREAK
from schemadoc.domain.token_models import PropertyDescriptor, Token

logger = logging.getLogger(__name__)

TABLE_HEADER = "| Name | Type | Allowed | Required | Description | Example |"
TABLE_RULE = "| --- | --- | --- | --- | --- | --- |"

_CODE_SPAN_RX = re.compile(r"(`[^`]*`)")


class MarkdownGenerator:
    """
    Markdown renderer bound to one Token Store.

    Args:
        store: The tokens of a single document.
    """

    def __init__(self, store: TokenStore):
        self.store = store

    def generate(self) -> str:
        """Render all tokens in insertion order."""
        sections = [self.render_token(tok) for tok in self.store]
        logger.debug(f"Generated markdown for {len(sections)} token(s)")
        return "\n\n".join(sections) + ("\n" if sections else "")

    def render_token(self, token: Token) -> str:
        lines: List[str] = [f"## {token.heading}", ""]

        if token.description:
            lines += [token.description, ""]
        if token.type:
            lines.append(f"**Type:** `{token.type}`")
        if token.required:
            lines.append(f"**Required:** {_code_list(token.required)}")
        if token.required_one_of:
            lines.append(f"**Required one of:** {_alternatives(token.required_one_of)}")
        if token.required_any_of:
            lines.append(f"**Required any of:** {_alternatives(token.required_any_of)}")

        if token.props:
            if lines[-1] != "":
                lines.append("")
            lines += [TABLE_HEADER, TABLE_RULE]
            lines += [_property_row(prop) for prop in token.props.values()]

        return "\n".join(lines).rstrip()

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _property_row(prop: PropertyDescriptor) -> str:
    cells = [
        f"`{prop.name}`",
        _cell(prop.type),
        _cell(prop.allowed),
        "yes" if prop.required else "",
        _cell(prop.description),
        _example_cell(prop.example),
    ]
    return "| " + " | ".join(cells) + " |"


def _example_cell(example: str) -> str:
    if not example:
        return ""
    return LINE_BREAK.join(_cell(f"`{part}`") for part in example.split(LINE_BREAK))


def _cell(text: str) -> str:
    # Pipes inside code spans stay literal; odd split indexes are the spans.
    parts = _CODE_SPAN_RX.split((text or "").replace("\n", " "))
    return "".join(
        part if i % 2 else part.replace("|", "&#124;")
        for i, part in enumerate(parts)
    )


def _code_list(names: List[str]) -> str:
    return ", ".join(f"`{n}`" for n in names)


def _alternatives(sets: List[List[str]]) -> str:
    return " or ".join(f"({_code_list(names)})" for names in sets)
