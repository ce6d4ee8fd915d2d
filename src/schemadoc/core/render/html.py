from __future__ import annotations

"""
Markdown to HTML Conversion.

Thin wrapper around Python-Markdown configured for pipe tables and simple
line breaks. Intra-word underscores stay literal, so property names such
as `created_at` are never turned into emphasis.
"""

import markdown

MARKDOWN_EXTENSIONS = ["tables", "nl2br"]


def markdown_to_html(text: str) -> str:
    """
    Convert a Markdown document to an HTML fragment.

    Args:
        text: Markdown source.

    Returns:
        str: HTML body markup.
    """
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, output_format="html")
    return md.convert(text)
