from __future__ import annotations

"""
Doctree Template Engine.

Expands the doctree markup of a template against a Document Map. Branch
nodes render through the branch-root template at depth 1 and the branch
template below that; leaves render through the leaf template. Node
attributes are substituted into `{tag-branch-<prop>}` / `{tag-leaf-<prop>}`
placeholders and rendered children land in the template's childs slot.

The output carries no doctree tags: the root region is replaced by the
rendered nodes and the template definitions themselves are dropped.
"""

import logging
import re
from typing import Dict, List, Optional

from schemadoc.core.doctree.template_parser import (
    DoctreeTemplates,
    TagElement,
    extract_templates,
    parse_template,
    slot_tag_for,
)
from schemadoc.domain.constants import (
    ACTIVE_CLASS,
    INDENT_CLASS,
    PLACEHOLDER_BRANCH,
    PLACEHOLDER_INDENT,
    PLACEHOLDER_LEAF,
    PLACEHOLDER_LEVEL,
    PLACEHOLDER_PAGE,
    PLACEHOLDER_STATE_PREFIX,
    TAG_BRANCH,
    TAG_BRANCH_ROOT,
)
from schemadoc.domain.doc_map_models import DocMap, DocNode

logger = logging.getLogger(__name__)

_STATE_RX = re.compile(re.escape(PLACEHOLDER_STATE_PREFIX) + r"[^{}]*\}")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def apply_doc_map(doc_map: DocMap, text: str) -> str:
    """
    Expand the doctree markup of a template.

    Args:
        doc_map: Navigation tree to render.
        text: Template source.

    Returns:
        str: The template with its `doctree-root` region replaced by the
        rendered tree. Text without a root tag is returned unchanged.

    Raises:
        TemplateSyntaxError: On malformed or duplicated doctree tags.
    """
    doc = parse_template(text)
    templates = extract_templates(doc)
    if templates is None:
        return text

    rendered = render_doc_map(doc_map, templates)
    root = templates.root
    return text[:root.start] + _render_root(root, rendered) + text[root.end:]


def render_doc_map(doc_map: DocMap, templates: DoctreeTemplates) -> str:
    """Concatenate the renders of all top-level nodes."""
    return "".join(render_node(node, templates, 1) for node in doc_map.values())


def render_node(node: DocNode, templates: DoctreeTemplates, level: int) -> str:
    """
    Render one node and, for branches, its subtree.

    Args:
        node: Node to render.
        templates: Extracted template fragments.
        level: Depth of the node, starting at 1.
    """
    if node.is_leaf:
        if templates.leaf is None:
            return ""
        return _render_fragment(templates.leaf, None, _substitutions(node, PLACEHOLDER_LEAF, level), "")

    childs = "".join(
        render_node(child, templates, level + 1) for child in (node.childs or {}).values()
    )

    template = _branch_template(templates, level)
    if template is None:
        return childs
    substitutions = _substitutions(node, PLACEHOLDER_BRANCH, level)
    return _render_fragment(template, slot_tag_for(template), substitutions, childs)


def apply_active_state(item_uri: str, text: str) -> str:
    """
    Mark the navigation entry of one page as active.

    Replaces `{tag-item-state:<item_uri>}` with the active class and clears
    every other state placeholder.
    """
    active = f"{PLACEHOLDER_STATE_PREFIX}{item_uri}}}"
    return _STATE_RX.sub("", text.replace(active, ACTIVE_CLASS))


def apply_page_properties(text: str, properties: Dict[str, str]) -> str:
    """Substitute `{tag-page-<prop>}` placeholders for the current page."""
    for prop, value in properties.items():
        text = text.replace(PLACEHOLDER_PAGE.format(prop=prop), value)
    return text

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _branch_template(templates: DoctreeTemplates, level: int) -> Optional[TagElement]:
    if level > 1:
        return templates.branch or templates.branch_root
    return templates.branch_root or templates.branch


def _substitutions(node: DocNode, pattern: str, level: int) -> Dict[str, str]:
    subs = {
        PLACEHOLDER_LEVEL: str(level),
        PLACEHOLDER_INDENT: INDENT_CLASS if level > 2 else "",
    }
    for prop, value in node.properties().items():
        subs[pattern.format(prop=prop)] = value
    return subs


def _render_fragment(
        element: TagElement,
        slot_tag: Optional[str],
        substitutions: Dict[str, str],
        slot_value: str,
) -> str:
    """
    Instantiate a template element.

    Text children get the placeholder substitutions, the slot element is
    replaced by slot_value and any other nested definition is dropped.
    """
    out: List[str] = []
    for child in element.children:
        if isinstance(child, str):
            out.append(_substitute(child, substitutions))
        elif child.name == slot_tag:
            out.append(slot_value)
    return "".join(out)


def _render_root(root: TagElement, rendered: str) -> str:
    out: List[str] = []
    placed = False
    for child in root.children:
        if isinstance(child, str):
            out.append(child)
        elif child.name in (TAG_BRANCH_ROOT, TAG_BRANCH) and not placed:
            out.append(rendered)
            placed = True
    if not placed:
        logger.warning("Doctree root has no branch definition; navigation appended at the end.")
        out.append(rendered)
    return "".join(out)


def _substitute(text: str, substitutions: Dict[str, str]) -> str:
    for placeholder, value in substitutions.items():
        text = text.replace(placeholder, value)
    return text