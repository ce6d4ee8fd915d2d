from __future__ import annotations

"""
Doctree Tag Parser.

Recursive-descent parser for the structural doctree tags embedded in
header, footer and index templates. Text outside structural tags,
including arbitrary HTML, is kept verbatim as string nodes.

Grammar:
    content  := (TEXT | element)*
    element  := '<' TAG '>' content '</' TAG '>'
    TAG      := one of the six doctree structural tag names
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from schemadoc.domain.constants import (
    STRUCTURAL_TAGS,
    TAG_BRANCH,
    TAG_BRANCH_CHILDS,
    TAG_BRANCH_LEAF,
    TAG_BRANCH_ROOT,
    TAG_BRANCH_ROOT_CHILDS,
    TAG_ROOT,
)
from schemadoc.domain.errors import TemplateSyntaxError

_TAG_RX = re.compile(r"<(/?)(doctree-[a-z-]+)>")

# -----------------------------------------------------------------------------
# PARSE TREE
# -----------------------------------------------------------------------------

@dataclass
class TagElement:
    """
    One structural tag pair.

    Attributes:
        name: Tag name.
        children: Text and nested elements, in source order.
        start: Offset of the opening tag in the source.
        end: Offset just past the closing tag.
    """
    name: str
    children: List[Union[str, "TagElement"]] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def iter_elements(self) -> Iterator["TagElement"]:
        """Depth-first iteration over nested elements (excluding self)."""
        for child in self.children:
            if isinstance(child, TagElement):
                yield child
                yield from child.iter_elements()

    def find(self, name: str) -> Optional["TagElement"]:
        for element in self.iter_elements():
            if element.name == name:
                return element
        return None


@dataclass
class TemplateDocument:
    """Parsed template: top-level text and elements plus the raw source."""
    source: str
    children: List[Union[str, TagElement]] = field(default_factory=list)


@dataclass(frozen=True)
class DoctreeTemplates:
    """
    The fragments extracted from one template document.

    Attributes:
        root: The `doctree-root` element.
        branch_root: Template for depth-1 branches.
        branch: Template for deeper branches.
        leaf: Template for leaves.
    """
    root: TagElement
    branch_root: Optional[TagElement]
    branch: Optional[TagElement]
    leaf: Optional[TagElement]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_template(source: str) -> TemplateDocument:
    """
    Parse template text into a tree of structural elements.

    Raises:
        TemplateSyntaxError: On unbalanced or mismatched structural tags.
    """
    doc = TemplateDocument(source=source)
    stack: List[TagElement] = []
    pos = 0

    def _append(node: Union[str, TagElement]) -> None:
        target = stack[-1].children if stack else doc.children
        if isinstance(node, str) and target and isinstance(target[-1], str):
            target[-1] += node
        elif node != "":
            target.append(node)

    for m in _TAG_RX.finditer(source):
        closing, name = m.group(1) == "/", m.group(2)
        if name not in STRUCTURAL_TAGS:
            continue

        _append(source[pos:m.start()])
        pos = m.end()

        if not closing:
            stack.append(TagElement(name=name, start=m.start()))
            continue

        if not stack:
            raise TemplateSyntaxError(f"Unexpected closing tag </{name}> at offset {m.start()}")
        element = stack.pop()
        if element.name != name:
            raise TemplateSyntaxError(
                f"Mismatched closing tag </{name}> at offset {m.start()}; "
                f"expected </{element.name}>"
            )
        element.end = m.end()
        _append(element)

    if stack:
        raise TemplateSyntaxError(f"Unclosed tag <{stack[-1].name}> at offset {stack[-1].start}")

    _append(source[pos:])
    return doc


def extract_templates(doc: TemplateDocument) -> Optional[DoctreeTemplates]:
    """
    Locate the root, branch-root, branch and leaf fragments.

    Each fragment may sit at any depth below the root: nested inside the
    childs slot of its parent template or declared as a sibling. Returns
    None when the document has no `doctree-root`.

    Raises:
        TemplateSyntaxError: If a structural tag is declared more than once.
    """
    roots = [c for c in _walk(doc.children) if c.name == TAG_ROOT]
    if not roots:
        return None
    if len(roots) > 1:
        raise TemplateSyntaxError(f"Duplicate <{TAG_ROOT}> declaration")
    root = roots[0]

    seen: List[str] = []
    for element in root.iter_elements():
        if element.name in seen:
            raise TemplateSyntaxError(f"Duplicate <{element.name}> declaration")
        seen.append(element.name)

    return DoctreeTemplates(
        root=root,
        branch_root=root.find(TAG_BRANCH_ROOT),
        branch=root.find(TAG_BRANCH),
        leaf=root.find(TAG_BRANCH_LEAF),
    )


def slot_tag_for(element: TagElement) -> str:
    """Children slot used by a branch template."""
    return TAG_BRANCH_ROOT_CHILDS if element.name == TAG_BRANCH_ROOT else TAG_BRANCH_CHILDS

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _walk(nodes: List[Union[str, TagElement]]) -> Iterator[TagElement]:
    for node in nodes:
        if isinstance(node, TagElement):
            yield node
            yield from node.iter_elements()
