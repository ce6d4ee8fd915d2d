from __future__ import annotations

"""
Document Map Builder.

Builds the ordered directory/file tree that mirrors the discovered input
schemas. The map drives both navigation rendering and output naming: a
leaf's `uri` is exactly the file name of the page generated for it.
"""

import logging
import os
from typing import Iterable, List, Tuple

from schemadoc.domain.constants import HTML_EXTENSION
from schemadoc.domain.doc_map_models import DocMap, DocNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_doc_map(files: Iterable[str], input_root: str) -> DocMap:
    """
    Build the Document Map for a set of discovered files.

    Args:
        files: Schema file paths, in discovery order.
        input_root: Directory the paths are made relative to.

    Returns:
        DocMap: Top-level nodes keyed by name, in insertion order.
    """
    doc_map: DocMap = {}
    root_abs = os.path.abspath(input_root)

    for file_path in files:
        rel_path = os.path.relpath(os.path.abspath(file_path), root_abs)
        dirs, name = split_relative_path(rel_path)
        insert_path(doc_map, dirs, name)

    logger.debug(f"Document map built with {len(doc_map)} top-level node(s)")
    return doc_map


def insert_path(doc_map: DocMap, dirs: List[str], name: str) -> DocNode:
    """
    Insert one file into the map, creating directory nodes on demand.

    Re-inserting a path already present is a no-op.

    Args:
        doc_map: Map to extend in place.
        dirs: Directory components, outermost first.
        name: File base name without extension.

    Returns:
        DocNode: The (new or existing) leaf node.
    """
    level = doc_map
    dir_step: List[str] = []

    for component in dirs:
        dir_step.append(component)
        key = _slot_key(level, component, leaf=False)
        node = level.get(key)
        if node is None:
            branch_path = "/".join(dir_step)
            node = DocNode(
                name=component,
                label=make_label(component),
                path=branch_path,
                uri=branch_path,
                is_leaf=False,
                childs={},
            )
            level[key] = node
        level = node.childs if node.childs is not None else {}

    key = _slot_key(level, name, leaf=True)
    leaf = level.get(key)
    if leaf is None:
        leaf = DocNode(
            name=name,
            label=make_label(name),
            path="/".join(dirs),
            uri=page_uri(dirs, name),
            is_leaf=True,
            childs=None,
        )
        level[key] = leaf
    return leaf


def page_uri(dirs: List[str], name: str) -> str:
    """Output page name for a file: directory components and name joined by '.'."""
    return ".".join(list(dirs) + [name]) + HTML_EXTENSION


def output_name_for(rel_path: str) -> str:
    """Output page name for a path relative to the input root."""
    dirs, name = split_relative_path(rel_path)
    return page_uri(dirs, name)


def make_label(name: str) -> str:
    return name.replace("_", " ").replace(".", " ")


def split_relative_path(rel_path: str) -> Tuple[List[str], str]:
    """
    Split a relative file path into directory components and base name.

    The last extension is dropped from the base name.
    """
    normalized = rel_path.replace(os.sep, "/")
    parts = [p for p in normalized.split("/") if p and p != "."]
    if not parts:
        raise ValueError(f"Empty relative path: {rel_path!r}")
    name, _ = os.path.splitext(parts[-1])
    return parts[:-1], name

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _slot_key(level: DocMap, name: str, leaf: bool) -> str:
    # A file 'a.json' next to a directory 'a' must not share a slot.
    existing = level.get(name)
    if existing is None or existing.is_leaf == leaf:
        return name
    return name + (HTML_EXTENSION if leaf else "/")
