from __future__ import annotations

"""
Unit tests for the Doctree Template Engine.

Verifies node rendering per depth, template fallbacks, root assembly,
the active-state pass and page placeholders.
"""

import logging
from pathlib import Path

import pytest

from schemadoc.core.doctree.doc_map import build_doc_map
from schemadoc.core.doctree.engine import (
    apply_active_state,
    apply_doc_map,
    apply_page_properties,
)
from schemadoc.domain.doc_map_models import DocMap
from schemadoc.domain.errors import TemplateSyntaxError

SIBLING_NAV = (
    '<nav><doctree-root><ul>'
    '<doctree-branch-root>'
    '<li class="{tag-item-indent}">{tag-branch-label}<ul>'
    '<doctree-branch-root-childs></doctree-branch-root-childs>'
    '</ul></li>'
    '</doctree-branch-root>'
    '<doctree-branch-leaf>'
    '<li><a href="{tag-leaf-uri}" class="{tag-item-state:{tag-leaf-uri}}">{tag-leaf-label}</a></li>'
    '</doctree-branch-leaf>'
    '</ul></doctree-root></nav>'
)


def _map(root: Path, *rels: str) -> DocMap:
    return build_doc_map([str(root / rel) for rel in rels], str(root))

# -----------------------------------------------------------------------------
# EXPANSION
# -----------------------------------------------------------------------------

def test_nested_template_renders_each_leaf_once(tmp_path: Path, nav_template: str) -> None:
    doc_map = _map(tmp_path, "a/x.json", "a/y.json", "b/z.json")
    assert apply_doc_map(doc_map, nav_template) == "xyz"


def test_sibling_template_with_markup(tmp_path: Path) -> None:
    doc_map = _map(tmp_path, "user_data/x.json", "top.json")

    out = apply_doc_map(doc_map, SIBLING_NAV)

    assert out == (
        '<nav><ul>'
        '<li class="">user data<ul>'
        '<li><a href="user_data.x.html" class="{tag-item-state:user_data.x.html}">x</a></li>'
        '</ul></li>'
        '<li><a href="top.html" class="{tag-item-state:top.html}">top</a></li>'
        '</ul></nav>'
    )
    assert "doctree-" not in out


def test_level_and_indent_placeholders(tmp_path: Path) -> None:
    template = (
        "<doctree-root>"
        "<doctree-branch>[{tag-item-level}:{tag-branch-name}:{tag-item-indent}"
        "<doctree-branch-childs></doctree-branch-childs>]</doctree-branch>"
        "<doctree-branch-leaf>({tag-item-level}:{tag-leaf-name}:{tag-item-indent})</doctree-branch-leaf>"
        "</doctree-root>"
    )
    doc_map = _map(tmp_path, "a/b/c.json")

    assert apply_doc_map(doc_map, template) == "[1:a:[2:b:(3:c:is-indent)]]"


def test_branch_root_used_only_at_depth_one(tmp_path: Path) -> None:
    template = (
        "<doctree-root>"
        "<doctree-branch-root>R({tag-branch-name})"
        "<doctree-branch-root-childs></doctree-branch-root-childs>;</doctree-branch-root>"
        "<doctree-branch>B({tag-branch-name})"
        "<doctree-branch-childs></doctree-branch-childs>;</doctree-branch>"
        "<doctree-branch-leaf>{tag-leaf-name},</doctree-branch-leaf>"
        "</doctree-root>"
    )
    doc_map = _map(tmp_path, "a/b/c.json", "a/d.json")

    assert apply_doc_map(doc_map, template) == "R(a)B(b)c,;d,;"


def test_missing_branch_falls_back_to_branch_root(tmp_path: Path) -> None:
    template = (
        "<doctree-root><doctree-branch-root>R({tag-branch-name})"
        "<doctree-branch-root-childs></doctree-branch-root-childs></doctree-branch-root>"
        "<doctree-branch-leaf>{tag-leaf-name}</doctree-branch-leaf></doctree-root>"
    )
    doc_map = _map(tmp_path, "a/b/c.json")

    assert apply_doc_map(doc_map, template) == "R(a)R(b)c"


def test_missing_leaf_template_renders_nothing_for_leaves(tmp_path: Path) -> None:
    template = (
        "<doctree-root><doctree-branch>{tag-branch-name};"
        "<doctree-branch-childs></doctree-branch-childs></doctree-branch></doctree-root>"
    )
    assert apply_doc_map(_map(tmp_path, "a/x.json"), template) == "a;"


def test_leaf_properties(tmp_path: Path) -> None:
    template = (
        "<doctree-root><doctree-branch-leaf>"
        "{tag-leaf-name}|{tag-leaf-label}|{tag-leaf-path}|{tag-leaf-uri}|{tag-leaf-is-leaf}"
        "</doctree-branch-leaf></doctree-root>"
    )
    out = apply_doc_map(_map(tmp_path, "top_file.json"), template)
    assert out == "top_file|top file||top_file.html|true"


def test_root_without_branch_definition_appends(
        tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    template = "<doctree-root>L:<doctree-branch-leaf>{tag-leaf-name}</doctree-branch-leaf></doctree-root>"

    with caplog.at_level(logging.WARNING, logger="schemadoc.core.doctree.engine"):
        out = apply_doc_map(_map(tmp_path, "top.json"), template)

    assert out == "L:top"
    assert "no branch definition" in caplog.text


def test_template_without_root_is_unchanged(tmp_path: Path) -> None:
    text = "<header>{tag-page-label}</header>"
    assert apply_doc_map(_map(tmp_path, "a/x.json"), text) == text


def test_malformed_template_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateSyntaxError):
        apply_doc_map(_map(tmp_path, "a/x.json"), "<doctree-root><doctree-branch>")

# -----------------------------------------------------------------------------
# PER-PAGE PASSES
# -----------------------------------------------------------------------------

def test_active_state_marks_current_page_only(tmp_path: Path) -> None:
    expanded = apply_doc_map(_map(tmp_path, "user_data/x.json", "top.json"), SIBLING_NAV)

    page = apply_active_state("user_data.x.html", expanded)

    assert 'href="user_data.x.html" class="is-active"' in page
    assert 'href="top.html" class=""' in page
    assert "{tag-item-state:" not in page


def test_active_state_without_match_clears_all() -> None:
    text = "{tag-item-state:a.html}|{tag-item-state:b.html}"
    assert apply_active_state("index.html", text) == "|"
    assert apply_active_state("b.html", text) == "|is-active"


def test_page_properties() -> None:
    text = "<title>{tag-page-label}</title><a href='{tag-page-uri}'>{tag-page-name}</a>"
    props = {"uri": "a.x.html", "name": "a.x", "label": "a x"}

    assert apply_page_properties(text, props) == "<title>a x</title><a href='a.x.html'>a.x</a>"
