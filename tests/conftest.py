from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for schema trees, templates and option dictionaries.
"""

import json
import logging
import os
import sys
from logging.handlers import QueueListener
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


NESTED_NAV_TEMPLATE = (
    "<doctree-root><doctree-branch-root><doctree-branch-root-childs>"
    "<doctree-branch><doctree-branch-childs>"
    "<doctree-branch-leaf>{tag-leaf-name}</doctree-branch-leaf>"
    "</doctree-branch-childs></doctree-branch>"
    "</doctree-branch-root-childs></doctree-branch-root></doctree-root>"
)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """
    Return a helper that serializes a value to a JSON file.

    Parent directories are created on demand.
    """
    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def person_schema() -> Dict[str, Any]:
    """A representative schema with nested objects, arrays and compositions."""
    return {
        "title": "Person",
        "description": "A human being.",
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Full name."},
            "email": {"type": "string", "format": "email"},
            "age": {"type": "integer", "minimum": 0, "maximum": 150},
            "nickname": {"type": ["string", "null"]},
            "role": {"type": "string", "enum": ["admin", "user"]},
            "address": {
                "type": "object",
                "title": "Address",
                "properties": {
                    "street": {"type": "string"},
                    "zip": {"type": "string", "pattern": "^[0-9]{5}$"},
                },
                "required": ["street"],
            },
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["name", "email"],
        "oneOf": [{"required": ["email"]}, {"required": ["nickname"]}],
    }


@pytest.fixture
def schema_tree(tmp_path: Path, write_json: Callable[[Path, Any], Path]) -> Path:
    """
    Create an input directory with three schema files.

    Structure:
    /schemas
      /a
        x.json
        y.json
      /b
        z.json
    """
    root = tmp_path / "schemas"
    for rel in ("a/x.json", "a/y.json", "b/z.json"):
        name = Path(rel).stem
        write_json(root / rel, {
            "title": name.upper(),
            "type": "object",
            "properties": {"value": {"type": "string"}},
        })
    return root


@pytest.fixture
def nav_template() -> str:
    """Fully nested doctree template rendering only leaf names."""
    return NESTED_NAV_TEMPLATE


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete options dictionary for testing.

    Reflects the structure defined in 'schemadoc.domain.config'.
    """
    return {
        "input_path": str(tmp_path / "schemas"),
        "output_path": str(tmp_path / "out"),
        "header_file": "",
        "footer_file": "",
        "index_file": "",
        "write_file": True,
        "verbose": False,
        "log_file": "",
    }


@pytest.fixture
def clean_logging():
    """Detach the handlers installed by `configure_logging` around a test."""
    from schemadoc.infra.logging import _CONFIGURED_FLAG_ATTR, _HANDLER_TAG_ATTR, _QUEUE_LISTENER_ATTR

    def _reset() -> None:
        root = logging.getLogger()
        listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
        if isinstance(listener, QueueListener):
            listener.stop()
            setattr(root, _QUEUE_LISTENER_ATTR, None)
        for h in list(root.handlers):
            if getattr(h, _HANDLER_TAG_ATTR, False):
                root.removeHandler(h)
                h.close()
        if hasattr(root, _CONFIGURED_FLAG_ATTR):
            delattr(root, _CONFIGURED_FLAG_ATTR)
        root.setLevel(logging.WARNING)

    _reset()
    yield
    _reset()
