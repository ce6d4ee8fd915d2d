from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against missing and corrupted config files.
3. Legacy camelCase key migration.
4. Loading a config file from a temporary directory.
"""

import json
import os
from pathlib import Path

from schemadoc.domain.config import (
    get_default_config,
    load_config,
    migrate_legacy_keys,
)


def test_default_config_keys() -> None:
    cfg = get_default_config()
    assert set(cfg) == {
        "input_path", "output_path", "header_file", "footer_file",
        "index_file", "write_file", "verbose", "log_file",
    }
    assert cfg["write_file"] is True
    assert cfg["verbose"] is False
    assert cfg["input_path"] == os.getcwd()


def test_load_without_path_returns_defaults() -> None:
    assert load_config(None) == get_default_config()


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_config(str(tmp_path / "absent.json")) == get_default_config()


def test_load_corrupted_file_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ broken", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_load_non_object_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_load_merges_and_migrates(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "version": "0.9.0",
        "headerFile": "head.html",
        "verbose": True,
    }), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["header_file"] == "head.html"
    assert cfg["verbose"] is True
    assert cfg["write_file"] is True
    assert "version" not in cfg
    assert "headerFile" not in cfg


def test_migrate_prefers_current_keys() -> None:
    out = migrate_legacy_keys({"indexFile": "old.md", "index_file": "new.md", "other": 1})
    assert out == {"index_file": "new.md", "other": 1}


def test_load_ignores_version_key(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"version": "1.0.0", "footer_file": "foot.html"}), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["footer_file"] == "foot.html"
    assert "version" not in cfg
