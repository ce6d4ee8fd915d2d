from __future__ import annotations

"""
Integration tests for the Conversion Driver.

Runs `process_path` and `process_file` against real schema trees in a
temporary directory and inspects the written pages, the callback
protocol and the partial-failure policy.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest

from schemadoc.core.pipeline.engine import compose_page, process_file, process_path
from schemadoc.domain.errors import InputPathError, ReferenceResolutionError, SchemaParseError

WriteJson = Callable[[Path, Any], Path]
Events = List[Tuple[Optional[BaseException], Optional[str]]]

HEADER = (
    "<html><title>{tag-page-label}</title><ul>"
    "<doctree-root><doctree-branch-root><li>{tag-branch-label}<ul>"
    "<doctree-branch-root-childs></doctree-branch-root-childs></ul></li></doctree-branch-root>"
    "<doctree-branch-leaf><li class=\"{tag-item-state:{tag-leaf-uri}}\">{tag-leaf-uri}</li>"
    "</doctree-branch-leaf></doctree-root></ul>"
)
FOOTER = "<footer>{tag-page-uri}</footer></html>"


@pytest.fixture
def events() -> Events:
    return []


@pytest.fixture
def recorder(events: Events) -> Callable[[Optional[BaseException], Optional[str]], None]:
    def _record(error: Optional[BaseException], html: Optional[str]) -> None:
        events.append((error, html))
    return _record


@pytest.fixture
def templates(tmp_path: Path) -> Tuple[Path, Path]:
    header = tmp_path / "header.html"
    footer = tmp_path / "footer.html"
    header.write_text(HEADER, encoding="utf-8")
    footer.write_text(FOOTER, encoding="utf-8")
    return header, footer

# -----------------------------------------------------------------------------
# DIRECTORY RUNS
# -----------------------------------------------------------------------------

def test_process_path_writes_one_page_per_schema(
        schema_tree: Path, tmp_path: Path, templates: Tuple[Path, Path], events: Events, recorder
) -> None:
    header, footer = templates
    out = tmp_path / "site"

    result = process_path(
        str(schema_tree), str(out),
        {"header_file": str(header), "footer_file": str(footer)},
        recorder,
    )

    assert result.ok
    assert result.processed == 3
    assert result.failures == []
    assert sorted(p.name for p in out.iterdir()) == ["a.x.html", "a.y.html", "b.z.html"]
    assert set(result.generated_files) == {
        str(Path("a") / "x.json"), str(Path("a") / "y.json"), str(Path("b") / "z.json"),
    }
    assert len(events) == 3
    assert all(err is None and "<h2>" in html for err, html in events)

    page = (out / "a.y.html").read_text(encoding="utf-8")
    assert page.startswith("<html><title>a y</title>")
    assert '<li class="is-active">a.y.html</li>' in page
    assert '<li class="">a.x.html</li>' in page
    assert "<h2>Y</h2>" in page
    assert page.endswith("<footer>a.y.html</footer></html>")
    assert "doctree-" not in page
    assert "{tag-" not in page


def test_default_output_dir_is_skipped_on_rerun(schema_tree: Path, write_json: WriteJson) -> None:
    write_json(schema_tree / "md" / "stale.json", {"title": "stale"})

    result = process_path(str(schema_tree))

    assert result.ok
    assert result.output_path == os.path.abspath(str(schema_tree / "md"))
    assert result.processed == 3
    assert (schema_tree / "md" / "b.z.html").exists()
    assert not (schema_tree / "md" / "md.stale.html").exists()


def test_failures_do_not_abort_batch(
        schema_tree: Path, tmp_path: Path, write_json: WriteJson, events: Events, recorder
) -> None:
    (schema_tree / "a" / "broken.json").write_text("{ nope", encoding="utf-8")
    write_json(schema_tree / "b" / "dangling.json", {
        "type": "object",
        "properties": {"link": {"$ref": "#/missing"}},
    })
    out = tmp_path / "site"

    result = process_path(str(schema_tree), str(out), None, recorder)

    assert not result.ok
    assert result.processed == 3
    assert result.total == 5
    failed = {f.rel_path: f.error for f in result.failures}
    assert set(failed) == {str(Path("a") / "broken.json"), str(Path("b") / "dangling.json")}
    assert "#/missing" in failed[str(Path("b") / "dangling.json")]

    written = sorted(p.name for p in out.iterdir())
    assert written == ["a.x.html", "a.y.html", "b.z.html"]

    errors = [err for err, html in events if err is not None]
    assert len(errors) == 2
    assert any(isinstance(err, ReferenceResolutionError) for err in errors)
    assert all(isinstance(err, SchemaParseError) for err in errors)
    assert all(html is None for err, html in events if err is not None)


def test_no_write_mode_only_reports(schema_tree: Path, tmp_path: Path, events: Events, recorder) -> None:
    out = tmp_path / "site"

    result = process_path(str(schema_tree), str(out), False, recorder)

    assert result.ok
    assert result.generated_files == {}
    assert not out.exists()
    assert [html is not None for _, html in events] == [True, True, True]


def test_index_page(schema_tree: Path, tmp_path: Path, nav_template: str) -> None:
    index = tmp_path / "index.md"
    index.write_text("<main>" + nav_template + "</main>", encoding="utf-8")
    header = tmp_path / "header.html"
    header.write_text("<p class=\"{tag-item-state:index.html}\">{tag-page-name}</p>", encoding="utf-8")
    out = tmp_path / "site"

    result = process_path(str(schema_tree), str(out), {
        "indexFile": str(index),
        "headerFile": str(header),
    })

    assert result.index_path == os.path.abspath(str(out / "index.html"))
    page = (out / "index.html").read_text(encoding="utf-8")
    assert page == '<p class="is-active">index</p><main>xyz</main>'

    other = (out / "a.x.html").read_text(encoding="utf-8")
    assert other.startswith('<p class="">a.x</p>')


def test_missing_templates_are_treated_as_empty(
        schema_tree: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    out = tmp_path / "site"

    with caplog.at_level(logging.WARNING):
        result = process_path(str(schema_tree), str(out), {"header_file": str(tmp_path / "nope.html")})

    assert result.ok
    assert (out / "a.x.html").read_text(encoding="utf-8").startswith("<h2>X</h2>")
    assert "Template not found" in caplog.text


def test_malformed_template_aborts_run(schema_tree: Path, tmp_path: Path) -> None:
    header = tmp_path / "header.html"
    header.write_text("<doctree-root><doctree-branch>", encoding="utf-8")

    result = process_path(str(schema_tree), str(tmp_path / "site"), {"header_file": str(header)})

    assert not result.ok
    assert "Template error" in result.error
    assert result.processed == 0


def test_missing_input_directory(tmp_path: Path, events: Events, recorder) -> None:
    result = process_path(str(tmp_path / "absent"), None, None, recorder)

    assert not result.ok
    assert "No path" in result.error
    assert len(events) == 1
    assert isinstance(events[0][0], InputPathError)


def test_progress_logging_follows_verbose(schema_tree: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="schemadoc.core.pipeline.engine"):
        process_path(str(schema_tree), None, {"write_file": False})
    assert "Processing x.json [1/3]" not in caplog.text

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="schemadoc.core.pipeline.engine"):
        process_path(str(schema_tree), None, {"write_file": False, "verbose": True})
    assert "Processing x.json [1/3]" in caplog.text
    assert "Processing z.json [3/3]" in caplog.text

# -----------------------------------------------------------------------------
# SINGLE FILE RUNS
# -----------------------------------------------------------------------------

def test_process_file_default_output_in_cwd(
        tmp_path: Path, write_json: WriteJson, person_schema, monkeypatch: pytest.MonkeyPatch
) -> None:
    src = write_json(tmp_path / "in" / "person.json", person_schema)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    result = process_file(str(src))

    assert result.ok
    assert result.output_path == str((workdir / "person.html").resolve())
    page = (workdir / "person.html").read_text(encoding="utf-8")
    assert "<h2>Person</h2>" in page
    assert "<h2>Address</h2>" in page


def test_process_file_explicit_output_and_templates(
        tmp_path: Path, write_json: WriteJson, templates: Tuple[Path, Path]
) -> None:
    header, footer = templates
    src = write_json(tmp_path / "order.json", {"title": "Order", "type": "object"})
    target = tmp_path / "pages" / "order.html"

    result = process_file(str(src), str(target), {"header_file": str(header), "footer_file": str(footer)})

    assert result.ok
    page = target.read_text(encoding="utf-8")
    assert '<li class="is-active">order.html</li>' in page
    assert page.endswith("<footer>order.html</footer></html>")


def test_process_file_navigation_links_to_renamed_output(
        tmp_path: Path, write_json: WriteJson, templates: Tuple[Path, Path]
) -> None:
    header, _ = templates
    src = write_json(tmp_path / "s.json", {"title": "S", "type": "object"})
    target = tmp_path / "out" / "page.html"

    result = process_file(str(src), str(target), {"header_file": str(header)})

    assert result.ok
    page = target.read_text(encoding="utf-8")
    assert '<li class="is-active">page.html</li>' in page
    assert "s.html" not in page
    assert page.startswith("<html><title>page</title>")


def test_process_file_in_memory(tmp_path: Path, write_json: WriteJson, events: Events, recorder) -> None:
    src = write_json(tmp_path / "order.json", {"title": "Order"})

    result = process_file(str(src), None, False, recorder)

    assert result.ok
    assert result.output_path == ""
    assert "<h2>Order</h2>" in result.html
    assert events == [(None, result.html)]


def test_process_file_missing_reference_reaches_callback(
        tmp_path: Path, write_json: WriteJson, events: Events, recorder
) -> None:
    src = write_json(tmp_path / "doc.json", {
        "type": "object",
        "properties": {"x": {"$ref": "#/gone"}},
    })

    result = process_file(str(src), str(tmp_path / "doc.html"), None, recorder)

    assert not result.ok
    assert "#/gone" in result.error
    assert not (tmp_path / "doc.html").exists()
    assert len(events) == 1
    assert isinstance(events[0][0], ReferenceResolutionError)
    assert events[0][1] is None


def test_process_file_missing_input(tmp_path: Path, events: Events, recorder) -> None:
    result = process_file(str(tmp_path / "absent.json"), None, None, recorder)

    assert not result.ok
    assert "No file" in result.error
    assert isinstance(events[0][0], InputPathError)


def test_compose_page() -> None:
    page = compose_page(
        "<h1>{tag-page-label}</h1>{tag-item-state:a.b.html}",
        "BODY",
        "{tag-item-state:other.html}<i>{tag-page-name}</i>",
        "a.b.html",
    )
    assert page == "<h1>a b</h1>is-activeBODY<i>a.b</i>"
