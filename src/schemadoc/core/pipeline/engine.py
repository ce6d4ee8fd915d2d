from __future__ import annotations

"""
Conversion Driver.

Coordinates the conversion workflow for a single schema or a whole tree:
1. Validates options and input paths.
2. Discovers schema files and builds the Document Map.
3. Expands the doctree markup of the header, footer and index templates.
4. Walks each schema into a fresh Token Store.
5. Renders Markdown, converts it to HTML and wraps it in the templates.
6. Writes one page per schema (plus an optional index page).

Per-document failures never abort a directory run: they are logged,
reported through the callback and collected in the result.
"""

import logging
import os
from typing import Callable, Dict, List, Optional

from schemadoc.core.doctree.doc_map import build_doc_map, insert_path, make_label, output_name_for
from schemadoc.core.doctree.engine import apply_active_state, apply_doc_map, apply_page_properties
from schemadoc.core.pipeline.validator import validate_config
from schemadoc.core.render.html import markdown_to_html
from schemadoc.core.render.markdown_generator import MarkdownGenerator
from schemadoc.core.schema.walker import parse_schema_file
from schemadoc.core.services.scanner import discover_schema_files
from schemadoc.core.tokens.store import TokenStore
from schemadoc.domain.constants import DEFAULT_OUTPUT_SUBDIR, HTML_EXTENSION, INDEX_PAGE_NAME
from schemadoc.domain.doc_map_models import DocMap
from schemadoc.domain.errors import InputPathError, SchemaDocError, TemplateSyntaxError
from schemadoc.domain.pipeline_models import (
    BatchResult,
    DocumentFailure,
    DocumentResult,
    create_batch_error,
)
from schemadoc.infra.fs import normalize_path, read_template, safe_mkdir, write_text_file

logger = logging.getLogger(__name__)

DocumentCallback = Callable[[Optional[BaseException], Optional[str]], None]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def convert_schema(file_path: str) -> str:
    """
    Convert one schema file to an HTML fragment.

    Args:
        file_path: Path to the JSON Schema document.

    Returns:
        str: Body HTML (no header or footer).

    Raises:
        SchemaDocError: If the document or one of its references is invalid.
    """
    store = parse_schema_file(file_path, TokenStore())
    markdown_text = MarkdownGenerator(store).generate()
    return markdown_to_html(markdown_text)


def process_file(
        in_file: Optional[str],
        out_file: Optional[str] = None,
        options: Optional[Dict] = None,
        on_document: Optional[DocumentCallback] = None,
) -> DocumentResult:
    """
    Convert a single schema file.

    Args:
        in_file: Schema file path.
        out_file: Target page; defaults to '<name>.html' in the working directory.
        options: Options dictionary (see domain.config) or a bare write_file bool.
        on_document: Called with (error, None) or (None, html) once the
            document has been processed.

    Returns:
        DocumentResult: Outcome with the converted HTML body.
    """
    cfg, warnings = validate_config(options)
    _log_warnings(warnings)

    if not in_file or not os.path.isfile(in_file):
        err = InputPathError(f"No file: {in_file or '(none)'}")
        logger.error(f"{err}, exiting!")
        _notify(on_document, err, None)
        return DocumentResult(ok=False, error=str(err))

    output_file = out_file or _default_output_name(in_file)
    page_uri = os.path.basename(output_file)
    _progress(cfg, f"Processing {os.path.basename(in_file)} [1/1]")

    try:
        doc_map: DocMap = {}
        # The only leaf links to the page actually written.
        leaf = insert_path(doc_map, [], os.path.splitext(os.path.basename(in_file))[0])
        leaf.uri = page_uri
        header = apply_doc_map(doc_map, read_template(cfg["header_file"]))
        footer = apply_doc_map(doc_map, read_template(cfg["footer_file"]))
        html = convert_schema(in_file)
    except Exception as e:
        _report_failure(in_file, e)
        _notify(on_document, e, None)
        return DocumentResult(ok=False, error=str(e))

    written = ""
    if cfg["write_file"]:
        page = compose_page(header, html, footer, page_uri)
        try:
            written = write_text_file(output_file, page)
        except OSError as e:
            logger.error(f"Failed to write {output_file}: {e}")
            _notify(on_document, e, None)
            return DocumentResult(ok=False, error=str(e), html=html)
        logger.info(f"Page written: {written}")

    _notify(on_document, None, html)
    return DocumentResult(ok=True, html=html, output_path=written)


def process_path(
        in_path: Optional[str],
        out_path: Optional[str] = None,
        options: Optional[Dict] = None,
        on_document: Optional[DocumentCallback] = None,
) -> BatchResult:
    """
    Convert every schema file below a directory.

    Args:
        in_path: Input directory, scanned recursively for '.json' files.
        out_path: Output directory; defaults to '<in_path>/md'.
        options: Options dictionary (see domain.config) or a bare write_file bool.
        on_document: Called once per document with (error, html).

    Returns:
        BatchResult: Counters, per-document failures and written files.
    """
    logger.info("Batch conversion started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(options)
    _log_warnings(warnings)

    if not in_path or not os.path.isdir(in_path):
        msg = f"No path: {in_path or '(none)'}"
        logger.error(f"{msg}, exiting!")
        _notify(on_document, InputPathError(msg), None)
        return create_batch_error(msg, in_path or "")

    input_root = normalize_path(in_path, os.getcwd())
    output_root = normalize_path(out_path, os.path.join(input_root, DEFAULT_OUTPUT_SUBDIR))

    # -------------------------------------------------------------------------
    # 2) Discovery & Templates
    # -------------------------------------------------------------------------
    files = discover_schema_files(input_root, skip_dir=output_root)
    doc_map = build_doc_map(files, input_root)

    try:
        header = apply_doc_map(doc_map, read_template(cfg["header_file"]))
        footer = apply_doc_map(doc_map, read_template(cfg["footer_file"]))
        index = apply_doc_map(doc_map, read_template(cfg["index_file"])) if cfg["index_file"] else ""
    except (TemplateSyntaxError, OSError) as e:
        msg = f"Template error: {e}"
        logger.error(msg)
        return create_batch_error(msg, input_root, output_root)

    if cfg["write_file"]:
        ok, err = safe_mkdir(output_root)
        if not ok:
            msg = f"Failed to create output directory {output_root}: {err}"
            logger.critical(msg)
            return create_batch_error(msg, input_root, output_root)

    # -------------------------------------------------------------------------
    # 3) Index Page
    # -------------------------------------------------------------------------
    index_path: Optional[str] = None
    if index and cfg["write_file"]:
        page = compose_page(header, index, footer, INDEX_PAGE_NAME)
        try:
            index_path = write_text_file(os.path.join(output_root, INDEX_PAGE_NAME), page)
            logger.info(f"Index written: {index_path}")
        except OSError as e:
            logger.error(f"Failed to write index page: {e}")

    # -------------------------------------------------------------------------
    # 4) Documents
    # -------------------------------------------------------------------------
    failures: List[DocumentFailure] = []
    generated: Dict[str, str] = {}
    total = len(files)

    for position, file_path in enumerate(files, start=1):
        rel_path = os.path.relpath(file_path, input_root)
        _progress(cfg, f"Processing {os.path.basename(file_path)} [{position}/{total}]")

        try:
            html = convert_schema(file_path)
            if cfg["write_file"]:
                page_name = output_name_for(rel_path)
                page = compose_page(header, html, footer, page_name)
                generated[rel_path] = write_text_file(os.path.join(output_root, page_name), page)
        except Exception as e:
            _report_failure(rel_path, e)
            failures.append(DocumentFailure(rel_path=rel_path, error=str(e)))
            _notify(on_document, e, None)
            continue

        _notify(on_document, None, html)

    processed = total - len(failures)
    logger.info(f"Batch conversion finished: {processed}/{total} document(s) converted.")
    if failures:
        logger.warning(f"{len(failures)} document(s) failed; see errors above.")

    return BatchResult(
        ok=not failures,
        input_path=input_root,
        output_path=output_root,
        processed=processed,
        failures=failures,
        generated_files=generated,
        index_path=index_path,
    )


def compose_page(header: str, body: str, footer: str, page_uri: str) -> str:
    """
    Wrap a body in the header and footer for one page.

    The navigation entry of page_uri is marked active and the page
    placeholders are filled in.
    """
    name = page_uri[: -len(HTML_EXTENSION)] if page_uri.endswith(HTML_EXTENSION) else page_uri
    properties = {"uri": page_uri, "name": name, "label": make_label(name)}

    def _wrap(template: str) -> str:
        return apply_active_state(page_uri, apply_page_properties(template, properties))

    return _wrap(header) + body + _wrap(footer)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _default_output_name(in_file: str) -> str:
    base, _ = os.path.splitext(os.path.basename(in_file))
    return base + HTML_EXTENSION


def _progress(cfg: Dict, message: str) -> None:
    logger.log(logging.INFO if cfg.get("verbose") else logging.DEBUG, message)


def _report_failure(source: str, error: BaseException) -> None:
    if isinstance(error, SchemaDocError):
        logger.error(f"Failed to convert {source}: {error}")
    else:
        logger.error(f"Unexpected error converting {source}: {error}", exc_info=True)


def _notify(
        callback: Optional[DocumentCallback],
        error: Optional[BaseException],
        html: Optional[str],
) -> None:
    if callback is not None:
        callback(error, html)


def _log_warnings(warnings: List[str]) -> None:
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")
