from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of the
configuration sources (defaults, optional config file, command line
flags), dispatch to the single-file or directory conversion, and result
rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Union

from schemadoc.core.pipeline.engine import process_file, process_path
from schemadoc.core.pipeline.validator import validate_config
from schemadoc.core.schema.walker import parse_schema_file
from schemadoc.core.services.scanner import discover_schema_files
from schemadoc.domain.config import load_config
from schemadoc.domain.errors import SchemaDocError
from schemadoc.domain.pipeline_models import BatchResult, DocumentResult
from schemadoc.infra.logging import LoggingConfig, configure_logging, get_logger, level_for_verbosity
from schemadoc.interface.cli import args as cli_args
from schemadoc.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing input,
        130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr)
    level = level_for_verbosity(args.verbose, args.debug)
    configure_logging(LoggingConfig(level=level, console=True, log_file=args.log_file), force=True)

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve configuration (defaults < config file < flags)
    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # Options coming from the config file may change the logging setup
    conf_level = level_for_verbosity(clean_conf["verbose"], args.debug)
    conf_log_file = clean_conf["log_file"] or None
    if conf_level != level or conf_log_file != args.log_file:
        configure_logging(LoggingConfig(level=conf_level, console=True, log_file=conf_log_file), force=True)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Pre-flight input verification
    input_path = clean_conf["input_path"]
    if not os.path.exists(input_path):
        msg = i18n.t("cli.errors.path_not_exist", path=input_path)
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    if args.dump_tokens:
        return _dump_tokens(input_path)

    # 5. Conversion phase
    output_path = clean_conf["output_path"] or None
    logger.info(f"Targeting input: {input_path}")
    try:
        result: Union[BatchResult, DocumentResult]
        if os.path.isdir(input_path):
            result = process_path(input_path, output_path, clean_conf)
        else:
            result = process_file(input_path, output_path, clean_conf)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.pipeline_fail", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(_result_payload(result), ensure_ascii=False, indent=2))
    elif isinstance(result, BatchResult):
        _print_batch_summary(result)
    else:
        _print_document_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge the non-None command line overrides into the base config.

    Args:
        base: Configuration loaded from defaults and the config file.
        overrides: Values derived from the command line.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------

def _dump_tokens(input_path: str) -> int:
    """Print the token store of one schema, or of every schema in a directory."""
    if os.path.isdir(input_path):
        files = discover_schema_files(input_path)
    else:
        files = [input_path]

    payload: Dict[str, Any] = {}
    failed = False
    for file_path in files:
        rel_path = os.path.relpath(file_path, input_path) if os.path.isdir(input_path) else file_path
        try:
            payload[rel_path] = parse_schema_file(file_path).as_dict()
        except SchemaDocError as e:
            logger.error(f"Failed to parse {rel_path}: {e}")
            payload[rel_path] = {"error": str(e)}
            failed = True

    if not os.path.isdir(input_path) and not failed:
        payload = payload[input_path]

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 1 if failed else 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_payload(result: Union[BatchResult, DocumentResult]) -> Dict[str, Any]:
    payload = asdict(result)
    if isinstance(result, BatchResult):
        payload["total"] = result.total
    else:
        # The body is already written to disk; keep the JSON report compact
        payload.pop("html", None)
    return payload


def _print_batch_summary(result: BatchResult) -> None:
    """
    Print a directory run report to stdout (errors to stderr).

    Args:
        result: The batch result to render.
    """
    if result.error:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if result.failures:
        print(i18n.t("cli.status.partial", count=len(result.failures)))
    else:
        print(i18n.t("cli.status.success"))

    print(i18n.t("cli.status.output_dir", path=result.output_path))
    print(i18n.t("cli.status.counts", processed=result.processed, total=result.total))

    if result.index_path:
        print(i18n.t("cli.status.index", path=result.index_path))

    if result.failures:
        print(i18n.t("cli.status.failures"), file=sys.stderr)
        for failure in result.failures:
            print(f"  - {failure.rel_path}: {failure.error}", file=sys.stderr)


def _print_document_summary(result: DocumentResult) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(i18n.t("cli.status.success"))
    if result.output_path:
        print(i18n.t("cli.status.output_file", path=result.output_path))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
