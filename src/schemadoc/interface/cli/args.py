from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface and translates the parsed namespace
into configuration overrides understood by the conversion driver.
"""

import argparse
from typing import Any, Dict

from schemadoc.domain.constants import APP_VERSION
from schemadoc.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the schemadoc CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="schemadoc",
        description=i18n.t("app.description"),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        help=i18n.t("cli.args.input"),
        default=None,
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        help=i18n.t("cli.args.output"),
        default=None,
    )

    # --- Templates ---
    p.add_argument("--header", dest="header_file", default=None, help=i18n.t("cli.args.header"))
    p.add_argument("--footer", dest="footer_file", default=None, help=i18n.t("cli.args.footer"))
    p.add_argument("--index", dest="index_file", default=None, help=i18n.t("cli.args.index"))

    # --- Runtime ---
    p.add_argument(
        "--no-write",
        action="store_true",
        help=i18n.t("cli.args.no_write"),
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help=i18n.t("cli.args.verbose"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug", default="Elevate logging verbosity to DEBUG."),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help=i18n.t("cli.args.config"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--dump-tokens",
        action="store_true",
        help=i18n.t("cli.args.dump_tokens", default="Print the token store of the input as JSON and exit."),
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Unset options map to None so that they never mask values coming from
    a configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "header_file": args.header_file,
        "footer_file": args.footer_file,
        "index_file": args.index_file,
        "log_file": args.log_file,
    }

    if args.no_write:
        overrides["write_file"] = False
    if args.verbose:
        overrides["verbose"] = True

    return overrides
