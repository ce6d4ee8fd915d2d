from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the literal values shared by the synthesizer, the doctree
engine and the pipeline: example literals per string format, the doctree
tag vocabulary and output naming defaults.
"""

from typing import Dict, Tuple

APP_VERSION = "0.3.0"

SCHEMA_EXTENSION = ".json"
HTML_EXTENSION = ".html"
DEFAULT_OUTPUT_SUBDIR = "md"
INDEX_PAGE_NAME = "index.html"

# -----------------------------------------------------------------------------
# EXAMPLE SYNTHESIS
# -----------------------------------------------------------------------------

DEFAULT_STRING_EXAMPLE = '"example"'
DEFAULT_NUMBER_EXAMPLE = "42.0"
DEFAULT_INTEGER_EXAMPLE = "42"
DEFAULT_BOOLEAN_EXAMPLE = "true"
DEFAULT_OBJECT_EXAMPLE = "{...}"

STRING_FORMAT_EXAMPLES: Dict[str, str] = {
    "date-time": '"1970-01-01T12:00:00Z"',
    "date": '"1970-01-01"',
    "email": '"firstname.lastname@example.com"',
    "hostname": '"www.example.com"',
    "ipv4": '"127.0.0.1"',
    "ipv6": '"2001:db8:a0b:12f0::1"',
    "uri": '"http://www.example.com/example"',
}

# Type branches are emitted in this order regardless of declaration order
EXAMPLE_TYPE_ORDER: Tuple[str, ...] = (
    "string", "number", "integer", "boolean", "object", "array",
)

LINE_BREAK = "<br/>"

# -----------------------------------------------------------------------------
# DOCTREE VOCABULARY
# -----------------------------------------------------------------------------

TAG_ROOT = "doctree-root"
TAG_BRANCH_ROOT = "doctree-branch-root"
TAG_BRANCH_ROOT_CHILDS = "doctree-branch-root-childs"
TAG_BRANCH = "doctree-branch"
TAG_BRANCH_CHILDS = "doctree-branch-childs"
TAG_BRANCH_LEAF = "doctree-branch-leaf"

STRUCTURAL_TAGS: Tuple[str, ...] = (
    TAG_ROOT,
    TAG_BRANCH_ROOT,
    TAG_BRANCH_ROOT_CHILDS,
    TAG_BRANCH,
    TAG_BRANCH_CHILDS,
    TAG_BRANCH_LEAF,
)

PLACEHOLDER_BRANCH = "{{tag-branch-{prop}}}"
PLACEHOLDER_LEAF = "{{tag-leaf-{prop}}}"
PLACEHOLDER_PAGE = "{{tag-page-{prop}}}"
PLACEHOLDER_LEVEL = "{tag-item-level}"
PLACEHOLDER_INDENT = "{tag-item-indent}"
PLACEHOLDER_STATE_PREFIX = "{tag-item-state:"

INDENT_CLASS = "is-indent"
ACTIVE_CLASS = "is-active"
