from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, directory creation and the whole-file read
and write helpers used by the conversion driver.
"""

import logging
import os
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM I/O API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def read_template(path: Optional[str]) -> str:
    """
    Read an optional template file.

    A missing path or file yields an empty template and a warning.

    Args:
        path: Template file path, possibly empty.

    Returns:
        str: File contents or ''.
    """
    if not path:
        return ""
    if not os.path.isfile(path):
        logger.warning(f"Template not found, ignoring: {path}")
        return ""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text_file(path: str, content: str) -> str:
    """
    Overwrite a file with content, creating its parent directory.

    Args:
        path: Destination file.
        content: Full file contents.

    Returns:
        str: Absolute path written.
    """
    abs_path = os.path.abspath(path)
    parent = os.path.dirname(abs_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(abs_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug(f"Wrote {len(content)} chars to {abs_path}")
    return abs_path
