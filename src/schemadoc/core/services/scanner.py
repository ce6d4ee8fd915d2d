from __future__ import annotations

"""
Schema Discovery Service.

Recursively collects the JSON Schema documents below an input directory
in a deterministic order: the entries of each directory are sorted by
name, files and subdirectories together, and a subdirectory's documents
are listed at the position of the subdirectory itself.
"""

import logging
import os
from typing import Dict, Iterable, Iterator, List, Optional, Set

from schemadoc.domain.constants import SCHEMA_EXTENSION

logger = logging.getLogger(__name__)

# Directories never descended into
DEFAULT_EXCLUDED_DIRS = (".git", "node_modules", "__pycache__")


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_schema_files(
        input_path: str,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        skip_dir: Optional[str] = None,
) -> Iterator[Dict[str, str]]:
    """
    Traverse the filesystem and yield every `.json` file.

    Args:
        input_path: Root directory of the scan.
        excluded_dirs: Directory names pruned from the walk.
        skip_dir: Absolute directory to prune (typically the output folder).

    Yields:
        Dict[str, str]: Metadata for each file found:
                        - file_path: Absolute path.
                        - rel_path: Relative path from root.
                        - file_name: Base filename.
    """
    input_path_abs = os.path.abspath(input_path)
    skip_abs = os.path.abspath(skip_dir) if skip_dir else None

    for file_path in _walk_sorted(input_path_abs, set(excluded_dirs), skip_abs):
        yield {
            "file_path": file_path,
            "rel_path": os.path.relpath(file_path, input_path_abs),
            "file_name": os.path.basename(file_path),
        }


def discover_schema_files(input_path: str, skip_dir: Optional[str] = None) -> List[str]:
    """
    Return the absolute paths of all schema files below input_path.

    Args:
        input_path: Root directory of the scan.
        skip_dir: Absolute directory to leave out of the scan.

    Returns:
        List[str]: File paths in discovery order.
    """
    files = [entry["file_path"] for entry in yield_schema_files(input_path, skip_dir=skip_dir)]
    logger.debug(f"Discovered {len(files)} schema file(s) in {input_path}")
    return files


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk_sorted(directory: str, excluded: Set[str], skip_abs: Optional[str]) -> Iterator[str]:
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        logger.warning(f"Cannot list directory {directory}: {e}")
        return

    for name in names:
        path = os.path.join(directory, name)
        if os.path.isdir(path):
            if name in excluded or path == skip_abs:
                continue
            yield from _walk_sorted(path, excluded, skip_abs)
        elif os.path.splitext(name)[1] == SCHEMA_EXTENSION:
            yield path
