from __future__ import annotations

"""
Document Map Data Models.

Provides the recursive node type used to mirror the discovered input
directory structure for navigation rendering and output naming.
"""

from dataclasses import dataclass
from typing import Dict, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class DocNode:
    """
    One directory (branch) or schema file (leaf) in the Document Map.

    Attributes:
        name: Directory name, or file base name without extension.
        label: Display label (underscores and dots replaced by spaces).
        path: Relative directory path of the entry.
        uri: Output URI; the HTML file name for leaves.
        is_leaf: True for files.
        childs: Ordered child nodes; None for leaves.
    """
    name: str
    label: str
    path: str
    uri: str
    is_leaf: bool
    childs: Optional[Dict[str, "DocNode"]] = None

    def properties(self) -> Dict[str, str]:
        """Return the substitutable attributes (everything except childs)."""
        return {
            "name": self.name,
            "label": self.label,
            "path": self.path,
            "uri": self.uri,
            "is-leaf": "true" if self.is_leaf else "false",
        }


DocMap = Dict[str, DocNode]
