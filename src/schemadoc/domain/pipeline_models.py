from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result objects exchanged between the conversion driver and
the interface layer (CLI).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# ERROR TRACKING MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentFailure:
    """
    Failure details for one schema document in a batch run.

    Attributes:
        rel_path: Document path relative to the input root.
        error: Descriptive exception message.
    """
    rel_path: str
    error: str

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DocumentResult:
    """
    Result of converting a single schema file.

    Attributes:
        ok: Whether the document converted successfully.
        error: Failure message when ok is False.
        html: Converted body HTML (without header/footer).
        output_path: Written file path, empty when nothing was written.
    """
    ok: bool
    error: str = ""
    html: str = ""
    output_path: str = ""


@dataclass(frozen=True)
class BatchResult:
    """
    Result of converting a directory of schema files.

    Attributes:
        ok: False if the run aborted or any document failed.
        error: Run-level failure message.
        input_path: Normalized input directory.
        output_path: Directory receiving the generated pages.
        processed: Number of documents converted successfully.
        failures: Per-document failures (the run continues past them).
        generated_files: Mapping of relative schema path to written page.
        index_path: Generated index page, if any.
    """
    ok: bool
    error: str = ""
    input_path: str = ""
    output_path: str = ""
    processed: int = 0
    failures: List[DocumentFailure] = field(default_factory=list)
    generated_files: Dict[str, str] = field(default_factory=dict)
    index_path: Optional[str] = None

    @property
    def total(self) -> int:
        return self.processed + len(self.failures)


def create_batch_error(error: str, input_path: str, output_path: str = "") -> BatchResult:
    """
    Create a failed batch result for a run that could not start.

    Args:
        error: Detailed error description.
        input_path: The target input directory.
        output_path: Calculated output directory.

    Returns:
        BatchResult: An immutable error result object.
    """
    return BatchResult(ok=False, error=error, input_path=input_path, output_path=output_path)
