from __future__ import annotations

"""
Processing Result Models.

Defines the result object returned by the engine to the interface layer and
the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProcessResult:
    """
    Unified result of one directory run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_dir: Normalized directory that was processed.
        language: Language selector used for the run.
        dry_run: Whether writes were suppressed.
        patched_files: Files that received at least one accessor.
        unchanged_files: Record files that were already patched.
        skipped_files: Files that are not record files.
        record_types: Sorted record type names collected for the registry.
        registry_path: Path of the emitted registry file (empty on failure).
        summary: Execution counters.
    """
    ok: bool
    error: str

    input_dir: str
    language: str
    dry_run: bool = False

    patched_files: List[str] = field(default_factory=list)
    unchanged_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    record_types: List[str] = field(default_factory=list)
    registry_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        input_dir: str,
        language: str,
        dry_run: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ProcessResult:
    """Create a failed result. Files rewritten before the failure are not rolled back."""
    return ProcessResult(
        ok=False,
        error=error,
        input_dir=input_dir,
        language=language,
        dry_run=dry_run,
        summary=summary_extra or {},
    )


def create_success_result(
        input_dir: str,
        language: str,
        patched_files: List[str],
        unchanged_files: List[str],
        skipped_files: List[str],
        record_types: List[str],
        registry_path: str,
        dry_run: bool = False,
) -> ProcessResult:
    """Create a successful result with derived summary counters."""
    summary = {
        "files_seen": len(patched_files) + len(unchanged_files) + len(skipped_files),
        "patched": len(patched_files),
        "unchanged": len(unchanged_files),
        "skipped": len(skipped_files),
        "record_types": len(record_types),
    }
    return ProcessResult(
        ok=True,
        error="",
        input_dir=input_dir,
        language=language,
        dry_run=dry_run,
        patched_files=patched_files,
        unchanged_files=unchanged_files,
        skipped_files=skipped_files,
        record_types=record_types,
        registry_path=registry_path,
        summary=summary,
    )
