from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates one post-processing run:
1. Validates configuration and the input directory.
2. Resolves the language processor.
3. Walks the directory, feeding each file through parse, detect, patch, write.
4. Emits the registry for the collected record types.

The run stops at the first fatal error. Files rewritten before the failure
stay rewritten; re-running converges because patching is idempotent.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional

from fbsprocessor.core.pipeline.scanner import compile_patterns, yield_source_files
from fbsprocessor.core.pipeline.validator import validate_config
from fbsprocessor.domain.errors import NotARecordFile, ProcessorError
from fbsprocessor.domain.records import RecordTypeSet
from fbsprocessor.domain.results import (
    ProcessResult,
    create_error_result,
    create_success_result,
)
from fbsprocessor.infra.fs import normalize_path
from fbsprocessor.processors import get_processor
from fbsprocessor.processors.base import LanguageProcessor

logger = logging.getLogger(__name__)


def build_processor(cfg: Dict[str, Any]) -> LanguageProcessor:
    """Instantiate the processor selected by a validated configuration."""
    return get_processor(
        cfg["language"],
        runtime_module=cfg["runtime_module"],
        sentinel_type=cfg["sentinel_type"],
        accessor_name=cfg["accessor_name"],
        per_type=cfg["per_type_idempotence"],
        package_name=cfg["package_name"],
        registry_file_name=cfg["registry_file_name"],
        registry_template=cfg["registry_template"],
    )


def process_directory(
        processor: LanguageProcessor,
        input_dir: str,
        exclude_patterns: List[str],
        language: str = "",
        dry_run: bool = False,
) -> ProcessResult:
    """
    Run one processor over a directory.

    Args:
        processor: Language processor to drive.
        input_dir: Directory of generated sources.
        exclude_patterns: File name regexes to skip.
        language: Selector reported in the result.
        dry_run: Suppress all writes.

    Returns:
        ProcessResult: Success result with per-file classification.

    Raises:
        ProcessorError: On the first fatal error.
    """
    types = RecordTypeSet()
    patched: List[str] = []
    unchanged: List[str] = []
    skipped: List[str] = []

    # The registry is regenerated from scratch on every run
    exclude_rx = compile_patterns(exclude_patterns)
    exclude_rx.extend(compile_patterns([f"^{re.escape(processor.registry_file_name)}$"]))

    processor.pre_process(input_dir)

    for file_path in yield_source_files(input_dir, processor.extension, exclude_rx):
        try:
            outcome = processor.process_file(file_path, types, dry_run=dry_run)
        except NotARecordFile:
            logger.debug(f"Skipping {file_path}: not a record file")
            skipped.append(file_path)
            continue

        if outcome.patched:
            prefix = "[dry-run] " if dry_run else ""
            logger.info(f"{prefix}Patched {file_path} ({', '.join(outcome.added)})")
            patched.append(file_path)
        else:
            unchanged.append(file_path)

    registry_path = processor.post_process(input_dir, types, dry_run=dry_run) or ""

    return create_success_result(
        input_dir=input_dir,
        language=language or processor.extension.lstrip("."),
        patched_files=patched,
        unchanged_files=unchanged,
        skipped_files=skipped,
        record_types=types.sorted_names(),
        registry_path=registry_path,
        dry_run=dry_run,
    )


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> ProcessResult:
    """
    Execute a full post-processing run.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, simulate execution without writing to disk.

    Returns:
        ProcessResult: Status, processed files and emitted registry path.
    """
    logger.info("Post-processing started.")

    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    input_dir = normalize_path(cfg["input_dir"], os.getcwd())
    language = cfg["language"]

    if not os.path.isdir(input_dir):
        msg = f"Invalid input directory: {input_dir}"
        logger.error(msg)
        return create_error_result(msg, input_dir, language, dry_run, summary_extra={"phase": "input"})

    try:
        processor = build_processor(cfg)
        result = process_directory(
            processor, input_dir, cfg["exclude_patterns"], language=language, dry_run=dry_run
        )
    except ProcessorError as e:
        logger.error(f"Post-processing aborted: {e}")
        return create_error_result(
            str(e),
            input_dir,
            language,
            dry_run,
            summary_extra={"phase": e.phase, "path": e.path or ""},
        )

    logger.info(
        f"Post-processing finished: {result.summary['patched']} patched, "
        f"{result.summary['unchanged']} unchanged, {result.summary['skipped']} skipped."
    )
    return result
