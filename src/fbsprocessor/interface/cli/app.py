from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading and
merging (defaults, JSON file, CLI overrides), the post-processing run and
result rendering. Exit codes: 0 on success, 1 on a processing failure, 2 on
invalid input or configuration.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fbsprocessor.core.pipeline.engine import run_pipeline
from fbsprocessor.core.pipeline.validator import validate_config
from fbsprocessor.domain.config import load_config
from fbsprocessor.domain.errors import ConfigError
from fbsprocessor.domain.results import ProcessResult
from fbsprocessor.infra.logging import LoggingConfig, configure_logging, get_logger
from fbsprocessor.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    try:
        base_conf = load_config(args.config_path) if args.config_path else load_config()
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    if result.summary.get("phase") in ("config", "input"):
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None override values into the base configuration.

    Only keys already present in the base are merged.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# OUTPUT RENDERING
# -----------------------------------------------------------------------------

def _print_human_summary(result: ProcessResult) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    mode = " (dry run)" if result.dry_run else ""
    print(f"Processed {result.input_dir}{mode}")
    print(f"  Patched:   {len(result.patched_files)}")
    print(f"  Unchanged: {len(result.unchanged_files)}")
    print(f"  Skipped:   {len(result.skipped_files)}")
    print(f"  Registry:  {result.registry_path} ({len(result.record_types)} types)")
