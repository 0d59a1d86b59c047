from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from fbsprocessor.processors import available_languages

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the fbsprocessor CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="fbsprocessor",
        description=(
            "Post-process FlatBuffers generated sources: add a Name() accessor "
            "to every record type and emit a name-keyed registry file."
        ),
    )

    # --- Input and language ---
    p.add_argument(
        "-d", "--dir",
        dest="input_dir",
        required=True,
        help="Directory containing the generated source files.",
    )
    p.add_argument(
        "-l", "--lang",
        dest="language",
        default=None,
        help=f"Target language of the generated files ({', '.join(available_languages())}).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated file name regexes to skip.",
    )

    # --- Patching ---
    p.add_argument(
        "--per-type",
        action="store_true",
        help="Check for an existing accessor per type instead of per file.",
    )

    # --- Registry ---
    p.add_argument(
        "--package",
        dest="package_name",
        default=None,
        help="Package clause of the registry file (default: inferred).",
    )
    p.add_argument(
        "--registry-name",
        dest="registry_file_name",
        default=None,
        help="File name of the emitted registry.",
    )
    p.add_argument(
        "--template",
        dest="registry_template",
        default=None,
        help="Custom registry template using $package and $entries.",
    )

    # --- Runtime ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_dir"] = args.input_dir
    overrides["language"] = args.language
    overrides["package_name"] = args.package_name
    overrides["registry_file_name"] = args.registry_file_name
    overrides["registry_template"] = args.registry_template

    if args.exclude_patterns is not None:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.per_type:
        overrides["per_type_idempotence"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
