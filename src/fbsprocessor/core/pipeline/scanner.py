from __future__ import annotations

"""
Source File Discovery.

Lists the generated output directory and yields the source files eligible
for post-processing, in a deterministic sorted order. Sub-directories are
not visited: every Go directory is a package of its own and gets its own
registry.
"""

import logging
import os
import re
from typing import Iterator, List

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """Compile exclusion regexes, dropping (and logging) invalid ones."""
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid exclude pattern '{p}': {e}")
    return compiled


def yield_source_files(
        input_dir: str,
        extension: str,
        exclude_rx: List[re.Pattern],
) -> Iterator[str]:
    """
    List the directory and yield source files in sorted order.

    Args:
        input_dir: Directory produced by the schema compiler.
        extension: Source extension to keep (e.g. '.go').
        exclude_rx: Compiled patterns matched against file names.

    Yields:
        str: Absolute path of each eligible file.
    """
    input_dir_abs = os.path.abspath(input_dir)

    for file_name in sorted(os.listdir(input_dir_abs)):
        file_path = os.path.join(input_dir_abs, file_name)
        if not file_name.endswith(extension) or not os.path.isfile(file_path):
            continue
        if any(rx.search(file_name) for rx in exclude_rx):
            logger.debug(f"Excluded by pattern: {file_name}")
            continue
        yield file_path
