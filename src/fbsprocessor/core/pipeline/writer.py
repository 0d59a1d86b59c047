from __future__ import annotations

"""
Source Writer.

Serializes a source tree back to disk. Parsed declarations are re-emitted as
the original bytes; synthesized declarations are appended after them,
separated by a blank line, so only the appended text differs from the input.
"""

import logging
from typing import Optional

from fbsprocessor.domain.errors import WriteError
from fbsprocessor.domain.models import SourceTree

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def render_source(tree: SourceTree) -> bytes:
    """
    Produce the file content for a tree.

    Appended declarations use the line ending of the original file.

    Args:
        tree: Parsed tree, possibly with synthesized declarations.

    Returns:
        bytes: Original bytes followed by any appended declarations.
    """
    out = bytearray(tree.source)
    eol = detect_line_ending(tree.source)

    for decl in tree.synthesized:
        if out and not out.endswith(b"\n"):
            out += eol
        out += eol
        out += (decl.text or "").encode("utf-8").replace(b"\n", eol)
        out += eol

    return bytes(out)


def detect_line_ending(source: bytes) -> bytes:
    """Return the line ending of the first line, LF when there is none."""
    first = source.find(b"\n")
    if first > 0 and source[first - 1:first] == b"\r":
        return b"\r\n"
    return b"\n"

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_source(tree: SourceTree, path: Optional[str] = None) -> str:
    """
    Overwrite a file with the serialized tree.

    Args:
        tree: Tree to serialize.
        path: Destination. Defaults to the path the tree was parsed from.

    Returns:
        str: The written path.

    Raises:
        WriteError: If the file cannot be written.
    """
    target = path or tree.path
    content = render_source(tree)

    try:
        with open(target, "wb") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Failed to write source: {e}", target) from e

    logger.debug(f"Wrote {len(content)} bytes to {target}")
    return target
