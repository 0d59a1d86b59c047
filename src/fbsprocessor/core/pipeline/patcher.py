from __future__ import annotations

"""
Identity Accessor Patcher.

Appends a `Name() string` method to every struct type of a record file so
that generated types can identify themselves at runtime. The idempotence
guard is file-level by default: any existing function named like the
accessor marks the whole file as already patched. Per-type mode skips only
the types that already own such a method.
"""

import logging
from typing import List, Set

from fbsprocessor.domain.constants import ACCESSOR_NAME
from fbsprocessor.domain.errors import PatchError
from fbsprocessor.domain.models import FuncDecl, SourceTree

logger = logging.getLogger(__name__)

_ACCESSOR_TEMPLATE = (
    "func (*{type_name}) {accessor}() string {{\n"
    "\treturn \"{type_name}\"\n"
    "}}"
)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def has_accessor(tree: SourceTree, accessor_name: str = ACCESSOR_NAME) -> bool:
    """Check whether any function or method in the file has the accessor name."""
    return any(func.name == accessor_name for func in tree.functions)


def render_accessor(type_name: str, accessor_name: str = ACCESSOR_NAME) -> str:
    """Render the Go source of one identity accessor."""
    return _ACCESSOR_TEMPLATE.format(type_name=type_name, accessor=accessor_name)


def patch_tree(
        tree: SourceTree,
        accessor_name: str = ACCESSOR_NAME,
        per_type: bool = False,
) -> List[FuncDecl]:
    """
    Append one identity accessor per struct type.

    Args:
        tree: Parsed record file. Mutated in place.
        accessor_name: Reserved method name.
        per_type: Evaluate the idempotence guard per type instead of per file.

    Returns:
        List[FuncDecl]: The synthesized declarations, empty if nothing changed.

    Raises:
        PatchError: If a struct type cannot receive a method.
    """
    if not per_type and has_accessor(tree, accessor_name):
        logger.debug(f"{tree.path}: '{accessor_name}' already present, skipping patch")
        return []

    owners: Set[str] = set()
    if per_type:
        owners = {f.receiver for f in tree.functions if f.name == accessor_name and f.receiver}

    added: List[FuncDecl] = []
    for decl in tree.type_declarations:
        if not decl.is_struct or decl.name in owners:
            continue
        if decl.is_generic:
            raise PatchError(
                f"Cannot add '{accessor_name}' to generic struct '{decl.name}'",
                tree.path,
            )
        added.append(FuncDecl(
            name=accessor_name,
            receiver=decl.name,
            text=render_accessor(decl.name, accessor_name),
        ))

    for func in added:
        tree.append(func)

    if added:
        logger.debug(f"{tree.path}: added {accessor_name}() to {', '.join(f.receiver for f in added)}")
    return added
