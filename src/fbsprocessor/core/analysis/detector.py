from __future__ import annotations

"""
Record File Detection.

Decides whether a parsed file is a generated FlatBuffers record file. Two
conjoined signals are required: the runtime support module is imported, and
some field is typed with the runtime's `Table` marker. Struct fields are
checked first (table types embed `_tab flatbuffers.Table`); method parameters
and results come second, which catches struct types whose `Table()` accessor
is the only reference to the marker. A file that imports the runtime without
such a field is skipped, never treated as an error.
"""

import logging
from typing import Optional

from fbsprocessor.domain.constants import (
    RUNTIME_DEFAULT_ALIAS,
    RUNTIME_MODULE_PATH,
    SENTINEL_TYPE_NAME,
)
from fbsprocessor.domain.models import FieldDecl, SourceTree, TypeDecl

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_record_file(
        tree: SourceTree,
        runtime_module: str = RUNTIME_MODULE_PATH,
        sentinel: str = SENTINEL_TYPE_NAME,
) -> bool:
    """
    Check both detection signals on a parsed file.

    Args:
        tree: Parsed source file.
        runtime_module: Exact import path of the runtime support module.
        sentinel: Name of the marker type exported by the runtime.

    Returns:
        bool: True only if the runtime is imported and a sentinel-typed
              field or method signature exists.
    """
    alias = runtime_alias(tree, runtime_module)
    if alias is None:
        return False
    return find_record_type(tree, alias, sentinel) is not None


def runtime_alias(tree: SourceTree, runtime_module: str = RUNTIME_MODULE_PATH) -> Optional[str]:
    """
    Resolve the local name under which the runtime module is imported.

    Returns:
        Optional[str]: The alias, the default package name when the import
                       has none, '' for blank or dot imports (which cannot
                       qualify a type), or None when not imported at all.
    """
    for imp in tree.imports:
        if imp.path != runtime_module:
            continue
        if imp.alias is None:
            return RUNTIME_DEFAULT_ALIAS
        if imp.alias in ("_", "."):
            return ""
        return imp.alias
    return None


def find_record_type(tree: SourceTree, alias: str, sentinel: str = SENTINEL_TYPE_NAME) -> Optional[TypeDecl]:
    """
    Locate the struct type a record file contributes.

    Args:
        tree: Parsed source file.
        alias: Local name of the runtime import.
        sentinel: Marker type name.

    Returns:
        Optional[TypeDecl]: The first struct holding a `<alias>.<sentinel>`
                            field, else the receiver of the first method
                            taking or returning one. None if neither exists.
    """
    if not alias:
        return None

    structs = [d for d in tree.type_declarations if d.is_struct]
    for decl in structs:
        if any(_is_sentinel(fld, alias, sentinel) for fld in decl.fields):
            return decl

    by_name = {d.name: d for d in structs}
    for func in tree.functions:
        if func.receiver not in by_name:
            continue
        if any(_is_sentinel(fld, alias, sentinel) for fld in func.signature):
            return by_name[func.receiver]
    return None


def record_type_name(
        tree: SourceTree,
        runtime_module: str = RUNTIME_MODULE_PATH,
        sentinel: str = SENTINEL_TYPE_NAME,
) -> Optional[str]:
    """Name of the record type a file contributes to the registry."""
    alias = runtime_alias(tree, runtime_module)
    if alias is None:
        return None
    decl = find_record_type(tree, alias, sentinel)
    return decl.name if decl else None


def _is_sentinel(fld: FieldDecl, alias: str, sentinel: str) -> bool:
    return fld.qualifier == alias and fld.type_name == sentinel and not fld.pointer
