from __future__ import annotations

"""
Go Source Parser.

Builds a `SourceTree` from Go source using the tree-sitter Go grammar. The
concrete syntax tree is only used for inspection: declarations are recorded
together with their byte spans and the original bytes are kept untouched,
so an unmodified tree serializes back to exactly the same file.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import tree_sitter_go as ts_go
from tree_sitter import Language, Node, Parser

from fbsprocessor.domain.errors import ParseError, ReadError
from fbsprocessor.domain.models import (
    Declaration,
    FieldDecl,
    FuncDecl,
    ImportDecl,
    OtherDecl,
    SourceTree,
    TypeDecl,
)

logger = logging.getLogger(__name__)

_GO_LANGUAGE = Language(ts_go.language())


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_go_file(file_path: str) -> SourceTree:
    """
    Read and parse a Go source file.

    Args:
        file_path: Path to the `.go` file.

    Returns:
        SourceTree: Structural view of the file.

    Raises:
        ReadError: If the file cannot be read or is not valid UTF-8.
        ParseError: If the file contains syntax errors.
    """
    try:
        with open(file_path, "rb") as f:
            source = f.read()
        source.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Could not read source: {e}", file_path) from e

    return parse_go_source(source, file_path)


def parse_go_source(source: bytes, path: str = "<memory>") -> SourceTree:
    """
    Parse Go source bytes into a `SourceTree`.

    Args:
        source: Raw file content.
        path: Path reported in errors and stored on the tree.

    Returns:
        SourceTree: Imports and top-level declarations in source order.

    Raises:
        ParseError: On the first ERROR or MISSING node in the syntax tree.
    """
    parser = Parser(_GO_LANGUAGE)
    root = parser.parse(source).root_node

    if root.has_error:
        bad = _first_error(root)
        line, column = (bad.start_point[0] + 1, bad.start_point[1] + 1) if bad else (None, None)
        detail = f"missing {bad.type}" if bad is not None and bad.is_missing else "syntax error"
        raise ParseError(detail, path, line, column)

    tree = SourceTree(path=path, source=source)

    for node in root.named_children:
        if node.type == "package_clause":
            tree.package = _package_name(node, source)
        elif node.type == "import_declaration":
            tree.imports.extend(_import_specs(node, source))
        elif node.type == "comment":
            continue
        else:
            tree.declarations.extend(_declarations(node, source))

    logger.debug(
        f"Parsed {path}: {len(tree.imports)} imports, {len(tree.declarations)} declarations"
    )
    return tree


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: NODE CONVERSION
# -----------------------------------------------------------------------------

def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8")


def _span(node: Node) -> Tuple[int, int]:
    return node.start_byte, node.end_byte


def _first_error(root: Node) -> Optional[Node]:
    """Depth-first search for the earliest ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _package_name(node: Node, source: bytes) -> str:
    for child in node.named_children:
        if child.type == "package_identifier":
            return _text(child, source)
    return ""


def _import_specs(node: Node, source: bytes) -> Iterator[ImportDecl]:
    for child in node.named_children:
        if child.type == "import_spec":
            yield _import_spec(child, source)
        elif child.type == "import_spec_list":
            for spec in child.named_children:
                if spec.type == "import_spec":
                    yield _import_spec(spec, source)


def _import_spec(node: Node, source: bytes) -> ImportDecl:
    path_node = node.child_by_field_name("path")
    name_node = node.child_by_field_name("name")
    path = _text(path_node, source).strip('"`') if path_node else ""
    alias = _text(name_node, source) if name_node else None
    return ImportDecl(path=path, alias=alias, span=_span(node))


def _declarations(node: Node, source: bytes) -> List[Declaration]:
    if node.type == "type_declaration":
        return [
            _type_spec(spec, source)
            for spec in node.named_children
            if spec.type in ("type_spec", "type_alias")
        ]
    if node.type == "function_declaration":
        name = node.child_by_field_name("name")
        return [FuncDecl(
            name=_text(name, source),
            span=_span(node),
            signature=_signature(node, source),
        )]
    if node.type == "method_declaration":
        name = node.child_by_field_name("name")
        receiver = node.child_by_field_name("receiver")
        return [FuncDecl(
            name=_text(name, source),
            receiver=_receiver_type(receiver, source),
            span=_span(node),
            signature=_signature(node, source),
        )]
    return [OtherDecl(kind=node.type, span=_span(node))]


def _type_spec(node: Node, source: bytes) -> TypeDecl:
    name = _text(node.child_by_field_name("name"), source)
    type_node = node.child_by_field_name("type")

    # `type A = B` aliases never define a new struct
    is_struct = node.type == "type_spec" and type_node is not None and type_node.type == "struct_type"
    fields = _struct_fields(type_node, source) if is_struct else []

    return TypeDecl(
        name=name,
        is_struct=is_struct,
        fields=fields,
        is_generic=node.child_by_field_name("type_parameters") is not None,
        span=_span(node),
    )


def _struct_fields(struct_node: Node, source: bytes) -> List[FieldDecl]:
    fields: List[FieldDecl] = []
    for body in struct_node.named_children:
        if body.type != "field_declaration_list":
            continue
        for decl in body.named_children:
            if decl.type != "field_declaration":
                continue
            names = tuple(_text(n, source) for n in decl.children_by_field_name("name"))
            type_node = decl.child_by_field_name("type")
            if type_node is None:
                continue
            # Embedded `*T` keeps the star as a sibling token
            pointer = any(c.type == "*" for c in decl.children)
            fields.append(_field_type(names, type_node, source, pointer))
    return fields


def _field_type(names: Tuple[str, ...], type_node: Node, source: bytes, pointer: bool) -> FieldDecl:
    if type_node.type == "pointer_type":
        pointer = True
        inner = type_node.named_children[-1] if type_node.named_children else type_node
        type_node = inner

    if type_node.type == "qualified_type":
        package = type_node.child_by_field_name("package")
        name = type_node.child_by_field_name("name")
        return FieldDecl(
            names=names,
            type_name=_text(name, source),
            qualifier=_text(package, source),
            pointer=pointer,
        )

    return FieldDecl(names=names, type_name=_text(type_node, source), pointer=pointer)


def _receiver_type(receiver: Optional[Node], source: bytes) -> Optional[str]:
    """Resolve `(r *T)`, `(T)` or `(r *T[K])` to the base type name `T`."""
    if receiver is None:
        return None
    for param in receiver.named_children:
        if param.type != "parameter_declaration":
            continue
        type_node = param.child_by_field_name("type")
        while type_node is not None and type_node.type in ("pointer_type", "generic_type", "parenthesized_type"):
            if type_node.type == "generic_type":
                type_node = type_node.child_by_field_name("type")
            else:
                type_node = type_node.named_children[-1] if type_node.named_children else None
        if type_node is not None:
            return _text(type_node, source)
    return None


def _signature(node: Node, source: bytes) -> List[FieldDecl]:
    """Collect parameter and result types of a function or method."""
    types: List[FieldDecl] = []
    for part in (node.child_by_field_name("parameters"), node.child_by_field_name("result")):
        if part is None:
            continue
        # A single unnamed result is a bare type, not a parameter list
        if part.type != "parameter_list":
            types.append(_field_type((), part, source, False))
            continue
        for param in part.named_children:
            if param.type != "parameter_declaration":
                continue
            type_node = param.child_by_field_name("type")
            if type_node is None:
                continue
            names = tuple(_text(n, source) for n in param.children_by_field_name("name"))
            types.append(_field_type(names, type_node, source, False))
    return types
