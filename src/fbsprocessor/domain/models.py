from __future__ import annotations

"""
Source Tree Domain Models.

Defines the structural view of one Go source file: its imports and an ordered
sequence of top-level declarations. Parsed nodes remember the byte span they
occupy in the original source; synthesized nodes carry their rendered text
instead. The writer relies on this split to re-emit untouched files
byte-for-byte.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

Span = Tuple[int, int]

# -----------------------------------------------------------------------------
# DECLARATION NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ImportDecl:
    """
    A single import spec.

    Attributes:
        path: Unquoted import path.
        alias: Explicit local name, '_' or '.', or None when absent.
        span: Byte range of the spec in the original source.
    """
    path: str
    alias: Optional[str] = None
    span: Optional[Span] = None


@dataclass(frozen=True)
class FieldDecl:
    """
    One struct field declaration.

    Attributes:
        names: Declared field names. Empty for an embedded field.
        type_name: Declared type name (the selector part for qualified types).
        qualifier: Package qualifier for `pkg.Type` references, else None.
        pointer: Whether the declared type was written as `*T`.
    """
    names: Tuple[str, ...]
    type_name: str
    qualifier: Optional[str] = None
    pointer: bool = False

    @property
    def is_embedded(self) -> bool:
        return not self.names


@dataclass
class TypeDecl:
    name: str
    is_struct: bool
    fields: List[FieldDecl] = field(default_factory=list)
    is_generic: bool = False
    span: Optional[Span] = None


@dataclass
class FuncDecl:
    """
    A function or method declaration.

    Attributes:
        name: Function name.
        receiver: Receiver base type name for methods, None for functions.
        span: Byte range when parsed from source.
        text: Rendered source for synthesized declarations.
        signature: Parameter and result types, in declaration order.
    """
    name: str
    receiver: Optional[str] = None
    span: Optional[Span] = None
    text: Optional[str] = None
    signature: List[FieldDecl] = field(default_factory=list)

    @property
    def synthesized(self) -> bool:
        return self.span is None


@dataclass
class OtherDecl:
    """Any other top-level declaration (var, const, ...)."""
    kind: str
    span: Optional[Span] = None


Declaration = Union[TypeDecl, FuncDecl, OtherDecl]

# -----------------------------------------------------------------------------
# SOURCE TREE
# -----------------------------------------------------------------------------

@dataclass
class SourceTree:
    """
    In-memory structural representation of one source file.

    Owned by the pass that parsed it. The original bytes are kept verbatim so
    that serialization of an unmodified tree is lossless.
    """
    path: str
    source: bytes
    package: str = ""
    imports: List[ImportDecl] = field(default_factory=list)
    declarations: List[Declaration] = field(default_factory=list)

    def append(self, decl: Declaration) -> None:
        """Add a declaration at the end of the declaration sequence."""
        self.declarations.append(decl)

    @property
    def type_declarations(self) -> List[TypeDecl]:
        return [d for d in self.declarations if isinstance(d, TypeDecl)]

    @property
    def functions(self) -> List[FuncDecl]:
        return [d for d in self.declarations if isinstance(d, FuncDecl)]

    @property
    def synthesized(self) -> List[FuncDecl]:
        return [d for d in self.functions if d.synthesized]

    @property
    def is_modified(self) -> bool:
        return bool(self.synthesized)
