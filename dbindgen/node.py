"""
node.py — The parser-independent view of a declaration.

Every registry in the translation context works on `Node` values rather than
on libclang cursors.  That keeps the identity rules (what counts as "the same
declaration") in one place, and lets the engine be driven without a C parser
at all.
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple


class NodeId(NamedTuple):
    """
    Structural identity of a declaration.

    Two nodes with equal ids are the same declaration seen twice, e.g. through
    two different include paths.  Nothing here depends on object identity or
    traversal order.
    """

    spelling: str
    kind: str
    type_spelling: str
    type_kind: str


@dataclass(frozen=True)
class Node:
    """A declaration as the translator sees it."""

    spelling: str  # "" for anonymous structs/unions/enums
    kind: str  # clang CursorKind name, e.g. "STRUCT_DECL"
    hash: int = 0  # structural hash, used to nickname anonymous nodes
    type_spelling: str = ""  # e.g. "struct foo"
    type_kind: str = ""  # clang TypeKind name, e.g. "RECORD"
    mangling: str = ""  # linker symbol for functions and globals
    is_macro_function: bool = False
    cursor: Any = field(default=None, compare=False, repr=False)

    @property
    def id(self) -> NodeId:
        return NodeId(self.spelling, self.kind, self.type_spelling, self.type_kind)

    @property
    def is_anonymous(self) -> bool:
        return self.spelling == ""
