"""
symbols.py — Which names are taken, and by what.

Four independent tables are filled while a translation unit is translated:

  - aggregates:      struct/union/enum spellings (or nicknames)
  - function_macros: function-like macros (plus `macros` for all macros)
  - linkables:       functions and global variables, with the output line
                     they were written to and their mangled name; C++
                     overloads share a spelling, so each name maps to a list
  - fields:          struct field spellings, with their output lines

plus `field_structs`, aggregate spellings referenced by some declaration but
possibly never declared themselves.  Nothing is ever removed; the collision
pass reads the tables once the whole file has been translated.

Sets are dicts with `None` values so iteration follows insertion order and
the output is deterministic.
"""

from dataclasses import dataclass
from typing import Dict, List

from .naming import DlangNaming
from .node import Node


@dataclass(frozen=True)
class Linkable:
    """A function or global variable declaration already written to output."""

    line_number: int
    mangling: str


class SymbolTable:
    """The per-translation-unit symbol registries."""

    def __init__(self, naming=None):
        self.naming = naming or DlangNaming()

        self.aggregates: Dict[str, None] = {}
        self.macros: Dict[str, None] = {}
        self.function_macros: Dict[str, None] = {}
        self.linkables: Dict[str, List[Linkable]] = {}
        self.fields: Dict[str, List[int]] = {}
        self.field_structs: Dict[str, None] = {}

    def remember_aggregate(self, spelling: str):
        self.aggregates[spelling] = None

    def remember_macro(self, node: Node):
        self.macros[node.spelling] = None
        if node.is_macro_function:
            self.function_macros[node.spelling] = None

    def macro_already_defined(self, node: Node) -> bool:
        return node.spelling in self.macros

    def remember_linkable(self, node: Node, line_number: int) -> str:
        """
        Record a function or global variable that will be written at
        `line_number`, and return the spelling the caller must emit.
        """
        spelling = self.naming.linkable_spelling(node, self)
        linkable = Linkable(line_number, node.mangling)
        self.linkables.setdefault(spelling, []).append(linkable)
        return spelling

    def remember_field(self, spelling: str, line_number: int):
        self.fields.setdefault(spelling, []).append(line_number)

    def remember_field_struct(self, spelling: str):
        """
        Remember an aggregate referenced from a field or a signature.  This is
        valid C even if the aggregate is never declared:

            struct Foo* fun(void);
        """
        self.field_structs[spelling] = None
