"""
collisions.py — End-of-file repair of names that are legal in C but not in D.

Runs once per translation unit, after every declaration has been written:

  1. declare unknown structs: aggregates referenced but never declared get a
     `struct Name;` stub, and join the aggregate table
  2. fix linkables: a function/variable sharing its name with an aggregate or
     a function-like macro is renamed in place and pinned to its original
     symbol with `pragma(mangle)`
  3. fix fields: a field named like an aggregate is renamed in place

Phase 2 reads the aggregate table that phase 1 extends, so the order is
fixed.  Nothing here raises; every repair is logged.
"""

import logging
from enum import Enum, auto
from typing import Dict, List

from .output import OutputBuffer
from .symbols import Linkable, SymbolTable

logger = logging.getLogger(__name__)


LINKABLE_TERMINATORS = (";", "(", "[")
FIELD_TERMINATORS = (";", "[")


class Phase(Enum):
    IDLE = auto()
    DECLARING_UNKNOWNS = auto()
    FIXING_LINKABLES = auto()
    FIXING_FIELDS = auto()
    DONE = auto()


class CollisionResolver:
    """Three-phase fixup over the output buffer of one translation unit."""

    def __init__(self, buffer: OutputBuffer, symbols: SymbolTable):
        self.buffer = buffer
        self.symbols = symbols
        self.naming = symbols.naming
        self.phase = Phase.IDLE

    def run(self):
        if self.phase is not Phase.IDLE:
            raise RuntimeError(f"Collision resolution already ran ({self.phase.name})")

        self.phase = Phase.DECLARING_UNKNOWNS
        self.declare_unknown_structs()

        self.phase = Phase.FIXING_LINKABLES
        self.fix_linkables()

        self.phase = Phase.FIXING_FIELDS
        self.fix_fields()

        self.phase = Phase.DONE

    def declare_unknown_structs(self):
        for name in list(self.symbols.field_structs):
            if name not in self.symbols.aggregates:
                logger.info(
                    "Could not find '%s' in aggregate declarations, defining it", name
                )
                self.buffer.append(f"struct {name};")
                self.symbols.remember_aggregate(name)

    def fix_linkables(self):
        clashes: Dict[str, List[Linkable]] = {}
        for declarations in (self.symbols.aggregates, self.symbols.function_macros):
            for name in declarations:
                linkables = self.symbols.linkables.get(name)
                if linkables:
                    clashes.setdefault(name, linkables)

        for name, linkables in clashes.items():
            new_name = self.naming.rename(name, self.symbols)
            # Every overload gets the same new name
            for linkable in linkables:
                logger.info(
                    "Renaming '%s' to '%s' on line %d (mangled as '%s')",
                    name,
                    new_name,
                    linkable.line_number,
                    linkable.mangling,
                )
                line = self.buffer[linkable.line_number]
                fixed = line.renamed(
                    name, new_name, LINKABLE_TERMINATORS
                ).with_directive(self.naming.linkage_directive(linkable.mangling))
                self.buffer.patch(linkable.line_number, fixed)

    def fix_fields(self):
        for spelling, line_numbers in self.symbols.fields.items():
            if spelling not in self.symbols.aggregates:
                continue
            new_name = self.naming.rename(spelling, self.symbols)
            for line_number in line_numbers:
                logger.info(
                    "Renaming field '%s' to '%s' on line %d",
                    spelling,
                    new_name,
                    line_number,
                )
                line = self.buffer[line_number]
                self.buffer.patch(
                    line_number, line.renamed(spelling, new_name, FIELD_TERMINATORS)
                )
