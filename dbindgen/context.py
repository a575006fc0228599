"""
context.py — Everything the translation of one file needs to remember.

A `Context` is created per input file and passed explicitly through the whole
pipeline, so there is no global state and independent files can be translated
side by side.  It owns:

  - the output buffer the D code is written to
  - the identity, nickname and type registries
  - the symbol tables the collision pass works on
  - the C++ namespace stack
"""

from contextlib import contextmanager
from enum import Enum
from typing import Optional, Pattern

from .collisions import CollisionResolver
from .naming import DlangNaming
from .namespaces import NamespaceStack
from .node import Node
from .options import Options
from .output import LineLike, OutputBuffer
from .registry import IdentityRegistry, NicknameRegistry, TypeRegistry
from .symbols import SymbolTable


class Language(Enum):
    C = "C"
    CPP = "C++"


class Context:
    """Translation state for one input file and the headers it includes."""

    def __init__(
        self,
        options: Optional[Options] = None,
        language: Language = Language.C,
        naming=None,
    ):
        self.options = options or Options()
        self.language = language
        self.naming = naming or DlangNaming()

        self.buffer = OutputBuffer()
        self.seen = IdentityRegistry()
        self.nicknames = NicknameRegistry()
        self.types = TypeRegistry()
        self.symbols = SymbolTable(self.naming)
        self.namespaces = NamespaceStack(self.options.ignored_namespaces)

        self._depth = 0
        self._resolver: Optional[CollisionResolver] = None

    # -- indentation ------------------------------------------------------

    @property
    def indentation(self) -> str:
        return self.options.indentation * self._depth

    @contextmanager
    def indented(self):
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    # -- output -----------------------------------------------------------

    def write(self, line: LineLike) -> int:
        return self.buffer.append(line)

    def translation(self) -> str:
        return self.buffer.render()

    # -- identity ---------------------------------------------------------

    def has_seen(self, node: Node) -> bool:
        return self.seen.has_seen(node)

    def remember_node(self, node: Node):
        self.seen.remember(node)

    def spelling_or_nickname(self, node: Node) -> str:
        """The node's spelling, its nickname if anonymous, renamed if a keyword."""
        if node.is_anonymous:
            return self.nicknames.nickname_for(node)
        return self.naming.safe_identifier(node.spelling, self.symbols)

    def anonymous_member_name(self, node: Node) -> str:
        return self.nicknames.member_name_for(node)

    # -- types ------------------------------------------------------------

    def remember_type(self, spelling: str):
        self.types.remember(spelling)

    def cast_pattern(self) -> Pattern[str]:
        return self.types.cast_pattern()

    # -- symbols ----------------------------------------------------------

    def remember_aggregate(self, node: Node) -> str:
        spelling = self.spelling_or_nickname(node)
        self.symbols.remember_aggregate(spelling)
        self.remember_type(spelling)
        return spelling

    def remember_linkable(self, node: Node) -> str:
        """
        Remember a function or global variable.  Linkables translate to a
        single line, so the next line written is the declaration itself.
        """
        return self.symbols.remember_linkable(node, len(self.buffer))

    def remember_field(self, spelling: str):
        """Remember a field about to be written on the next line."""
        self.symbols.remember_field(spelling, len(self.buffer))

    def remember_field_struct(self, spelling: str):
        self.symbols.remember_field_struct(spelling)

    def remember_macro(self, node: Node):
        self.symbols.remember_macro(node)

    def macro_already_defined(self, node: Node) -> bool:
        return self.symbols.macro_already_defined(node)

    def fix_names(self):
        """Run the collision pass.  May only be called once."""
        if self._resolver is None:
            self._resolver = CollisionResolver(self.buffer, self.symbols)
        self._resolver.run()

    # -- namespaces -------------------------------------------------------

    def push_namespace(self, name: str):
        self.namespaces.push(name)

    def pop_namespace(self, name: str = ""):
        self.namespaces.pop(name)

    @property
    def namespace(self) -> str:
        return self.namespaces.current()

    def is_from_ignored_ns(self, spelling: str) -> bool:
        return self.namespaces.is_ignored(spelling)
