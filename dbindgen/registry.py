"""
registry.py — Per-translation-unit registries keyed by structural identity.

  - IdentityRegistry: which declarations have already been translated
  - NicknameRegistry: stable synthetic names for anonymous aggregates
  - TypeRegistry:     every type spelling seen so far, and a regex that
                      recognises C-style casts to one of them
"""

import re
from typing import Dict, List, Optional, Pattern, Set

from .node import Node, NodeId


class IdentityRegistry:
    """
    Remembers translated declarations so that a header included twice (or
    reached through two include paths) is only translated once.
    """

    def __init__(self):
        self._seen: Set[NodeId] = set()

    def has_seen(self, node: Node) -> bool:
        return node.id in self._seen

    def remember(self, node: Node):
        # An anonymous enum still defines its members, which must not be
        # emitted again on the next visit.
        if node.spelling != "" or node.kind == "ENUM_DECL":
            self._seen.add(node.id)

    def __len__(self) -> int:
        return len(self._seen)


class NicknameRegistry:
    """
    Names anonymous aggregates `_Anonymous_0`, `_Anonymous_1`, ... in the
    order they are first asked about.

    Nicknames are keyed by the node's structural hash, so asking again about
    the same node always gives the same answer.
    """

    PREFIX = "_Anonymous_"
    MEMBER_PREFIX = "_anonymous_"

    def __init__(self):
        self._nicknames: Dict[int, str] = {}
        self._next_index = 0

    def nickname_for(self, node: Node) -> str:
        if node.hash not in self._nicknames:
            self._nicknames[node.hash] = f"{self.PREFIX}{self._next_index}"
            self._next_index += 1
        return self._nicknames[node.hash]

    def member_name_for(self, node: Node) -> str:
        """
        Name for the member that embeds an anonymous aggregate, e.g.
        `_anonymous_3` for the struct nicknamed `_Anonymous_3`.
        """
        return self.nickname_for(node).replace(self.PREFIX, self.MEMBER_PREFIX, 1)

    def items(self):
        return self._nicknames.items()

    def __len__(self) -> int:
        return len(self._nicknames)


# Regex fragments, not plain spellings: the generic pointer allows an
# optional space before the star.
PRIMITIVE_TYPES = (
    r"void ?\*",
    "char",
    "unsigned char",
    "signed char",
    "short",
    "unsigned short",
    "int",
    "unsigned",
    "unsigned int",
    "long",
    "unsigned long",
    "long long",
    "unsigned long long",
    "float",
    "double",
    "long double",
)


class TypeRegistry:
    """
    Collects type spellings and builds the C-cast matcher from them.

    The matcher is rebuilt lazily: registering a type invalidates the cached
    pattern and the next `cast_pattern()` call compiles a new one.
    """

    def __init__(self):
        self._types: List[str] = list(PRIMITIVE_TYPES)
        self._pattern: Optional[Pattern[str]] = None

    def remember(self, spelling: str):
        self._types.append(re.escape(spelling))
        self._pattern = None

    def cast_pattern(self) -> Pattern[str]:
        """
        Regex for `( T )`, `( const T )`, `( T * )` and `( const T * )` where
        `T` is any known type.  Group 1 is the text between the parentheses.
        """
        if self._pattern is None:
            unique = list(dict.fromkeys(self._types))
            const_optional = [f"(?:const )?{t}" for t in unique]
            pointers = [f"{t} ?\\*" for t in const_optional]
            alternation = "|".join(const_optional + pointers)
            self._pattern = re.compile(rf"\(( *?(?:{alternation}) *?)\)")
        return self._pattern

    def __contains__(self, spelling: str) -> bool:
        return re.escape(spelling) in self._types or spelling in self._types

    def __len__(self) -> int:
        return len(set(self._types))
