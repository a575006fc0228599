"""
namespaces.py — The C++ namespaces the translator is currently inside.
"""

from typing import Iterable, List

SEPARATOR = "::"


class NamespaceStack:
    """
    Nested namespace names, outermost first.

    Entry and exit must be balanced by the caller; `pop` always drops the
    innermost namespace.
    """

    def __init__(self, ignored: Iterable[str] = ()):
        self._namespaces: List[str] = []
        self.ignored = list(ignored)

    def push(self, name: str):
        self._namespaces.append(name)

    def pop(self, name: str = ""):
        self._namespaces.pop()

    def current(self) -> str:
        return SEPARATOR.join(self._namespaces)

    def qualify(self, name: str) -> str:
        return SEPARATOR.join(self._namespaces + [name])

    def strip(self, spelling: str) -> str:
        """Remove the current namespace qualification from `spelling`."""
        prefix = self.current()
        if prefix and spelling.startswith(prefix + SEPARATOR):
            return spelling[len(prefix) + len(SEPARATOR) :]
        return spelling

    def is_ignored(self, spelling: str) -> bool:
        """True if `spelling` names something inside an ignored namespace."""
        return any(ns + SEPARATOR in spelling for ns in self.ignored)

    def __len__(self) -> int:
        return len(self._namespaces)
