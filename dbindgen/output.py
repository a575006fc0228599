"""
output.py — The line-indexed output buffer.

The translator writes D code one line at a time.  Some collisions are only
discovered after the colliding declaration has already been written, so the
buffer has to support going back and patching a line in place.  Indices are
therefore stable: lines are only ever appended after, or replaced at, an index
that was handed out before.

Lines are stored as `OutputLine` records.  A declaration line remembers which
part of its text is the declarator, so renaming it later is a field update
rather than a textual search.  Lines without that structure fall back to a
conservative substring rewrite.
"""

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Union


@dataclass(frozen=True)
class OutputLine:
    """
    One line of output.

    Fields
    ------
    head       : text before the declarator (or the whole line)
    declarator : the declared name, if this line declares one
    tail       : text after the declarator
    """

    head: str
    declarator: Optional[str] = None
    tail: str = ""

    @classmethod
    def declaration(cls, head: str, declarator: str, tail: str) -> "OutputLine":
        return cls(head=head, declarator=declarator, tail=tail)

    @property
    def text(self) -> str:
        if self.declarator is None:
            return self.head + self.tail
        return self.head + self.declarator + self.tail

    def renamed(
        self, old: str, new: str, terminators: Sequence[str] = (";", "(")
    ) -> "OutputLine":
        """
        Return a copy with the declarator `old` renamed to `new`.

        If the declarator is known the rename is exact.  Otherwise every
        occurrence of the identifier `old` that is immediately followed by one
        of `terminators` is rewritten, and the result is a plain line.
        """
        if self.declarator == old:
            return replace(self, declarator=new)

        alternatives = "|".join(re.escape(t) for t in terminators)
        pattern = re.compile(rf"(?<![\w$]){re.escape(old)}(?=(?:{alternatives}))")
        return OutputLine(head=pattern.sub(new, self.text))

    def with_directive(self, directive: str) -> "OutputLine":
        """Insert `directive` right after the leading indentation."""
        stripped = self.head.lstrip()
        indent = self.head[: len(self.head) - len(stripped)]
        return replace(self, head=indent + directive + stripped)

    def __str__(self) -> str:
        return self.text


LineLike = Union[str, OutputLine]


def _as_line(line: LineLike) -> OutputLine:
    if isinstance(line, OutputLine):
        return line
    return OutputLine(head=line)


class OutputBuffer:
    """
    Append-only list of output lines that can be patched in place.

    `len(buffer)` is the index the next appended line will get; registries
    read it *before* the matching line is appended.
    """

    def __init__(self):
        self._lines: List[OutputLine] = []

    def append(self, line: LineLike) -> int:
        """Append one line and return its index."""
        self._lines.append(_as_line(line))
        return len(self._lines) - 1

    def extend(self, lines: Iterable[LineLike]):
        for line in lines:
            self.append(line)

    def patch(self, index: int, line: LineLike):
        """Replace the line at `index`.  The buffer length never changes."""
        if not 0 <= index < len(self._lines):
            raise IndexError(f"No output line {index} (have {len(self._lines)})")
        self._lines[index] = _as_line(line)

    def render(self) -> str:
        return "\n".join(line.text for line in self._lines)

    def __getitem__(self, index: int) -> OutputLine:
        return self._lines[index]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)
