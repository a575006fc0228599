"""
printer.py — Pretty-print the symbol registries for debugging

Useful for:
  - Understanding why a declaration was renamed
  - Seeing which structs were declared opaque at end of file
  - Implementing the --print-symbols flag

Output format:
  Aggregates:
    foo
  Linkables:
    foo_ (line 12, mangled "foo")
"""

from typing import List

from .context import Context


class SymbolPrinter:
    """Pretty-prints the registries of a translation context."""

    def __init__(self, ctx: Context):
        self.ctx = ctx

    def print_all(self) -> str:
        """Print every registry to a string."""
        symbols = self.ctx.symbols
        lines: List[str] = []

        lines.append("=" * 70)
        lines.append(f"Symbols ({self.ctx.language.value})")
        lines.append("=" * 70)
        lines.append("")

        self._section(lines, "Aggregates", list(symbols.aggregates))
        self._section(lines, "Function-like macros", list(symbols.function_macros))
        self._section(
            lines,
            "Linkables",
            [
                f'{name} (line {linkable.line_number}, mangled "{linkable.mangling}")'
                for name, linkables in symbols.linkables.items()
                for linkable in linkables
            ],
        )
        self._section(
            lines,
            "Fields",
            [
                f"{name} (lines {', '.join(map(str, numbers))})"
                for name, numbers in symbols.fields.items()
            ],
        )
        self._section(
            lines,
            "Referenced aggregates",
            list(symbols.field_structs),
        )
        self._section(
            lines,
            "Nicknames",
            [f"{nickname} (hash {h})" for h, nickname in self.ctx.nicknames.items()],
        )

        lines.append(f"Known types: {len(self.ctx.types)}")
        lines.append(f"Seen declarations: {len(self.ctx.seen)}")
        lines.append("")

        return "\n".join(lines)

    def _section(self, lines: List[str], title: str, entries: List[str]):
        lines.append(f"{title}:")
        lines.append("-" * 70)
        if entries:
            for entry in entries:
                lines.append(f"  {entry}")
        else:
            lines.append("  (none)")
        lines.append("")


def print_symbols(ctx: Context) -> str:
    """Convenience function to print a context's registries."""
    printer = SymbolPrinter(ctx)
    return printer.print_all()
