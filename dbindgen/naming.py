"""
naming.py — Decide which D spelling a C name gets.

C allows a function, a struct and a macro to share one name, and C names can
be D keywords.  The naming policy turns a raw C spelling into one that is safe
to declare in D, and produces the `pragma(mangle)` directive that keeps a
renamed declaration linked to its original symbol.
"""

from .node import Node


D_KEYWORDS = frozenset(
    """
    abstract alias align asm assert auto body bool break byte case cast catch
    cdouble cent cfloat char class const continue creal dchar debug default
    delegate delete deprecated do double else enum export extern false final
    finally float for foreach foreach_reverse function goto idouble if ifloat
    immutable import in inout int interface invariant ireal is lazy long macro
    mixin module new nothrow null out override package pragma private protected
    public pure real ref return scope shared short static struct super switch
    synchronized template this throw true try typeid typeof ubyte ucent uint
    ulong union unittest ushort version void wchar while with
    __FILE__ __FILE_FULL_PATH__ __MODULE__ __LINE__ __FUNCTION__
    __PRETTY_FUNCTION__ __gshared __traits __vector __parameters
    """.split()
)


class DlangNaming:
    """Naming policy for D output."""

    def is_keyword(self, spelling: str) -> bool:
        return spelling in D_KEYWORDS

    def is_taken(self, spelling: str, symbols) -> bool:
        return (
            self.is_keyword(spelling)
            or spelling in symbols.aggregates
            or spelling in symbols.linkables
            or spelling in symbols.function_macros
        )

    def rename(self, spelling: str, symbols) -> str:
        """Append underscores until the name no longer clashes with anything."""
        candidate = spelling + "_"
        while self.is_taken(candidate, symbols):
            candidate += "_"
        return candidate

    def safe_identifier(self, spelling: str, symbols) -> str:
        return self.rename(spelling, symbols) if self.is_keyword(spelling) else spelling

    def linkable_spelling(self, node: Node, symbols) -> str:
        """
        Spelling for a function or global variable at the moment it is first
        declared.  Clashes with names that are already known are resolved
        here; clashes with names declared later are fixed at end of file.
        """
        spelling = node.spelling
        clashes = (
            self.is_keyword(spelling)
            or spelling in symbols.aggregates
            or spelling in symbols.function_macros
        )
        return self.rename(spelling, symbols) if clashes else spelling

    def linkage_directive(self, mangling: str) -> str:
        if not mangling:
            return ""
        return f'pragma(mangle, "{mangling}") '
