"""
types.py — Map C types to D types.

Builtins are mapped by their clang *kind* rather than their spelling, so
"int", "signed int" and "signed" all resolve to the same entry.  Typedef
names are kept as names, and records and enums are referred to by their
spelling or by the nickname of the anonymous aggregate.

If a C type doesn't have a mapping, `translate_type` returns None and the
caller skips the declaration and logs it, rather than generating broken code.
"""

import re
from typing import Optional

from clang.cindex import TypeKind

from .parser import node_from_cursor


# ---------------------------------------------------------------------------
# The mapping table
# ---------------------------------------------------------------------------
# Keys are clang canonical TypeKind names.

TYPE_MAP: dict[str, str] = {
    # --- void / bool ---
    "VOID": "void",
    "BOOL": "bool",
    # --- characters ---
    "CHAR_S": "char",
    "CHAR_U": "char",
    "SCHAR": "byte",
    "UCHAR": "ubyte",
    "WCHAR": "wchar_t",
    "CHAR16": "wchar",
    "CHAR32": "dchar",
    # --- integers ---
    "SHORT": "short",
    "USHORT": "ushort",
    "INT": "int",
    "UINT": "uint",
    "LONG": "c_long",  # from core.stdc.config, imported by the preamble
    "ULONG": "c_ulong",
    "LONGLONG": "long",
    "ULONGLONG": "ulong",
    "INT128": "cent",
    "UINT128": "ucent",
    # --- floating point ---
    "FLOAT": "float",
    "DOUBLE": "double",
    "LONGDOUBLE": "real",
}

# The same table, keyed by C spelling, for text such as macro bodies where
# there is no clang type to look at.
C_SPELLINGS: dict[str, str] = {
    "void": "void",
    "_Bool": "bool",
    "char": "char",
    "signed char": "byte",
    "unsigned char": "ubyte",
    "short": "short",
    "unsigned short": "ushort",
    "int": "int",
    "unsigned": "uint",
    "unsigned int": "uint",
    "long": "c_long",
    "unsigned long": "c_ulong",
    "long long": "long",
    "unsigned long long": "ulong",
    "float": "float",
    "double": "double",
    "long double": "real",
}

_ELABORATION = re.compile(r"^(?:struct|union|enum|class)\s+")
_QUALIFIERS = re.compile(r"\b(?:const|volatile|restrict)\s+")
_FUNCTION_KINDS = (TypeKind.FUNCTIONPROTO, TypeKind.FUNCTIONNOPROTO)


# ---------------------------------------------------------------------------
# clang types
# ---------------------------------------------------------------------------


def _const(clang_type, translated: str) -> str:
    if clang_type.is_const_qualified() and not translated.startswith("const("):
        return f"const({translated})"
    return translated


def translate_type(clang_type, context) -> Optional[str]:
    """
    Translate a clang Type to D.

    Parameters
    ----------
    clang_type : a clang.cindex.Type
    context    : the translation Context (nicknames, namespaces, symbols)

    Returns
    -------
    The D spelling, or None if the type isn't supported.
    """
    if context.is_from_ignored_ns(clang_type.spelling):
        return None

    kind = clang_type.kind

    if kind == TypeKind.ELABORATED:
        inner = translate_type(clang_type.get_named_type(), context)
        return None if inner is None else _const(clang_type, inner)

    if kind == TypeKind.TYPEDEF:
        spelling = _QUALIFIERS.sub("", clang_type.spelling).strip()
        name = context.namespaces.strip(spelling).rpartition("::")[2]
        name = name or clang_type.get_declaration().spelling
        return _const(clang_type, context.naming.safe_identifier(name, context.symbols))

    if kind == TypeKind.POINTER:
        return _translate_pointer(clang_type, context)

    if kind == TypeKind.CONSTANTARRAY:
        element = translate_type(clang_type.element_type, context)
        if element is None:
            return None
        return f"{element}[{clang_type.element_count}]"

    if kind == TypeKind.INCOMPLETEARRAY:
        element = translate_type(clang_type.element_type, context)
        return None if element is None else f"{element}*"

    if kind in (TypeKind.RECORD, TypeKind.ENUM):
        node = node_from_cursor(clang_type.get_declaration())
        spelling = context.spelling_or_nickname(node)
        if kind == TypeKind.RECORD:
            context.remember_field_struct(spelling)
        return _const(clang_type, spelling)

    mapped = TYPE_MAP.get(clang_type.get_canonical().kind.name)
    if mapped is None:
        return None
    return _const(clang_type, mapped)


def _translate_pointer(clang_type, context) -> Optional[str]:
    pointee = clang_type.get_pointee()
    canonical = pointee.get_canonical()

    if canonical.kind in _FUNCTION_KINDS:
        signature = translate_function_type(canonical, context)
        return None if signature is None else _const(clang_type, signature)

    inner = translate_type(pointee, context)
    if inner is None:
        return None
    return _const(clang_type, f"{inner}*")


def translate_function_type(clang_type, context) -> Optional[str]:
    """`int (*)(double, ...)` -> `int function(double, ...)`"""
    result = translate_type(clang_type.get_result(), context)
    if result is None:
        return None

    params = []
    if clang_type.kind == TypeKind.FUNCTIONPROTO:
        for arg in clang_type.argument_types():
            translated = translate_type(arg, context)
            if translated is None:
                return None
            params.append(translated)
        if clang_type.is_function_variadic():
            params.append("...")

    return f"{result} function({', '.join(params)})"


# ---------------------------------------------------------------------------
# C spellings
# ---------------------------------------------------------------------------


def c_spelling_to_d(spelling: str) -> str:
    """
    Translate a C type spelling, as found inside a cast.

    e.g. "unsigned int" -> "uint", "const char *" -> "const(char)*"
    """
    text = " ".join(spelling.replace("*", " * ").split())
    stars = text.count("*")
    base = text.replace("*", "").strip()

    is_const = base.startswith("const ")
    if is_const:
        base = base[len("const ") :].strip()

    base = _ELABORATION.sub("", base)
    translated = C_SPELLINGS.get(base, base)
    if is_const:
        translated = f"const({translated})"
    return translated + "*" * stars


def translate_casts(text: str, context) -> str:
    """Rewrite every C cast to a known type into a D `cast(T)`."""
    pattern = context.cast_pattern()
    return pattern.sub(lambda m: f"cast({c_spelling_to_d(m.group(1))})", text)
