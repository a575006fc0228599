"""
translation.py — Turn one libclang cursor into D declarations.

`translate(cursor, context)` writes the D translation of a declaration into
the context's output buffer, registering every name it declares on the way.
Constructs without a rule (C++ methods, templates, static functions, ...)
are skipped and logged at DEBUG level.
"""

import logging

from clang.cindex import Cursor, CursorKind, StorageClass, TypeKind

from .context import Context
from .output import OutputLine
from .parser import AGGREGATE_KINDS, node_from_cursor
from .types import translate_casts, translate_type

logger = logging.getLogger(__name__)


AGGREGATE_KEYWORDS = {
    CursorKind.STRUCT_DECL: "struct",
    CursorKind.CLASS_DECL: "struct",
    CursorKind.UNION_DECL: "union",
}


def translate(cursor: Cursor, context: Context):
    """Translate a single top-level (or nested) declaration."""
    kind = cursor.kind

    if kind in AGGREGATE_KEYWORDS:
        translate_aggregate(cursor, context)
    elif kind == CursorKind.ENUM_DECL:
        translate_enum(cursor, context)
    elif kind == CursorKind.FUNCTION_DECL:
        translate_function(cursor, context)
    elif kind == CursorKind.VAR_DECL:
        translate_variable(cursor, context)
    elif kind == CursorKind.TYPEDEF_DECL:
        translate_typedef(cursor, context)
    elif kind == CursorKind.MACRO_DEFINITION:
        translate_macro(cursor, context)
    elif kind == CursorKind.NAMESPACE:
        translate_namespace(cursor, context)
    else:
        logger.debug("Skipping %s '%s'", kind.name, cursor.spelling)


# ---------------------------------------------------------------------------
# Functions and global variables
# ---------------------------------------------------------------------------


def _parameters(cursor: Cursor, context: Context):
    """The D parameter list of a function, or None if a type is unsupported."""
    params = []
    for i, arg in enumerate(cursor.get_arguments()):
        translated = translate_type(arg.type, context)
        if translated is None:
            return None
        name = context.naming.safe_identifier(arg.spelling or f"arg{i}", context.symbols)
        params.append(f"{translated} {name}")

    if cursor.type.kind == TypeKind.FUNCTIONPROTO and cursor.type.is_function_variadic():
        params.append("...")
    return params


def translate_function(cursor: Cursor, context: Context):
    if cursor.storage_class == StorageClass.STATIC:
        logger.debug("Skipping static function '%s'", cursor.spelling)
        return

    node = node_from_cursor(cursor)
    if context.has_seen(node):
        return
    context.remember_node(node)

    result = translate_type(cursor.result_type, context)
    params = _parameters(cursor, context)
    if result is None or params is None:
        logger.debug("Skipping function '%s' (unsupported types)", node.spelling)
        return

    spelling = context.remember_linkable(node)
    directive = (
        context.naming.linkage_directive(node.mangling)
        if spelling != node.spelling
        else ""
    )
    context.write(
        OutputLine.declaration(
            f"{context.indentation}{directive}{result} ",
            spelling,
            f"({', '.join(params)});",
        )
    )


def translate_variable(cursor: Cursor, context: Context):
    if cursor.storage_class == StorageClass.STATIC:
        logger.debug("Skipping static variable '%s'", cursor.spelling)
        return

    node = node_from_cursor(cursor)
    if context.has_seen(node):
        return
    context.remember_node(node)

    translated = translate_type(cursor.type, context)
    if translated is None:
        logger.debug("Skipping variable '%s' (unsupported type)", node.spelling)
        return

    spelling = context.remember_linkable(node)
    directive = (
        context.naming.linkage_directive(node.mangling)
        if spelling != node.spelling
        else ""
    )
    context.write(
        OutputLine.declaration(
            f"{context.indentation}{directive}extern __gshared {translated} ",
            spelling,
            ";",
        )
    )


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def _field_declaration_hashes(cursor: Cursor):
    """Hashes of the aggregates that the fields of `cursor` are declared with."""
    hashes = set()
    for child in cursor.get_children():
        if child.kind == CursorKind.FIELD_DECL:
            declaration = child.type.get_canonical().get_declaration()
            if declaration.kind in AGGREGATE_KINDS:
                hashes.add(declaration.hash)
    return hashes


def translate_aggregate(cursor: Cursor, context: Context):
    node = node_from_cursor(cursor)

    if not cursor.is_definition():
        # Only a forward declaration: if the definition never shows up the
        # collision pass declares it as an opaque struct.
        context.remember_field_struct(context.spelling_or_nickname(node))
        return

    if context.has_seen(node):
        return
    context.remember_node(node)

    spelling = context.remember_aggregate(node)
    context.write(f"{context.indentation}{AGGREGATE_KEYWORDS[cursor.kind]} {spelling}")
    context.write(f"{context.indentation}{{")
    with context.indented():
        _translate_members(cursor, context)
    context.write(f"{context.indentation}}}")


def _translate_members(cursor: Cursor, context: Context):
    referenced = _field_declaration_hashes(cursor)

    for child in cursor.get_children():
        if child.kind in AGGREGATE_KINDS:
            translate(child, context)
            child_node = node_from_cursor(child)
            if (
                child_node.is_anonymous
                and child.is_definition()
                and child.hash not in referenced
            ):
                # C11 anonymous member: give it a name of its own
                member = context.anonymous_member_name(child_node)
                nickname = context.spelling_or_nickname(child_node)
                context.remember_field(member)
                context.write(
                    OutputLine.declaration(
                        f"{context.indentation}{nickname} ", member, ";"
                    )
                )
        elif child.kind == CursorKind.FIELD_DECL:
            translate_field(child, context)
        else:
            logger.debug(
                "Skipping %s '%s' in '%s'",
                child.kind.name,
                child.spelling,
                cursor.spelling,
            )


def translate_field(cursor: Cursor, context: Context):
    translated = translate_type(cursor.type, context)
    if translated is None:
        logger.warning(
            "Skipping field '%s' of '%s' (unsupported type %s)",
            cursor.spelling,
            cursor.semantic_parent.spelling,
            cursor.type.spelling,
        )
        return

    spelling = context.naming.safe_identifier(cursor.spelling, context.symbols)
    context.remember_field(spelling)
    context.write(
        OutputLine.declaration(f"{context.indentation}{translated} ", spelling, ";")
    )


def translate_enum(cursor: Cursor, context: Context):
    node = node_from_cursor(cursor)

    if not cursor.is_definition():
        return
    if context.has_seen(node):
        return
    context.remember_node(node)

    spelling = context.remember_aggregate(node)
    members = [
        (context.naming.safe_identifier(c.spelling, context.symbols), c.enum_value)
        for c in cursor.get_children()
        if c.kind == CursorKind.ENUM_CONSTANT_DECL
    ]

    context.write(f"{context.indentation}enum {spelling}")
    context.write(f"{context.indentation}{{")
    with context.indented():
        for name, value in members:
            context.write(f"{context.indentation}{name} = {value},")
    context.write(f"{context.indentation}}}")

    # C enum members live in the enclosing scope
    for name, _ in members:
        context.write(f"{context.indentation}enum {name} = {spelling}.{name};")


# ---------------------------------------------------------------------------
# Typedefs
# ---------------------------------------------------------------------------


def translate_typedef(cursor: Cursor, context: Context):
    node = node_from_cursor(cursor)
    if context.has_seen(node):
        return
    context.remember_node(node)

    name = context.naming.safe_identifier(node.spelling, context.symbols)
    translated = translate_type(cursor.underlying_typedef_type, context)
    context.remember_type(name)

    if translated is None:
        logger.debug("Skipping typedef '%s' (unsupported type)", name)
        return
    if translated == name:
        # typedef struct Foo Foo;
        return

    context.write(f"{context.indentation}alias {name} = {translated};")


# ---------------------------------------------------------------------------
# Macros
# ---------------------------------------------------------------------------


def macro_definition(cursor: Cursor, context: Context) -> str:
    """
    The text of a `#define` directive for the macro under `cursor`, with C
    casts in its body rewritten to D casts.
    """
    tokens = [t.spelling for t in cursor.get_tokens()]
    name, rest = tokens[0], tokens[1:]

    params = ""
    if node_from_cursor(cursor).is_macro_function:
        close = rest.index(")")
        params = "".join(rest[: close + 1]).replace(",", ", ")
        rest = rest[close + 1 :]

    body = translate_casts(" ".join(rest), context)
    return f"#define {name}{params} {body}".rstrip()


def translate_macro(cursor: Cursor, context: Context):
    node = node_from_cursor(cursor)
    if context.macro_already_defined(node):
        return
    context.remember_macro(node)
    context.write(macro_definition(cursor, context))


# ---------------------------------------------------------------------------
# C++ namespaces
# ---------------------------------------------------------------------------


def translate_namespace(cursor: Cursor, context: Context):
    name = cursor.spelling
    if context.is_from_ignored_ns(context.namespaces.qualify(name) + "::"):
        logger.debug("Skipping ignored namespace '%s'", name)
        return

    context.write(f'{context.indentation}extern(C++, "{name}")')
    context.write(f"{context.indentation}{{")
    context.push_namespace(name)
    with context.indented():
        for child in cursor.get_children():
            translate(child, context)
    context.pop_namespace(name)
    context.write(f"{context.indentation}}}")
