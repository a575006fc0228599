"""
parser.py — Parse included headers with libclang.

WHY LIBCLANG:
Headers are full of macros, typedefs and platform ifdefs.  Libclang gives us
the same AST that a real C compiler sees, so the translator never mis-parses
a declaration.

Each `#include` line of an input file is parsed on its own: libclang is handed
a virtual file containing only that directive, in the directory of the input
file, so quoted includes resolve exactly as they would for a C compiler.
"""

from pathlib import Path
from typing import Iterator, List, Optional

from clang.cindex import (
    Cursor,
    CursorKind,
    Diagnostic,
    Index,
    TranslationUnit,
)

from .errors import ParseError
from .node import Node
from .options import Options

INCLUDE_FILE_NAME = "__dbindgen_include__.h"

AGGREGATE_KINDS = frozenset(
    {
        CursorKind.STRUCT_DECL,
        CursorKind.UNION_DECL,
        CursorKind.CLASS_DECL,
        CursorKind.ENUM_DECL,
    }
)
LINKABLE_KINDS = frozenset({CursorKind.FUNCTION_DECL, CursorKind.VAR_DECL})


# ---------------------------------------------------------------------------
# Cursor -> Node
# ---------------------------------------------------------------------------


def _declared_spelling(cursor: Cursor) -> str:
    """
    The name a declaration introduces.

    Depending on the libclang version, anonymous records and enums are
    spelled "" or "struct (unnamed at foo.h:3:9)"; both become "".
    """
    spelling = cursor.spelling or ""
    if cursor.kind in AGGREGATE_KINDS:
        if "(anonymous" in spelling or "(unnamed" in spelling:
            return ""
    return spelling


def _is_macro_function(cursor: Cursor) -> bool:
    """
    A macro is function-like when its name is immediately followed by "(",
    with no whitespace in between.
    """
    if cursor.kind != CursorKind.MACRO_DEFINITION:
        return False
    tokens = list(cursor.get_tokens())
    if len(tokens) < 2 or tokens[1].spelling != "(":
        return False
    return tokens[0].extent.end.offset == tokens[1].extent.start.offset


def node_from_cursor(cursor: Cursor) -> Node:
    """Build the parser-independent view of a cursor."""
    clang_type = cursor.type
    mangling = cursor.mangled_name if cursor.kind in LINKABLE_KINDS else ""
    return Node(
        spelling=_declared_spelling(cursor),
        kind=cursor.kind.name,
        hash=cursor.hash,
        type_spelling=clang_type.spelling,
        type_kind=clang_type.kind.name,
        mangling=mangling or "",
        is_macro_function=_is_macro_function(cursor),
        cursor=cursor,
    )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def clang_args_for(directory: Path, options: Options, cpp: bool) -> List[str]:
    args = ["-x", "c++" if cpp else "c", f"-I{directory}"]
    for include in options.include_paths:
        args.append(f"-I{include}")
    args.extend(options.clang_args)
    return args


def parse_include(
    header: str,
    system: bool,
    directory: Path,
    options: Options,
    cpp: bool = False,
    index: Optional[Index] = None,
) -> TranslationUnit:
    """
    Parse one `#include` directive and return its translation unit.

    Parameters
    ----------
    header    : the name between the quotes or angle brackets
    system    : True for `#include <...>`
    directory : directory of the input file, searched for quoted includes
    options   : runtime options (include paths, extra clang args)
    cpp       : parse as C++ instead of C

    Raises ParseError if libclang reports any error.
    """
    directory = Path(directory).resolve()
    main_file = str(directory / INCLUDE_FILE_NAME)
    directive = f"#include <{header}>\n" if system else f'#include "{header}"\n'

    index = index or Index.create()
    tu = index.parse(
        main_file,
        args=clang_args_for(directory, options, cpp),
        unsaved_files=[(main_file, directive)],
        options=TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD
        | TranslationUnit.PARSE_SKIP_FUNCTION_BODIES,
    )

    errors = [
        str(diag.spelling)
        if diag.location.file is None
        else f"{diag.location.file.name}:{diag.location.line}: {diag.spelling}"
        for diag in tu.diagnostics
        if diag.severity >= Diagnostic.Error
    ]
    if errors:
        raise ParseError(header, errors)

    return tu


def translatable_cursors(tu: TranslationUnit) -> Iterator[Cursor]:
    """
    Top-level cursors that come from an actual header.  Compiler builtins
    (macros like __STDC__) have no file and are skipped.

    libclang lists macro definitions ahead of declarations.  Macros are
    yielded last instead, so that a cast in a macro body can name any type
    the headers declare.
    """
    macros = []
    for cursor in tu.cursor.get_children():
        location_file = cursor.location.file
        if location_file is None:
            continue
        if Path(location_file.name).name == INCLUDE_FILE_NAME:
            continue
        if cursor.kind == CursorKind.MACRO_DEFINITION:
            macros.append(cursor)
            continue
        yield cursor
    yield from macros
