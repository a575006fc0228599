"""
expansion.py — Expand `#include` directives of an input file into D.

Lines of a .dpp file are D code, except for C `#include` directives.  Those
are replaced inline by the translation of everything the header declares,
wrapped in an `extern(C)` (or `extern(C++)`) block.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from .context import Context, Language
from .parser import parse_include, translatable_cursors
from .translation import translate

logger = logging.getLogger(__name__)

INCLUDE_RE = re.compile(r'^\s*#\s*include\s+(?:<(?P<system>[^>]+)>|"(?P<local>[^"]+)")')


def include_target(line: str) -> Optional[tuple]:
    """
    (header, is_system) if `line` is an include directive, None otherwise.

    e.g. '#include <stdio.h>' -> ("stdio.h", True)
    """
    match = INCLUDE_RE.match(line)
    if match is None:
        return None
    if match.group("system") is not None:
        return match.group("system"), True
    return match.group("local"), False


def maybe_expand(line: str, context: Context, directory: Path):
    """Write `line` through, or the translation of the header it includes."""
    target = include_target(line)
    if target is None:
        context.write(line)
        return

    header, system = target
    expand(header, system, context, directory)


def expand(header: str, system: bool, context: Context, directory: Path):
    cpp = context.options.is_cpp_header(header)
    context.language = Language.CPP if cpp else Language.C

    logger.debug("Expanding %s as %s", header, context.language.value)
    tu = parse_include(header, system, directory, context.options, cpp=cpp)

    context.write(f"{context.indentation}extern({context.language.value})")
    context.write(f"{context.indentation}{{")
    with context.indented():
        for cursor in translatable_cursors(tu):
            translate(cursor, context)
    context.write(f"{context.indentation}}}")
