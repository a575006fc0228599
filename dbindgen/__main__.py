"""
__main__.py — CLI entry point for dbindgen.

Usage:
    python -m dbindgen foo.dpp [bar.dpp ...] [-I include/] [compiler args ...]

This is the single command that does everything:
  1. Translates every .dpp file, expanding C #include directives into D
  2. Repairs name collisions that are legal in C but not in D
  3. Runs the C preprocessor so C macros expand inside the D code
  4. Writes the .d files
  5. Compiles them with the D compiler (unless --preprocess-only)

Arguments that are not .dpp files are passed through to the D compiler.
"""

import argparse
import logging
import shlex
import sys
from pathlib import Path
from typing import Sequence

from .app import run
from .errors import DbindgenError
from .options import DPP_SUFFIX, Options
from .printer import print_symbols


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbindgen",
        description="Translate C headers included from D files, then compile.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help=".dpp files to translate; anything else goes to the D compiler",
    )
    parser.add_argument(
        "-I",
        action="append",
        default=[],
        dest="includes",
        type=Path,
        help="Additional include directories for the C parser",
    )
    parser.add_argument(
        "--clang-option",
        action="append",
        default=[],
        dest="clang_options",
        help="Extra argument for libclang (repeatable)",
    )
    parser.add_argument(
        "--ignore-ns",
        action="append",
        default=[],
        dest="ignored_namespaces",
        help="C++ namespace to skip entirely (repeatable)",
    )
    parser.add_argument(
        "--parse-as-cpp",
        action="store_true",
        help="Parse every header as C++",
    )
    parser.add_argument(
        "--preprocess-only",
        action="store_true",
        help="Only write the .d files, do not compile them",
    )
    parser.add_argument(
        "--keep-pre-cpp-files",
        action="store_true",
        help="Keep the files fed to the C preprocessor",
    )
    parser.add_argument(
        "--keep-d-files",
        action="store_true",
        help="Keep the .d files after compiling",
    )
    parser.add_argument(
        "--compiler",
        default="dmd",
        help="D compiler to use (default: dmd)",
    )
    parser.add_argument(
        "--cpp",
        default="cpp",
        help="C preprocessor command (default: cpp)",
    )
    parser.add_argument(
        "--print-symbols",
        action="store_true",
        help="Print the symbol tables of every translated file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging",
    )
    return parser


def options_from_args(args: argparse.Namespace, extra: Sequence[str] = ()) -> Options:
    """
    `extra` holds the arguments argparse did not recognise, typically D
    compiler flags.  They are passed through along with non-.dpp files.
    """
    arguments = [*args.files, *extra]
    inputs = [Path(a) for a in arguments if a.endswith(DPP_SUFFIX)]
    passthrough = [a for a in arguments if not a.endswith(DPP_SUFFIX)]
    return Options(
        input_files=inputs,
        include_paths=args.includes,
        clang_args=args.clang_options,
        ignored_namespaces=args.ignored_namespaces,
        parse_as_cpp=args.parse_as_cpp,
        preprocess_only=args.preprocess_only,
        keep_pre_cpp_files=args.keep_pre_cpp_files,
        keep_d_files=args.keep_d_files,
        compiler=args.compiler,
        compiler_args=passthrough,
        preprocessor=shlex.split(args.cpp),
    )


def _print_progress(step: int, steps: int, message: str):
    print(f"[{step}/{steps}] {message}")


def main(argv: list[str] | None = None) -> int:
    args, extra = _build_parser().parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = options_from_args(args, extra)
    if not options.input_files:
        print(f"No {DPP_SUFFIX} files given. Exiting.", file=sys.stderr)
        return 1

    try:
        contexts = run(options, progress=_print_progress)
    except DbindgenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.print_symbols:
        for context in contexts:
            print(print_symbols(context))

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
