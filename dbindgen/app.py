"""
app.py — What dbindgen does at runtime.

For every input file:
  1. translate it line by line, expanding #include directives inline
  2. repair name collisions once the whole file is known
  3. run the C preprocessor over the result, so that C macros re-emitted as
     #define lines expand inside the D code
  4. drop the preprocessor's line markers and write the .d file

and finally, unless asked to stop there, compile the .d files.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .context import Context
from .errors import ProcessError
from .expansion import maybe_expand
from .options import Options

logger = logging.getLogger(__name__)


PREAMBLE = [
    "import core.stdc.config;",
    "import core.stdc.stdarg: va_list;",
    "struct __locale_data { int dummy; }",
    "#define __gnuc_va_list va_list",
    "alias _Bool = bool;",
]


def execute(command: Sequence[str]) -> str:
    """Run `command` and return its stdout; raise ProcessError on failure."""
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(list(command), capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ProcessError(command, str(e)) from e
    if result.returncode != 0:
        raise ProcessError(command, result.stdout + result.stderr, result.returncode)
    if result.stderr:
        logger.debug("%s", result.stderr)
    return result.stdout


def strip_line_markers(text: str) -> str:
    """Remove the `# 1 "file"` lines the preprocessor leaves behind."""
    return "\n".join(line for line in text.splitlines() if not line.startswith("#"))


def translate_file(options: Options, input_path: Path) -> Context:
    """Translate one input file into a fresh context, collisions repaired."""
    input_path = Path(input_path)
    context = Context(options)

    with input_path.open() as f:
        for line in f:
            maybe_expand(line.rstrip("\n"), context, input_path.parent)

    context.fix_names()
    return context


def preprocess(options: Options, input_path: Path, output_path: Path) -> Context:
    """
    Turn a .dpp file into a .d file.

    The intermediate file `<output>.tmp` is what the preprocessor sees; it is
    removed afterwards unless `options.keep_pre_cpp_files` is set.  The output
    file is only written once the preprocessor succeeded.
    """
    output_path = Path(output_path)
    tmp_path = output_path.with_name(output_path.name + ".tmp")

    context = translate_file(options, input_path)

    try:
        tmp_path.write_text("\n".join(PREAMBLE) + "\n" + context.translation() + "\n")
        preprocessed = execute([*options.preprocessor, str(tmp_path)])
    finally:
        if not options.keep_pre_cpp_files and tmp_path.exists():
            tmp_path.unlink()

    output_path.write_text(strip_line_markers(preprocessed) + "\n")
    return context


def compile_d_files(options: Options) -> List[Path]:
    """Compile every .d file, removing them afterwards unless keep_d_files."""
    d_files = options.d_file_names
    execute([options.compiler, *options.compiler_args, *map(str, d_files)])
    if not options.keep_d_files:
        for path in d_files:
            path.unlink()
    return d_files


def run(
    options: Options, progress: Optional[Callable[[int, int, str], None]] = None
) -> List[Context]:
    """
    Translate every input file and, unless preprocess_only, compile them.

    `progress(step, steps, message)` is called before each step.
    """
    steps = len(options.input_files) + (0 if options.preprocess_only else 1)
    report = progress or (lambda step, steps, message: None)

    contexts = []
    for step, path in enumerate(options.input_files, start=1):
        d_file = options.to_d_file_name(path)
        report(step, steps, f"Translating {path.name} → {d_file}")
        contexts.append(preprocess(options, path, d_file))

    if options.preprocess_only:
        return contexts

    report(steps, steps, f"Compiling with {options.compiler} ...")
    compile_d_files(options)
    return contexts
