"""
Command line tests.
"""

import shlex
import sys

import pytest

pytest.importorskip("clang.cindex")

from dbindgen.__main__ import _build_parser, main, options_from_args


def test_options_from_args():
    args, extra = _build_parser().parse_known_args(
        ["app.dpp", "-I", "inc", "other.d", "-of=app", "--ignore-ns=std", "--keep-d-files"]
    )
    options = options_from_args(args, extra)

    assert [p.name for p in options.input_files] == ["app.dpp"]
    assert options.compiler_args == ["other.d", "-of=app"]
    assert [str(p) for p in options.include_paths] == ["inc"]
    assert options.ignored_namespaces == ["std"]
    assert options.keep_d_files
    assert options.preprocessor == ["cpp"]


def test_cpp_command_is_split():
    args = _build_parser().parse_args(["app.dpp", "--cpp", "clang -E -P"])
    assert options_from_args(args).preprocessor == ["clang", "-E", "-P"]


def test_no_dpp_files(capsys):
    assert main(["foo.d"]) == 1
    assert "No .dpp files" in capsys.readouterr().err


def test_preprocess_only(project, fake_cpp, capsys):
    dpp = project({"foo.h": "int foo(void);\n"}, '#include "foo.h"\n')

    code = main([str(dpp), "--preprocess-only", "--print-symbols", "--cpp", shlex.join(fake_cpp)])

    out = capsys.readouterr().out
    assert code == 0
    assert "[1/1] Translating app.dpp" in out
    assert "Linkables:" in out
    assert "Done!" in out
    assert "int foo();" in dpp.with_suffix(".d").read_text()


def test_error_is_reported(project, failing_cpp, capsys):
    dpp = project({}, "void main() {}\n")

    code = main([str(dpp), "--preprocess-only", "--cpp", shlex.join(failing_cpp)])

    assert code == 1
    assert "Error: Could not execute" in capsys.readouterr().err


def test_compile_step(project, fake_cpp, capsys):
    dpp = project({}, "void main() {}\n")
    compiler = sys.executable

    code = main(
        [
            str(dpp),
            "--cpp",
            shlex.join(fake_cpp),
            "--compiler",
            compiler,
            "--keep-d-files",
            "-c",
            "import sys; sys.exit(0)",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "[2/2] Compiling" in out
    assert dpp.with_suffix(".d").exists()


def test_dpp_files_after_options_are_inputs():
    args, extra = _build_parser().parse_known_args(["a.dpp", "-I", "inc", "b.dpp", "-g"])
    options = options_from_args(args, extra)
    assert [p.name for p in options.input_files] == ["a.dpp", "b.dpp"]
    assert options.compiler_args == ["-g"]
