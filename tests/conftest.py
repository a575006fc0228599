"""
Shared fixtures.

Translation tests write a header and a .dpp file including it to a temp
directory.  The C preprocessor is replaced by a small Python script that
behaves like `cpp` as far as dbindgen cares: it consumes #define lines and
surrounds the rest with line markers.
"""

import sys
from pathlib import Path

import pytest

FAKE_CPP = """\
import sys

path = sys.argv[1]
print(f'# 1 "{path}"')
with open(path) as f:
    for line in f:
        if line.lstrip().startswith("#define"):
            continue
        sys.stdout.write(line)
print('# 2 "<built-in>"')
"""

FAILING_CPP = """\
import sys

sys.stderr.write("boom: cannot preprocess\\n")
sys.exit(3)
"""


def _script(tmp_path: Path, name: str, source: str) -> list[str]:
    script = tmp_path / name
    script.write_text(source)
    return [sys.executable, str(script)]


@pytest.fixture
def fake_cpp(tmp_path) -> list[str]:
    return _script(tmp_path, "fake_cpp.py", FAKE_CPP)


@pytest.fixture
def failing_cpp(tmp_path) -> list[str]:
    return _script(tmp_path, "failing_cpp.py", FAILING_CPP)


@pytest.fixture
def project(tmp_path):
    """
    Write headers and a .dpp file into tmp_path.

    Usage: dpp = project({"foo.h": "int foo(void);"}, '#include "foo.h"')
    """

    def _write(headers: dict[str, str], dpp_source: str, name: str = "app.dpp") -> Path:
        for header, source in headers.items():
            (tmp_path / header).write_text(source)
        dpp = tmp_path / name
        dpp.write_text(dpp_source)
        return dpp

    return _write
