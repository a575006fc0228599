"""
options.py — Runtime configuration for one dbindgen invocation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DPP_SUFFIX = ".dpp"
CPP_HEADER_SUFFIXES = frozenset({".hpp", ".hh", ".hxx", ".h++"})


@dataclass
class Options:
    """
    Everything the command line can configure.

    Fields
    ------
    input_files        : the .dpp files to translate
    include_paths      : extra -I directories for libclang
    clang_args         : extra raw arguments for libclang
    ignored_namespaces : C++ namespaces whose declarations are skipped
    parse_as_cpp       : parse every header as C++
    preprocess_only    : stop after writing the .d files
    keep_pre_cpp_files : keep the `.d.tmp` file fed to the preprocessor
    keep_d_files       : keep the .d files after compiling them
    compiler           : D compiler executable
    compiler_args      : arguments passed through to the D compiler
    preprocessor       : command (argv) of the C preprocessor
    indentation        : one level of indentation in the generated code
    """

    input_files: List[Path] = field(default_factory=list)
    include_paths: List[Path] = field(default_factory=list)
    clang_args: List[str] = field(default_factory=list)
    ignored_namespaces: List[str] = field(default_factory=list)
    parse_as_cpp: bool = False
    preprocess_only: bool = False
    keep_pre_cpp_files: bool = False
    keep_d_files: bool = False
    compiler: str = "dmd"
    compiler_args: List[str] = field(default_factory=list)
    preprocessor: List[str] = field(default_factory=lambda: ["cpp"])
    indentation: str = "    "

    @staticmethod
    def to_d_file_name(path: Path) -> Path:
        """e.g. "foo.dpp" -> "foo.d" """
        return Path(path).with_suffix(".d")

    @property
    def d_file_names(self) -> List[Path]:
        return [self.to_d_file_name(p) for p in self.input_files]

    def is_cpp_header(self, header: str) -> bool:
        return self.parse_as_cpp or Path(header).suffix in CPP_HEADER_SUFFIXES
