"""
Tests for the D naming policy and the namespace stack.
"""

from dbindgen.namespaces import NamespaceStack
from dbindgen.naming import DlangNaming
from dbindgen.node import Node
from dbindgen.symbols import SymbolTable


def test_keywords_are_renamed():
    naming = DlangNaming()
    symbols = SymbolTable(naming)
    assert naming.is_keyword("module")
    assert naming.safe_identifier("module", symbols) == "module_"
    assert naming.safe_identifier("count", symbols) == "count"


def test_rename_appends_until_free():
    symbols = SymbolTable()
    symbols.remember_aggregate("foo_")
    symbols.remember_aggregate("foo__")
    assert symbols.naming.rename("foo", symbols) == "foo___"


def test_linkable_spelling_considers_aggregates_and_function_macros():
    symbols = SymbolTable()
    symbols.remember_aggregate("stat")
    symbols.remember_macro(Node("min", "MACRO_DEFINITION", is_macro_function=True))
    symbols.remember_macro(Node("EOF", "MACRO_DEFINITION"))

    assert symbols.remember_linkable(Node("stat", "FUNCTION_DECL"), 3) == "stat_"
    assert symbols.remember_linkable(Node("min", "FUNCTION_DECL"), 4) == "min_"
    assert symbols.remember_linkable(Node("EOF", "VAR_DECL"), 5) == "EOF"
    assert symbols.linkables["stat_"][0].line_number == 3


def test_linkage_directive():
    naming = DlangNaming()
    assert naming.linkage_directive("_Z3foov") == 'pragma(mangle, "_Z3foov") '
    assert naming.linkage_directive("") == ""


def test_namespace_round_trip():
    stack = NamespaceStack()
    assert stack.current() == ""
    stack.push("A")
    stack.push("B")
    assert stack.current() == "A::B"
    stack.pop("B")
    assert stack.current() == "A"
    stack.pop("A")
    assert len(stack) == 0


def test_namespace_strip_and_qualify():
    stack = NamespaceStack()
    stack.push("outer")
    stack.push("inner")
    assert stack.qualify("T") == "outer::inner::T"
    assert stack.strip("outer::inner::T") == "T"
    assert stack.strip("other::T") == "other::T"


def test_ignored_namespaces():
    stack = NamespaceStack(ignored=["std", "detail"])
    assert stack.is_ignored("std::string")
    assert stack.is_ignored("const lib::detail::impl &")
    assert not stack.is_ignored("stdx::thing")
    assert not stack.is_ignored("std")
