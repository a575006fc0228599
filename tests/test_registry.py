"""
Tests for the identity, nickname and type registries.
"""

from dbindgen.node import Node
from dbindgen.registry import IdentityRegistry, NicknameRegistry, TypeRegistry


def _struct(spelling: str, hash_: int = 0) -> Node:
    return Node(
        spelling=spelling,
        kind="STRUCT_DECL",
        hash=hash_,
        type_spelling=f"struct {spelling}",
        type_kind="RECORD",
    )


# ---------------------------------------------------------------------------
# IdentityRegistry
# ---------------------------------------------------------------------------


def test_second_occurrence_is_seen():
    seen = IdentityRegistry()
    node = _struct("foo", hash_=1)
    assert not seen.has_seen(node)
    seen.remember(node)
    # Same structure, different hash: still the same declaration
    assert seen.has_seen(_struct("foo", hash_=2))
    seen.remember(node)
    assert len(seen) == 1


def test_identity_includes_type():
    seen = IdentityRegistry()
    seen.remember(Node("foo", "FUNCTION_DECL", type_spelling="int (void)", type_kind="FUNCTIONPROTO"))
    assert not seen.has_seen(
        Node("foo", "FUNCTION_DECL", type_spelling="int (int)", type_kind="FUNCTIONPROTO")
    )


def test_anonymous_struct_is_not_remembered():
    seen = IdentityRegistry()
    node = _struct("")
    seen.remember(node)
    assert not seen.has_seen(node)


def test_anonymous_enum_is_remembered():
    seen = IdentityRegistry()
    node = Node("", "ENUM_DECL", type_spelling="enum (unnamed at a.h:1:1)", type_kind="ENUM")
    seen.remember(node)
    assert seen.has_seen(node)


# ---------------------------------------------------------------------------
# NicknameRegistry
# ---------------------------------------------------------------------------


def test_nicknames_follow_encounter_order():
    nicknames = NicknameRegistry()
    nodes = [_struct("", hash_=h) for h in (40, 10, 30)]
    assert [nicknames.nickname_for(n) for n in nodes] == [
        "_Anonymous_0",
        "_Anonymous_1",
        "_Anonymous_2",
    ]
    assert nicknames.nickname_for(nodes[0]) == "_Anonymous_0"
    assert len(nicknames) == 3


def test_member_name_reuses_the_nickname_index():
    nicknames = NicknameRegistry()
    first = _struct("", hash_=1)
    second = _struct("", hash_=2)
    assert nicknames.member_name_for(first) == "_anonymous_0"
    assert nicknames.nickname_for(first) == "_Anonymous_0"
    assert nicknames.nickname_for(second) == "_Anonymous_1"
    assert nicknames.member_name_for(second) == "_anonymous_1"


# ---------------------------------------------------------------------------
# TypeRegistry
# ---------------------------------------------------------------------------


def test_cast_pattern_matches_only_known_types():
    types = TypeRegistry()
    assert types.cast_pattern().search("(Foo *)x") is None

    types.remember("Foo")
    match = types.cast_pattern().search("(Foo *)x")
    assert match is not None
    assert match.group(1) == "Foo *"


def test_cast_pattern_primitives_const_and_pointers():
    pattern = TypeRegistry().cast_pattern()
    assert pattern.search("(unsigned int)y").group(1) == "unsigned int"
    assert pattern.search("( const char * )s").group(1) == " const char * "
    assert pattern.search("(void*)0").group(1) == "void*"
    assert pattern.search("(x)") is None
    assert pattern.search("(intx)") is None


def test_cast_pattern_rebuilt_after_new_type():
    types = TypeRegistry()
    types.remember("Foo")
    assert types.cast_pattern().search("(Bar)b") is None
    types.remember("Bar")
    assert types.cast_pattern().search("(Bar)b") is not None
    assert types.cast_pattern().search("(Foo)f") is not None


def test_duplicate_types_are_harmless():
    types = TypeRegistry()
    types.remember("Foo")
    types.remember("Foo")
    assert "Foo" in types
    assert types.cast_pattern().search("(const Foo*)p") is not None
