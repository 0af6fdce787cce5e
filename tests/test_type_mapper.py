import pytest

from idlbind import GeneratorConfig, Diagnostics
from idlbind import tree as t
from idlbind.type_mapper import TypeMapper, TypedefCycle, resolve_terminal, describe, dynamic_kind


@pytest.fixture
def mapper():
    return TypeMapper(GeneratorConfig(), Diagnostics())


@pytest.mark.parametrize("node,unboxed,boxed", [
    (t.boolean, "bool", "bool"),
    (t.octet, "types.uint8", "int"),
    (t.char, "types.char", "str"),
    (t.short, "types.int16", "int"),
    (t.ushort, "types.uint16", "int"),
    (t.long, "types.int32", "int"),
    (t.ulong, "types.uint32", "int"),
    (t.longlong, "types.int64", "int"),
    (t.ulonglong, "types.uint64", "int"),
    (t.float_, "types.float32", "float"),
    (t.double, "types.float64", "float"),
    (t.string, "str", "str"),
    (t.wstring, "str", "str"),
])
def test_primitive_mapping(mapper, node, unboxed, boxed):
    assert mapper.map_type(node, boxed=False) == unboxed
    assert mapper.map_type(node, boxed=True) == boxed


def test_sequence_uses_boxed_elements(mapper):
    assert mapper.map_type(t.Sequence(t.long), boxed=False) == "List[int]"
    assert mapper.map_type(t.Sequence(t.Sequence(t.double))) == "List[List[float]]"


def test_sequence_as_tuple():
    mapper = TypeMapper(GeneratorConfig(use_collection_for_sequences=False))
    assert mapper.map_type(t.Sequence(t.long)) == "Tuple[int, ...]"


def test_entity_references_map_to_their_name(mapper):
    point = t.Struct("Point")
    alias = t.Typedef("Meters", t.double)
    assert mapper.map_type(point) == "Point"
    assert mapper.map_type(t.Enum_("Color", ["RED"])) == "Color"
    assert mapper.map_type(t.Bitmask("Flags", ["A"])) == "Flags"
    assert mapper.map_type(t.Union("Shape", t.long)) == "Shape"
    assert mapper.map_type(alias) == "Meters"
    assert mapper.map_type(t.Sequence(point)) == "List[Point]"


def test_keyword_names_are_escaped(mapper):
    assert mapper.map_type(t.Struct("class")) == "class_"


def test_missing_type_is_a_mapping_gap(mapper):
    assert mapper.map_type(None) == "Any"
    assert mapper.diagnostics.warning_count == 1


def test_nullable_declarations(mapper):
    assert mapper.declaration(t.string) == "Optional[str]"
    assert mapper.declaration(t.Sequence(t.octet)) == "Optional[List[int]]"
    assert mapper.declaration(t.long) == "types.int32"


def test_default_values(mapper):
    assert mapper.default_value(t.long) == ("0", False)
    assert mapper.default_value(t.double) == ("0.0", False)
    assert mapper.default_value(t.boolean) == ("False", False)
    assert mapper.default_value(t.string) == ("None", False)
    assert mapper.default_value(t.Struct("P"), "a.P.P") == ("a.P.P()", True)
    assert mapper.default_value(t.Enum_("C", ["X", "Y"]), "a.C.C") == ("a.C.C.X", True)


def test_resolve_terminal():
    inner = t.Typedef("Inner", t.long)
    outer = t.Typedef("Outer", inner)
    assert resolve_terminal(outer) is t.long
    assert resolve_terminal(t.string) is t.string
    assert resolve_terminal(None) is None


def test_resolve_terminal_detects_cycles():
    a = t.Typedef("A")
    b = t.Typedef("B", a)
    a.aliased_type = b
    with pytest.raises(TypedefCycle):
        resolve_terminal(a)


def test_descriptions():
    assert describe(t.Sequence(t.ulong)) == "sequence<unsigned long>"
    assert describe(t.Struct("P")) == "struct P"
    assert dynamic_kind(t.long) == "INT32"
    assert dynamic_kind(t.wstring) == "STRING16"
    assert dynamic_kind(t.Sequence(t.long)) == "SEQUENCE"
