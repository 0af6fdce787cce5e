import pytest

from idlbind import Diagnostics
from idlbind import tree as t
from idlbind.emitters import emit_bitmask, emit_enum, emit_typedef

from support_modules.trees import shapes


def test_enum_ordinals_are_positional(generated):
    generated.write(shapes())
    Color = generated.entity("shapes.Color")

    assert [c.ordinal for c in Color] == [0, 1, 2]
    assert Color.from_ordinal(2) is Color.BLUE
    with pytest.raises(ValueError):
        Color.from_ordinal(3)
    assert Color.describe_type() == {
        'name': 'shapes::Color',
        'kind': 'ENUM',
        'enumerators': ['RED', 'GREEN', 'BLUE'],
        'annotations': [],
    }


def test_enum_reserved_and_empty():
    unit = emit_enum(t.Enum_("Odd", ["value", "name", "class"]))
    assert "value_ = 0" in unit.text
    assert "name_ = 1" in unit.text
    assert "class_ = 2" in unit.text

    unit = emit_enum(t.Enum_("Nothing", []))
    assert "class Nothing(Enum):" in unit.text


def test_bitmask_constants(generated):
    generated.write(shapes())
    Flags = generated.entity("shapes.Flags")

    assert Flags.FAST == 1
    assert Flags.WIDE == 2
    f = Flags()
    f.set_flag(Flags.WIDE)
    assert f.is_set(Flags.WIDE) and not f.is_set(Flags.FAST)
    f.set_flag(Flags.FAST)
    f.clear_flag(Flags.WIDE)
    assert f.value == 1
    assert repr(Flags(0x3)) == "Flags[value=0x3]"
    assert Flags.describe_type()['bits'] == {'FAST': 1, 'WIDE': 2}


def test_bitmask_beyond_64_bits_warns():
    diagnostics = Diagnostics()
    unit = emit_bitmask(t.Bitmask("Wide", [f"B{i}" for i in range(65)]), diagnostics=diagnostics)
    assert "B64 = 1 << 64" in unit.text
    assert diagnostics.warning_count == 1


def test_typedef_wrapper(generated):
    generated.write(shapes())
    Meters = generated.entity("shapes.Meters")

    m = Meters()
    assert m.get_value() == 0.0
    m.set_value(2.5)
    assert m.value == 2.5
    assert Meters(2.5) == m


def test_typedef_has_no_codec():
    unit = emit_typedef(t.Typedef("Ids", t.Sequence(t.long)))
    assert "value: Optional[List[int]] = None" in unit.text
    assert "encode" not in unit.text


def test_typedef_chain_in_struct(generated):
    inner = t.Typedef("Inner", t.string)
    outer = t.Typedef("Outer", inner)
    holder = t.Struct("Holder", [t.Member("o", outer), t.Member("many", t.Sequence(inner))])
    generated.write(t.Module("alias", [inner, outer, holder]))

    Holder = generated.entity("alias.Holder")
    Outer = generated.entity("alias.Outer")
    Inner = generated.entity("alias.Inner")

    v = Holder(o=Outer(Inner("deep")), many=[Inner("a"), Inner(None)])
    assert Holder.decode(v.encode()) == v
    assert Holder().o == Outer(Inner(None))


def test_typedef_cycle_is_reported():
    diagnostics = Diagnostics()
    a = t.Typedef("A")
    b = t.Typedef("B", a)
    a.aliased_type = b
    unit = emit_typedef(a, diagnostics=diagnostics)
    assert "value: B = None" in unit.text
    assert diagnostics.warning_count == 1


def test_is_set_requires_every_bit_of_a_combined_flag(generated):
    generated.write(shapes())
    Flags = generated.entity("shapes.Flags")

    assert not Flags(Flags.FAST).is_set(Flags.FAST | Flags.WIDE)
    assert Flags(Flags.FAST | Flags.WIDE).is_set(Flags.FAST | Flags.WIDE)
    assert Flags(Flags.FAST | Flags.WIDE).is_set(Flags.WIDE)
