import pytest
from dataclasses import FrozenInstanceError

from idlbind import GeneratorConfig, Diagnostics
from idlbind import tree as t
from idlbind.emitters import emit_struct

from support_modules.trees import scalars, shapes


def entity(module, name):
    return [d for d in module.definitions if d.name == name][0]


def test_point_unit():
    point = entity(shapes(), "Point")
    unit = emit_struct(point)
    assert unit.path == "shapes/Point.py"
    assert unit.module == "shapes.Point"
    assert "__idl_field_order__ = ['x', 'y']" in unit.text
    assert "x: types.int32 = 0" in unit.text
    assert "__idl_annotations__ = ['Topic']" in unit.text
    assert "__idl_field_annotations__ = {'x': ['Key']}" in unit.text

    encode = unit.text.index("def encode_into")
    assert unit.text.index("buffer.write('i', 4, self.x)", encode) < unit.text.index("buffer.write('i', 4, self.y)", encode)


def test_point_encodes_to_eight_bytes(generated):
    generated.write(shapes())
    Point = generated.entity("shapes.Point")

    data = Point(x=1, y=-1).encode()
    assert data == b'\x01\x00\x00\x00\xff\xff\xff\xff'
    assert Point.decode(data) == Point(x=1, y=-1)
    assert repr(Point(x=3, y=4)) == "Point[x=3, y=4]"


def test_absent_string_is_minus_one(generated):
    generated.write(shapes())
    Name = generated.entity("shapes.Name")

    v = Name()
    assert v.label is None
    assert v.encode() == b'\xff\xff\xff\xff'
    assert Name.decode(v.encode()).label is None
    assert Name.decode(Name(label="").encode()).label == ""
    assert Name.decode(Name(label="héllo").encode()).label == "héllo"


def test_scalars_round_trip(generated):
    generated.write(scalars())
    Scalars = generated.entity("generated.Scalars")

    v = Scalars(b=True, o=255, c='z', s=-32768, us=65535, l=-5, ul=4294967295,
                ll=-9223372036854775808, ull=18446744073709551615, f=0.5, d=-2.25, w="wide")
    assert Scalars.decode(v.encode()) == v
    assert Scalars.decode(Scalars().encode()) == Scalars()
    assert len(Scalars(w=None).encode()) == 1 + 1 + 1 + 2 + 2 + 4 + 4 + 8 + 8 + 4 + 8 + 4


def test_composite_struct_round_trip(generated):
    generated.write(shapes())
    Polygon = generated.entity("shapes.Polygon")
    Point = generated.entity("shapes.Point")
    Color = generated.entity("shapes.Color")
    Flags = generated.entity("shapes.Flags")
    Meters = generated.entity("shapes.Meters")

    v = Polygon(
        name="triangle",
        points=[Point(0, 0), Point(1, 0), Point(0, 1)],
        color=Color.BLUE,
        flags=Flags(Flags.FAST | Flags.WIDE),
        perimeter=Meters(3.5),
        grid=[[1, 2], [], [3]],
    )
    assert Polygon.decode(v.encode()) == v

    empty = Polygon()
    assert empty.color == Color.RED
    assert Polygon.decode(empty.encode()) == empty
    assert Polygon.decode(Polygon(points=[]).encode()).points == []


def test_decode_rejects_truncated_data(generated):
    generated.write(shapes())
    Point = generated.entity("shapes.Point")
    with pytest.raises(ValueError):
        Point.decode(b'\x01\x00')


def test_empty_struct(generated):
    generated.write(t.Struct("Empty"))
    Empty = generated.entity("generated.Empty")
    assert Empty().encode() == b''
    assert Empty.decode(b'') == Empty()
    assert repr(Empty()) == "Empty[]"


def test_compact_form_is_frozen(generated):
    generated.write(shapes(), GeneratorConfig(generate_compact_declaration_form=True))
    Point = generated.entity("shapes.Point")
    v = Point(x=1, y=2)
    with pytest.raises(FrozenInstanceError):
        v.x = 3
    assert Point.decode(v.encode()) == v


def test_tuples_for_sequences(generated):
    generated.write(shapes(), GeneratorConfig(use_collection_for_sequences=False))
    Polygon = generated.entity("shapes.Polygon")
    decoded = Polygon.decode(Polygon(grid=((1,), (2, 3))).encode())
    assert decoded.grid == ((1,), (2, 3))


def test_codec_can_be_disabled():
    unit = emit_struct(entity(shapes(), "Point"), GeneratorConfig(disable_codec_generation=True))
    assert "def encode" not in unit.text
    assert "def decode" not in unit.text
    assert "def __repr__" in unit.text


def test_describe_type(generated):
    generated.write(shapes())
    Point = generated.entity("shapes.Point")
    assert Point.describe_type() == {
        'name': 'shapes::Point',
        'kind': 'STRUCTURE',
        'members': [('x', 'INT32'), ('y', 'INT32')],
        'annotations': ['Topic'],
        'topic': True,
    }


def test_structural_fallbacks():
    diagnostics = Diagnostics()
    node = t.Struct(None, [t.Member(None, t.long), t.Member("encode", t.long), t.Member("odd", None)])
    t.Module("m", [node])
    unit = emit_struct(node, diagnostics=diagnostics)
    assert unit.path == "m/UnnamedStruct.py"
    assert "unnamed_0: types.int32 = 0" in unit.text
    assert "encode_: types.int32 = 0" in unit.text
    assert "odd: Any = None" in unit.text
    assert diagnostics.warning_count == 3


def test_class_name_override():
    unit = emit_struct(entity(shapes(), "Point"), class_name="Vertex")
    assert unit.path == "shapes/Vertex.py"
    assert "class Vertex:" in unit.text


def test_mutually_referencing_units(generated):
    a = t.Struct("A")
    b = t.Struct("B", [t.Member("a", a)])
    a.members = [t.Member("v", t.long), t.Member("bs", t.Sequence(b))]
    for member in a.members:
        member.parent = a
    generated.write(t.Module("cycle", [a, b]))

    assert "import cycle.B" in generated.source("cycle/A.py")
    assert "import cycle.A" in generated.source("cycle/B.py")

    B = generated.entity("cycle.B")
    A = generated.entity("cycle.A")
    v = A(v=1, bs=[B(a=A(v=2)), B(a=A(v=3, bs=[]))])
    assert A.decode(v.encode()) == v
    assert B().a == A(v=0, bs=None)
    assert B.decode(B().encode()) == B()


def test_missing_member_type_warns_once():
    diagnostics = Diagnostics()
    unit = emit_struct(t.Struct("S", [t.Member("x", None), t.Member("y", None)]), diagnostics=diagnostics)
    assert "x: Any = None" in unit.text
    assert diagnostics.warning_count == 2
