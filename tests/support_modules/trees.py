from idlbind import tree as t


def shapes():
    """module shapes {
        enum Color { RED, GREEN, BLUE };
        bitmask Flags { FAST, WIDE };
        typedef double Meters;
        @topic struct Point { @key long x; long y; };
        struct Name { string label; };
        struct Polygon {
            string name;
            sequence<Point> points;
            Color color;
            Flags flags;
            Meters perimeter;
            sequence<sequence<long>> grid;
        };
        union Shape switch (long) {
            case 1: double radius;
            case 2: case 3: Point corner;
            default: string label;
        };
        struct Drawing { Shape shape; sequence<Shape> extra; };
    };"""
    color = t.Enum_("Color", ["RED", "GREEN", "BLUE"])
    flags = t.Bitmask("Flags", ["FAST", "WIDE"])
    meters = t.Typedef("Meters", t.double)
    point = t.Struct("Point", [
        t.Member("x", t.long, ["key"]),
        t.Member("y", t.long),
    ], ["topic"])
    name = t.Struct("Name", [t.Member("label", t.string)])
    polygon = t.Struct("Polygon", [
        t.Member("name", t.string),
        t.Member("points", t.Sequence(point)),
        t.Member("color", color),
        t.Member("flags", flags),
        t.Member("perimeter", meters),
        t.Member("grid", t.Sequence(t.Sequence(t.long))),
    ])
    shape = t.Union("Shape", t.long, [
        t.Case(t.Member("radius", t.double), [1]),
        t.Case(t.Member("corner", point), [2, 3]),
        t.Case(t.Member("label", t.string), is_default=True),
    ])
    drawing = t.Struct("Drawing", [
        t.Member("shape", shape),
        t.Member("extra", t.Sequence(shape)),
    ])
    return t.Module("shapes", [color, flags, meters, point, name, polygon, shape, drawing])


def scalars():
    """struct Scalars with one member per primitive kind, at top level."""
    return t.Struct("Scalars", [
        t.Member("b", t.boolean),
        t.Member("o", t.octet),
        t.Member("c", t.char),
        t.Member("s", t.short),
        t.Member("us", t.ushort),
        t.Member("l", t.long),
        t.Member("ul", t.ulong),
        t.Member("ll", t.longlong),
        t.Member("ull", t.ulonglong),
        t.Member("f", t.float_),
        t.Member("d", t.double),
        t.Member("w", t.wstring),
    ])


def nested_modules():
    """module outer { struct A {}; module inner { struct B { outer::A a; }; }; };"""
    a = t.Struct("A", [t.Member("v", t.long)])
    b = t.Struct("B", [t.Member("a", a)])
    inner = t.Module("inner", [b])
    return t.Module("outer", [a, inner])
