from idlbind import tree as t
from idlbind.namespace import (
    resolve_namespace, scope_chain, qualified_module, output_path, scoped_name,
    safe_identifier, entity_name, DEFAULT_NAMESPACE
)

from support_modules.trees import nested_modules, shapes


def test_top_level_uses_default_namespace():
    node = t.Struct("Lonely")
    assert resolve_namespace(node) == DEFAULT_NAMESPACE == "generated"
    assert resolve_namespace(node, "com.example") == "com.example.generated"
    assert output_path(node) == "generated/Lonely.py"


def test_module_chain_is_joined_outermost_first():
    outer = nested_modules()
    inner = outer.definitions[1]
    b = inner.definitions[0]
    assert scope_chain(b) == ["outer", "inner"]
    assert resolve_namespace(b) == "outer.inner"
    assert resolve_namespace(b, "org") == "org.outer.inner"
    assert qualified_module(b) == "outer.inner.B"
    assert output_path(b, "org") == "org/outer/inner/B.py"
    assert scoped_name(b) == "outer::inner::B"


def test_siblings_share_namespace_and_nesting_adds_one_segment():
    outer = nested_modules()
    a = outer.definitions[0]
    b = outer.definitions[1].definitions[0]
    assert resolve_namespace(b) == resolve_namespace(a) + ".inner"

    module = shapes()
    namespaces = {resolve_namespace(d) for d in module.definitions}
    assert namespaces == {"shapes"}


def test_point_path():
    module = shapes()
    point = [d for d in module.definitions if d.name == "Point"][0]
    assert output_path(point) == "shapes/Point.py"


def test_identifiers():
    assert safe_identifier("class") == "class_"
    assert safe_identifier("None") == "None_"
    assert safe_identifier("radius") == "radius"
    assert entity_name(t.Struct(None)) == "UnnamedStruct"
    assert entity_name(t.Enum_(None)) == "UnnamedEnum"
    assert scope_chain(t.Module(None, [t.Struct("X")]).definitions[0]) == []


def test_anonymous_modules_add_no_segment():
    x = t.Struct("X")
    t.Module("outer", [t.Module(None, [x])])
    assert resolve_namespace(x) == "outer"
    assert output_path(x) == "outer/X.py"
    assert scoped_name(x) == "outer::X"

    lonely = t.Struct("Lonely")
    t.Module(None, [lonely])
    assert output_path(lonely) == "generated/Lonely.py"
