from idlbind import tree as t
from idlbind.annotations import tag, is_topic_type, is_nested_type, field_markers


def test_recognized_annotations_in_order():
    node = t.Struct("S", annotations=["nested", "key", "unknown", "id", "optional", "topic"])
    assert tag(node) == ["Nested", "Key", "IDLEntity", "Optional", "Topic"]


def test_nothing_to_tag():
    assert tag(t.Struct("S")) == []
    assert tag(t.Struct("S", annotations=["appendable"])) == []
    assert tag(None) == []


def test_topic_and_nested():
    plain = t.Struct("Plain")
    topic = t.Struct("Topic", annotations=["topic"])
    nested = t.Struct("Nested", annotations=["nested"])
    both = t.Struct("Both", annotations=["topic", "nested"])

    assert is_topic_type(plain) and not is_nested_type(plain)
    assert is_topic_type(topic) and not is_nested_type(topic)
    assert not is_topic_type(nested) and is_nested_type(nested)
    assert is_topic_type(both) and is_nested_type(both)


def test_field_markers():
    members = [
        t.Member("id", t.long, ["key"]),
        t.Member("note", t.string),
        t.Member("lambda", t.long, ["optional"]),
    ]
    assert field_markers(members) == {"id": ["Key"], "lambda_": ["Optional"]}
    assert field_markers(members, ["a", "b", "c"]) == {"a": ["Key"], "c": ["Optional"]}
