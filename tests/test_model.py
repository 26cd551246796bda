import pytest

from protospec.model import (
    Enumerator,
    Extensions,
    Field,
    FileDescriptor,
    Label,
    MapType,
    Message,
    NamedType,
    OneOf,
    Proto2Frequency,
    Proto3Frequency,
    ScalarType,
    Syntax,
    resolve_frequency,
)

MAP = MapType(ScalarType.STRING, ScalarType.INT32)


@pytest.mark.parametrize(
    "syntax, typ, label, expected",
    [
        (Syntax.PROTO2, MAP, Label.REPEATED, Proto2Frequency.MAP),
        (Syntax.PROTO2, MAP, None, Proto2Frequency.MAP),
        (Syntax.PROTO2, ScalarType.INT32, Label.REQUIRED, Proto2Frequency.REQUIRED),
        (Syntax.PROTO2, ScalarType.INT32, Label.OPTIONAL, Proto2Frequency.OPTIONAL),
        (Syntax.PROTO2, ScalarType.INT32, Label.REPEATED, Proto2Frequency.REPEATED),
        (Syntax.PROTO2, ScalarType.INT32, None, Proto2Frequency.OPTIONAL),
        (Syntax.PROTO3, MAP, Label.OPTIONAL, Proto3Frequency.MAP),
        (Syntax.PROTO3, NamedType("A"), Label.REQUIRED, Proto3Frequency.OPTIONAL),
        (Syntax.PROTO3, NamedType("A"), Label.OPTIONAL, Proto3Frequency.OPTIONAL),
        (Syntax.PROTO3, NamedType("A"), Label.REPEATED, Proto3Frequency.REPEATED),
        (Syntax.PROTO3, NamedType("A"), None, Proto3Frequency.DEFAULT),
    ],
)
def test_resolve_frequency(syntax, typ, label, expected):
    assert resolve_frequency(syntax, typ, label) is expected


@pytest.mark.parametrize(
    "frequency, repeated",
    [
        (Proto2Frequency.REPEATED, True),
        (Proto3Frequency.REPEATED, True),
        (Proto2Frequency.OPTIONAL, False),
        (Proto2Frequency.REQUIRED, False),
        (Proto3Frequency.DEFAULT, False),
        (Proto3Frequency.OPTIONAL, False),
    ],
)
def test_field_is_repeated(frequency, repeated):
    f = Field(name="a", frequency=frequency, number=1, typ=ScalarType.INT32)
    assert f.is_repeated() is repeated


def test_field_defaults():
    f = Field(name="a", frequency=Proto2Frequency.OPTIONAL, number=1, typ=ScalarType.BOOL)
    assert (f.default, f.packed, f.boxed, f.deprecated) == (None, None, False, False)


def test_scalar_type_from_keyword():
    assert ScalarType("sfixed64") is ScalarType.SFIXED64
    assert ScalarType("string") is ScalarType.STRING
    with pytest.raises(ValueError):
        ScalarType("Foo")


def test_map_type_equality_and_hash():
    assert MapType(ScalarType.STRING, ScalarType.INT32) == MAP
    assert hash(MapType(ScalarType.STRING, ScalarType.INT32)) == hash(MAP)
    assert NamedType("Bar") == NamedType("Bar")
    assert NamedType("Bar") != NamedType("Baz")


def test_message_defaults_are_independent():
    a = Message(name="A")
    b = Message(name="B")
    a.fields.append(
        Field(name="x", frequency=Proto2Frequency.OPTIONAL, number=1, typ=ScalarType.INT32)
    )
    assert b.fields == []
    assert a.reserved_nums is None and a.extensions is None


def test_file_descriptor_defaults():
    desc = FileDescriptor()
    assert desc.syntax is Syntax.PROTO2
    assert desc.package == ""
    assert desc.messages == [] and desc.import_paths == []


def test_oneof_defaults():
    o = OneOf(name="a_oneof")
    assert (o.package, o.module, o.imported, o.fields) == ("", "", False, [])


def test_extensions_max_range():
    ext = Extensions(start=1300, end=Extensions.MAX)
    assert ext.end == Extensions.MAX
    assert ext.start < ext.end


def test_enumerator_fields_keep_order():
    e = Enumerator(name="Turn", fields=[("UP", 0), ("DOWN", 1)])
    assert [name for name, _ in e.fields] == ["UP", "DOWN"]