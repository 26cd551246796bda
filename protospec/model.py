"""Data model of a parsed .proto file."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import ClassVar, Optional, Union


class Syntax(enum.Enum):
    """The protobuf syntax version of a file."""

    PROTO2 = "proto2"
    PROTO3 = "proto3"


class ScalarType(enum.Enum):
    """Built-in protobuf field types, keyed by their keyword."""

    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    SFIXED32 = "sfixed32"
    FIXED64 = "fixed64"
    SFIXED64 = "sfixed64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    FLOAT = "float"
    DOUBLE = "double"


@dataclass(frozen=True)
class MapType:
    """A ``map<key, value>`` field type."""

    key: "FieldType"
    value: "FieldType"


@dataclass(frozen=True)
class NamedType:
    """A reference to a message or enum by (possibly qualified) name."""

    name: str


FieldType = Union[ScalarType, MapType, NamedType]


class Label(enum.Enum):
    """The label written before a field, as it appears in the source."""

    OPTIONAL = "optional"
    REPEATED = "repeated"
    REQUIRED = "required"


class Proto2Frequency(enum.Enum):
    """How often a proto2 field may occur."""

    OPTIONAL = "optional"
    REPEATED = "repeated"
    REQUIRED = "required"
    MAP = "map"


class Proto3Frequency(enum.Enum):
    """How often a proto3 field may occur."""

    OPTIONAL = "optional"
    REPEATED = "repeated"
    DEFAULT = "default"
    MAP = "map"


Frequency = Union[Proto2Frequency, Proto3Frequency]


def resolve_frequency(
    syntax: Syntax, field_type: FieldType, label: Optional[Label]
) -> Frequency:
    """Work out a field's frequency from the syntax, its type and its label."""
    if syntax is Syntax.PROTO2:
        if isinstance(field_type, MapType):
            return Proto2Frequency.MAP
        if label is None:
            return Proto2Frequency.OPTIONAL
        return {
            Label.REQUIRED: Proto2Frequency.REQUIRED,
            Label.OPTIONAL: Proto2Frequency.OPTIONAL,
            Label.REPEATED: Proto2Frequency.REPEATED,
        }[label]
    if isinstance(field_type, MapType):
        return Proto3Frequency.MAP
    if label is None:
        return Proto3Frequency.DEFAULT
    if label is Label.REPEATED:
        return Proto3Frequency.REPEATED
    return Proto3Frequency.OPTIONAL


@dataclass
class Field:
    """A field of a message, oneof or extend block."""

    name: str
    frequency: Frequency
    number: int
    typ: FieldType
    default: Optional[str] = None
    packed: Optional[bool] = None
    boxed: bool = False
    deprecated: bool = False

    def is_repeated(self) -> bool:
        """Return True for a repeated field."""
        return self.frequency in (Proto2Frequency.REPEATED, Proto3Frequency.REPEATED)


@dataclass
class OneOf:
    """A ``oneof`` group inside a message."""

    name: str
    fields: list[Field] = field(default_factory=list)
    package: str = ""
    module: str = ""
    imported: bool = False


@dataclass
class Enumerator:
    """An enum and its (name, value) pairs in declaration order."""

    name: str
    fields: list[tuple[str, int]] = field(default_factory=list)


@dataclass
class Extensions:
    """An ``extensions start to end;`` range."""

    MAX: ClassVar[int] = 536_870_911

    start: int
    end: int


@dataclass
class Message:
    """A message with its fields and nested definitions."""

    name: str
    fields: list[Field] = field(default_factory=list)
    oneofs: list[OneOf] = field(default_factory=list)
    reserved_nums: Optional[list[int]] = None
    reserved_names: Optional[list[str]] = None
    messages: list["Message"] = field(default_factory=list)
    enums: list[Enumerator] = field(default_factory=list)
    extensions: Optional[Extensions] = None


@dataclass
class RpcFunctionDeclaration:
    """One ``rpc name(arg) returns (ret)`` declaration."""

    name: str
    arg: str
    ret: str


@dataclass
class RpcService:
    """A ``service`` block."""

    service_name: str
    functions: list[RpcFunctionDeclaration] = field(default_factory=list)


@dataclass
class Extend:
    """An ``extend Name { ... }`` block."""

    name: str
    fields: list[Field] = field(default_factory=list)


@dataclass
class FileDescriptor:
    """Everything read from one .proto file."""

    import_paths: list[PurePath] = field(default_factory=list)
    package: str = ""
    syntax: Syntax = Syntax.PROTO2
    messages: list[Message] = field(default_factory=list)
    enums: list[Enumerator] = field(default_factory=list)
    rpc_services: list[RpcService] = field(default_factory=list)
    message_extends: list[Extend] = field(default_factory=list)