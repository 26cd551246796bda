"""Parser turning .proto source text into a :class:`FileDescriptor`.

Each reader takes the text still to be read and returns the rest of the text
together with what it read. A reader that does not find what it expects raises
:class:`~protospec.errors.ParseError`.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import PurePath
from typing import Optional, TypeVar

from .errors import ParseError, TrailingGarbageError
from .lexer import (
    expect,
    hex_integer,
    integer,
    qualifiable_name,
    require_breaks,
    skip_breaks,
    string,
    word,
)
from .model import (
    Enumerator,
    Extend,
    Extensions,
    Field,
    FieldType,
    FileDescriptor,
    Frequency,
    Label,
    MapType,
    Message,
    NamedType,
    OneOf,
    Proto2Frequency,
    Proto3Frequency,
    RpcFunctionDeclaration,
    RpcService,
    ScalarType,
    Syntax,
    resolve_frequency,
)

T = TypeVar("T")
_Reader = Callable[[str], "tuple[str, T]"]


def _many0(read: Callable[[str], tuple[str, T]], text: str) -> tuple[str, list[T]]:
    items: list[T] = []
    while True:
        try:
            rest, item = read(text)
        except ParseError:
            return text, items
        if rest == text:
            return text, items
        items.append(item)
        text = rest


def _many1(read: Callable[[str], tuple[str, T]], text: str) -> tuple[str, list[T]]:
    rest, first = read(text)
    rest, others = _many0(read, rest)
    return rest, [first, *others]


def _take_until(text: str, token: str) -> tuple[str, str]:
    end = text.find(token)
    if end < 0:
        raise ParseError(f"expected {token!r} near {text[:30]!r}")
    return text[end:], text[:end]


def _optional_semicolon(text: str) -> str:
    try:
        return expect(skip_breaks(text), ";")
    except ParseError:
        return text


def syntax(text: str) -> tuple[str, Syntax]:
    """Read a ``syntax = "proto2";`` or ``syntax = "proto3";`` statement."""
    rest = skip_breaks(expect(text, "syntax"))
    rest = skip_breaks(expect(rest, "="))
    for candidate in Syntax:
        quoted = f'"{candidate.value}"'
        if rest.startswith(quoted):
            rest = expect(skip_breaks(rest[len(quoted):]), ";")
            return rest, candidate
    raise ParseError(f"expected a syntax version near {rest[:30]!r}")


def scan_syntax(text: str) -> Syntax:
    """Return the syntax declared at the very start of ``text``, proto2 otherwise."""
    try:
        return syntax(text)[1]
    except ParseError:
        return Syntax.PROTO2


def import_statement(text: str) -> tuple[str, PurePath]:
    """Read an ``import "path";`` statement."""
    rest = require_breaks(expect(text, "import"))
    rest, path = string(rest)
    return expect(skip_breaks(rest), ";"), PurePath(path)


def package(text: str) -> tuple[str, str]:
    """Read a ``package a.b.c;`` statement."""
    rest = require_breaks(expect(text, "package"))
    rest, name = qualifiable_name(rest)
    return expect(skip_breaks(rest), ";"), name


def extensions(text: str) -> tuple[str, Extensions]:
    """Read an ``extensions N to M;`` range, where M may be ``max``."""
    rest = require_breaks(expect(text, "extensions"))
    rest, start = integer(rest)
    rest = require_breaks(expect(skip_breaks(rest), "to"))
    rest, upper = _take_until(rest, ";")
    rest = expect(rest, ";")
    upper = upper.strip()
    if upper == "max":
        end = Extensions.MAX
    else:
        try:
            end = int(upper)
        except ValueError as exc:
            raise ParseError(f"invalid extensions upper bound {upper!r}") from exc
    return rest, Extensions(start, end)


def _num_range(text: str) -> tuple[str, list[int]]:
    rest, start = integer(text)
    rest = require_breaks(expect(require_breaks(rest), "to"))
    rest, end = integer(rest)
    return rest, list(range(start, end + 1))


def _single_num(text: str) -> tuple[str, list[int]]:
    rest, value = integer(text)
    return rest, [value]


def _comma(text: str) -> str:
    return skip_breaks(expect(skip_breaks(text), ","))


def _separated_list1(
    read: Callable[[str], tuple[str, T]], text: str
) -> tuple[str, list[T]]:
    rest, first = read(text)
    items = [first]
    while True:
        try:
            after, item = read(_comma(rest))
        except ParseError:
            return rest, items
        items.append(item)
        rest = after


def _num_or_range(text: str) -> tuple[str, list[int]]:
    try:
        return _num_range(text)
    except ParseError:
        return _single_num(text)


def reserved_nums(text: str) -> tuple[str, list[int]]:
    """Read ``reserved 1, 3 to 5;`` and return every reserved number."""
    rest = require_breaks(expect(text, "reserved"))
    rest, groups = _separated_list1(_num_or_range, rest)
    rest = expect(skip_breaks(rest), ";")
    return rest, [n for group in groups for n in group]


def reserved_names(text: str) -> tuple[str, list[str]]:
    """Read ``reserved "a", "b";`` and return the reserved names."""
    rest = require_breaks(expect(text, "reserved"))
    rest, names = _separated_list1(string, rest)
    return expect(skip_breaks(rest), ";"), names


def _key_val(text: str) -> tuple[str, tuple[str, str]]:
    rest = skip_breaks(expect(text, "["))
    rest, key = word(rest)
    rest = skip_breaks(expect(skip_breaks(rest), "="))
    rest, value = _take_until(rest, "]")
    return expect(rest, "]"), (key, value.strip())


def _label(text: str) -> tuple[str, Label]:
    for label in Label:
        if text.startswith(label.value):
            return text[len(label.value):], label
    raise ParseError(f"expected a field label near {text[:30]!r}")


def _map_field(text: str) -> tuple[str, MapType]:
    rest = skip_breaks(expect(skip_breaks(expect(text, "map")), "<"))
    rest, key = field_type(rest)
    rest, value = field_type(_comma(rest))
    return expect(skip_breaks(rest), ">"), MapType(key, value)


def field_type(text: str) -> tuple[str, FieldType]:
    """Read a scalar type keyword, a ``map<K, V>`` or a message/enum name."""
    for scalar in ScalarType:
        if text.startswith(scalar.value):
            return text[len(scalar.value):], scalar
    try:
        return _map_field(text)
    except ParseError:
        pass
    rest, name = qualifiable_name(text)
    return rest, NamedType(name)


def _parse_bool(key: str, value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ParseError(f"cannot parse {key} value {value!r}")


def _default_check(
    syntax_: Syntax, typ: FieldType, key_vals: list[tuple[str, str]]
) -> Optional[str]:
    for key, value in key_vals:
        if key != "default":
            continue
        if syntax_ is Syntax.PROTO2 and typ in (ScalarType.STRING, ScalarType.BYTES):
            for quote in ('"', "'"):
                if value.startswith(quote):
                    end = value.find(quote, 1)
                    if end >= 0:
                        return value[1:end]
            raise ParseError("Default value must be wrapped in inverted commas!")
        return value
    return None


def _field_generic(
    text: str,
    syntax_: Syntax,
    frequency_of: Callable[[Syntax, FieldType, Optional[Label]], Frequency],
) -> tuple[str, Field]:
    label: Optional[Label]
    try:
        rest, label = _label(text)
        rest = require_breaks(rest)
    except ParseError:
        rest, label = text, None
    rest, typ = field_type(rest)
    rest = require_breaks(rest)
    rest, name = word(rest)
    rest = skip_breaks(expect(skip_breaks(rest), "="))
    try:
        rest, number = integer(rest)
    except ParseError:
        rest, number = hex_integer(rest)
    rest, key_vals = _many0(_key_val, skip_breaks(rest))
    rest = expect(skip_breaks(rest), ";")
    packed = next((_parse_bool(k, v) for k, v in key_vals if k == "packed"), None)
    deprecated = next(
        (_parse_bool(k, v) for k, v in key_vals if k == "deprecated"), False
    )
    return rest, Field(
        name=name,
        frequency=frequency_of(syntax_, typ, label),
        number=number,
        typ=typ,
        default=_default_check(syntax_, typ, key_vals),
        packed=packed,
        boxed=False,
        deprecated=deprecated,
    )


def message_field(text: str, syntax: Syntax) -> tuple[str, Field]:
    """Read a field declaration inside a message or extend block."""
    return _field_generic(text, syntax, resolve_frequency)


def _oneof_frequency(
    syntax_: Syntax, _typ: FieldType, _label: Optional[Label]
) -> Frequency:
    if syntax_ is Syntax.PROTO2:
        return Proto2Frequency.REQUIRED
    return Proto3Frequency.OPTIONAL


def _padded(read: Callable[[str], tuple[str, T]]) -> Callable[[str], tuple[str, T]]:
    def padded(text: str) -> tuple[str, T]:
        rest, value = read(skip_breaks(text))
        return skip_breaks(rest), value

    return padded


def one_of(text: str, syntax: Syntax) -> tuple[str, OneOf]:
    """Read a ``oneof name { ... }`` group."""
    rest = require_breaks(expect(text, "oneof"))
    rest, name = word(rest)
    rest = expect(skip_breaks(rest), "{")
    rest, fields = _many1(
        _padded(lambda t: _field_generic(t, syntax, _oneof_frequency)), rest
    )
    return expect(rest, "}"), OneOf(name=name, fields=fields)


def _message_event(text: str, syntax_: Syntax) -> tuple[str, tuple[str, object]]:
    readers: list[tuple[str, Callable[[str], tuple[str, object]]]] = [
        ("reserved_nums", reserved_nums),
        ("reserved_names", reserved_names),
        ("field", lambda t: message_field(t, syntax_)),
        ("message", lambda t: message(t, syntax_)),
        ("enum", enumerator),
        ("oneof", lambda t: one_of(t, syntax_)),
        ("extensions", extensions),
        ("ignore", option_ignore),
        ("ignore", lambda t: (require_breaks(t), None)),
    ]
    for kind, read in readers:
        try:
            rest, value = read(text)
        except ParseError:
            continue
        return rest, (kind, value)
    raise ParseError(f"expected a message item near {text[:30]!r}")


def message(text: str, syntax: Syntax) -> tuple[str, Message]:
    """Read a ``message Name { ... }`` definition."""
    rest = require_breaks(expect(text, "message"))
    rest, name = word(rest)
    rest = expect(skip_breaks(rest), "{")
    rest, events = _many0(lambda t: _message_event(t, syntax), rest)
    rest = _optional_semicolon(expect(rest, "}"))
    msg = Message(name=name)
    for kind, value in events:
        if kind == "field":
            msg.fields.append(value)
        elif kind == "reserved_nums":
            msg.reserved_nums = value
        elif kind == "reserved_names":
            msg.reserved_names = value
        elif kind == "message":
            msg.messages.append(value)
        elif kind == "enum":
            msg.enums.append(value)
        elif kind == "oneof":
            msg.oneofs.append(value)
        elif kind == "extensions":
            msg.extensions = value
    return rest, msg


def _whitespace0(text: str) -> str:
    return text.lstrip(" \t\r\n")


def _deprecated_marker(text: str) -> tuple[str, None]:
    rest = _whitespace0(expect(text, "["))
    rest = _whitespace0(expect(rest, "deprecated"))
    rest = _whitespace0(expect(rest, "="))
    rest, _ = word(rest)
    return expect(_whitespace0(rest), "]"), None


def _enum_trailer(text: str) -> tuple[str, None]:
    try:
        return require_breaks(text), None
    except ParseError:
        return _deprecated_marker(text)


def _enum_field(text: str) -> tuple[str, tuple[str, int]]:
    rest, name = word(text)
    rest = skip_breaks(expect(skip_breaks(rest), "="))
    try:
        rest, value = hex_integer(rest)
    except ParseError:
        rest, value = integer(rest)
    rest, _ = _many0(_enum_trailer, rest)
    return expect(rest, ";"), (name, value)


def _enum_event(text: str) -> tuple[str, Optional[tuple[str, int]]]:
    try:
        return _enum_field(text)
    except ParseError:
        pass
    try:
        return option_ignore(text)
    except ParseError:
        return require_breaks(text), None


def enumerator(text: str) -> tuple[str, Enumerator]:
    """Read an ``enum Name { ... }`` definition."""
    rest = require_breaks(expect(text, "enum"))
    rest, name = word(rest)
    rest = expect(skip_breaks(rest), "{")
    rest, events = _many0(_enum_event, rest)
    rest = _optional_semicolon(expect(rest, "}"))
    return rest, Enumerator(name=name, fields=[e for e in events if e is not None])


def option_ignore(text: str) -> tuple[str, None]:
    """Skip an ``option ...;`` statement."""
    rest = require_breaks(expect(text, "option"))
    rest, _ = _take_until(rest, ";")
    return expect(rest, ";"), None


def _rpc_body_item(text: str) -> tuple[str, None]:
    try:
        return option_ignore(text)
    except ParseError:
        return expect(text, ";"), None


def rpc_function_declaration(text: str) -> tuple[str, RpcFunctionDeclaration]:
    """Read an ``rpc name(Arg) returns (Ret)`` declaration with ``;`` or a body."""
    rest = require_breaks(expect(text, "rpc"))
    rest, name = word(rest)
    rest = skip_breaks(expect(skip_breaks(rest), "("))
    rest, arg = word(rest)
    rest = expect(skip_breaks(rest), ")")
    rest = skip_breaks(expect(require_breaks(rest), "returns"))
    rest = skip_breaks(expect(rest, "("))
    rest, ret = word(rest)
    rest = skip_breaks(expect(skip_breaks(rest), ")"))
    if rest.startswith("{"):
        body = skip_breaks(expect(rest, "{"))
        body, _ = _many0(_rpc_body_item, body)
        rest = expect(skip_breaks(body), "}")
    else:
        rest = expect(rest, ";")
    return rest, RpcFunctionDeclaration(name=name, arg=arg, ret=ret)


def rpc_service(text: str) -> tuple[str, RpcService]:
    """Read a ``service Name { rpc ... }`` block."""
    rest = require_breaks(expect(text, "service"))
    rest, name = word(rest)
    rest = expect(skip_breaks(rest), "{")
    rest, functions = _many0(_padded(rpc_function_declaration), rest)
    return expect(rest, "}"), RpcService(service_name=name, functions=functions)


def extend(text: str, syntax: Syntax) -> tuple[str, Extend]:
    """Read an ``extend Name { fields }`` block."""
    rest = require_breaks(expect(text, "extend"))
    rest, name = qualifiable_name(rest)
    rest = expect(skip_breaks(rest), "{")
    rest, fields = _many1(_padded(lambda t: message_field(t, syntax)), rest)
    rest = _optional_semicolon(expect(rest, "}"))
    return rest, Extend(name=name, fields=fields)


def file_descriptor(text: str) -> tuple[str, FileDescriptor]:
    """Read as much of a .proto file as possible; return the unread rest too."""
    got_syntax = scan_syntax(text)
    desc = FileDescriptor()
    readers: list[tuple[str, Callable[[str], tuple[str, object]]]] = [
        ("syntax", syntax),
        ("import", import_statement),
        ("package", package),
        ("message", lambda t: message(t, got_syntax)),
        ("enum", enumerator),
        ("service", rpc_service),
        ("extend", lambda t: extend(t, got_syntax)),
        ("ignore", option_ignore),
        ("ignore", lambda t: (require_breaks(t), None)),
    ]
    while text:
        for kind, read in readers:
            try:
                rest, value = read(text)
            except ParseError:
                continue
            break
        else:
            break
        if rest == text:
            break
        text = rest
        if kind == "syntax":
            desc.syntax = value
        elif kind == "import":
            desc.import_paths.append(value)
        elif kind == "package":
            desc.package = value
        elif kind == "message":
            desc.messages.append(value)
        elif kind == "enum":
            desc.enums.append(value)
        elif kind == "service":
            desc.rpc_services.append(value)
        elif kind == "extend":
            desc.message_extends.append(value)
    return text, desc


def parse_file_descriptor(text: str) -> FileDescriptor:
    """Read a whole .proto file, raising if anything is left unread."""
    rest, desc = file_descriptor(text)
    if rest:
        raise TrailingGarbageError(rest)
    return desc