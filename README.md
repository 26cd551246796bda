# protospec

`protospec` reads protobuf schema files (`.proto`, proto2 and proto3) into a
plain Python model made of dataclasses and enums, and prepares the per-file
settings that a code generator needs.

## Installation

```
pip install protospec
```

## Parsing a schema

```python
from protospec.parser import parse_file_descriptor

source = '''syntax = "proto3";
package shop.orders;

message Order {
    uint64 id = 1;
    repeated string items = 2;
    map<string, int32> quantities = 3;
    oneof payment {
        string card = 4;
        string voucher = 5;
    }
}

service Orders {
    rpc Place(Order) returns (Order);
}
'''

desc = parse_file_descriptor(source)
print(desc.package)                                  # shop.orders
print([f.name for f in desc.messages[0].fields])     # ['id', 'items', 'quantities']
print(desc.messages[0].oneofs[0].name)               # payment
print(desc.rpc_services[0].functions[0].name)        # Place
```

`parse_file_descriptor` returns a `protospec.model.FileDescriptor` and raises
`protospec.errors.TrailingGarbageError` when the parser stops before the end of
the input. The lower-level `protospec.parser.file_descriptor` returns the
unparsed remainder together with the descriptor instead of raising.

The syntax used to work out field frequencies is the one declared by a
`syntax = ...;` statement at the very start of the text; without one, proto2
is assumed (`protospec.parser.scan_syntax`).

Comments (`//` and `/* */`), `option` statements, `reserved` numbers, ranges
and names, `extensions` ranges (including `to max`), `extend` blocks, nested
messages and enums, `oneof` groups, `service`/`rpc` declarations, imports and
the field options `default`, `packed` and `deprecated` are understood.

The individual readers in `protospec.parser` (`message`, `enumerator`,
`one_of`, `message_field`, `field_type`, `rpc_service`, ...) and the token
readers in `protospec.lexer` (`word`, `qualifiable_name`, `integer`,
`hex_integer`, `string`, `comment`, `block_comment`, `skip_breaks`,
`require_breaks`, `expect`) can also be used on their own. Each takes the text
still to be read and returns the rest of it along with what was read; a reader
that does not find what it expects raises `protospec.errors.ParseError`.

## The model

`protospec.model` holds `FileDescriptor`, `Message`, `Field`, `OneOf`,
`Enumerator`, `Extensions`, `Extend`, `RpcService` and
`RpcFunctionDeclaration`. Field types are `ScalarType` members, `MapType` or
`NamedType`; a field's frequency is a `Proto2Frequency` or `Proto3Frequency`
member, as computed by `resolve_frequency(syntax, field_type, label)`.

## Names

`protospec.keywords.sanitize_keyword` appends `_pb` to identifiers that clash
with reserved words of the generated code, part by part for dotted names;
`is_keyword` tells whether a single identifier is reserved:

```python
from protospec.keywords import sanitize_keyword

sanitize_keyword("type")        # "type_pb"
sanitize_keyword("foo.self")    # "foo.self_pb"
```

## Generator configuration

```python
from protospec.config import Options, build_configs

configs = build_configs(["schema/orders.proto"], None, "out", [], Options(single_module=True))
for config in configs:
    print(config.in_file, "->", config.out_file)   # schema/orders.proto -> out/orders.rs
```

`build_configs` returns one `Config` per input file. It raises a dedicated
subclass of `protospec.errors.ProtoError` when there are no input files
(`NoProtoError`), an input file does not exist (`InputFileError`), the output
directory is not a directory (`OutputDirectoryError`), a single output file is
given for several inputs (`OutputMultipleInputsError`), or both an output file
and an output directory are given (`OutputAndOutputDirError`). The current
directory is always added to the include paths. `Config.with_options` returns a
copy with some `Options` fields changed.

## What this package does not do

`protospec` parses schemas and prepares configurations only. It does not
resolve imports across files, check messages for cycles, or generate any code,
and it has no command-line tool.