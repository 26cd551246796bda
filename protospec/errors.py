"""Exceptions raised while reading .proto files and preparing code generation."""

from __future__ import annotations

from collections.abc import Iterable


def _debug_str(text: str) -> str:
    """Quote a string with double quotes and escape it, the way debug output shows it."""
    escapes = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
    return '"' + "".join(escapes.get(ch, ch) for ch in text) + '"'


class ProtoError(Exception):
    """Base class of every error this package raises."""


class ParseError(ProtoError):
    """The parser could not make sense of its input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TrailingGarbageError(ProtoError):
    """Parsing stopped before the end of the file."""

    def __init__(self, remaining: str) -> None:
        super().__init__(f"parsing abandoned near: {_debug_str(remaining)}")
        self.remaining = remaining


class NoProtoError(ProtoError):
    """No .proto file was given."""

    def __init__(self) -> None:
        super().__init__("No .proto file provided")


class InputFileError(ProtoError):
    """An input file cannot be read."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Cannot read input file '{path}'")
        self.path = str(path)


class OutputFileError(ProtoError):
    """An output file cannot be used."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Cannot read output file '{path}'")
        self.path = str(path)


class OutputDirectoryError(ProtoError):
    """The output directory does not exist or is not a directory."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Cannot read output directory '{path}'")
        self.path = str(path)


class OutputMultipleInputsError(ProtoError):
    """A single output file was given for several input files."""

    def __init__(self) -> None:
        super().__init__("--output only allowed for single input file")


class InvalidMessageError(ProtoError):
    """A message failed its consistency checks."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            f"Message checks errored: {detail}\r\n"
            "Proto definition might be invalid or something got wrong in the parsing"
        )
        self.detail = detail


class InvalidImportError(ProtoError):
    """An import cannot be turned into a module import."""

    def __init__(self, import_path: object) -> None:
        super().__init__(
            f"Cannot convert protobuf import into module import:: {import_path}\r\n"
            "Import definition might be invalid, some characters may not be supported"
        )
        self.import_path = str(import_path)


class EmptyReadError(ProtoError):
    """Nothing usable was found in the input."""

    def __init__(self) -> None:
        super().__init__(
            "No message or enum were read;"
            "either definition might be invalid or there were only unsupported structures"
        )


class MessageOrEnumNotFoundError(ProtoError):
    """A referenced message or enum does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find message or enum {name}")
        self.name = name


class InvalidDefaultEnumError(ProtoError):
    """An enum field default names a variant that does not exist."""

    def __init__(self, variant: str) -> None:
        super().__init__(
            f"Enum field cannot be set to '{variant}', this variant does not exist"
        )
        self.variant = variant


class ReadFnMapError(ProtoError):
    """A map field reached a code path that only handles plain fields."""

    def __init__(self) -> None:
        super().__init__("There should be a special case for maps")


class CycleError(ProtoError):
    """Messages refer to each other without an optional field to break the cycle."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        listed = ", ".join(_debug_str(m) for m in self.messages)
        super().__init__(f"Messages [{listed}] are cyclic (missing an optional field)")


class OutputAndOutputDirError(ProtoError):
    """Both an output file and an output directory were given."""

    def __init__(self) -> None:
        super().__init__("only one of --output or --output_directory allowed")