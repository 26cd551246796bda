"""Identifiers that clash with the generated code and must be renamed."""

from __future__ import annotations

RESERVED_IDENTIFIERS: frozenset[str] = frozenset(
    {
        "abstract", "alignof", "as", "become", "bool", "box", "Box", "break",
        "BytesReader", "const", "continue", "crate", "Cow", "Default", "do",
        "else", "enum", "Err", "extern", "f32", "f64", "false", "final", "fn",
        "for", "HashMap", "i32", "i64", "if", "impl", "in", "let", "loop",
        "match", "mod", "move", "mut", "None", "MessageWrite", "offsetof", "Ok",
        "Option", "override", "priv", "pub", "pure", "ref", "Result", "return",
        "self", "Self", "sizeof", "Some", "static", "str", "String", "struct",
        "super", "trait", "true", "type", "typeof", "u8", "u32", "u64",
        "unsafe", "unsized", "use", "Vec", "virtual", "where", "while", "Write",
        "Writer", "yield",
    }
)

SUFFIX = "_pb"


def is_keyword(ident: str) -> bool:
    """Return True if ``ident`` is a reserved identifier."""
    return ident in RESERVED_IDENTIFIERS


def sanitize_keyword(ident: str) -> str:
    """Append ``_pb`` to every dot-separated part of ``ident`` that is reserved."""
    return ".".join(
        part + SUFFIX if is_keyword(part) else part for part in ident.split(".")
    )