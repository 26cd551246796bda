"""Token-level readers for .proto source text.

Every reader takes the text still to be read and returns what is left after
the token, together with the token's value where it has one. A reader that
does not find its token raises :class:`~protospec.errors.ParseError`.
"""

from __future__ import annotations

import re

from .errors import ParseError

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_QUALIFIABLE_NAME = re.compile(
    r"\.?[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*"
)
_DIGITS = re.compile(r"[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")
_WHITESPACE = re.compile(r"[ \t\r\n]+")

_I32_MAX = 2**31 - 1

_CONTEXT_LEN = 30


def _fail(what: str, text: str) -> ParseError:
    near = text[:_CONTEXT_LEN]
    return ParseError(f"expected {what} near {near!r}")


def word(text: str) -> tuple[str, str]:
    """Read an identifier: a letter or ``_`` followed by letters, digits and ``_``."""
    match = _WORD.match(text)
    if match is None:
        raise _fail("an identifier", text)
    return text[match.end():], match.group()


def qualifiable_name(text: str) -> tuple[str, str]:
    """Read a name made of dot-separated identifiers, with an optional leading dot."""
    match = _QUALIFIABLE_NAME.match(text)
    if match is None:
        raise _fail("a name", text)
    name = match.group()
    if name.endswith(".") or ".." in name:
        raise _fail("a name", text)
    return text[match.end():], name


def integer(text: str) -> tuple[str, int]:
    """Read a non-negative decimal integer that fits in a signed 32-bit value."""
    match = _DIGITS.match(text)
    if match is None:
        raise _fail("an integer", text)
    value = int(match.group())
    if value > _I32_MAX:
        raise _fail("a 32-bit integer", text)
    return text[match.end():], value


def hex_integer(text: str) -> tuple[str, int]:
    """Read a ``0x``-prefixed hexadecimal integer that fits in a signed 32-bit value."""
    rest = expect(text, "0x")
    match = _HEX_DIGITS.match(rest)
    if match is None:
        raise _fail("hexadecimal digits", rest)
    value = int(match.group(), 16)
    if value > _I32_MAX:
        raise _fail("a 32-bit integer", text)
    return rest[match.end():], value


def comment(text: str) -> str:
    """Skip a ``//`` comment up to, but not including, the line ending."""
    rest = expect(text, "//")
    for pos, ch in enumerate(rest):
        if ch == "\n":
            return rest[pos:]
        if ch == "\r":
            if rest[pos + 1:pos + 2] == "\n":
                return rest[pos:]
            raise _fail("a line ending", rest[pos:])
    return ""


def block_comment(text: str) -> str:
    """Skip a ``/* ... */`` comment; nesting is not supported."""
    rest = expect(text, "/*")
    end = rest.find("*/")
    if end < 0:
        raise _fail("the end of a block comment", text)
    return rest[end + 2:]


def string(text: str) -> tuple[str, str]:
    """Read a double-quoted string; its content is taken verbatim."""
    rest = expect(text, '"')
    end = rest.find('"')
    if end < 0:
        raise _fail("a closing quote", text)
    return rest[end + 1:], rest[:end]


def _break(text: str) -> str:
    """Skip one piece of whitespace or one comment."""
    match = _WHITESPACE.match(text)
    if match is not None:
        return text[match.end():]
    for reader in (comment, block_comment):
        try:
            return reader(text)
        except ParseError:
            continue
    raise _fail("whitespace or a comment", text)


def skip_breaks(text: str) -> str:
    """Skip any amount of whitespace and comments, possibly none."""
    while True:
        try:
            rest = _break(text)
        except ParseError:
            return text
        if rest == text:
            return text
        text = rest


def require_breaks(text: str) -> str:
    """Skip whitespace and comments, requiring at least one."""
    return skip_breaks(_break(text))


def expect(text: str, token: str) -> str:
    """Skip ``token``, which must come first in ``text``."""
    if not text.startswith(token):
        raise _fail(repr(token), text)
    return text[len(token):]