"""Decoding and quoting of JavaScript string literal text."""

import re
import string

from sbdice.errors import DecodeFailure

_SINGLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Legacy octal escape: \0-\377
_OCTAL_ESCAPE = re.compile(r"[0-3][0-7]{0,2}|[4-7][0-7]?")

_HEX_DIGITS = frozenset(string.hexdigits)


def _is_hex(text: str) -> bool:
    return bool(text) and all(c in _HEX_DIGITS for c in text)


def _join_surrogates(text: str) -> str:
    """Combine escaped surrogate pairs into single code points."""
    try:
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise DecodeFailure("String contains a lone surrogate") from e


def decode_string_literal(raw: str, escapes: bool = True) -> str:
    """Decode the source text of a quoted string literal.

    Args:
        raw: Source text including the surrounding quotes.
        escapes: Whether backslash escapes apply. JSX attribute strings
            take their content verbatim.

    Returns:
        The string value as plain text.

    Raises:
        DecodeFailure: If the text is not a quoted string, holds a malformed
            escape, or decodes to a lone surrogate.
    """
    if len(raw) < 2 or raw[0] not in "'\"" or raw[-1] != raw[0]:
        raise DecodeFailure(f"Not a quoted string: {raw[:20]!r}")

    body = raw[1:-1]
    if not escapes:
        return body

    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        i += 1
        if i >= n:
            raise DecodeFailure("Dangling backslash at end of string")
        ch = body[i]

        if ch in _SINGLE_ESCAPES:
            out.append(_SINGLE_ESCAPES[ch])
            i += 1
        elif ch == "\r":
            # Line continuation, \r\n counts as one terminator
            i += 2 if body[i + 1:i + 2] == "\n" else 1
        elif ch in "\n\u2028\u2029":
            i += 1
        elif ch == "x":
            digits = body[i + 1:i + 3]
            if len(digits) != 2 or not _is_hex(digits):
                raise DecodeFailure(f"Malformed hex escape at offset {i - 1}")
            out.append(chr(int(digits, 16)))
            i += 3
        elif ch == "u":
            if body[i + 1:i + 2] == "{":
                end = body.find("}", i + 2)
                digits = body[i + 2:end] if end != -1 else ""
                if not _is_hex(digits) or int(digits, 16) > 0x10FFFF:
                    raise DecodeFailure(f"Malformed code point escape at offset {i - 1}")
                out.append(chr(int(digits, 16)))
                i = end + 1
            else:
                digits = body[i + 1:i + 5]
                if len(digits) != 4 or not _is_hex(digits):
                    raise DecodeFailure(f"Malformed unicode escape at offset {i - 1}")
                out.append(chr(int(digits, 16)))
                i += 5
        elif ch in "01234567":
            # Always matches: body[i] is an octal digit
            octal = _OCTAL_ESCAPE.match(body, i).group()
            out.append(chr(int(octal, 8)))
            i += len(octal)
        else:
            out.append(ch)
            i += 1

    return _join_surrogates("".join(out))


_QUOTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def quote_string(value: str, escapes: bool = True) -> str:
    """Render a value as a string literal.

    Uses double quotes. JSX attribute strings (no escapes) switch to single
    quotes when the value holds a double one, and become a `{"..."}`
    expression container when it holds both kinds.
    """
    if not escapes:
        if '"' not in value:
            return f'"{value}"'
        if "'" not in value:
            return f"'{value}'"
        return "{" + quote_string(value) + "}"

    parts = ['"']
    for ch in value:
        if ch in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"\\x{ord(ch):02x}")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)
