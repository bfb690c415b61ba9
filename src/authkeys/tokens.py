"""Quote-aware field splitting for authorized_keys lines.

Two separators are used:
- WHITESPACE splits a line into its fields (options, type, key, comment)
- COMMA splits the options field into single options

Double-quoted runs are atomic, and a backslash escapes the next character.
Backslashes and quotes are kept verbatim so a token can be written back
unchanged.
"""

from __future__ import annotations

WHITESPACE = "whitespace"
COMMA = "comma"


def _is_sep(char: str, sep: str) -> bool:
    if sep == WHITESPACE:
        return char.isspace()
    return char == ","


def strip_quotes(token: str) -> str:
    """Remove double quotes enclosing the whole token, if any."""
    if len(token) >= 2 and token[0] == token[-1] == '"':
        return token[1:-1]
    return token


def split_fields(text: str, sep: str = WHITESPACE, keep_quotes: bool = True) -> list[str]:
    """Split `text` on `sep`, honoring double quotes.

    An unterminated quote swallows the rest of the text into the open token.
    Runs of whitespace count as one separator; with COMMA every comma
    separates, so `a,,b` yields an empty middle token.
    """
    if sep not in (WHITESPACE, COMMA):
        raise ValueError(f"unknown separator: {sep!r}")

    text = text.strip()
    if not text:
        return []

    tokens: list[str] = []
    current: list[str] = []
    in_quote = False
    escaped = False

    for char in text:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == "\\":
            current.append(char)
            escaped = True
            continue
        if char == '"':
            current.append(char)
            in_quote = not in_quote
            continue
        if not in_quote and _is_sep(char, sep):
            if sep == WHITESPACE:
                if current:
                    tokens.append("".join(current))
                    current = []
            else:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)

    if current or sep == COMMA:
        tokens.append("".join(current))

    if not keep_quotes:
        tokens = [strip_quotes(t) for t in tokens]
    return tokens


def split_line(line: str) -> list[str]:
    """Split a whole line into whitespace-separated fields, quotes kept."""
    return split_fields(line, WHITESPACE, keep_quotes=True)


def split_options(text: str) -> list[str]:
    """Split an options field into comma-separated tokens, quotes kept."""
    return split_fields(text, COMMA, keep_quotes=True)
