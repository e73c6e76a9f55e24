"""Conversion between argument lists and a single quoted command line.

``to_string`` and ``split_quoted`` are inverses: for any list of strings
``split_quoted(to_string(args)) == args``, including empty strings and
strings with embedded whitespace or quote characters.
"""

from __future__ import annotations

from typing import Iterable

_QUOTES = "\"'"


def _needs_quotes(arg: str) -> bool:
    if not arg:
        return True
    return any(ch.isspace() or ch in _QUOTES for ch in arg)


def quote(arg: str) -> str:
    """Quote a single argument if it contains whitespace or quotes, or is empty."""
    if not _needs_quotes(arg):
        return arg
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_string(args: Iterable[str]) -> str:
    """Join arguments into one command line string.

    Args:
        args: The argument list, program first.

    Returns:
        The arguments separated by single spaces, each quoted where needed.
    """
    return " ".join(quote(str(arg)) for arg in args)


def split_quoted(text: str) -> list[str]:
    """Split a command line produced by :func:`to_string` back into arguments.

    Whitespace outside of quotes separates arguments. A single- or
    double-quoted run is kept as one piece and may directly adjoin unquoted
    text. Inside a quoted run a backslash escapes the enclosing quote
    character or another backslash; any other backslash is literal.

    Raises:
        ValueError: If a quoted run is not terminated.
    """
    args: list[str] = []
    current: list[str] = []
    in_token = False
    quote_char: str | None = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote_char is not None:
            if ch == "\\" and i + 1 < n and text[i + 1] in (quote_char, "\\"):
                current.append(text[i + 1])
                i += 2
                continue
            if ch == quote_char:
                quote_char = None
            else:
                current.append(ch)
        elif ch.isspace():
            if in_token:
                args.append("".join(current))
                current = []
                in_token = False
        elif ch in _QUOTES:
            quote_char = ch
            in_token = True
        else:
            current.append(ch)
            in_token = True
        i += 1
    if quote_char is not None:
        raise ValueError(f"Unterminated {quote_char} quote in: {text}")
    if in_token:
        args.append("".join(current))
    return args
