"""
Sexp Persistence — canonical printed form of value trees, and file I/O.

Printed syntax:
    int          42, -7
    float        1.5, 1e+20, 1.0e+INF, -1.0e+INF, 0.0e+NaN
    str          "text with \\" and \\\\ escaped"
    bool         t / nil
    Symbol       name, with special characters backslash-escaped;
                 the empty symbol prints as ##
    Pair         (key . value)
    list/tuple   (a b c); the empty list prints as nil
    None         nil
    record       anything with a `to_form()` method prints as that form

Reading is the inverse: `nil` and `()` read as [], `t` reads as True,
`(x . y)` reads as Pair(x, y). Comments (`;` to end of line) are ignored.
Dotted lists with more than one element before the dot are rejected.

Neither printing nor reading is recursive, so nesting depth is limited
only by memory. Cyclic structures are not supported.
"""

from __future__ import annotations

import math
import os
import re
from typing import Any, List, Union

from wgutil.errors import SexpParseError, SexpPrintError
from wgutil.forms import Pair, Symbol


ENCODING = "utf-8"

PathLike = Union[str, "os.PathLike[str]"]


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------

_SYMBOL_SPECIAL_RE = re.compile(r"""[\s()"\\;'`,\[\]]""")
_NUMBER_LIKE_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?(?:\d+|INF|NaN))?$")


class _Raw:
    """Literal output text queued on the printer stack."""

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text


def _print_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _print_symbol(symbol: Symbol) -> str:
    name = symbol.name
    if name == "":
        return "##"
    escaped = _SYMBOL_SPECIAL_RE.sub(lambda m: "\\" + m.group(0), name)
    if escaped == name and (name in ("nil", "t", ".", "##") or _NUMBER_LIKE_RE.match(name)):
        escaped = "\\" + name
    return escaped


def _print_float(value: float) -> str:
    if math.isnan(value):
        return "0.0e+NaN"
    if math.isinf(value):
        return "1.0e+INF" if value > 0 else "-1.0e+INF"
    text = repr(value)
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def _print_atom(value: Any) -> str:
    if value is None or value is False:
        return "nil"
    if value is True:
        return "t"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _print_float(value)
    if isinstance(value, str):
        return _print_string(value)
    if isinstance(value, Symbol):
        return _print_symbol(value)
    raise SexpPrintError(f"No printed form for {type(value).__name__}: {value!r}")


def print_form(value: Any) -> str:
    """
    Return the canonical printed form of `value`.

    Raises:
        SexpPrintError: If the tree contains a value with no printed form
    """
    out: List[str] = []
    stack: List[Any] = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, _Raw):
            out.append(item.text)
        elif isinstance(item, Pair):
            out.append("(")
            stack.extend([_Raw(")"), item.value, _Raw(" . "), item.key])
        elif isinstance(item, (list, tuple)) and item:
            out.append("(")
            stack.append(_Raw(")"))
            for index in range(len(item) - 1, -1, -1):
                stack.append(item[index])
                if index:
                    stack.append(_Raw(" "))
        elif isinstance(item, (list, tuple)):
            out.append("nil")
        elif hasattr(item, "to_form"):
            stack.append(item.to_form())
        else:
            out.append(_print_atom(item))
    return "".join(out)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

_TOKEN_RE = re.compile(
    r"""
      (?P<space>\s+|;[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<atom>(?:[^\s()"\\;'`,\[\]]|\\.)+)
    | (?P<bad>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_INT_RE = re.compile(r"^[+-]?\d+\.?$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:e[+-]?\d+)?$")
_STRING_ESCAPES = {"n": "\n", "t": "\t", "\n": ""}
_SPECIAL_FLOATS = {
    "1.0e+INF": math.inf,
    "-1.0e+INF": -math.inf,
    "0.0e+NaN": math.nan,
    "-0.0e+NaN": math.nan,
}


class _Dot:
    """Marker for a standalone `.` while a list is being read."""

    def __repr__(self) -> str:
        return "."


_DOT = _Dot()


def _position(text: str, offset: int) -> str:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return f"line {line}, column {column}"


def _read_string(token: str) -> str:
    body = token[1:-1]
    return re.sub(r"\\(.)", lambda m: _STRING_ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def _read_atom(token: str) -> Any:
    if "\\" in token:
        return Symbol(re.sub(r"\\(.)", r"\1", token, flags=re.DOTALL))
    if token == ".":
        return _DOT
    if token == "##":
        return Symbol("")
    if token == "nil":
        return []
    if token == "t":
        return True
    if _INT_RE.match(token):
        return int(token.rstrip("."))
    if token in _SPECIAL_FLOATS:
        return _SPECIAL_FLOATS[token]
    if _FLOAT_RE.match(token):
        return float(token)
    return Symbol(token)


def _close_list(items: List[Any], text: str, offset: int) -> Any:
    dots = [index for index, item in enumerate(items) if item is _DOT]
    if not dots:
        return items
    if dots != [1] or len(items) != 3:
        raise SexpParseError(f"Malformed dotted pair at {_position(text, offset)}")
    return Pair(items[0], items[2])


def read_form_string(text: str) -> Any:
    """
    Read exactly one printed form from `text`.

    Raises:
        SexpParseError: For empty input, unbalanced parentheses, a stray
            dot, an unterminated string or more than one form
    """
    stack: List[List[Any]] = [[]]
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        token = match.group(kind)
        if kind == "space":
            continue
        if kind == "open":
            stack.append([])
        elif kind == "close":
            if len(stack) == 1:
                raise SexpParseError(f"Unexpected ')' at {_position(text, match.start())}")
            items = stack.pop()
            stack[-1].append(_close_list(items, text, match.start()))
        elif kind == "string":
            stack[-1].append(_read_string(token))
        elif kind == "atom":
            stack[-1].append(_read_atom(token))
        elif token == '"':
            raise SexpParseError(f"Unterminated string at {_position(text, match.start())}")
        else:
            raise SexpParseError(f"Unexpected character {token!r} at {_position(text, match.start())}")

    if len(stack) > 1:
        raise SexpParseError("Missing closing parenthesis at end of input")
    forms = stack[0]
    if not forms:
        raise SexpParseError("No form to read")
    if len(forms) > 1:
        raise SexpParseError(f"Expected one form, found {len(forms)}")
    if forms[0] is _DOT:
        raise SexpParseError("Stray '.' outside a list")
    return forms[0]


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def write_form(value: Any, filepath: PathLike) -> PathLike:
    """
    Print `value` and write it to `filepath`, replacing any existing file.

    The value is printed before the file is opened, so a value with no
    printed form leaves an existing file untouched.

    Returns:
        filepath, so a write can be chained into `read_form`
    """
    text = print_form(value)
    with open(filepath, "w", encoding=ENCODING) as f:
        f.write(text)
        f.write("\n")
    return filepath


def read_form(filepath: PathLike) -> Any:
    """
    Read the single form stored in `filepath`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SexpParseError: If the contents are not exactly one form
    """
    with open(filepath, "r", encoding=ENCODING) as f:
        content = f.read()
    try:
        return read_form_string(content)
    except SexpParseError as e:
        raise SexpParseError(f"{os.fspath(filepath)}: {e}") from e


__all__ = [
    "ENCODING",
    "print_form",
    "read_form_string",
    "write_form",
    "read_form",
]
