"""
Value-tree types shared by alists, records and sexp persistence.

A "form" is any value the sexp printer can write and the reader can
rebuild:
    - int, float
    - str (printed as a quoted string)
    - bool (printed as t / nil)
    - Symbol
    - Pair (printed as a dotted pair)
    - list of forms (printed as a parenthesized list)

ARCHITECTURAL RULE:
    These objects carry structure only.
    Printing and parsing belong in `wgutil.sexp`.
"""

from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class Symbol:
    """
    An interned-by-value identifier.

    Two symbols are equal when their names are equal. A symbol is never
    equal to a string with the same text; that distinction survives a
    print/read round trip.

    Examples:
        Symbol("wg-workgroup")
        Symbol(":name")   (keyword-style symbol)

    Properties:
        name: The symbol's printed name
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Pair:
    """
    A single key/value association, printed as `(key . value)`.

    Alists are plain lists of Pair. The pair is immutable: "replacing" a
    value in an alist builds a new Pair at the same position.

    Properties:
        key: Association key (any form, usually a Symbol or str)
        value: Associated value (any form)
    """

    key: Any
    value: Any


Form = Union[int, float, str, bool, Symbol, Pair, List[Any]]


def is_nil(value: Any) -> bool:
    """
    Return True for the values treated as empty/unsatisfied.

    None, False and empty lists/tuples are nil. Zero and the empty string
    are NOT nil.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


__all__ = ["Symbol", "Pair", "Form", "is_nil"]
