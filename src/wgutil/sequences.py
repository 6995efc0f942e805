"""
Sequence Utilities — partitioning, rotation, cyclic indexing and
positional editing of ordered lists.

Every function takes a sequence and returns a NEW list; arguments are
never mutated.

Conventions:
    - "Cyclic" indices are reduced with a true modulo of the current
      length, so negative offsets wrap backwards.
    - Non-cyclic indices outside their documented range raise
      OutOfRangeError.
    - A missing element is not an error: lookups return None.
    - Errors raised by caller-supplied equality/key/predicate functions
      propagate unchanged.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence

from wgutil.errors import OutOfRangeError


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class Match:
    """
    Options controlling how elements are compared.

    Properties:
        equality: Two-argument predicate deciding whether values match
        key: Applied to each sequence element before comparison

    When searching for a given element, `key` is applied to the sequence
    elements only; the searched-for element is compared as given.
    When comparing elements of the same sequence with each other
    (duplicate detection), `key` is applied to both sides.
    """

    equality: Callable[[Any, Any], bool] = operator.eq
    key: Callable[[Any], Any] = _identity

    def position(self, elt: Any, seq: Sequence[Any]) -> Optional[int]:
        """Index of the first element matching `elt`, or None."""
        for index, item in enumerate(seq):
            if self.equality(elt, self.key(item)):
                return index
        return None


DEFAULT_MATCH = Match()
IDENTITY_MATCH = Match(equality=operator.is_)


class Partition:
    """
    Lazy, restartable view of `seq` split into sub-lists.

    Each chunk holds up to `size` elements; the start of consecutive
    chunks advances by `step`. The final chunk may be shorter. Iterating
    the object again starts over from the beginning.
    """

    def __init__(self, seq: Sequence[Any], size: int = 2, step: Optional[int] = None):
        if step is None:
            step = size
        if size <= 0:
            raise OutOfRangeError(f"Partition size must be positive, got {size}")
        if step <= 0:
            raise OutOfRangeError(f"Partition step must be positive, got {step}")
        self.seq = list(seq)
        self.size = size
        self.step = step

    def __iter__(self) -> Iterator[List[Any]]:
        start = 0
        while start < len(self.seq):
            yield self.seq[start:start + self.size]
            start += self.step

    def __repr__(self) -> str:
        return f"Partition(size={self.size}, step={self.step}, chunks={list(self)!r})"


def partition(seq: Sequence[Any], size: int = 2, step: Optional[int] = None) -> Partition:
    """Split `seq` into chunks of `size`, advancing by `step` (defaults to `size`)."""
    return Partition(seq, size, step)


def take_first(seq: Sequence[Any], n: int) -> List[Any]:
    """Return the first `n` elements (all of them if `n` exceeds the length)."""
    if n < 0:
        raise OutOfRangeError(f"Cannot take a negative number of elements: {n}")
    return list(seq[:n])


def take_last(seq: Sequence[Any], n: int) -> List[Any]:
    """Return the last `n` elements (all of them if `n` exceeds the length)."""
    if n < 0:
        raise OutOfRangeError(f"Cannot take a negative number of elements: {n}")
    if n == 0:
        return []
    return list(seq[-n:])


def nth_from_end(seq: Sequence[Any], n: int) -> Any:
    """Return the element `n` places from the end (0 is the last element)."""
    if n < 0 or n >= len(seq):
        raise OutOfRangeError(f"Index {n} from end is out of range for length {len(seq)}")
    return seq[len(seq) - 1 - n]


def last(seq: Sequence[Any]) -> Any:
    """Return the last element, or None for an empty sequence."""
    if not seq:
        return None
    return seq[-1]


def take_while(pred: Callable[[Any], Any], seq: Sequence[Any]) -> List[Any]:
    """Longest prefix whose elements all satisfy `pred`."""
    result = []
    for item in seq:
        if not pred(item):
            break
        result.append(item)
    return result


def int_range(start: int, end: int) -> List[int]:
    """Integers from `start` up to but excluding `end`."""
    return list(range(start, end))


def rotate(seq: Sequence[Any], offset: int = 1) -> List[Any]:
    """
    Move the first `offset mod len` elements to the end.

    A negative offset rotates the other way. An empty sequence rotates
    to an empty list.
    """
    items = list(seq)
    if not items:
        return []
    k = offset % len(items)
    return items[k:] + items[:k]


def center_rotate(seq: Sequence[Any]) -> List[Any]:
    """
    Rotate so the original first element sits at the middle index.

    For an even length the element lands just before the center.
    """
    items = list(seq)
    if not items:
        return []
    return rotate(items, -((len(items) - 1) // 2))


def insert_before(elt: Any, seq: Sequence[Any], index: int) -> List[Any]:
    """Insert `elt` so that it ends up at `index` (0 prepends, len appends)."""
    items = list(seq)
    if index < 0 or index > len(items):
        raise OutOfRangeError(f"Insert index {index} is out of range for length {len(items)}")
    items.insert(index, elt)
    return items


def insert_after(elt: Any, seq: Sequence[Any], index: int) -> List[Any]:
    """Insert `elt` right after position `index` (-1 prepends)."""
    return insert_before(elt, seq, index + 1)


def remove_nth(seq: Sequence[Any], index: int) -> List[Any]:
    """Return a copy of `seq` without the element at `index`."""
    if index < 0 or index >= len(seq):
        raise OutOfRangeError(f"Index {index} is out of range for length {len(seq)}")
    items = list(seq)
    del items[index]
    return items


def move_element(elt: Any, seq: Sequence[Any], index: int, match: Match = DEFAULT_MATCH) -> List[Any]:
    """
    Move the first element matching `elt` so it sits before `index`.

    `index` refers to the sequence with `elt` already removed. When `elt`
    is not present the sequence is left as is and `elt` is simply
    inserted at `index`.
    """
    pos = match.position(elt, seq)
    if pos is None:
        return insert_before(elt, seq, index)
    return insert_before(seq[pos], remove_nth(seq, pos), index)


def cyclic_nth(seq: Sequence[Any], n: int) -> Any:
    """Element at `n mod len`; raises OutOfRangeError for an empty sequence."""
    if not seq:
        raise OutOfRangeError("Cyclic index into an empty sequence")
    return seq[n % len(seq)]


def cyclic_offset(elt: Any, seq: Sequence[Any], n: int, match: Match = DEFAULT_MATCH) -> Optional[List[Any]]:
    """
    Move `elt` `n` places along the sequence, wrapping around the ends.

    Returns None when `elt` is not present.
    """
    pos = match.position(elt, seq)
    if pos is None:
        return None
    return move_element(elt, seq, (pos + n) % len(seq), match=match)


def cyclic_nth_from(elt: Any, seq: Sequence[Any], n: int, match: Match = DEFAULT_MATCH) -> Any:
    """
    Element `n` places after `elt`, wrapping around the ends.

    Returns None when `elt` is not present.
    """
    pos = match.position(elt, seq)
    if pos is None:
        return None
    return cyclic_nth(seq, pos + n)


def swap(elt1: Any, elt2: Any, seq: Sequence[Any], match: Match = DEFAULT_MATCH) -> Optional[List[Any]]:
    """Copy of `seq` with `elt1` and `elt2` exchanged, or None if either is absent."""
    pos1 = match.position(elt1, seq)
    pos2 = match.position(elt2, seq)
    if pos1 is None or pos2 is None:
        return None
    items = list(seq)
    items[pos1], items[pos2] = items[pos2], items[pos1]
    return items


def has_duplicates(seq: Sequence[Any], match: Match = DEFAULT_MATCH) -> Any:
    """
    Return the first element that occurs again later in `seq`.

    Elements are compared on `match.key(element)` using `match.equality`.
    Returns None when every element is unique. A duplicated None element
    also returns None, so callers whose sequences may hold None must
    check for repeated None themselves.
    """
    keys = [match.key(item) for item in seq]
    for i, key in enumerate(keys):
        for later in keys[i + 1:]:
            if match.equality(key, later):
                return seq[i]
    return None


def union_preserving_order(*seqs: Sequence[Any], match: Match = DEFAULT_MATCH) -> List[Any]:
    """Elements of all `seqs` in order of first appearance, without repeats."""
    result: List[Any] = []
    seen: List[Any] = []
    for seq in seqs:
        for item in seq:
            key = match.key(item)
            if not any(match.equality(key, other) for other in seen):
                seen.append(key)
                result.append(item)
    return result


__all__ = [
    "Match",
    "DEFAULT_MATCH",
    "IDENTITY_MATCH",
    "Partition",
    "partition",
    "take_first",
    "take_last",
    "nth_from_end",
    "last",
    "take_while",
    "int_range",
    "rotate",
    "center_rotate",
    "insert_before",
    "insert_after",
    "remove_nth",
    "move_element",
    "cyclic_nth",
    "cyclic_offset",
    "cyclic_nth_from",
    "swap",
    "has_duplicates",
    "union_preserving_order",
]
