"""
Base-36 integer encoding (digits 0-9 then A-Z, most significant first).

Used to build short, sortable unique ids for session records.
"""

import time
from typing import Optional

from wgutil.errors import OutOfRangeError


DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE = len(DIGITS)


def _digit(value: int) -> str:
    if value < 0 or value >= BASE:
        raise OutOfRangeError(f"No base-36 digit for {value}")
    return DIGITS[value]


def encode_base36(i: int, min_length: int = 0) -> str:
    """
    Encode a non-negative integer in base 36.

    Args:
        i: Integer to encode (must be >= 0)
        min_length: Left-pad the result with "0" up to this length

    Returns:
        The encoded string, e.g. 35 -> "Z", 36 -> "10", (5, 3) -> "005"

    Raises:
        OutOfRangeError: If `i` is negative
    """
    if i < 0:
        raise OutOfRangeError(f"Cannot base-36 encode a negative integer: {i}")
    digits = []
    while True:
        i, remainder = divmod(i, BASE)
        digits.append(_digit(remainder))
        if i == 0:
            break
    return "".join(reversed(digits)).rjust(min_length, "0")


def decode_base36(text: str) -> int:
    """
    Decode a base-36 string produced by `encode_base36`.

    Lower-case digits are accepted. Raises OutOfRangeError for an empty
    string or a character outside 0-9/A-Z.
    """
    if not text:
        raise OutOfRangeError("Cannot decode an empty base-36 string")
    value = 0
    for char in text.upper():
        digit = DIGITS.find(char)
        if digit < 0:
            raise OutOfRangeError(f"Invalid base-36 digit: {char!r}")
        value = value * BASE + digit
    return value


def make_uid(counter: int, now: Optional[float] = None) -> str:
    """
    Build a unique id from the current time and a caller-held counter.

    Format: 7 digits of seconds, 4 digits of microseconds, "-", counter.
    Ids made later sort after earlier ones while seconds fit in 7 digits.
    """
    if now is None:
        now = time.time()
    seconds, micros = divmod(int(round(now * 1_000_000)), 1_000_000)
    return f"{encode_base36(seconds, 7)}{encode_base36(micros, 4)}-{encode_base36(counter)}"


__all__ = ["DIGITS", "encode_base36", "decode_base36", "make_uid"]
