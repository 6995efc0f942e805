"""
Association lists — ordered key/value stores backed by a list of Pair.

An alist is an ordinary `list` of `wgutil.forms.Pair`, so it prints and
reads back through `wgutil.sexp` without conversion.

Ordering policy:
    - `make_alist` keeps argument order.
    - `put` on an existing key replaces that pair in place.
    - `put` on a new key PREPENDS the pair: the most recently added key
      comes first when iterating.

`put` and `remove` return new lists; the argument is never mutated.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from wgutil.forms import Pair
from wgutil.sequences import DEFAULT_MATCH, Match, partition


Alist = List[Pair]


def _key_position(alist: Sequence[Pair], key: Any, match: Match) -> Optional[int]:
    for index, pair in enumerate(alist):
        if match.equality(key, match.key(pair.key)):
            return index
    return None


def make_alist(*keys_and_values: Any) -> Alist:
    """
    Build an alist from interleaved keys and values.

    Example:
        make_alist("name", "main", "uid", 7)
        -> [Pair("name", "main"), Pair("uid", 7)]
    """
    if len(keys_and_values) % 2:
        raise ValueError("make_alist needs an even number of arguments")
    return [Pair(key, value) for key, value in partition(keys_and_values, 2)]


def from_dict(mapping: Dict[Any, Any]) -> Alist:
    """Alist with the dict's items in insertion order."""
    return [Pair(k, v) for k, v in mapping.items()]


def to_dict(alist: Sequence[Pair]) -> Dict[Any, Any]:
    """Dict view of an alist; for repeated keys the first pair wins."""
    result: Dict[Any, Any] = {}
    for pair in alist:
        result.setdefault(pair.key, pair.value)
    return result


def get(alist: Sequence[Pair], key: Any, default: Any = None, match: Match = DEFAULT_MATCH) -> Any:
    """Value of the first pair whose key matches `key`, else `default`."""
    pos = _key_position(alist, key, match)
    if pos is None:
        return default
    return alist[pos].value


def copy_shallow(alist: Sequence[Pair]) -> Alist:
    """New alist of new pairs holding the same key and value objects."""
    return [Pair(pair.key, pair.value) for pair in alist]


def put(alist: Sequence[Pair], key: Any, value: Any, match: Match = DEFAULT_MATCH) -> Alist:
    """
    Associate `key` with `value`.

    An existing pair keeps its position; a new pair is prepended.
    """
    result = list(alist)
    pos = _key_position(result, key, match)
    if pos is None:
        return [Pair(key, value)] + result
    result[pos] = Pair(result[pos].key, value)
    return result


def remove(alist: Sequence[Pair], key: Any, match: Match = DEFAULT_MATCH) -> Alist:
    """Copy of `alist` without the first pair matching `key`."""
    result = list(alist)
    pos = _key_position(result, key, match)
    if pos is not None:
        del result[pos]
    return result


def keys(alist: Sequence[Pair]) -> List[Any]:
    return [pair.key for pair in alist]


def values(alist: Sequence[Pair]) -> List[Any]:
    return [pair.value for pair in alist]


NameSpec = Union[str, Tuple[str, Any]]


def bind(alist: Sequence[Pair], names: Iterable[NameSpec], body: Callable[..., Any], match: Match = DEFAULT_MATCH) -> Any:
    """
    Destructure `alist` into keyword arguments for `body`.

    Each entry of `names` is either a name, looked up under the same key,
    or a `(name, key)` tuple binding `name` to the value under `key`.
    Missing keys bind None.

        bind(config, ["name", ("uid", Symbol("uid"))], lambda name, uid: ...)
    """
    bound = {}
    for spec in names:
        if isinstance(spec, tuple):
            name, key = spec
        else:
            name, key = spec, spec
        bound[name] = get(alist, key, match=match)
    return body(**bound)


__all__ = [
    "Alist",
    "make_alist",
    "from_dict",
    "to_dict",
    "get",
    "copy_shallow",
    "put",
    "remove",
    "keys",
    "values",
    "bind",
]
