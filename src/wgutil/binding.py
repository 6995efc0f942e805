"""
Binding Combinators — guarded binding and short-circuit evaluation.

Each form takes explicit closures for its branches. The value a branch
would see implicitly (the "it" of an anaphoric form) is passed to the
branch as an ordinary parameter instead.

Evaluation contract:
    - Every bound expression is evaluated at most once.
    - Evaluation is strictly left to right.
    - Evaluation stops at the first nil value (see `wgutil.forms.is_nil`).
    - Nothing here catches exceptions raised by the closures.
"""

from typing import Any, Callable, Optional, Sequence, Tuple

from wgutil.forms import is_nil


Binding = Tuple[str, Callable[..., Any]]


def guarded_bind(
    expression: Callable[[], Any],
    then: Callable[[Any], Any],
    otherwise: Optional[Callable[[], Any]] = None,
) -> Any:
    """
    Evaluate `expression` once and branch on whether it is nil.

    Args:
        expression: Zero-argument closure producing the bound value
        then: Called with the bound value when it is not nil
        otherwise: Called with no arguments when it is nil

    Returns:
        The result of the branch taken, or None when the value is nil
        and no `otherwise` branch was given.
    """
    value = expression()
    if not is_nil(value):
        return then(value)
    if otherwise is not None:
        return otherwise()
    return None


def all_bind(
    bindings: Sequence[Binding],
    body: Callable[..., Any],
    otherwise: Optional[Callable[[], Any]] = None,
) -> Any:
    """
    Bind names one after another, running `body` only if none is nil.

    Each binding is a `(name, expression)` tuple. An expression is called
    with every name bound so far as keyword arguments, so later bindings
    can be computed from earlier ones:

        all_bind(
            [("frame", lambda: host.selected_frame()),
             ("window", lambda frame: frame.selected_window)],
            body=lambda frame, window: window.buffer,
        )

    As soon as one expression yields nil, the remaining expressions are
    not evaluated and `otherwise()` (or None) is returned.

    Returns:
        body(**bound) when every binding is non-nil.
    """
    bound = {}
    for name, expression in bindings:
        value = expression(**bound)
        if is_nil(value):
            return otherwise() if otherwise is not None else None
        bound[name] = value
    return body(**bound)


def aif(value: Any, then: Callable[[Any], Any], otherwise: Optional[Callable[[], Any]] = None) -> Any:
    """Anaphoric if: call `then(value)` when value is non-nil, else `otherwise()`."""
    if not is_nil(value):
        return then(value)
    if otherwise is not None:
        return otherwise()
    return None


def awhen(value: Any, body: Callable[[Any], Any]) -> Any:
    """Anaphoric when: call `body(value)` when value is non-nil, else None."""
    if is_nil(value):
        return None
    return body(value)


def acond(*clauses: Tuple[Callable[[], Any], Callable[[Any], Any]]) -> Any:
    """
    Anaphoric cond.

    Each clause is a `(test, branch)` tuple. Tests are evaluated in order;
    the first non-nil test result is passed to its branch and the branch
    result is returned. Later tests are never evaluated. Returns None when
    no test succeeds.
    """
    for test, branch in clauses:
        value = test()
        if not is_nil(value):
            return branch(value)
    return None


def aand(first: Any, *steps: Callable[[Any], Any]) -> Any:
    """
    Anaphoric and.

    `first` is the initial value. Each step is called with the previous
    value. The first nil value is returned immediately without running
    later steps; otherwise the last value is returned.
    """
    value = first
    if is_nil(value):
        return value
    for step in steps:
        value = step(value)
        if is_nil(value):
            return value
    return value


__all__ = [
    "Binding",
    "guarded_bind",
    "all_bind",
    "aif",
    "awhen",
    "acond",
    "aand",
]
