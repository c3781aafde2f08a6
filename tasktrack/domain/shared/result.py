"""Ok/Err values for operations with expected failures.

Bad input, unknown ids, unreadable files and git refusing a branch are
all part of normal use, so the core returns them as ``Err`` instead of
raising. Callers branch with ``isinstance``:

    >>> loaded = Ok(3)
    >>> loaded.value if isinstance(loaded, Ok) else 0
    3
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure carrying ``error``, usually a TaskError."""

    error: E


# Union keeps the alias subscriptable at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Transform the success value; an Err passes through untouched."""
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Feed the success value into another fallible step.

    The first Err short-circuits, so ``flat_map(load(), find)`` returns
    either the load failure or whatever ``find`` returned.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result
