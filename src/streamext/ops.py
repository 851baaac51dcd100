"""Pipeline bindings: host combinators that accept fallible operations.

Every combinator comes in three forms:

- ``<name>_e(iterable, op)``: rethrow policy.
- ``<name>_e(iterable, op, fallback_fn)``: fallback policy.
- ``<name>_quiet(iterable, op)``: quiet policy.

The host is the iterator protocol itself: ``filter``, ``map``,
``itertools.chain.from_iterable``, ``all`` and ``any``. Intermediate bindings
return lazy iterators, so a ``FunctionExecutionError`` surfaces where
evaluation is driven, not where the stage is declared. Short-circuiting is
exactly that of the builtin being delegated to.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, TypeVar

from streamext.adapters import fallback, quiet, quiet_predicate, rethrow

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from streamext.config import Config
    from streamext.types import (
        ActionFallback,
        FallibleAction,
        FallibleMapper,
        FalliblePredicate,
        MapperFallback,
        PredicateFallback,
    )

T = TypeVar("T")
R = TypeVar("R")


def _adapt(
    op: Callable[[T], R],
    fallback_fn: Callable[[T, Exception], R] | None,
    config: Config | None,
) -> Callable[[T], R]:
    if fallback_fn is None:
        return rethrow(op, config=config)
    return fallback(op, fallback_fn, config=config)


# --- Predicate combinators ---


def filter_e(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    fallback_fn: PredicateFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> Iterator[T]:
    """Lazily keep the elements matching a predicate that may raise."""
    return filter(_adapt(predicate, fallback_fn, config), iterable)


def filter_quiet(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    *,
    config: Config | None = None,
) -> Iterator[T]:
    """Like ``filter_e`` but elements whose predicate raises are dropped."""
    return filter(quiet_predicate(predicate, config=config), iterable)


def all_match_e(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    fallback_fn: PredicateFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> bool:
    """Return True if every element matches; stops at the first non-match."""
    return all(map(_adapt(predicate, fallback_fn, config), iterable))


def all_match_quiet(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    *,
    config: Config | None = None,
) -> bool:
    return all(map(quiet_predicate(predicate, config=config), iterable))


def any_match_e(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    fallback_fn: PredicateFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> bool:
    """Return True if some element matches; stops at the first match."""
    return any(map(_adapt(predicate, fallback_fn, config), iterable))


def any_match_quiet(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    *,
    config: Config | None = None,
) -> bool:
    return any(map(quiet_predicate(predicate, config=config), iterable))


def none_match_e(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    fallback_fn: PredicateFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> bool:
    """Return True if no element matches; stops at the first match."""
    return not any(map(_adapt(predicate, fallback_fn, config), iterable))


def none_match_quiet(
    iterable: Iterable[T],
    predicate: FalliblePredicate[T],
    *,
    config: Config | None = None,
) -> bool:
    return not any(map(quiet_predicate(predicate, config=config), iterable))


# --- Mapper combinators ---


def map_e(
    iterable: Iterable[T],
    mapper: FallibleMapper[T, R],
    fallback_fn: MapperFallback[T, R] | None = None,
    *,
    config: Config | None = None,
) -> Iterator[R]:
    """Lazily apply a mapper that may raise to each element."""
    return map(_adapt(mapper, fallback_fn, config), iterable)


def map_quiet(
    iterable: Iterable[T],
    mapper: FallibleMapper[T, R],
    *,
    config: Config | None = None,
) -> Iterator[R | None]:
    """Like ``map_e`` but elements whose mapper raises become ``None``."""
    return map(quiet(mapper, config=config), iterable)


def flat_map_e(
    iterable: Iterable[T],
    mapper: FallibleMapper[T, Iterable[R]],
    fallback_fn: MapperFallback[T, Iterable[R]] | None = None,
    *,
    config: Config | None = None,
) -> Iterator[R]:
    """Lazily map each element to an iterable and chain the results."""
    return itertools.chain.from_iterable(
        map(_adapt(mapper, fallback_fn, config), iterable)
    )


def flat_map_quiet(
    iterable: Iterable[T],
    mapper: FallibleMapper[T, Iterable[R]],
    *,
    config: Config | None = None,
) -> Iterator[R]:
    """Like ``flat_map_e`` but elements whose mapper raises contribute nothing."""
    return itertools.chain.from_iterable(
        map(quiet(mapper, default=(), config=config), iterable)
    )


# --- Action combinators ---


def for_each_e(
    iterable: Iterable[T],
    action: FallibleAction[T],
    fallback_fn: ActionFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> None:
    """Run an action that may raise on every element."""
    adapted = _adapt(action, fallback_fn, config)
    for element in iterable:
        adapted(element)


def for_each_quiet(
    iterable: Iterable[T],
    action: FallibleAction[T],
    *,
    config: Config | None = None,
) -> None:
    """Run an action on every element, discarding the ones that raise."""
    adapted = quiet(action, config=config)
    for element in iterable:
        adapted(element)


# Iteration here is always sequential, so encounter order is the only order.
def for_each_ordered_e(
    iterable: Iterable[T],
    action: FallibleAction[T],
    fallback_fn: ActionFallback[T] | None = None,
    *,
    config: Config | None = None,
) -> None:
    """Run an action on every element in encounter order."""
    for_each_e(iterable, action, fallback_fn, config=config)


def for_each_ordered_quiet(
    iterable: Iterable[T],
    action: FallibleAction[T],
    *,
    config: Config | None = None,
) -> None:
    for_each_quiet(iterable, action, config=config)


# --- Terminal ---


def to_list(iterable: Iterable[T]) -> list[T]:
    """Drain ``iterable`` into a list, preserving encounter order."""
    return list(iterable)


__all__ = [
    "all_match_e",
    "all_match_quiet",
    "any_match_e",
    "any_match_quiet",
    "filter_e",
    "filter_quiet",
    "flat_map_e",
    "flat_map_quiet",
    "for_each_e",
    "for_each_ordered_e",
    "for_each_ordered_quiet",
    "for_each_quiet",
    "map_e",
    "map_quiet",
    "none_match_e",
    "none_match_quiet",
    "to_list",
]
