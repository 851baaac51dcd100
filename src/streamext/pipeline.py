"""Chainable pipeline stage over the ``streamext.ops`` bindings.

``Pipeline`` adds method-call syntax, nothing more: every method delegates to
a builtin or to the matching function in ``streamext.ops``. Like the iterator
it wraps, a pipeline is single-pass.

Example:
    padded = Pipeline.of("1", "2", "3").map_e(lambda s: "0" + s).to_list()
    # ["01", "02", "03"]
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from streamext import ops

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


class Pipeline(Generic[T]):
    """A lazy, single-pass sequence with fallible-operation stages."""

    __slots__ = ("_config", "_source")

    def __init__(self, source: Iterable[T], *, config: Config | None = None) -> None:
        self._source: Iterator[T] = iter(source)
        self._config = config

    @classmethod
    def of(cls, *elements: T, config: Config | None = None) -> Pipeline[T]:
        return cls(elements, config=config)

    def __iter__(self) -> Iterator[T]:
        return self._source

    def __repr__(self) -> str:
        return f"Pipeline(config={self._config!r})"

    def _next(self, source: Iterable[R]) -> Pipeline[R]:
        return Pipeline(source, config=self._config)

    # --- Plain stages (operations that cannot raise) ---

    def map(self, mapper: Callable[[T], R]) -> Pipeline[R]:
        return self._next(map(mapper, self._source))

    def filter(self, predicate: Callable[[T], bool]) -> Pipeline[T]:
        return self._next(filter(predicate, self._source))

    def flat_map(self, mapper: Callable[[T], Iterable[R]]) -> Pipeline[R]:
        return self._next(itertools.chain.from_iterable(map(mapper, self._source)))

    # --- Fallible stages ---

    def filter_e(
        self,
        predicate: FalliblePredicate[T],
        fallback_fn: PredicateFallback[T] | None = None,
    ) -> Pipeline[T]:
        return self._next(
            ops.filter_e(self._source, predicate, fallback_fn, config=self._config)
        )

    def filter_quiet(self, predicate: FalliblePredicate[T]) -> Pipeline[T]:
        return self._next(ops.filter_quiet(self._source, predicate, config=self._config))

    def map_e(
        self,
        mapper: FallibleMapper[T, R],
        fallback_fn: MapperFallback[T, R] | None = None,
    ) -> Pipeline[R]:
        return self._next(ops.map_e(self._source, mapper, fallback_fn, config=self._config))

    def map_quiet(self, mapper: FallibleMapper[T, R]) -> Pipeline[R | None]:
        return self._next(ops.map_quiet(self._source, mapper, config=self._config))

    def flat_map_e(
        self,
        mapper: FallibleMapper[T, Iterable[R]],
        fallback_fn: MapperFallback[T, Iterable[R]] | None = None,
    ) -> Pipeline[R]:
        return self._next(
            ops.flat_map_e(self._source, mapper, fallback_fn, config=self._config)
        )

    def flat_map_quiet(self, mapper: FallibleMapper[T, Iterable[R]]) -> Pipeline[R]:
        return self._next(ops.flat_map_quiet(self._source, mapper, config=self._config))

    # --- Terminal operations ---

    def for_each_e(
        self,
        action: FallibleAction[T],
        fallback_fn: ActionFallback[T] | None = None,
    ) -> None:
        ops.for_each_e(self._source, action, fallback_fn, config=self._config)

    def for_each_quiet(self, action: FallibleAction[T]) -> None:
        ops.for_each_quiet(self._source, action, config=self._config)

    def for_each_ordered_e(
        self,
        action: FallibleAction[T],
        fallback_fn: ActionFallback[T] | None = None,
    ) -> None:
        ops.for_each_ordered_e(self._source, action, fallback_fn, config=self._config)

    def for_each_ordered_quiet(self, action: FallibleAction[T]) -> None:
        ops.for_each_ordered_quiet(self._source, action, config=self._config)

    def all_match_e(
        self,
        predicate: FalliblePredicate[T],
        fallback_fn: PredicateFallback[T] | None = None,
    ) -> bool:
        return ops.all_match_e(self._source, predicate, fallback_fn, config=self._config)

    def all_match_quiet(self, predicate: FalliblePredicate[T]) -> bool:
        return ops.all_match_quiet(self._source, predicate, config=self._config)

    def any_match_e(
        self,
        predicate: FalliblePredicate[T],
        fallback_fn: PredicateFallback[T] | None = None,
    ) -> bool:
        return ops.any_match_e(self._source, predicate, fallback_fn, config=self._config)

    def any_match_quiet(self, predicate: FalliblePredicate[T]) -> bool:
        return ops.any_match_quiet(self._source, predicate, config=self._config)

    def none_match_e(
        self,
        predicate: FalliblePredicate[T],
        fallback_fn: PredicateFallback[T] | None = None,
    ) -> bool:
        return ops.none_match_e(self._source, predicate, fallback_fn, config=self._config)

    def none_match_quiet(self, predicate: FalliblePredicate[T]) -> bool:
        return ops.none_match_quiet(self._source, predicate, config=self._config)

    def find_first(self, default: Any = None) -> T | Any:
        """Return the next element, or ``default`` when the pipeline is empty."""
        return next(self._source, default)

    def to_list(self) -> list[T]:
        return ops.to_list(self._source)


__all__ = ("Pipeline",)
