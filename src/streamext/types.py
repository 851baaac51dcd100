"""Call contracts for operations that may raise.

Each shape mirrors a plain callable the host pipeline already accepts, minus
the promise not to raise. Any function, lambda, bound method or
``functools.partial`` satisfies them structurally.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)
R_co = TypeVar("R_co", covariant=True)


class FalliblePredicate(Protocol[T_contra]):
    """Tests an element; may raise instead of answering."""

    def __call__(self, element: T_contra, /) -> bool: ...


class FallibleMapper(Protocol[T_contra, R_co]):
    """Maps an element to a result; may raise instead of returning."""

    def __call__(self, element: T_contra, /) -> R_co: ...


class FallibleAction(Protocol[T_contra]):
    """Performs a side effect for an element; may raise."""

    def __call__(self, element: T_contra, /) -> None: ...


class PredicateFallback(Protocol[T_contra]):
    """Substitute answer for a predicate that raised on ``element``."""

    def __call__(self, element: T_contra, error: Exception, /) -> bool: ...


class MapperFallback(Protocol[T_contra, R_co]):
    """Substitute result for a mapper that raised on ``element``."""

    def __call__(self, element: T_contra, error: Exception, /) -> R_co: ...


class ActionFallback(Protocol[T_contra]):
    """Recovery side effect for an action that raised on ``element``."""

    def __call__(self, element: T_contra, error: Exception, /) -> None: ...


__all__ = (
    "ActionFallback",
    "FallibleAction",
    "FallibleMapper",
    "FalliblePredicate",
    "MapperFallback",
    "PredicateFallback",
)
