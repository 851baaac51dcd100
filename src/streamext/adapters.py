"""Failure policies that turn fallible callables into pipeline-safe ones.

Three policies cover what can happen when a per-element operation raises
inside a pipeline that has no notion of per-element failure:

- ``rethrow``: stop the pipeline with a ``FunctionExecutionError``.
- ``quiet``: substitute a safe default (``False`` for predicates, ``None``
  for mappers, nothing for actions).
- ``fallback``: let the caller compute the substitute from the element and
  the exception.

Policies are shape-agnostic: predicates, mappers and actions differ only in
their output type, so one implementation serves all three.

Example:
    sizes = map(rethrow(os.path.getsize), paths)
    hidden = filter(quiet_predicate(is_hidden), paths)
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from streamext.config import Config, current_config
from streamext.errors import FunctionExecutionError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _describe(op: Callable[..., Any]) -> str:
    name = getattr(op, "__qualname__", None) or getattr(op, "__name__", None)
    return name if isinstance(name, str) else repr(op)


def _guard(
    op: Callable[[T], R],
    on_failure: Callable[[T, Exception], R],
    *,
    config: Config | None,
    suppresses: bool,
) -> Callable[[T], R]:
    """Build the adapted callable; everything it needs is captured here."""
    cfg = config if config is not None else current_config()
    # rethrow wraps every Exception; only absorbing policies narrow.
    catch = cfg.catch if suppresses else (Exception,)
    log_absorbed = suppresses and cfg.log_suppressed
    level = cfg.log_level
    op_name = _describe(op)

    def adapted(element: T) -> R:
        try:
            return op(element)
        except catch as exc:
            if log_absorbed:
                log.log(
                    level,
                    "%s raised %s; substituting fallback result",
                    op_name,
                    type(exc).__name__,
                    exc_info=exc,
                )
            return on_failure(element, exc)

    # updated=() so wrapping a class (e.g. int) does not copy its namespace.
    return functools.update_wrapper(adapted, op, updated=())


def _raise_wrapped(element: Any, error: Exception) -> Any:
    raise FunctionExecutionError(error, element=element) from error


def fallback(
    op: Callable[[T], R],
    fallback_fn: Callable[[T, Exception], R],
    *,
    config: Config | None = None,
) -> Callable[[T], R]:
    """Return ``op`` with failures replaced by ``fallback_fn(element, error)``.

    ``op`` runs exactly once per call; ``fallback_fn`` runs only when ``op``
    raises one of ``config.catch``; other exceptions propagate unchanged, as
    do exceptions raised by ``fallback_fn`` itself.

    Args:
        op: A predicate, mapper or action that may raise.
        fallback_fn: Produces the substitute output from the element and the
            exception ``op`` raised.
        config: Configuration to capture; defaults to ``current_config()``.

    Returns:
        A callable with the same shape as ``op`` that never raises ``op``'s
        handled exceptions.
    """
    return _guard(op, fallback_fn, config=config, suppresses=True)


def rethrow(op: Callable[[T], R], *, config: Config | None = None) -> Callable[[T], R]:
    """Return ``op`` with failures re-raised as ``FunctionExecutionError``.

    The original exception is available unchanged as ``error.cause`` (and
    ``error.__cause__``); the failing element as ``error.element``. Every
    ``Exception`` is wrapped regardless of ``config.catch``.
    """
    return _guard(op, _raise_wrapped, config=config, suppresses=False)


def quiet(
    op: Callable[[T], R | None],
    *,
    default: Any = None,
    config: Config | None = None,
) -> Callable[[T], R | None]:
    """Return ``op`` with failures replaced by ``default``.

    With the default ``None`` this is the mapper form (a failing element maps
    to ``None``) and the action form (the failure is discarded).
    """
    return _guard(op, lambda _element, _error: default, config=config, suppresses=True)


def quiet_predicate(
    op: Callable[[T], bool], *, config: Config | None = None
) -> Callable[[T], bool]:
    """Return ``op`` with failures evaluated as "does not match"."""
    return quiet(op, default=False, config=config)


__all__ = ["fallback", "quiet", "quiet_predicate", "rethrow"]
