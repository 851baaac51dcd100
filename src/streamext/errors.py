"""Exception hierarchy for streamext."""

from __future__ import annotations

from typing import Any


class StreamExtError(Exception):
    """Base exception for all streamext errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(StreamExtError):
    """Configuration validation or resolution failed."""


class FunctionExecutionError(StreamExtError):
    """An adapted operation raised while a pipeline stage was evaluating it.

    Raised only by the ``rethrow`` policy. The original exception is kept as
    ``cause`` and is also linked as ``__cause__`` once raised, so standard
    tracebacks show both.
    """

    def __init__(self, cause: Exception, *, element: Any = None) -> None:
        super().__init__(
            f"{type(cause).__name__}: {cause}",
            hint="Inspect .cause for the original exception.",
        )
        self.cause = cause
        self.element = element

    def __reduce__(self) -> tuple[Any, ...]:
        # args holds the message, not the cause; rebuild from the cause.
        return (type(self), (self.cause,), self.__dict__)


def unwrap(exc: BaseException) -> BaseException:
    """Return the innermost cause behind nested ``FunctionExecutionError`` wrappers."""
    while isinstance(exc, FunctionExecutionError):
        exc = exc.cause
    return exc
