"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: recording callables stand in for the
fallible operations and fallback strategies under test.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class Boom(Exception):
    """Distinct exception type so tests never confuse it with library errors."""


def _identity(element: Any) -> Any:
    return element


def _boom(element: Any) -> Exception:
    return Boom(f"failed on {element!r}")


@dataclass
class ScriptedOp:
    """Fallible operation double: records calls, raises on chosen elements."""

    result: Callable[[Any], Any] = _identity
    fail_on: tuple[Any, ...] = ()
    make_error: Callable[[Any], Exception] = _boom
    calls: list[Any] = field(default_factory=list)
    raised: list[Exception] = field(default_factory=list)

    def __call__(self, element: Any) -> Any:
        self.calls.append(element)
        if element in self.fail_on:
            err = self.make_error(element)
            self.raised.append(err)
            raise err
        return self.result(element)


@dataclass
class RecordingFallback:
    """Fallback strategy double: records (element, error) and returns ``value``."""

    value: Any = None
    calls: list[tuple[Any, Exception]] = field(default_factory=list)

    def __call__(self, element: Any, error: Exception) -> Any:
        self.calls.append((element, error))
        return self.value


def always_fails(element: Any) -> Any:
    raise RuntimeError("error")
