"""Configuration: frozen Config resolved once and captured by adapters.

Resolution order is ``overrides > environment > defaults``. Adapters read the
active configuration when they are constructed and keep it for their whole
lifetime, so changing the environment or entering a new scope never alters
an operation that already exists.

Environment variables:
    STREAMEXT_LOG_SUPPRESSED: log failures absorbed by ``fallback``/``quiet``.
    STREAMEXT_LOG_LEVEL: level name (``DEBUG``, ``INFO``...) or integer.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from streamext.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

log = logging.getLogger(__name__)

_ENV_PREFIX = "STREAMEXT_"

_LEVEL_NAMES: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_DOTENV_LOADED: bool = False


class Settings(BaseModel):
    """Validation schema for values that may come from the environment."""

    log_suppressed: bool = Field(default=False)
    log_level: int = Field(default=logging.DEBUG, ge=0)

    model_config = {"extra": "forbid"}

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept standard level names in any case."""
        if isinstance(v, str):
            name = v.strip().upper()
            return _LEVEL_NAMES.get(name, name)
        return v


@dataclass(frozen=True)
class Config:
    """Immutable adapter configuration.

    Example:
        config = Config(catch=(OSError,), log_suppressed=True)
        sizes = map_quiet(paths, os.path.getsize, config=config)
    """

    #: Exception types fallback/quiet absorb; rethrow always wraps every Exception.
    catch: tuple[type[Exception], ...] = (Exception,)
    log_suppressed: bool = False
    log_level: int = logging.DEBUG

    def __post_init__(self) -> None:
        """Normalize ``catch`` to a tuple and validate it."""
        catch = self.catch
        if isinstance(catch, type):
            catch = (catch,)
        catch = tuple(catch)
        if not catch:
            raise ConfigurationError(
                "catch must name at least one exception type",
                hint="Use catch=(Exception,) to handle every ordinary exception.",
            )
        for exc_type in catch:
            if not (isinstance(exc_type, type) and issubclass(exc_type, Exception)):
                raise ConfigurationError(
                    f"catch entries must be Exception subclasses, got {exc_type!r}",
                    hint="KeyboardInterrupt, SystemExit and GeneratorExit are never handled.",
                )
        object.__setattr__(self, "catch", catch)

        if isinstance(self.log_level, bool) or not isinstance(self.log_level, int):
            raise ConfigurationError(
                f"log_level must be an int, got {self.log_level!r}",
                hint="Pass a logging constant such as logging.INFO.",
            )
        if self.log_level < 0:
            raise ConfigurationError(
                f"log_level must be >= 0, got {self.log_level}",
            )


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[Config | None] = contextvars.ContextVar(
    "streamext_config", default=None
)


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import load_dotenv

    load_dotenv()
    _DOTENV_LOADED = True


def _load_env() -> dict[str, Any]:
    """Collect ``STREAMEXT_*`` values for known settings fields."""
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return values


def resolve_config(overrides: Mapping[str, Any] | None = None) -> Config:
    """Resolve a frozen Config from overrides, environment and defaults.

    Args:
        overrides: Programmatic values; they win over the environment.
            ``catch`` is only accepted here.

    Raises:
        ConfigurationError: A value failed validation or a key is unknown.
    """
    _load_dotenv_once()
    merged: dict[str, Any] = {**_load_env(), **(overrides or {})}
    catch = merged.pop("catch", (Exception,))

    try:
        settings = Settings(**merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first.get("loc", ())) or "config"
        raise ConfigurationError(
            f"Invalid value for {where}: {first.get('msg')}",
            hint=(
                f"Check {_ENV_PREFIX}{where.upper()} or the override passed in code."
            ),
        ) from exc

    cfg = Config(
        catch=catch,
        log_suppressed=settings.log_suppressed,
        log_level=settings.log_level,
    )
    log.debug("Resolved %s", cfg)
    return cfg


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | Config | None = None,
    **overrides: Any,
) -> Iterator[Config]:
    """Make a configuration ambient for adapters built inside the block.

    Context-variable backed, so it is safe across threads and tasks.

    Example:
        with config_scope(log_suppressed=True):
            names = list(map_quiet(paths, read_name))
    """
    if isinstance(cfg_or_overrides, Config):
        if overrides:
            raise ConfigurationError(
                "Pass either a Config or overrides, not both",
                hint="Build the Config with every field you need instead.",
            )
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


@cache
def _environment_config() -> Config:
    """Resolve the environment once; invalid values degrade to defaults."""
    try:
        return resolve_config()
    except ConfigurationError as exc:
        log.warning("Ignoring invalid streamext environment config: %s", exc)
        return Config()


def clear_config_cache() -> None:
    """Forget the cached environment config so the next lookup re-reads it."""
    _environment_config.cache_clear()


def current_config() -> Config:
    """Return the ambient config, or the cached environment config.

    Never raises: adapters call this at construction time.
    """
    cfg = _AMBIENT.get()
    if cfg is not None:
        return cfg
    return _environment_config()


__all__ = [
    "Config",
    "Settings",
    "clear_config_cache",
    "config_scope",
    "current_config",
    "resolve_config",
]
