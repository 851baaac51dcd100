"""streamext: fallible operations inside lazy iterator pipelines.

Public API:
    - rethrow(), quiet(), quiet_predicate(), fallback(): failure policies
    - filter_e(), map_e(), ... and their ``_quiet`` forms: pipeline bindings
    - Pipeline: chainable wrapper over the bindings
    - Config, config_scope(): adapter configuration
    - FunctionExecutionError: raised by the rethrow policy
    - FalliblePredicate, FallibleMapper, FallibleAction: operation contracts
"""

from __future__ import annotations

import logging

from streamext.adapters import fallback, quiet, quiet_predicate, rethrow
from streamext.config import (
    Config,
    clear_config_cache,
    config_scope,
    current_config,
    resolve_config,
)
from streamext.errors import (
    ConfigurationError,
    FunctionExecutionError,
    StreamExtError,
    unwrap,
)
from streamext.ops import (
    all_match_e,
    all_match_quiet,
    any_match_e,
    any_match_quiet,
    filter_e,
    filter_quiet,
    flat_map_e,
    flat_map_quiet,
    for_each_e,
    for_each_ordered_e,
    for_each_ordered_quiet,
    for_each_quiet,
    map_e,
    map_quiet,
    none_match_e,
    none_match_quiet,
    to_list,
)
from streamext.pipeline import Pipeline
from streamext.types import (
    ActionFallback,
    FallibleAction,
    FallibleMapper,
    FalliblePredicate,
    MapperFallback,
    PredicateFallback,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("streamext")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("streamext").addHandler(logging.NullHandler())

__all__ = [
    "ActionFallback",
    "Config",
    "ConfigurationError",
    "FallibleAction",
    "FallibleMapper",
    "FalliblePredicate",
    "FunctionExecutionError",
    "MapperFallback",
    "Pipeline",
    "PredicateFallback",
    "StreamExtError",
    "all_match_e",
    "all_match_quiet",
    "any_match_e",
    "any_match_quiet",
    "clear_config_cache",
    "config_scope",
    "current_config",
    "fallback",
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
    "quiet",
    "quiet_predicate",
    "resolve_config",
    "rethrow",
    "to_list",
    "unwrap",
]
