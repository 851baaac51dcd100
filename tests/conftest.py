"""Pytest configuration and fixtures.

Provides environment isolation so adapter configuration is only what each
test sets. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import os

import pytest

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_streamext_env(request, monkeypatch):
    """Clear STREAMEXT_* variables so defaults are predictable.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("STREAMEXT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def fresh_config_cache():
    """Re-read the environment config in every test."""
    from streamext.config import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()
