"""
Pytest configuration and fixtures for Rookie Draft Board tests.

This file provides test isolation and shared fixtures.
"""
import asyncio
import os
import pytest

# Ensure environment is set up before any imports happen
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")


@pytest.fixture(autouse=True)
def reset_singleton_state():
    """
    Reset any singleton/global state between tests.

    This prevents test pollution from global state in config, the shared API
    client and the logging context.
    """
    yield  # Run test

    # Reset config singleton to ensure clean state
    import config as cfg
    cfg._config = None

    import api.client as client_module
    client_module._global_client = None

    from utils.logging import clear_context
    clear_context()


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy."""
    return asyncio.DefaultEventLoopPolicy()
