"""
Pytest configuration and fixtures for feedline.

Provides cross-platform event loop configuration and recording consumers.
"""

import asyncio
import sys

import pytest

# Set policy *before* pytest-asyncio creates any loops
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


class Recorder:
    """Async consume function that records what it receives.

    Rejects (raises) when ``fail`` is set.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def __call__(self, data):
        self.calls.append(data)
        if self.fail:
            raise RuntimeError(f"rejected {data!r}")


@pytest.fixture
def recorder():
    """Accepting recorder."""
    return Recorder()


@pytest.fixture
def rejecting_recorder():
    """Recorder that rejects everything."""
    return Recorder(fail=True)


@pytest.fixture
def make_recorder():
    """Factory for additional recorders within one test."""
    return Recorder
