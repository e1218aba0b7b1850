"""
Unit tests for delivery metrics (light sanity checks).
"""

import pytest
from prometheus_client import REGISTRY

from feedline import Feeder, PushStream
from feedline.settings import get_settings


class ProbeFeeder(Feeder[int]):
    def _setup_feed(self, target):
        return PushStream()


def _count(outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "feedline_deliveries_total", {"feeder": "ProbeFeeder", "outcome": outcome}
    )
    return value or 0.0


@pytest.fixture(autouse=True)
def metrics_on(monkeypatch):
    monkeypatch.setenv("FEEDLINE_METRICS_ENABLED", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_outcomes_counted(recorder, rejecting_recorder):
    """delivered, redirected and failed outcomes each increment their counter."""
    f = ProbeFeeder()
    before = {k: _count(k) for k in ("delivered", "redirected", "failed")}

    await f._next(1, recorder, PushStream())
    await f._next(2, rejecting_recorder, PushStream().throws_to(recorder))
    with pytest.raises(RuntimeError):
        await f._next(3, rejecting_recorder, PushStream())

    assert _count("delivered") == before["delivered"] + 1
    assert _count("redirected") == before["redirected"] + 1
    assert _count("failed") == before["failed"] + 1


@pytest.mark.asyncio
async def test_metrics_disabled(monkeypatch, recorder):
    """Nothing is recorded when metrics are disabled."""
    monkeypatch.setenv("FEEDLINE_METRICS_ENABLED", "false")
    get_settings.cache_clear()
    before = _count("delivered")

    await ProbeFeeder()._next(1, recorder, PushStream())

    assert _count("delivered") == before
