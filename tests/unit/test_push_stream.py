"""
Unit tests for PushStream.
"""

import pytest

from feedline import PushStream, StreamNotTriggerableError


def test_enabled_by_default():
    """A new stream is enabled and not triggerable."""
    s = PushStream()
    assert s.enabled is True
    assert s.triggerable is False
    assert s.throws_to_target is None


def test_resume_once_per_false_to_true_transition():
    """resume fires only on False -> True, never on redundant True."""
    calls = 0

    def resume():
        nonlocal calls
        calls += 1

    s = PushStream()
    s.resume = resume

    s.enabled = True
    s.enabled = False
    s.enabled = False
    assert calls == 0

    s.enabled = True
    assert calls == 1

    s.enabled = True
    assert calls == 1

    s.enabled = False
    s.enabled = True
    assert calls == 2


def test_resume_sees_enabled_stream():
    """The flag is already set when resume runs."""
    seen = []
    s = PushStream()
    s.enabled = False
    s.resume = lambda: seen.append(s.enabled)

    s.enabled = True
    assert seen == [True]


def test_pause_once_per_true_to_false_transition():
    """pause fires only on True -> False."""
    calls = []
    s = PushStream()
    s.pause = lambda: calls.append("pause")

    s.enabled = False
    s.enabled = False
    s.enabled = True
    s.enabled = False
    assert calls == ["pause", "pause"]


def test_require_trigger_fails_fast():
    """Asking a plain stream for its trigger raises synchronously."""
    with pytest.raises(StreamNotTriggerableError, match="not triggerable"):
        PushStream().require_trigger()


@pytest.mark.asyncio
async def test_require_trigger_returns_endpoint():
    """A triggerable stream hands out its trigger."""
    fed = []

    async def trigger(data):
        fed.append(data)

    s = PushStream()
    s.trigger = trigger
    assert s.triggerable
    await s.require_trigger()(5)
    assert fed == [5]


def test_throws_to_chains():
    """throws_to sets the redirect and returns the stream."""

    async def handler(data):
        pass

    s = PushStream()
    assert s.throws_to(handler) is s
    assert s.throws_to_target is handler
