"""
Control channel shared by a producer and the consumer it feeds.

A ``PushStream`` is created once per ``feeds()`` call and governs exactly one
producer -> consumer edge. Producers check ``enabled`` immediately before every
delivery attempt.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import StreamNotTriggerableError
from .types import ConsumeFunction, Feedable


class PushStream:
    """Per-attachment state: enabled flag, resume/pause hooks, trigger, error redirect.

    Example:
        stream = feeder.feeds(consumer).throws_to(dead_letters)
        stream.enabled = False   # producer stops feeding
        stream.enabled = True    # stream.resume() is invoked once
    """

    def __init__(self) -> None:
        self._enabled = True

        # Invoked synchronously on every False -> True transition of ``enabled``
        self.resume: Optional[Callable[[], None]] = None
        # Invoked synchronously on every True -> False transition of ``enabled``
        self.pause: Optional[Callable[[], None]] = None
        # Alternate intake; feeding it makes the owning producer act (release, rearm)
        self.trigger: Optional[ConsumeFunction] = None
        # Receives data rejected by the primary target
        self.throws_to_target: Optional[Feedable] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        was = self._enabled
        self._enabled = value
        if not was and value:
            if self.resume is not None:
                self.resume()
        elif was and not value:
            if self.pause is not None:
                self.pause()

    @property
    def triggerable(self) -> bool:
        return self.trigger is not None

    def require_trigger(self) -> ConsumeFunction:
        """Return the trigger endpoint or fail fast if there is none."""
        if self.trigger is None:
            raise StreamNotTriggerableError("Stream is not triggerable")
        return self.trigger

    def throws_to(self, target: Feedable) -> "PushStream":
        """Redirect rejected data to ``target``. Returns self for chaining."""
        self.throws_to_target = target
        return self

    def __repr__(self) -> str:
        return (
            f"PushStream(enabled={self._enabled}, triggerable={self.triggerable}, "
            f"redirect={self.throws_to_target is not None})"
        )
