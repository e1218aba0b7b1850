"""
Fluent pipeline composition.

    IteratorFeeder(range(10)).pipe(Transformer(str)).pipe(Silo()).out(sink) \\
        .triggered_with(IntervalFeeder(IntervalFeederOptions(interval_ms=500)))

Each link is a consumer to its predecessor and a feeder to its successor. A Pipe
only delegates to ``Feeder.feeds``/``Feeder.triggers`` and holds no state of its own
beyond the tail feeder and the last stream created.
"""

from __future__ import annotations

from typing import Any

from .base import Feeder
from .stream import PushStream
from .types import Feedable


class Pipe:
    def __init__(self, feeder: Feeder, stream: PushStream):
        self.feeder = feeder
        self.stream = stream

    def pipe(self, nxt: Any) -> "Pipe":
        """Extend the chain: the tail feeds ``nxt`` which becomes the new tail."""
        return Pipe(nxt, self.feeder.feeds(nxt))

    def out(self, target: Feedable) -> "Pipe":
        """Attach the tail to a final consumer."""
        return Pipe(self.feeder, self.feeder.feeds(target))

    def throws_to(self, target: Feedable) -> "Pipe":
        """Redirect data rejected on the current stream to ``target``."""
        self.stream.throws_to(target)
        return self

    def triggered_with(self, source: Feeder) -> "Pipe":
        """Feed ``source`` into the current stream's trigger.

        Raises:
            StreamNotTriggerableError: the current stream has no trigger
        """
        self.stream.require_trigger()
        source.triggers(self.stream)
        return self

    def triggers(self, stream: PushStream) -> "Pipe":
        """Feed the tail into an external triggerable stream."""
        return Pipe(self.feeder, self.feeder.triggers(stream))
