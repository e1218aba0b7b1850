from __future__ import annotations

import asyncio
from typing import Generic, Iterable

from loguru import logger

from ..base import Feeder
from ..metrics import record_iterator_exhausted
from ..stream import PushStream
from ..types import ConsumeFunction, T


class IteratorFeeder(Feeder[T]):
    """Feeds data pulled from an iterable source.

    Every pull waits for the previous delivery on that feed to settle, so an
    IteratorFeeder is backpressured by its consumer. Multiple feeds share one
    iterator: they compete for the source and the quicker consumers get more of it.

    When the source is exhausted the feed's stream is disabled. Re-enabling it
    pulls again from wherever the shared iterator stands.
    """

    def __init__(self, source: Iterable[T]):
        super().__init__()
        self._iterator = iter(source)

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        session = _PullSession(self, stream, target)
        stream.resume = session.start
        session.start()
        return stream


class _PullSession(Generic[T]):
    """Pull loop of one feed. At most one loop runs per stream."""

    def __init__(self, feeder: IteratorFeeder[T], stream: PushStream, target: ConsumeFunction):
        self._feeder = feeder
        self._stream = stream
        self._target = target
        self._loop = asyncio.get_running_loop()
        self.pulling = False

    def start(self) -> None:
        if self.pulling:
            return
        self.pulling = True
        self._loop.call_soon(self._pull)

    def _pull(self) -> None:
        if not self._stream.enabled:
            self.pulling = False
            return

        try:
            value = next(self._feeder._iterator)
        except StopIteration:
            self._exhaust()
            return
        except Exception:
            logger.exception("IteratorFeeder source raised; closing feed")
            self._exhaust()
            return

        task = self._feeder._spawn(
            self._feeder._deliver_or_drop(value, self._target, self._stream)
        )
        task.add_done_callback(lambda _: self._loop.call_soon(self._pull))

    def _exhaust(self) -> None:
        self.pulling = False
        self._stream.enabled = False
        record_iterator_exhausted()
        logger.debug("IteratorFeeder source exhausted; feed disabled")
