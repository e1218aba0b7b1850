from __future__ import annotations

import asyncio
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from ..base import Feeder
from ..settings import get_settings
from ..stream import PushStream
from ..types import ConsumeFunction


class IntervalFeederOptions(BaseModel):
    """Options controlling IntervalFeeder behavior.

    Attributes:
        interval_ms: Time between feeds in milliseconds (settings default: 1000)
        start: First number of the sequence
        increment: Step between consecutive numbers
    """

    interval_ms: int = Field(default_factory=lambda: get_settings().default_interval_ms, gt=0)
    start: int | float = 0
    increment: int | float = 1


class IntervalFeeder(Feeder[float]):
    """Feeds an incremental sequence of numbers at regular intervals.

    Each attached feed runs its own ticker and keeps its own cursor. A tick is
    skipped while the feed is disabled or while the previous delivery on that
    feed is still outstanding, so a slow consumer backpressures its own feed
    without stretching the timer.

    Example:
        async with IntervalFeeder(IntervalFeederOptions(interval_ms=300)) as ticks:
            ticks.feeds(logger_consumer)
            await asyncio.sleep(3)
    """

    def __init__(self, options: Optional[IntervalFeederOptions] = None):
        super().__init__()
        self._options = options or IntervalFeederOptions()
        self._tickers: List[asyncio.Task] = []

    @property
    def options(self) -> IntervalFeederOptions:
        return self._options

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        ticker = asyncio.get_running_loop().create_task(self._run(stream, target))
        self._tickers.append(ticker)
        return stream

    async def _run(self, stream: PushStream, target: ConsumeFunction) -> None:
        interval = self._options.interval_ms / 1000.0
        cursor = self._options.start
        in_flight: Optional[asyncio.Task] = None

        async def deliver(value: float) -> None:
            nonlocal cursor
            try:
                await self._deliver_or_drop(value, target, stream)
            finally:
                cursor += self._options.increment

        while True:
            await asyncio.sleep(interval)
            if not stream.enabled:
                continue
            if in_flight is not None and not in_flight.done():
                continue
            in_flight = self._spawn(deliver(cursor))

    def stop(self) -> None:
        """Cancel every ticker. Deliveries already in flight are left to settle."""
        for ticker in self._tickers:
            ticker.cancel()
        if self._tickers:
            logger.debug(f"IntervalFeeder stopped {len(self._tickers)} ticker(s)")
        self._tickers.clear()

    # --------------- context management

    async def __aenter__(self) -> "IntervalFeeder":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.stop()
