from __future__ import annotations

import asyncio
from typing import Any, Optional

from loguru import logger

from ..base import Feeder
from ..metrics import record_watchdog_fire
from ..stream import PushStream
from ..types import ConsumeFunction, T


class Watchdog(Feeder[T]):
    """Feeds a fixed payload once a timeout elapses without a heartbeat.

    Feeding the stream's trigger rearms the timeout. When the timeout elapses the
    payload is fed and the stream disabled. Disabling the stream defuses the
    watchdog; re-enabling it arms a fresh timeout.

    Args:
        timeout_ms: Time without trigger before firing, in milliseconds
        data: Payload (single element or batch) fed on timeout
    """

    def __init__(self, timeout_ms: float, data: Any):
        super().__init__()
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")
        self._timeout = timeout_ms / 1000.0
        self._data = data

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        loop = asyncio.get_running_loop()
        timer: Optional[asyncio.TimerHandle] = None

        def disarm() -> None:
            nonlocal timer
            if timer is not None:
                timer.cancel()
                timer = None

        def fire() -> None:
            nonlocal timer
            timer = None
            record_watchdog_fire()
            logger.debug(f"Watchdog fired after {self._timeout * 1000:.0f}ms")
            self._spawn(self._deliver_or_drop(self._data, target, stream))
            stream.enabled = False

        def arm() -> None:
            nonlocal timer
            disarm()
            timer = loop.call_later(self._timeout, fire)

        async def trigger(_data: Any) -> None:
            if stream.enabled:
                arm()

        stream.trigger = trigger
        stream.resume = arm
        stream.pause = disarm
        arm()
        return stream
