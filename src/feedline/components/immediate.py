from __future__ import annotations

import asyncio
from typing import Any

from ..base import Feeder
from ..stream import PushStream
from ..types import ConsumeFunction, T


class ImmediateFeeder(Feeder[T]):
    """Feeds its data once, on the next event loop iteration."""

    def __init__(self, data: Any):
        super().__init__()
        self._data = data

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        asyncio.get_running_loop().call_soon(self._fire, target, stream)
        return stream

    def _fire(self, target: ConsumeFunction, stream: PushStream) -> None:
        if stream.enabled:
            self._spawn(self._deliver_or_drop(self._data, target, stream))
