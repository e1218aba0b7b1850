from __future__ import annotations

from typing import Any, List

from loguru import logger

from ..base import Feeder
from ..stream import PushStream
from ..types import ConsumeFunction, T, is_batch


class Silo(Feeder[T]):
    """A holding tank: consumes and stores data, releases it all on a trigger.

    Every feed set up by a Silo is triggerable. Feeding the stream's trigger
    releases the whole store as one batch, oldest first. The store is only
    emptied by a successful release; data from a failed release stays in the
    silo ahead of anything that arrived in the meantime.

    Example:
        silo = Silo[int]()
        fast.feeds(silo)
        release = silo.feeds(sink)
        slow.triggers(release)
    """

    def __init__(self) -> None:
        super().__init__()
        self._store: List[T] = []

    @property
    def store(self) -> List[T]:
        """Copy of the currently held data."""
        return list(self._store)

    def __len__(self) -> int:
        return len(self._store)

    async def consume(self, data: Any) -> None:
        if is_batch(data):
            self._store.extend(data)
        else:
            self._store.append(data)

    @property
    def connector(self) -> ConsumeFunction:
        return self.consume

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        releasing = False

        # At most one release per stream; a trigger during a release is a no-op
        async def release() -> None:
            nonlocal releasing
            if releasing:
                return
            releasing = True
            try:
                await self._release(target, stream)
            finally:
                releasing = False

        async def trigger(_data: Any) -> None:
            await release()

        stream.trigger = trigger
        stream.resume = lambda: self._spawn(release())
        return stream

    async def _release(self, target: ConsumeFunction, stream: PushStream) -> None:
        if not stream.enabled or not self._store:
            return

        batch, self._store = self._store, []
        try:
            await self._next(batch, target, stream)
        except Exception as exc:
            self._store = batch + self._store
            logger.debug(
                f"Silo release of {len(batch)} item(s) rejected, retained: "
                f"{type(exc).__name__}: {exc}"
            )
