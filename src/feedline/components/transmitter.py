"""
Consumer/feeder hybrids that forward what they consume.

``Transmitter`` is the base: it forwards every intake to all of its feeds and
succeeds if at least one of them accepted the data. ``Transformer``, ``Filter``
and ``Aggregator`` reshape the data before forwarding it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar

from ..base import Feeder
from ..errors import DeliveryRejected, NoForwardFeedsError
from ..stream import PushStream
from ..types import ConsumeFunction, T, as_batch, is_batch

I = TypeVar("I")
O = TypeVar("O")


@dataclass
class Transmission:
    stream: PushStream
    target: ConsumeFunction


class Transmitter(Feeder[T]):
    """Consumes data and forwards it to every attached feed."""

    def __init__(self) -> None:
        super().__init__()
        self._transmissions: List[Transmission] = []

    async def consume(self, data: Any) -> None:
        await self._transmit(data)

    @property
    def connector(self) -> ConsumeFunction:
        return self.consume

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        self._transmissions.append(Transmission(stream=stream, target=target))
        return stream

    async def _transmit(self, data: Any) -> None:
        """Deliver to all enabled feeds concurrently; succeed if any accepts.

        Raises:
            NoForwardFeedsError: nothing is attached
            DeliveryRejected: every feed is disabled or rejected the data
        """
        if not self._transmissions:
            raise NoForwardFeedsError(f"No forward feeds in {type(self).__name__}")

        active = [t for t in self._transmissions if t.stream.enabled]
        if not active:
            raise DeliveryRejected("All forward feeds are disabled")

        results = await asyncio.gather(
            *(self._next(data, t.target, t.stream) for t in active),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if len(errors) == len(results):
            raise DeliveryRejected(f"All {len(results)} forward feed(s) rejected") from errors[0]


class Transformer(Transmitter[O], Generic[I, O]):
    """Maps each element with ``fn``; a batch stays a batch, a single stays single."""

    def __init__(self, fn: Callable[[I], O]):
        super().__init__()
        self._fn = fn

    async def consume(self, data: Any) -> None:
        if is_batch(data):
            await self._transmit([self._fn(x) for x in data])
        else:
            await self._transmit(self._fn(data))


class Filter(Transmitter[T]):
    """Forwards elements satisfying ``predicate``.

    A batch is forwarded filtered (possibly empty). A single element that does
    not pass is rejected.
    """

    def __init__(self, predicate: Callable[[T], bool]):
        super().__init__()
        self._predicate = predicate

    async def consume(self, data: Any) -> None:
        if is_batch(data):
            await self._transmit([x for x in data if self._predicate(x)])
            return
        if not self._predicate(data):
            raise DeliveryRejected("Filtered out")
        await self._transmit(data)


class Aggregator(Transmitter[O], Generic[I, O]):
    """Turns a batch into another batch with ``fn``. Single values count as a batch of one."""

    def __init__(self, fn: Callable[[List[I]], List[O]]):
        super().__init__()
        self._fn = fn

    async def consume(self, data: Any) -> None:
        await self._transmit(self._fn(as_batch(data)))
