"""
Producer and consumer base classes.

Every producer derives from ``Feeder`` and implements ``_setup_feed``, which wires
one delivery activity to a target and returns the ``PushStream`` controlling it.
Every consumer derives from ``Consumer`` (or satisfies ``ConsumerBehavior``).
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from time import monotonic
from typing import TYPE_CHECKING, Any, Coroutine, Generic, Set

from loguru import logger

from .errors import StreamNotTriggerableError
from .metrics import record_delivery
from .stream import PushStream
from .types import ConsumeFunction, Feedable, T, consume_function_of

if TYPE_CHECKING:
    from .pipe import Pipe


class Consumer(ABC, Generic[T]):
    """Abstract consumer. Subclasses implement ``consume``."""

    @abstractmethod
    async def consume(self, data: Any) -> None:
        """Process one element or a batch. Raise to reject."""
        ...

    @property
    def connector(self) -> ConsumeFunction:
        """Bound delivery function for producers to feed."""
        return self.consume


class Feeder(ABC, Generic[T]):
    """Abstract producer.

    Subclasses implement ``_setup_feed`` and use ``_next`` for every delivery so
    that error redirection and metrics behave the same way everywhere.
    """

    def __init__(self) -> None:
        # Strong references to fire-and-forget work until it settles
        self._tasks: Set[asyncio.Task] = set()

    def feeds(self, target: Feedable) -> PushStream:
        """Set up a feed to a consumer object or consume function.

        Args:
            target: Consumer instance or async consume function

        Returns:
            The PushStream controlling the new feed
        """
        stream = self._setup_feed(consume_function_of(target))
        logger.debug(f"{type(self).__name__} attached to {_describe(target)}")
        return stream

    def triggers(self, stream: PushStream) -> PushStream:
        """Set up a feed into another stream's trigger endpoint.

        Raises:
            StreamNotTriggerableError: the stream has no trigger
        """
        if not stream.triggerable:
            raise StreamNotTriggerableError(
                f"{type(self).__name__}: PushStream is not triggerable"
            )
        return self._setup_feed(stream.require_trigger())

    def pipe(self, nxt: Any) -> "Pipe":
        """Start a pipeline feeding into ``nxt`` (a consumer that is also a feeder)."""
        from .pipe import Pipe

        return Pipe(nxt, self.feeds(nxt))

    @abstractmethod
    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        """Wire one feed activity to ``target`` and return its stream."""
        ...

    async def _next(self, data: Any, target: ConsumeFunction, stream: PushStream) -> None:
        """Deliver ``data`` to ``target``, falling back to the stream's redirect.

        Succeeds if either the target or the redirect accepts the data. If the
        target rejects and no redirect is set, the target's error is raised; if
        the redirect rejects too, the redirect's error is raised. The stream is
        never modified and the target is never retried.
        """
        feeder = type(self).__name__
        t0 = monotonic()
        try:
            await target(data)
        except Exception:
            if stream.throws_to_target is None:
                record_delivery(feeder, "failed", (monotonic() - t0) * 1000.0)
                raise
            redirect = consume_function_of(stream.throws_to_target)
            try:
                await redirect(data)
            except Exception:
                record_delivery(feeder, "failed", (monotonic() - t0) * 1000.0)
                raise
            record_delivery(feeder, "redirected", (monotonic() - t0) * 1000.0)
            return
        record_delivery(feeder, "delivered", (monotonic() - t0) * 1000.0)

    async def _deliver_or_drop(self, data: Any, target: ConsumeFunction, stream: PushStream) -> None:
        """``_next`` for producers whose policy is to lose rejected data."""
        try:
            await self._next(data, target, stream)
        except Exception as exc:
            logger.debug(f"{type(self).__name__} dropped data: {type(exc).__name__}: {exc}")

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


def _describe(target: Feedable) -> str:
    if isinstance(target, Consumer):
        return type(target).__name__
    return getattr(target, "__qualname__", None) or type(target).__name__
