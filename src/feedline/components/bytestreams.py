"""
Adapters between feedline and asyncio byte streams.

``ReadableFeeder`` feeds chunks read from an ``asyncio.StreamReader`` (or anything
with ``async read(n) -> bytes``). ``WritableConsumer`` writes what it consumes to an
``asyncio.StreamWriter`` (or anything with ``write``, ``drain`` and ``is_closing``).
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Protocol, Tuple

from loguru import logger

from ..base import Consumer, Feeder
from ..errors import DeliveryRejected
from ..stream import PushStream
from ..types import ConsumeFunction, is_batch


class ReaderLike(Protocol):
    async def read(self, n: int = -1) -> bytes:
        ...


class WriterLike(Protocol):
    def write(self, data: bytes) -> None:
        ...

    async def drain(self) -> None:
        ...

    def is_closing(self) -> bool:
        ...


class ReadableFeeder(Feeder[bytes]):
    """Feeds byte chunks as they arrive from a reader.

    One pump task reads until EOF and hands each chunk to every enabled feed.
    Chunks arriving while a feed is disabled, or rejected by its consumer, are lost.
    """

    def __init__(self, reader: ReaderLike, chunk_size: int = 64 * 1024):
        super().__init__()
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        self._reader = reader
        self._chunk_size = chunk_size
        self._feeds: List[Tuple[PushStream, ConsumeFunction]] = []
        self._pump: Optional[asyncio.Task] = None
        self._eof = False

    @property
    def at_eof(self) -> bool:
        """True once the reader reported end of stream."""
        return self._eof

    def _setup_feed(self, target: ConsumeFunction) -> PushStream:
        stream = PushStream()
        self._feeds.append((stream, target))
        if self._pump is None:
            self._pump = asyncio.get_running_loop().create_task(self._run())
        return stream

    async def _run(self) -> None:
        while True:
            try:
                chunk = await self._reader.read(self._chunk_size)
            except Exception:
                logger.exception("ReadableFeeder reader raised; stopping")
                return
            if not chunk:
                self._eof = True
                logger.debug("ReadableFeeder reached EOF")
                return
            for stream, target in list(self._feeds):
                if stream.enabled:
                    self._spawn(self._deliver_or_drop(bytes(chunk), target, stream))

    def stop(self) -> None:
        """Stop reading. Deliveries already in flight are left to settle."""
        if self._pump is not None and not self._pump.done():
            self._pump.cancel()
            logger.debug("ReadableFeeder stopped")

    async def wait_closed(self) -> None:
        """Wait until the pump ends (EOF, reader error or stop)."""
        if self._pump is not None:
            await asyncio.wait({self._pump})


class WritableConsumer(Consumer[bytes]):
    """Writes consumed bytes to a writer. A batch of chunks is written as one buffer."""

    def __init__(self, writer: WriterLike):
        self._writer = writer

    async def consume(self, data: Any) -> None:
        if self._writer.is_closing():
            raise DeliveryRejected("Stream no longer writable")
        self._writer.write(b"".join(data) if is_batch(data) else data)
        await self._writer.drain()
