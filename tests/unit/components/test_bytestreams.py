"""
Unit tests for the asyncio byte stream adapters.
"""

import asyncio
import pytest

from feedline import DeliveryRejected, ReadableFeeder, WritableConsumer


class FakeWriter:
    def __init__(self, closing=False, drain_error=None):
        self.closing = closing
        self.drain_error = drain_error
        self.written = []

    def write(self, data):
        self.written.append(data)

    async def drain(self):
        if self.drain_error is not None:
            raise self.drain_error

    def is_closing(self):
        return self.closing


@pytest.mark.asyncio
async def test_readable_feeds_chunks_until_eof(recorder):
    """Chunks from a StreamReader are fed as bytes until EOF."""
    reader = asyncio.StreamReader()
    feeder = ReadableFeeder(reader, chunk_size=4)
    feeder.feeds(recorder)

    reader.feed_data(b"abcdef")
    reader.feed_eof()
    await feeder.wait_closed()
    await asyncio.sleep(0)

    assert b"".join(recorder.calls) == b"abcdef"
    assert all(isinstance(c, bytes) for c in recorder.calls)
    assert feeder.at_eof


@pytest.mark.asyncio
async def test_readable_feeds_every_enabled_stream(make_recorder):
    """Each chunk goes to every enabled feed; disabled feeds lose it."""
    a, b = make_recorder(), make_recorder()
    reader = asyncio.StreamReader()
    feeder = ReadableFeeder(reader)
    feeder.feeds(a)
    feeder.feeds(b).enabled = False

    reader.feed_data(b"xyz")
    reader.feed_eof()
    await feeder.wait_closed()
    await asyncio.sleep(0)

    assert a.calls == [b"xyz"]
    assert b.calls == []


@pytest.mark.asyncio
async def test_readable_loses_rejected_chunks(rejecting_recorder):
    """A rejected chunk is dropped and reading continues."""
    reader = asyncio.StreamReader()
    feeder = ReadableFeeder(reader, chunk_size=2)
    feeder.feeds(rejecting_recorder)

    reader.feed_data(b"1234")
    reader.feed_eof()
    await feeder.wait_closed()
    await asyncio.sleep(0)

    assert b"".join(rejecting_recorder.calls) == b"1234"


@pytest.mark.asyncio
async def test_writable_writes_single_and_batch():
    """A batch of chunks is written as one buffer."""
    writer = FakeWriter()
    consumer = WritableConsumer(writer)

    await consumer.consume(b"ab")
    await consumer.consume([b"c", b"d"])

    assert writer.written == [b"ab", b"cd"]


@pytest.mark.asyncio
async def test_writable_rejects_when_closing():
    """A closing writer rejects the data."""
    writer = FakeWriter(closing=True)

    with pytest.raises(DeliveryRejected, match="no longer writable"):
        await WritableConsumer(writer).consume(b"ab")
    assert writer.written == []


@pytest.mark.asyncio
async def test_writable_propagates_drain_error():
    """Write completion errors reject the delivery."""
    writer = FakeWriter(drain_error=ConnectionResetError("peer gone"))

    with pytest.raises(ConnectionResetError):
        await WritableConsumer(writer).consume(b"ab")


@pytest.mark.asyncio
async def test_reader_to_writer_pipeline():
    """Bytes read from one stream end up written to another."""
    reader = asyncio.StreamReader()
    writer = FakeWriter()
    feeder = ReadableFeeder(reader)
    feeder.feeds(WritableConsumer(writer))

    reader.feed_data(b"hello")
    reader.feed_eof()
    await feeder.wait_closed()
    await asyncio.sleep(0)

    assert b"".join(writer.written) == b"hello"


class BrokenReader:
    def __init__(self):
        self.reads = 0

    async def read(self, n=-1):
        self.reads += 1
        if self.reads == 1:
            return b"ok"
        raise ConnectionResetError("reader broke")


@pytest.mark.asyncio
async def test_readable_reader_error_ends_pump(recorder):
    """A failing reader ends the pump without reporting EOF."""
    feeder = ReadableFeeder(BrokenReader())
    feeder.feeds(recorder)

    await feeder.wait_closed()
    await asyncio.sleep(0)

    assert recorder.calls == [b"ok"]
    assert feeder.at_eof is False


@pytest.mark.asyncio
async def test_readable_stop_cancels_pump(recorder):
    """stop() ends reading; later data is not fed."""
    reader = asyncio.StreamReader()
    feeder = ReadableFeeder(reader)
    feeder.feeds(recorder)

    reader.feed_data(b"one")
    await asyncio.sleep(0.01)
    feeder.stop()
    await feeder.wait_closed()

    reader.feed_data(b"two")
    await asyncio.sleep(0.01)

    assert recorder.calls == [b"one"]
    assert feeder.at_eof is False
