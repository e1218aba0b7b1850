from __future__ import annotations

import asyncio
import sys
from datetime import datetime
from typing import Any, Optional

import typer
from loguru import logger

from . import (
    Consumer,
    DeliveryRejected,
    IntervalFeeder,
    IntervalFeederOptions,
    IteratorFeeder,
    Silo,
    Transformer,
)
from .settings import get_settings

app = typer.Typer(help="feedline demo pipelines")


class EchoConsumer(Consumer[Any]):
    """Echoes what it consumes; rejects numbers divisible by ``reject_every``."""

    def __init__(self, label: str, reject_every: int = 0):
        self._label = label
        self._reject_every = reject_every

    async def consume(self, data: Any) -> None:
        if self._reject_every and isinstance(data, int) and data % self._reject_every == 0:
            raise DeliveryRejected(f"{data} is divisible by {self._reject_every}")
        typer.echo(f"{datetime.now():%H:%M:%S.%f} {self._label} {data}")


async def _echo_rejected(data: Any) -> None:
    typer.echo(f"{datetime.now():%H:%M:%S.%f} rejected {data}")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", envvar="FEEDLINE_LOG_LEVEL", help="loguru level for stderr"
    ),
):
    logger.remove()
    logger.add(sys.stderr, level=(log_level or get_settings().log_level).upper())


# ---------------------------
# Demos
# ---------------------------


@app.command("count")
def count(
    interval_ms: int = typer.Option(300, "--interval-ms", help="Time between numbers"),
    start: int = typer.Option(0, "--start", help="First number"),
    increment: int = typer.Option(1, "--increment", help="Step between numbers"),
    duration: float = typer.Option(3.0, "--duration", help="Seconds to run"),
    reject_every: int = typer.Option(
        0, "--reject-every", help="Consumer rejects multiples of this (0 = never)"
    ),
):
    """Print a number sequence; rejected numbers go to an error redirect."""

    async def run() -> None:
        async with IntervalFeeder(
            IntervalFeederOptions(interval_ms=interval_ms, start=start, increment=increment)
        ) as ticks:
            ticks.feeds(EchoConsumer("count", reject_every)).throws_to(_echo_rejected)
            await asyncio.sleep(duration)

    asyncio.run(run())


@app.command("silo")
def silo(
    fill_ms: int = typer.Option(300, "--fill-ms", help="Interval feeding the silo"),
    release_ms: int = typer.Option(1000, "--release-ms", help="Interval triggering release"),
    duration: float = typer.Option(3.5, "--duration", help="Seconds to run"),
):
    """Hold a fast number sequence in a silo and release it on a slower trigger."""

    async def run() -> None:
        tank = Silo[int]()
        fill = IntervalFeeder(IntervalFeederOptions(interval_ms=fill_ms))
        release = IntervalFeeder(IntervalFeederOptions(interval_ms=release_ms))

        fill.feeds(tank)
        release.triggers(tank.feeds(EchoConsumer("silo")))
        try:
            await asyncio.sleep(duration)
        finally:
            fill.stop()
            release.stop()
        logger.info(f"{len(tank)} item(s) left in silo")

    asyncio.run(run())


@app.command("iterate")
def iterate(
    count: int = typer.Option(10, "--count", help="Numbers to iterate over"),
    divisor: int = typer.Option(3, "--divisor", help="Divisibility to report"),
):
    """Iterate over a range and describe divisibility of each number."""

    async def run() -> None:
        describe = Transformer[int, str](
            lambda i: f"{i} can be divided by {divisor}"
            if i % divisor == 0
            else f"{i} cannot be divided by {divisor}"
        )
        describe.feeds(EchoConsumer("iterate"))
        stream = IteratorFeeder(range(count)).feeds(describe)
        while stream.enabled:
            await asyncio.sleep(0.01)

    asyncio.run(run())


if __name__ == "__main__":
    app()
