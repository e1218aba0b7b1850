"""Ready-made feeders and consumers."""

from .interval import IntervalFeeder, IntervalFeederOptions
from .iterator import IteratorFeeder
from .silo import Silo
from .watchdog import Watchdog
from .immediate import ImmediateFeeder
from .transmitter import Transmitter, Transformer, Filter, Aggregator
from .bytestreams import ReadableFeeder, WritableConsumer

__all__ = [
    # stateful feeders
    "IntervalFeeder",
    "IntervalFeederOptions",
    "IteratorFeeder",
    "Silo",
    "Watchdog",
    "ImmediateFeeder",
    # transmitters
    "Transmitter",
    "Transformer",
    "Filter",
    "Aggregator",
    # byte streams
    "ReadableFeeder",
    "WritableConsumer",
]
