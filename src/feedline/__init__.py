"""
feedline: push-based dataflow composition.

Feeders push data into consumers through a PushStream per connection, with
backpressure (a feeder waits on its consumer), triggers (an alternate intake that
releases or rearms) and error redirection (rejected data goes to an alternate
consumer).

Usage:
    from feedline import IteratorFeeder, Silo, IntervalFeeder, IntervalFeederOptions

    silo = Silo[int]()
    IteratorFeeder(range(100)).feeds(silo)
    release = silo.feeds(sink).throws_to(dead_letters)
    IntervalFeeder(IntervalFeederOptions(interval_ms=500)).triggers(release)
"""

from .types import ConsumeFunction, ConsumerBehavior, Feedable, consume_function_of, as_batch
from .errors import (
    FeedlineError,
    StreamNotTriggerableError,
    DeliveryRejected,
    NoForwardFeedsError,
)
from .stream import PushStream
from .base import Feeder, Consumer
from .pipe import Pipe
from .settings import FeedlineSettings, get_settings
from .components import (
    IntervalFeeder,
    IntervalFeederOptions,
    IteratorFeeder,
    Silo,
    Watchdog,
    ImmediateFeeder,
    Transmitter,
    Transformer,
    Filter,
    Aggregator,
    ReadableFeeder,
    WritableConsumer,
)

__version__ = "0.1.0"
__all__ = [
    # protocol
    "ConsumeFunction",
    "ConsumerBehavior",
    "Feedable",
    "consume_function_of",
    "as_batch",
    "PushStream",
    "Feeder",
    "Consumer",
    "Pipe",
    # errors
    "FeedlineError",
    "StreamNotTriggerableError",
    "DeliveryRejected",
    "NoForwardFeedsError",
    # settings
    "FeedlineSettings",
    "get_settings",
    # components
    "IntervalFeeder",
    "IntervalFeederOptions",
    "IteratorFeeder",
    "Silo",
    "Watchdog",
    "ImmediateFeeder",
    "Transmitter",
    "Transformer",
    "Filter",
    "Aggregator",
    "ReadableFeeder",
    "WritableConsumer",
]
