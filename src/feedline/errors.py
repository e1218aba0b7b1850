"""
Exceptions raised by feedline components.

Configuration errors are raised synchronously while a pipeline is being wired.
Delivery errors travel through the async delivery path and are either redirected
or discarded by the producer that attempted the delivery.
"""


class FeedlineError(Exception):
    """Base error for feedline."""

    pass


class StreamNotTriggerableError(FeedlineError):
    """A trigger connection was requested on a stream that exposes no trigger."""

    pass


class DeliveryRejected(FeedlineError):
    """A consumer refused the data it was given."""

    pass


class NoForwardFeedsError(DeliveryRejected):
    """A transmitter received data while nothing is attached downstream."""

    pass
