from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar, Union

T = TypeVar("T")


# Delivery function: returns normally on success, raises on failure.
ConsumeFunction = Callable[[Any], Awaitable[None]]


class ConsumerBehavior(Protocol):
    """Anything that can be fed to.

    ``consume`` is the intake; ``connector`` is the bound delivery function
    producers attach to.
    """

    async def consume(self, data: Any) -> None:
        ...

    @property
    def connector(self) -> ConsumeFunction:
        ...


Feedable = Union[ConsumerBehavior, ConsumeFunction]


def consume_function_of(target: Feedable) -> ConsumeFunction:
    """Normalize a feedable target into a plain delivery function.

    Consumers are recognized by their ``connector``; anything else must be
    the delivery function itself.
    """
    connector = getattr(target, "connector", None)
    if connector is not None:
        return connector
    if callable(target):
        return target
    raise TypeError(f"{type(target).__name__} is neither a consumer nor a consume function")


def is_batch(data: Any) -> bool:
    return isinstance(data, list)


def as_batch(data: Any) -> list:
    """Lone values become one-element batches."""
    return data if is_batch(data) else [data]
