"""Stream composition primitives.

A stream is any async iterator. A stage is a callable that takes an
upstream stream and returns a downstream one. Stages are async
generators, so every stage pulls one item at a time from its upstream
and backpressure from a slow consumer reaches the producer.
"""

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Sequence
from typing import Any, TypeVar, Union

from .core.results import TransferResults
from .core.types import TransferStage

logger = logging.getLogger(__name__)

T = TypeVar("T")

Stage = Callable[[AsyncIterator[Any]], AsyncIterator[Any]]
Producer = Union[AsyncIterable[Any], Iterable[Any]]


async def from_iterable(iterable: Iterable[T]) -> AsyncIterator[T]:
    """Adapt a synchronous iterable into an async stream."""
    for item in iterable:
        yield item


def _as_stream(producer: Producer) -> AsyncIterator[Any]:
    if isinstance(producer, AsyncIterator):
        return producer
    if isinstance(producer, AsyncIterable):
        return producer.__aiter__()
    if isinstance(producer, Iterable):
        return from_iterable(producer)
    raise TypeError(f"Not a stream producer: {type(producer).__name__}")


def chain(stages: Sequence[Producer | Stage]) -> AsyncIterator[Any]:
    """Pipe a producer through an ordered list of stages.

    The first element is the producer (an async or sync iterable); every
    following element is a stage applied to the output of the one before.
    Stages are wired immediately but nothing is pulled until the returned
    stream is iterated. Exceptions raised anywhere in the chain reach the
    consumer unchanged. Closing the returned stream early closes every
    stage, upstream last.

    Args:
        stages: Producer followed by zero or more stages

    Returns:
        Stream of the items emitted by the last stage, in producer order

    Raises:
        ValueError: If stages is empty
        TypeError: If the producer is not iterable

    Example:
        >>> stream = chain([records, StageCounter('links', results)])
        >>> async for record in stream:
        ...     print(record)
    """
    if not stages:
        raise ValueError("chain() needs at least a producer")

    producer, *transforms = stages
    opened = [_as_stream(producer)]
    for stage in transforms:
        opened.append(stage(opened[-1]))

    return _pipe(opened)


async def _pipe(opened: list[AsyncIterator[Any]]) -> AsyncIterator[Any]:
    try:
        async for item in opened[-1]:
            yield item
    finally:
        close_error: BaseException | None = None
        for stream in reversed(opened):
            aclose = getattr(stream, "aclose", None)
            if aclose is None:
                continue
            try:
                await aclose()
            except Exception as e:
                if close_error is None:
                    close_error = e
                else:
                    logger.warning("Error closing stream stage %r: %s", stream, e)
        if close_error is not None:
            raise close_error


def on_item_passthrough(callback: Callable[[Any], None]) -> Stage:
    """Build a stage that calls ``callback`` with each item, then forwards it."""

    async def passthrough(upstream: AsyncIterator[T]) -> AsyncIterator[T]:
        async for item in upstream:
            callback(item)
            yield item

    return passthrough


class StageCounter:
    """Stage that counts items flowing through it.

    The counter holds a reference to the provider's results and
    increments ``results[stage]`` once per item before forwarding it. It
    never drops, duplicates, reorders or modifies items, so after a full
    drain the count equals the number of items produced upstream.

    Args:
        stage: Transfer stage to count under
        results: Results accumulator shared with the provider
    """

    def __init__(self, stage: TransferStage | str, results: TransferResults):
        self.stage = TransferStage(stage)
        self.results = results

    def __call__(self, upstream: AsyncIterator[T]) -> AsyncIterator[T]:
        return on_item_passthrough(self._count)(upstream)

    def _count(self, _item: Any) -> None:
        self.results.increment(self.stage)

    def __repr__(self) -> str:
        return f"StageCounter({self.stage.value!r})"
