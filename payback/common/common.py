import asyncio
import logging
import typing as t

logger = logging.getLogger('app')

T = t.TypeVar("T")
R = t.TypeVar("R")




####################
# Common utilities #
####################

async def gather_bounded(func: t.Callable[[T], t.Awaitable[R]], items: t.Iterable[T], limit: int = 8) -> list[R]:
    """Runs `func` over every item with at most `limit` calls in flight.

    Waits for every call to finish and returns results in the order of `items`.
    The first exception raised by a worker cancels the remaining ones and is re-raised.
    """
    if limit < 1:
        raise ValueError(f"Worker limit must be positive. Given: {limit}")
    semaphore = asyncio.Semaphore(limit)

    async def worker(item: T) -> R:
        async with semaphore:
            return await func(item)

    tasks = [asyncio.ensure_future(worker(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
