"""Async notification channel with an explicit cancellation handle."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class Channel(Generic[T]):
    """Queue-backed stream of items.

    Producers call ``publish``; a consumer iterates with ``async for`` and calls
    ``task_done`` after handling each item so ``join`` can tell when it has caught up.
    ``unsubscribe`` (alias of ``close``) ends the iteration and runs ``on_close`` once.
    With ``maxsize`` set, only the newest ``maxsize`` items are kept for a slow consumer.
    """

    def __init__(
        self, on_close: Callable[[], None] | None = None, *, maxsize: int = 0
    ) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._maxsize = maxsize
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, item: T) -> bool:
        if self._closed:
            return False
        if self._maxsize and self._queue.qsize() >= self._maxsize:
            self._queue.get_nowait()
            self._queue.task_done()
        self._queue.put_nowait(item)
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            try:
                self._on_close()
            except Exception:
                logger.exception("Channel close hook failed")

    unsubscribe = close

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        await self._queue.join()

    def __aiter__(self) -> Channel[T]:
        return self

    async def __anext__(self) -> T:
        item = await self._queue.get()
        if item is _CLOSED:
            self._queue.task_done()
            raise StopAsyncIteration
        return item
