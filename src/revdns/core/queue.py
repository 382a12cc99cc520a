"""Closeable handoff queue carrying addresses from the reader to workers."""

import threading
from collections import deque
from typing import Generic, Iterator, TypeVar

from revdns.core.exceptions import QueueClosed

T = TypeVar("T")


class WorkQueue(Generic[T]):
    """Single-producer, multi-consumer queue without a buffer.

    ``put`` returns only after a consumer has taken the item, so the
    producer runs at the pace of the workers. After ``close`` consumers
    still receive anything already handed over, then see ``QueueClosed``.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._items: deque[T] = deque()
        self._closed = False
        self._put_count = 0
        self._taken_count = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def put(self, item: T) -> None:
        """Hand ``item`` to a consumer, blocking until one takes it or the queue closes."""
        with self._cond:
            if self._closed:
                raise QueueClosed("put on closed queue")

            self._items.append(item)
            self._put_count += 1
            ticket = self._put_count
            self._cond.notify_all()

            self._cond.wait_for(lambda: self._taken_count >= ticket or self._closed)

    def get(self) -> T:
        """Take the next item, blocking while the queue is empty and open."""
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed)

            if not self._items:
                raise QueueClosed("queue closed and drained")

            item = self._items.popleft()
            self._taken_count += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Stop accepting items and wake every waiting consumer."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except QueueClosed:
                return
