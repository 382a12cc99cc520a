"""Concurrent lookup dispatcher: input reader, worker pool and coordinator."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TextIO

from revdns.core.base import BaseResolverClient
from revdns.core.exceptions import LookupFailed, QueueClosed
from revdns.core.models import DispatchSummary, LookupConfig
from revdns.core.queue import WorkQueue
from revdns.core.resolver import build_resolvers

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[LookupConfig], list[BaseResolverClient]]


def format_line(address: str, name: str, domain_only: bool) -> str:
    """Render one output line for a resolved name."""
    name = name.rstrip(".")

    if domain_only:
        return name
    return f"{address}\t{name}"


class LineWriter:
    """Write whole lines to a shared stream, one writer at a time."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._lock = threading.Lock()

    def write_line(self, line: str) -> None:
        with self._lock:
            self._stream.write(line + "\n")
            self._stream.flush()


# ============================================================================
# Input Stream Reader
# ============================================================================


def read_input(stream: TextIO, queue: WorkQueue[str]) -> int:
    """Publish every line of ``stream`` to ``queue``, then close it.

    Returns the number of lines published. A read error ends the input.
    """
    published = 0

    try:
        for line in stream:
            queue.put(line.rstrip("\r\n"))
            published += 1
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Input read failed after {published} lines, treating as end of input: {e}")
    except QueueClosed:
        logger.debug(f"Work queue closed early, {published} lines published")
    finally:
        queue.close()

    logger.debug(f"Input reader finished, {published} lines published")
    return published


# ============================================================================
# Worker Pool
# ============================================================================


class Worker:
    """Drain the work queue, querying every resolver in order per address."""

    def __init__(
        self,
        worker_id: int,
        config: LookupConfig,
        queue: WorkQueue[str],
        writer: LineWriter,
        resolver_factory: ResolverFactory = build_resolvers,
    ):
        self.worker_id = worker_id
        self.config = config
        self.queue = queue
        self.writer = writer
        self.resolver_factory = resolver_factory

        self.addresses = 0
        self.lookups = 0
        self.failures = 0
        self.names = 0

    def run(self) -> "Worker":
        resolvers = self.resolver_factory(self.config)
        logger.debug(f"Worker {self.worker_id} started with {len(resolvers)} resolver(s)")

        for address in self.queue:
            self.addresses += 1
            for resolver in resolvers:
                self._lookup(resolver, address)

        logger.debug(f"Worker {self.worker_id} drained after {self.addresses} addresses")
        return self

    def _lookup(self, resolver: BaseResolverClient, address: str) -> None:
        self.lookups += 1

        try:
            names = resolver.lookup_addr(address)
        except LookupFailed as e:
            self.failures += 1
            logger.debug(f"Worker {self.worker_id}: lookup failed: {e}")
            return

        for name in names:
            self.writer.write_line(format_line(address, name, self.config.domain_only))
            self.names += 1


# ============================================================================
# Lifecycle Coordinator
# ============================================================================


def run(
    config: LookupConfig,
    stdin: TextIO,
    stdout: TextIO,
    resolver_factory: ResolverFactory = build_resolvers,
) -> DispatchSummary:
    """Read addresses from ``stdin`` and resolve them with ``config.threads`` workers.

    Blocks until the input is exhausted and every worker has drained.
    """
    start = time.perf_counter()

    queue: WorkQueue[str] = WorkQueue()
    writer = LineWriter(stdout)

    reader = threading.Thread(
        target=read_input, args=(stdin, queue), name="revdns-reader", daemon=True
    )
    reader.start()

    workers = [
        Worker(i, config, queue, writer, resolver_factory) for i in range(config.threads)
    ]

    try:
        with ThreadPoolExecutor(
            max_workers=config.threads, thread_name_prefix="revdns-worker"
        ) as executor:
            futures = [executor.submit(worker.run) for worker in workers]
            for future in futures:
                future.result()
    finally:
        # Unblock the reader if a worker died before the input was drained
        queue.close()

    summary = DispatchSummary(
        addresses=sum(w.addresses for w in workers),
        lookups=sum(w.lookups for w in workers),
        failures=sum(w.failures for w in workers),
        names=sum(w.names for w in workers),
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        f"Resolved {summary.addresses} addresses: {summary.lookups} lookups, "
        f"{summary.failures} failed, {summary.names} names in {summary.duration_ms:.0f}ms"
    )
    return summary
