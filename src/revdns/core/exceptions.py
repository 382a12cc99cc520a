"""Exceptions raised by the lookup core."""


class RevDNSError(Exception):
    """Base exception for revdns errors."""


class LookupFailed(RevDNSError):
    """A reverse lookup against one resolver did not produce an answer."""

    def __init__(self, address: str, resolver: str, reason: str):
        self.address = address
        self.resolver = resolver
        self.reason = reason
        super().__init__(f"{address} via {resolver}: {reason}")


class QueueClosed(RevDNSError):
    """The work queue is closed (and drained, for consumers)."""
