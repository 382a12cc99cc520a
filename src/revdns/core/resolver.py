"""Reverse lookup clients and the resolver set builder."""

import logging

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype
import dns.resolver
import dns.reversename

from revdns.core.base import BaseResolverClient
from revdns.core.exceptions import LookupFailed
from revdns.core.models import LookupConfig, Protocol, ResolverHandle

logger = logging.getLogger(__name__)

# Errors a single lookup can raise; anything else is a bug
LOOKUP_ERRORS = (dns.exception.DNSException, OSError, ValueError)


class DirectResolver(BaseResolverClient):
    """Query one resolver endpoint directly over UDP or TCP."""

    def __init__(self, handle: ResolverHandle):
        if handle.is_system:
            raise ValueError("DirectResolver needs an explicit resolver address")
        self.handle = handle

    def lookup_addr(self, address: str) -> list[str]:
        """Send a PTR query for ``address`` to the configured endpoint."""
        try:
            qname = dns.reversename.from_address(address)
            msg = dns.message.make_query(qname, dns.rdatatype.PTR)

            # No timeout: the call waits until the resolver answers or errors
            if self.handle.protocol == Protocol.TCP:
                response = dns.query.tcp(
                    msg, self.handle.address, timeout=None, port=self.handle.port
                )
            else:
                response = dns.query.udp(
                    msg, self.handle.address, timeout=None, port=self.handle.port
                )
        except LOOKUP_ERRORS as e:
            raise LookupFailed(address, str(self.handle), f"{type(e).__name__}: {e}") from e

        rcode = response.rcode()
        if rcode != dns.rcode.NOERROR:
            raise LookupFailed(address, str(self.handle), dns.rcode.to_text(rcode))

        names: list[str] = []
        for rrset in response.answer:
            if rrset.rdtype != dns.rdatatype.PTR:
                continue
            for rdata in rrset:
                names.append(rdata.target.to_text())

        return names


class SystemResolver(BaseResolverClient):
    """Use the platform's resolver configuration (``/etc/resolv.conf``)."""

    def __init__(self, handle: ResolverHandle | None = None):
        self.handle = handle or ResolverHandle()
        self._resolver: dns.resolver.Resolver | None = None

    def _get_resolver(self) -> dns.resolver.Resolver:
        # Reading the system configuration is deferred to the first lookup.
        # Timeouts are left as configured by the platform; none is set here.
        if self._resolver is None:
            self._resolver = dns.resolver.Resolver()
        return self._resolver

    def lookup_addr(self, address: str) -> list[str]:
        """Resolve ``address`` through the system resolver."""
        try:
            answer = self._get_resolver().resolve_address(address)
        except LOOKUP_ERRORS as e:
            raise LookupFailed(address, str(self.handle), f"{type(e).__name__}: {e}") from e

        return [rdata.target.to_text() for rdata in answer]


def build_resolvers(config: LookupConfig) -> list[BaseResolverClient]:
    """Build the ordered resolver set for one worker.

    A single resolver wins and is used alone; otherwise each entry of the
    resolver list is used, and with neither configured the system resolver
    is the only member. Port and protocol apply to custom resolvers only.
    """
    resolvers: list[BaseResolverClient] = []

    if config.resolver:
        handle = ResolverHandle(
            address=config.resolver, port=config.port, protocol=config.protocol
        )
        resolvers.append(DirectResolver(handle))
    else:
        for address in config.resolver_list:
            handle = ResolverHandle(address=address, port=config.port, protocol=config.protocol)
            resolvers.append(DirectResolver(handle))

    if not resolvers:
        resolvers.append(SystemResolver())

    logger.debug(f"Resolver set: {', '.join(str(r.handle) for r in resolvers)}")
    return resolvers
