"""Pytest configuration and fixtures."""

import threading

import dns.message
import dns.rcode
import dns.rrset
import pytest

from revdns.core.base import BaseResolverClient
from revdns.core.exceptions import LookupFailed
from revdns.core.models import LookupConfig, ResolverHandle


class FakeResolver(BaseResolverClient):
    """In-memory resolver recording every lookup it serves."""

    def __init__(self, address: str, answers: dict | None = None, fail: bool = False, delay: float = 0.0):
        self.handle = ResolverHandle(address=address)
        self.answers = answers or {}
        self.fail = fail
        self.delay = delay
        self.calls: list[tuple[str, str]] = []
        self.threads: set[int] = set()
        self._lock = threading.Lock()

    def lookup_addr(self, address: str) -> list[str]:
        with self._lock:
            self.calls.append((self.handle.address, address))
            self.threads.add(threading.get_ident())

        if self.delay:
            threading.Event().wait(self.delay)

        if self.fail or address not in self.answers:
            raise LookupFailed(address, str(self.handle), "NXDOMAIN")
        return list(self.answers[address])


def make_ptr_response(query: dns.message.Message, names: list[str], rcode: int = dns.rcode.NOERROR):
    """Build a response to ``query`` carrying the given PTR targets."""
    response = dns.message.make_response(query)
    response.set_rcode(rcode)

    if names:
        qname = query.question[0].name
        response.answer.append(dns.rrset.from_text(qname, 300, "IN", "PTR", *names))

    return response


@pytest.fixture
def default_config() -> LookupConfig:
    """Config with every option at its default."""
    return LookupConfig()


@pytest.fixture
def fake_resolver_factory():
    """Return a factory that hands the same resolvers to every worker."""

    def factory(*resolvers: FakeResolver):
        built = []

        def build(config):
            built.append(config)
            return list(resolvers)

        build.built = built
        return build

    return factory


@pytest.fixture
def fake_resolver():
    """The in-memory resolver class, for building resolver sets in tests."""
    return FakeResolver


@pytest.fixture
def ptr_response():
    """Builder for dnspython PTR responses."""
    return make_ptr_response
