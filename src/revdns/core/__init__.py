"""Core library modules for reverse lookups."""

from revdns.core.dispatcher import run
from revdns.core.models import (
    DispatchSummary,
    LookupConfig,
    Protocol,
    ResolverHandle,
)
from revdns.core.resolver import build_resolvers

__all__ = [
    "DispatchSummary",
    "LookupConfig",
    "Protocol",
    "ResolverHandle",
    "build_resolvers",
    "run",
]
