"""Core data models for revdns."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Protocol(str, Enum):
    """Transport used to reach a custom resolver."""

    TCP = "tcp"
    UDP = "udp"


# ============================================================================
# Configuration
# ============================================================================


class LookupConfig(BaseModel):
    """Process-wide lookup configuration, built once and shared read-only."""

    model_config = ConfigDict(frozen=True)

    threads: int = Field(default=8, ge=1, description="Number of concurrent workers")
    resolver: str | None = Field(default=None, description="Single resolver address")
    resolvers: str | None = Field(
        default=None, description="Comma delimited resolver addresses"
    )
    protocol: Protocol = Field(default=Protocol.UDP, description="Transport for custom resolvers")
    port: int = Field(default=53, ge=0, le=65535, description="Port for custom resolvers")
    domain_only: bool = Field(default=False, description="Emit only resolved names")

    @property
    def resolver_list(self) -> list[str]:
        """Return the configured resolver list, blank entries removed."""
        if not self.resolvers:
            return []

        return [entry.strip() for entry in self.resolvers.split(",") if entry.strip()]


# ============================================================================
# Resolver Models
# ============================================================================


class ResolverHandle(BaseModel):
    """Dial parameters for one resolver; ``address=None`` is the system resolver."""

    model_config = ConfigDict(frozen=True)

    address: str | None = None
    port: int = Field(default=53, ge=0, le=65535)
    protocol: Protocol = Protocol.UDP

    @property
    def is_system(self) -> bool:
        return self.address is None

    def __str__(self) -> str:
        if self.is_system:
            return "system"
        return f"{self.address}:{self.port}/{self.protocol.value}"


# ============================================================================
# Run Summary
# ============================================================================


class DispatchSummary(BaseModel):
    """Counters collected over one run of the dispatcher."""

    addresses: int = Field(default=0, description="Work items consumed")
    lookups: int = Field(default=0, description="Lookups issued")
    failures: int = Field(default=0, description="Lookups that failed")
    names: int = Field(default=0, description="Output lines written")
    duration_ms: float = Field(default=0.0, description="Wall clock time of the run")
