"""Abstract base class defining the resolver interface."""

from abc import ABC, abstractmethod

from revdns.core.models import ResolverHandle


class BaseResolverClient(ABC):
    """Abstract base class for reverse lookup clients."""

    handle: ResolverHandle

    @abstractmethod
    def lookup_addr(self, address: str) -> list[str]:
        """Return the PTR names for ``address``.

        Names are returned as absolute names, trailing dot included.
        Raises ``LookupFailed`` when the resolver gives no usable answer.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.handle})"
