"""revdns - bulk reverse DNS (PTR) lookups against configurable resolvers."""

__version__ = "0.1.0"
