"""Command line interface for revdns."""
