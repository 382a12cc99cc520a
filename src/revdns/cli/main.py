"""Main CLI entry point for revdns."""

import logging
import sys
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from revdns.core.dispatcher import run
from revdns.core.models import LookupConfig, Protocol

app = typer.Typer(
    name="revdns",
    help="Bulk reverse DNS (PTR) lookups for addresses read from stdin",
    add_completion=False,
)

# Results go to stdout; everything else goes here
console = Console(stderr=True)


def configure_logging(verbose: bool, debug: bool) -> None:
    """Send log records to stderr through rich."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(threadName)s %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def version_callback(value: bool):
    if value:
        from revdns import __version__

        typer.echo(f"revdns version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    threads: int = typer.Option(
        8, "--threads", "-t", min=1, help="How many threads should be used"
    ),
    resolver: Optional[str] = typer.Option(
        None, "--resolver", "-r", help="IP of the DNS resolver to use for lookups"
    ),
    resolvers: Optional[str] = typer.Option(
        None,
        "--resolvers",
        "-l",
        help="IPs of the DNS resolvers to use for lookups, comma delimited",
    ),
    protocol: Protocol = typer.Option(
        Protocol.UDP, "--protocol", "-P", help="Protocol to use for lookups"
    ),
    port: int = typer.Option(
        53, "--port", "-p", min=0, max=65535, help="Port to query the specified resolvers on"
    ),
    domain: bool = typer.Option(False, "--domain", "-d", help="Output only domains"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log a run summary to stderr"),
    debug: bool = typer.Option(False, "--debug", help="Log every failed lookup to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Resolve each address read from stdin and print `address<TAB>name` lines."""
    configure_logging(verbose, debug)

    try:
        config = LookupConfig(
            threads=threads,
            resolver=resolver,
            resolvers=resolvers,
            protocol=protocol,
            port=port,
            domain_only=domain,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e

    run(config, sys.stdin, sys.stdout)


if __name__ == "__main__":
    app()
