"""Allow running as ``python -m revdns``."""

from revdns.cli.main import app

if __name__ == "__main__":
    app()
