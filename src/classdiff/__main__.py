"""Entry point for ``python -m classdiff``."""

from classdiff.cli.main import cli

if __name__ == "__main__":
    cli()
