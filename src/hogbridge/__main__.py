"""Main entry point for hogbridge."""

from hogbridge.cli.main import cli

if __name__ == "__main__":
    cli()
