"""CLI package for trparser."""

from trparser.cli.app import app


def main() -> int:
    """Main entry point for the CLI."""
    app()
    return 0


__all__ = ["app", "main"]
