"""Allow running trparser as a module: python -m trparser."""

from trparser.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
