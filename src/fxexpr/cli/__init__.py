"""
fxexpr CLI Package.

- main.py: the typer application and its commands
- utils.py: shared helpers (version, logging, type declarations)
"""

from fxexpr.cli.main import app, main

__all__ = ["app", "main"]
