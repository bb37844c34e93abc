"""Reknit knitted R Markdown reports into the scrolly site template.

This package exposes the CLI entry points used by ``uv run reknit`` to merge
rendered HTML reports into the page template and copy their assets into the
published ``docs`` tree.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from reknit import main
>>> main()  # doctest: +SKIP
>>> from reknit import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
