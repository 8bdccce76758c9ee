"""Region-driven page composition for the Nexus lawncare theme.

This package renders theme pages from independently optional content regions
and exposes the CLI entry points used by ``uv run pages`` to write them out as
static HTML.

Exports
-------
- ``PageComposer``: Compose a page from a ``RegionSet`` and ``PageContext``.
- ``RegionSet`` / ``PageContext``: Per-render inputs.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from nexus_pages import PageComposer, PageContext, RegionSet
>>> html = PageComposer().compose(RegionSet(), PageContext())
>>> 'id="colophon"' in html
True
"""

from __future__ import annotations

from .cli import app, main
from .composer import PageComposer
from .models import PageContext, RegionSet

__all__ = ["PageComposer", "PageContext", "RegionSet", "app", "main"]
