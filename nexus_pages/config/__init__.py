"""Load and validate the Nexus site configuration YAML.

This subpackage parses ``config/site.yaml``, merges shared defaults with
per-page overrides, converts region entries into plain text or trusted
markup, and produces typed dataclasses (:class:`SiteConfig`,
:class:`PageEntry`) that the page builder consumes. The primary entry point
is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from nexus_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.get_page("front").output  # doctest: +SKIP
PosixPath('public/index.html')
"""

from .loader import load_site_config
from .models import PageEntry, SiteConfig, SiteConfigError

__all__ = ["PageEntry", "SiteConfig", "SiteConfigError", "load_site_config"]
