"""Typed dataclasses describing the Nexus site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from ..models import PageContext, RegionSet, ThemeConfig


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageEntry:
    """A fully resolved page: where it is written and what it renders."""

    key: str
    output: Path
    regions: RegionSet
    context: PageContext


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of page entries alongside shared theme settings."""

    pages: dict[str, PageEntry]
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    translations: dict[str, str] = dc.field(default_factory=dict)
    output_dir: Path = Path("public")

    def get_page(self, key: str) -> PageEntry:
        """Return the page registered under ``key``."""
        try:
            return self.pages[key]
        except KeyError as exc:
            known = ", ".join(sorted(self.pages)) or "none"
            msg = f"Unknown page '{key}'. Known pages: {known}."
            raise SiteConfigError(msg) from exc
