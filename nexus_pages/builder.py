"""Nexus page rendering pipeline.

This module turns one configured page from ``config/site.yaml`` into a static
HTML artefact plus a small JSON sidecar listing the asset libraries the page
attached while rendering (for example ``nexus/slider-js`` on the front page).
The main entry point is ``PageBuilder``:

>>> from pathlib import Path
>>> from nexus_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> PageBuilder(site, "front").run()  # doctest: +SKIP
[PosixPath('public/index.html'), PosixPath('public/.nexus-pages-front-assets.json')]

Side effects are limited to reading the packaged template and writing UTF-8
files under the page's output directory.
"""

from __future__ import annotations

import json
import typing as typ

from ._constants import ASSET_META_TEMPLATE
from .composer import PageComposer
from .services import AttachedAssets, CatalogTranslator, Services

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig


class PageBuilder:
    """Render a configured page and record the libraries it attached."""

    def __init__(
        self, site: SiteConfig, page_key: str, *, templates_dir: Path | None = None
    ) -> None:
        """Resolve the page and build a composer with fresh services.

        Parameters
        ----------
        site : SiteConfig
            Parsed site configuration providing the theme, translations, and
            page entries.
        page_key : str
            Key of the page to render.
        templates_dir : Path, optional
            Directory holding ``page.jinja``; defaults to the packaged
            templates.

        Raises
        ------
        SiteConfigError
            If ``page_key`` is not configured.
        OperationNotAllowedError
            If the page template uses an operation outside the page policy.
        """
        self.page = site.get_page(page_key)
        self.assets = AttachedAssets()
        services = Services(
            translator=CatalogTranslator(site.translations), assets=self.assets
        )
        self.composer = PageComposer(
            site.theme, services=services, templates_dir=templates_dir
        )

    def run(self) -> list[Path]:
        """Render and write the page, returning the written paths.

        Returns
        -------
        list[Path]
            The HTML file followed by the asset sidecar JSON file.

        Notes
        -----
        Parent directories are created as needed, the HTML always ends with a
        newline, and filesystem errors propagate to the caller.
        """
        output_path = self.page.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        html = self.composer.compose(self.page.regions, self.page.context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")

        meta_path = output_path.parent / ASSET_META_TEMPLATE.format(key=self.page.key)
        meta = {"page": self.page.key, "libraries": self.assets.libraries}
        meta_path.write_text(json.dumps(meta, indent=2) + "\n", encoding="utf-8")
        return [output_path, meta_path]


__all__ = ["PageBuilder"]
