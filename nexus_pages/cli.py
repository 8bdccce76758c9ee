"""Cyclopts CLI entrypoint for rendering the Nexus theme pages.

The ``pages`` console script renders every page configured in
``config/site.yaml`` and can check the packaged templates against their
operation policies without rendering anything.

Examples
--------
Render all pages for the default configuration:

>>> from nexus_pages.cli import main
>>> main()  # doctest: +SKIP

Render the front page into a custom directory:

>>> from nexus_pages.cli import app
>>> app(["generate", "--page", "front", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import PageBuilder
from .composer import PageComposer
from .config import load_site_config
from .embeds import ElementHelpComposer, GalleryComposer

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render the configured theme pages to static HTML.")
def generate(
    *,
    page: typ.Annotated[
        str | None, Parameter(help="Page identifier", env_var="INPUT_PAGE")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render pages for the requested site configuration.

    Parameters
    ----------
    page : str or None, optional
        Specific page key to render; when ``None`` (default) all pages are
        rendered.
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Write the single requested page into this folder instead of its
        configured location.

    Raises
    ------
    ValueError
        If ``output_dir`` is supplied when more than one page is requested.
    """
    site_config = load_site_config(config)

    if page:
        keys = [site_config.get_page(page).key]
    else:
        keys = list(site_config.pages)

    if len(keys) > 1 and output_dir:
        msg = "Cannot override output_dir when generating multiple pages."
        raise ValueError(msg)

    for key in keys:
        if output_dir:
            entry = site_config.pages[key]
            site_config.pages[key] = dc.replace(
                entry, output=output_dir / entry.output.name
            )
        for path in PageBuilder(site_config, key).run():
            print(f"wrote {_format_path(path)}")


@app.command(help="Check templates against their operation policies.")
def check(
    *,
    templates_dir: typ.Annotated[
        Path | None,
        Parameter(help="Template folder to check", env_var="INPUT_TEMPLATES_DIR"),
    ] = None,
) -> None:
    """Construct every composer so each template's policy check runs.

    Raises
    ------
    OperationNotAllowedError
        For the first template using a tag, filter, or function outside its
        policy.
    """
    for composer_type in (PageComposer, GalleryComposer, ElementHelpComposer):
        composer = composer_type(templates_dir=templates_dir)
        print(f"ok {composer.template_name}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
