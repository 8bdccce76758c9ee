"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import REGION_NAMES
from ..models import PageContext, RegionSet, Slide
from .helpers import _build_region_value, _build_theme_config, _optional_str
from .models import PageEntry, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the theme and its pages.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed site configuration with theme settings, translations, and one
        resolved :class:`PageEntry` per configured page.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or invalid (for example,
        no pages are defined or a region name is unknown).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.get_page("front").context.is_front  # doctest: +SKIP
    True
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    output_dir = Path(defaults.get("output_dir", "public"))

    page_defaults = _PageDefaults(
        output_dir=output_dir,
        base_path=str(defaults.get("base_path", "/")),
        front_page=str(defaults.get("front_page", "/")),
        site_name=str(defaults.get("site_name", "")),
        this_year=str(defaults.get("this_year") or dt.datetime.now(dt.UTC).year),
        preface_col=defaults.get("preface_col", 4),
        footer_col=defaults.get("footer_col", 3),
    )

    pages_raw = raw.get("pages") or {}
    if not pages_raw:
        msg = "No pages defined in site configuration."
        raise SiteConfigError(msg)

    pages: dict[str, PageEntry] = {}
    for key, payload in pages_raw.items():
        match payload:
            case dict():
                pages[str(key)] = _build_page_entry(
                    key=str(key), payload=payload, defaults=page_defaults
                )
            case _:
                msg = f"Page '{key}' must be a mapping."
                raise SiteConfigError(msg)

    translations = raw.get("translations") or {}
    if not isinstance(translations, dict):
        msg = "'translations' must map source strings to display strings."
        raise SiteConfigError(msg)

    return SiteConfig(
        pages=pages,
        theme=_build_theme_config(raw.get("theme", {}) or {}),
        translations={str(k): str(v) for k, v in translations.items()},
        output_dir=output_dir,
    )


@dc.dataclass(slots=True)
class _PageDefaults:
    """Internal container for page default configuration values."""

    output_dir: Path
    base_path: str
    front_page: str
    site_name: str
    this_year: str
    preface_col: int | str
    footer_col: int | str


def _build_page_entry(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _PageDefaults,
) -> PageEntry:
    """Build a PageEntry for a single page using defaults and overrides."""
    output = Path(payload.get("output") or defaults.output_dir / f"{key}.html")
    regions = _build_regions(key, payload.get("regions"))
    slides = tuple(_build_slide(key, entry) for entry in payload.get("slides") or [])
    context = PageContext(
        is_front=bool(payload.get("is_front", False)),
        slideshow_display=bool(payload.get("slideshow_display", False)),
        slides=slides,
        preface_col=payload.get("preface_col", defaults.preface_col),
        footer_col=payload.get("footer_col", defaults.footer_col),
        base_path=str(payload.get("base_path", defaults.base_path)),
        this_year=str(payload.get("this_year", defaults.this_year)),
        front_page=str(payload.get("front_page", defaults.front_page)),
        site_name=str(payload.get("site_name", defaults.site_name)),
        show_breadcrumbs=bool(payload.get("show_breadcrumbs", False)),
        breadcrumb=_build_region_value("breadcrumb", payload.get("breadcrumb")),
        messages=_build_region_value("messages", payload.get("messages")),
    )
    return PageEntry(key=key, output=output, regions=regions, context=context)


def _build_regions(key: str, payload: object | None) -> RegionSet:
    """Build the page's region set, rejecting unknown region names."""
    match payload:
        case None:
            return RegionSet()
        case dict() as data:
            pass
        case _:
            msg = f"Page '{key}' regions must be a mapping."
            raise SiteConfigError(msg)
    unknown = sorted(str(name) for name in data if name not in REGION_NAMES)
    if unknown:
        msg = f"Page '{key}' defines unknown regions: {', '.join(unknown)}."
        raise SiteConfigError(msg)
    return RegionSet.from_mapping(
        {name: _build_region_value(name, value) for name, value in data.items()}
    )


def _build_slide(key: str, entry: object) -> Slide:
    """Build the caption for one slide position."""
    match entry:
        case None:
            return Slide()
        case dict() as data:
            return Slide(
                heading=_optional_str(data.get("heading")),
                description=_optional_str(data.get("description")),
                url=_optional_str(data.get("url")),
            )
        case _:
            msg = f"Page '{key}' slides must be mappings or empty entries."
            raise SiteConfigError(msg)
