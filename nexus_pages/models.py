"""Typed inputs for a single page render.

``RegionSet`` and ``PageContext`` are built fresh for every render and are
read-only while the composer runs. ``ThemeConfig`` carries the settings that
stay fixed across renders: slide slots, the slider library, the footer credit
and the extra footer links.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import REGION_NAMES, SLIDE_IMAGE_DIR, SLIDER_LIBRARY

SLIDE_KEY_PATTERN = re.compile(r"^slide(\d+)_(head|desc|url)$")
_SLIDE_FIELDS = {"head": "heading", "desc": "description", "url": "url"}


def is_present(value: object | None) -> bool:
    """Return ``True`` when ``value`` is set and not blank.

    A literal ``"0"`` counts as present; only ``None`` and whitespace-only
    strings are absent.
    """
    if value is None:
        return False
    return bool(str(value).strip())


def _present_or_none(value: str | None) -> str | None:
    return value if is_present(value) else None


@dc.dataclass(frozen=True, slots=True)
class RegionSet:
    """Pre-rendered content for each named page region.

    Plain ``str`` values are escaped when rendered; ``markupsafe.Markup``
    values are trusted markup and pass through untouched. ``None`` and blank
    values mean the region is absent.
    """

    header: str | None = None
    main_navigation: str | None = None
    preface_first: str | None = None
    preface_second: str | None = None
    preface_third: str | None = None
    highlighted: str | None = None
    content_top: str | None = None
    help: str | None = None
    content: str | None = None
    footer: str | None = None
    footer_first: str | None = None
    footer_second: str | None = None
    footer_third: str | None = None
    footer_fourth: str | None = None

    @classmethod
    def from_mapping(cls, regions: typ.Mapping[str, str | None]) -> RegionSet:
        """Build a region set, dropping any key that is not a known region."""
        return cls(**{name: regions[name] for name in REGION_NAMES if name in regions})

    def is_present(self, name: str) -> bool:
        """Return whether region ``name`` has content; unknown names are absent."""
        if name not in REGION_NAMES:
            return False
        return is_present(getattr(self, name))

    def any_present(self, names: typ.Iterable[str]) -> bool:
        """Return whether at least one of ``names`` has content."""
        return any(self.is_present(name) for name in names)

    def as_context(self) -> dict[str, str | None]:
        """Return every region keyed by name, with absent regions as ``None``."""
        return {name: _present_or_none(getattr(self, name)) for name in REGION_NAMES}


@dc.dataclass(frozen=True, slots=True)
class Slide:
    """Caption fields for one slideshow slot."""

    heading: str | None = None
    description: str | None = None
    url: str | None = None

    @property
    def has_caption(self) -> bool:
        """Return whether the caption block should render for this slide."""
        return is_present(self.heading) or is_present(self.description)


@dc.dataclass(frozen=True, slots=True)
class PageContext:
    """Scalar values consumed while composing a page."""

    is_front: bool = False
    slideshow_display: bool = False
    slides: tuple[Slide, ...] = ()
    preface_col: int | str = 4
    footer_col: int | str = 3
    base_path: str = "/"
    this_year: str = ""
    front_page: str = "/"
    site_name: str = ""
    show_breadcrumbs: bool = False
    breadcrumb: str | None = None
    messages: str | None = None

    @classmethod
    def from_mapping(cls, values: typ.Mapping[str, typ.Any]) -> PageContext:
        """Build a context from flat keys such as ``slide2_head``.

        Slide numbers start at 1. Gaps produce empty slides so positions keep
        matching the theme's slide slots. Keys that are neither context fields
        nor slide fields are ignored.
        """
        slide_fields: dict[int, dict[str, str]] = {}
        for key, value in values.items():
            match = SLIDE_KEY_PATTERN.match(key)
            if match is None:
                continue
            index = int(match.group(1))
            if index < 1:
                continue
            slide_fields.setdefault(index, {})[_SLIDE_FIELDS[match.group(2)]] = value
        slides = tuple(
            Slide(**slide_fields.get(index, {}))
            for index in range(1, max(slide_fields, default=0) + 1)
        )
        names = {field.name for field in dc.fields(cls)} - {"slides"}
        scalars = {key: value for key, value in values.items() if key in names}
        if "slides" in values:
            slides = tuple(values["slides"])
        if "this_year" in scalars:
            scalars["this_year"] = str(scalars["this_year"])
        return cls(slides=slides, **scalars)

    def slide_at(self, index: int) -> Slide:
        """Return the slide in position ``index`` or an empty slide."""
        if 0 <= index < len(self.slides):
            return self.slides[index]
        return Slide()


@dc.dataclass(frozen=True, slots=True)
class SlideSlot:
    """Fixed image and call-to-action label for one slideshow position."""

    image: str
    label: str = "Read More"


@dc.dataclass(frozen=True, slots=True)
class ThemeCredit:
    """Link shown after the translated "Theme by" label."""

    label: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class FooterLink:
    """Extra static link appended to the colophon."""

    label: str
    href: str


DEFAULT_SLIDE_SLOTS = (
    SlideSlot(f"{SLIDE_IMAGE_DIR}mowing_slide.jpg"),
    SlideSlot(f"{SLIDE_IMAGE_DIR}fall_cleanup_slide.jpg"),
    SlideSlot(f"{SLIDE_IMAGE_DIR}bush_cutting_slide.jpg"),
    SlideSlot(f"{SLIDE_IMAGE_DIR}snow_removal_slide.jpg"),
)


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Theme settings shared by every page render."""

    slide_slots: tuple[SlideSlot, ...] = DEFAULT_SLIDE_SLOTS
    slider_library: str = SLIDER_LIBRARY
    credit: ThemeCredit | None = None
    footer_links: tuple[FooterLink, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class GalleryImage:
    """One image in a gallery's no-script fallback."""

    image: str
    title: str | None = None
    caption: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Gallery:
    """Gallery embed data.

    Attributes
    ----------
    gallery_id : str
        Unique DOM id for the gallery container.
    title : str, optional
        Gallery title shown in the fallback heading.
    description : str, optional
        Gallery description shown below the heading.
    images : tuple[GalleryImage, ...]
        Images listed in the fallback markup, in display order.
    attributes : Mapping[str, str]
        HTML attributes for the outer wrapper ``div``.
    title_suffix : str, optional
        Pre-rendered markup placed before the gallery container.
    """

    gallery_id: str
    title: str | None = None
    description: str | None = None
    images: tuple[GalleryImage, ...] = ()
    attributes: typ.Mapping[str, str] = dc.field(default_factory=dict)
    title_suffix: str | None = None


__all__ = [
    "DEFAULT_SLIDE_SLOTS",
    "FooterLink",
    "Gallery",
    "GalleryImage",
    "PageContext",
    "RegionSet",
    "Slide",
    "SlideSlot",
    "ThemeConfig",
    "ThemeCredit",
    "is_present",
]
