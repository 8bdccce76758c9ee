"""Utility helpers shared by the Nexus configuration loader."""

from __future__ import annotations

import typing as typ

from markdown import markdown
from markupsafe import Markup

from ..models import FooterLink, SlideSlot, ThemeConfig, ThemeCredit
from .models import SiteConfigError

MARKDOWN_EXTENSIONS = ["sane_lists", "tables", "fenced_code"]


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_region_value(name: str, value: object | None) -> str | None:
    """Convert a YAML region entry into plain text or trusted markup.

    Plain scalars stay plain text and are escaped on output. ``{html: ...}``
    is trusted markup, and ``{markdown: ...}`` is rendered to HTML first.
    """
    match value:
        case None:
            return None
        case str() | int() | float():
            return str(value)
        case {"html": html}:
            return Markup(str(html or ""))
        case {"markdown": text}:
            normalized = str(text or "").strip()
            if not normalized:
                return None
            return Markup(
                markdown(
                    normalized,
                    extensions=MARKDOWN_EXTENSIONS,
                    output_format="html5",
                )
            )
        case _:
            msg = (
                f"Region '{name}' must be text, an 'html' block, "
                "or a 'markdown' block."
            )
            raise SiteConfigError(msg)


def _build_slide_slots(entries: object | None) -> tuple[SlideSlot, ...] | None:
    """Build the slide slot table; ``None`` keeps the theme default."""
    if entries is None:
        return None
    if not isinstance(entries, list):
        msg = "Theme 'slides' must be a list."
        raise SiteConfigError(msg)
    slots: list[SlideSlot] = []
    for entry in entries:
        match entry:
            case {"image": image, **rest} if image:
                label = str(rest.get("label", "Read More"))
                slots.append(SlideSlot(image=str(image), label=label))
            case _:
                msg = "Theme slides require an 'image'."
                raise SiteConfigError(msg)
    return tuple(slots)


def _build_link(entry: object, *, context: str) -> tuple[str, str]:
    match entry:
        case {"label": label, "href": href} if label and href:
            return str(label), str(href)
        case _:
            msg = f"{context} requires 'label' and 'href'."
            raise SiteConfigError(msg)


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    slots = _build_slide_slots(payload.get("slides"))
    credit_raw = payload.get("credit")
    credit = (
        ThemeCredit(*_build_link(credit_raw, context="Theme credit"))
        if credit_raw
        else None
    )
    footer_links = tuple(
        FooterLink(*_build_link(entry, context="Footer links"))
        for entry in payload.get("footer_links") or []
    )
    return ThemeConfig(
        slide_slots=base.slide_slots if slots is None else slots,
        slider_library=str(payload.get("slider_library", base.slider_library)),
        credit=credit,
        footer_links=footer_links,
    )
