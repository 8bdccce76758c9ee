"""Capabilities the composers call into while rendering.

Escaping, translation, and asset registration belong to the host site. The
composers receive them as explicit collaborators instead of reaching for
ambient globals, so tests and alternate hosts can swap them out.

Examples
--------
>>> escaper = MarkupEscaper()
>>> str(escaper.escape("<b>Mow & Trim</b>"))
'&lt;b&gt;Mow &amp; Trim&lt;/b&gt;'
>>> escaper.strip_tags("<em>Fall</em> cleanup")
'Fall cleanup'
>>> CatalogTranslator({"Read More": "Lire la suite"}).translate("Read More")
'Lire la suite'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup, escape


class Escaper(typ.Protocol):
    """HTML escaping and tag stripping; must not raise on ``None``."""

    def escape(self, value: object | None) -> Markup: ...

    def strip_tags(self, value: object | None) -> str: ...


class Translator(typ.Protocol):
    """Resolve a source string into the active locale."""

    def translate(self, text: str) -> str: ...


class AssetRegistry(typ.Protocol):
    """Record that the page needs a named script/style library."""

    def attach(self, library: str) -> None: ...


class MarkupEscaper:
    """Escape with ``markupsafe``; ``Markup`` values are already safe."""

    def escape(self, value: object | None) -> Markup:
        if value is None:
            return Markup("")
        return escape(value)

    def strip_tags(self, value: object | None) -> str:
        if value is None:
            return ""
        return Markup(str(value)).striptags()


class CatalogTranslator:
    """Look strings up in a fixed catalogue, falling back to the source text."""

    def __init__(self, catalog: typ.Mapping[str, str] | None = None) -> None:
        self.catalog = dict(catalog or {})

    def translate(self, text: str) -> str:
        return self.catalog.get(text, text)


class AttachedAssets:
    """Collect attached libraries once each, in first-attached order."""

    def __init__(self) -> None:
        self._libraries: dict[str, None] = {}

    def attach(self, library: str) -> None:
        self._libraries.setdefault(library, None)

    @property
    def libraries(self) -> list[str]:
        """Return the attached library identifiers."""
        return list(self._libraries)


@dc.dataclass(slots=True)
class Services:
    """Bundle of collaborators shared by the composers."""

    escaper: Escaper = dc.field(default_factory=MarkupEscaper)
    translator: Translator = dc.field(default_factory=CatalogTranslator)
    assets: AssetRegistry = dc.field(default_factory=AttachedAssets)


__all__ = [
    "AssetRegistry",
    "AttachedAssets",
    "CatalogTranslator",
    "Escaper",
    "MarkupEscaper",
    "Services",
    "Translator",
]
