"""Region-driven page composition for the Nexus theme.

``PageComposer`` turns a :class:`~nexus_pages.models.RegionSet` and a
:class:`~nexus_pages.models.PageContext` into the page body HTML. Every
wrapper is driven by region presence: a block is emitted only when its region
has content, and absent regions are silently left out.

Typical usage:

>>> from nexus_pages.models import PageContext, RegionSet
>>> composer = PageComposer()
>>> html = composer.compose(RegionSet(content="Hello"), PageContext())
>>> 'class="content-area col-sm-12"' in html
True

The composer renders ``page.jinja`` from ``nexus_pages/templates`` inside a
sandboxed Jinja environment. Its template may only use the ``if``, ``set``,
and ``for`` tags, the ``striptags`` and ``t`` filters, and the
``attach_library`` function; anything else is rejected when the composer is
constructed.
"""

from __future__ import annotations

import typing as typ

from ._constants import FOOTER_REGIONS, PREFACE_REGIONS, PRIMARY_COL
from .models import ThemeConfig, is_present
from .policy import OperationPolicy, policy_for
from .rendering import TemplateComposer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import PageContext, RegionSet
    from .services import Services

PAGE_POLICY = policy_for(
    tags=("if", "set", "for"),
    filters=("striptags", "t"),
    functions=("attach_library",),
)


class PageComposer(TemplateComposer):
    """Assemble a page from independently optional regions."""

    template_name = "page.jinja"
    policy = PAGE_POLICY

    def __init__(
        self,
        theme: ThemeConfig | None = None,
        *,
        services: Services | None = None,
        templates_dir: Path | None = None,
        policy: OperationPolicy | None = None,
    ) -> None:
        """Initialize the composer and check its template against the policy.

        Parameters
        ----------
        theme : ThemeConfig, optional
            Slide slots, slider library, footer credit, and footer links.
            Defaults to the stock Nexus theme with four slides.
        services : Services, optional
            Escaper, translator, and asset registry used while rendering.
        templates_dir : Path, optional
            Directory containing ``page.jinja``. Defaults to the packaged
            templates.
        policy : OperationPolicy, optional
            Replacement operation allow-list for custom templates.

        Raises
        ------
        OperationNotAllowedError
            If the template uses a tag, filter, or function outside the policy.
        """
        self.theme = theme or ThemeConfig()
        super().__init__(services=services, templates_dir=templates_dir, policy=policy)

    def compose(self, regions: RegionSet, context: PageContext) -> str:
        """Render the page HTML for one request.

        Parameters
        ----------
        regions : RegionSet
            Pre-rendered region content; absent or blank regions are omitted
            along with their wrappers.
        context : PageContext
            Front-page flags, slide captions, column widths, and footer values.

        Returns
        -------
        str
            The page HTML. When ``context.is_front`` is set the slider library
            is attached to the asset registry exactly once, whether or not the
            slideshow is displayed.
        """
        return self.template.render(
            page=regions.as_context(),
            preface_regions=PREFACE_REGIONS,
            footer_regions=FOOTER_REGIONS,
            theme=self.theme,
            slides=self._slides(context),
            primary_col=PRIMARY_COL,
            is_front=context.is_front,
            slideshow_display=context.slideshow_display,
            preface_col=context.preface_col,
            footer_col=context.footer_col,
            base_path=context.base_path,
            this_year=context.this_year,
            front_page=context.front_page,
            site_name=context.site_name,
            show_breadcrumbs=context.show_breadcrumbs,
            breadcrumb=context.breadcrumb if is_present(context.breadcrumb) else None,
            messages=context.messages,
        )

    def _slides(self, context: PageContext) -> list[dict[str, typ.Any]]:
        """Pair each theme slide slot with the caption in the same position."""
        slides: list[dict[str, typ.Any]] = []
        for index, slot in enumerate(self.theme.slide_slots):
            slide = context.slide_at(index)
            slides.append(
                {
                    "image": slot.image,
                    "label": slot.label,
                    "heading": slide.heading if is_present(slide.heading) else None,
                    "description": (
                        slide.description if is_present(slide.description) else None
                    ),
                    "url": slide.url,
                    "caption": slide.has_caption,
                }
            )
        return slides


__all__ = ["PAGE_POLICY", "PageComposer"]
