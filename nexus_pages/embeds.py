"""Composers for small embedded fragments: gallery fallbacks and element help."""

from __future__ import annotations

import re
import typing as typ

from ._constants import ELEMENT_HELP_LIBRARY
from .policy import policy_for
from .rendering import TemplateComposer

if typ.TYPE_CHECKING:
    from .models import Gallery

GALLERY_POLICY = policy_for(tags=("if", "for"), filters=("xmlattr",))
ELEMENT_HELP_POLICY = policy_for(functions=("attach_library",))

INTER_TAG_WHITESPACE = re.compile(r">\s+<")


class GalleryComposer(TemplateComposer):
    """Render a gallery container with a no-script image listing.

    The fallback lists every image with its title and caption so visitors
    without JavaScript still see the gallery contents. The heading and
    description only render when the gallery defines them.
    """

    template_name = "gallery.jinja"
    policy = GALLERY_POLICY

    def compose(self, gallery: Gallery) -> str:
        """Return the gallery embed HTML."""
        return self.template.render(gallery=gallery)


class ElementHelpComposer(TemplateComposer):
    """Render a form element help icon and attach its behaviour library."""

    template_name = "element_help.jinja"
    policy = ELEMENT_HELP_POLICY

    def compose(self, help_icon: str | None) -> str:
        """Return the help icon markup with whitespace between tags removed."""
        html = self.template.render(library=ELEMENT_HELP_LIBRARY, help_icon=help_icon)
        return INTER_TAG_WHITESPACE.sub("><", html).strip()


__all__ = [
    "ELEMENT_HELP_POLICY",
    "GALLERY_POLICY",
    "ElementHelpComposer",
    "GalleryComposer",
]
