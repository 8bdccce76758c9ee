"""Common literal values used across nexus_pages.

Region names, column widths, and sidecar filenames live here so the
composer, the config loader, and tests share one definition.

Examples
--------
>>> from nexus_pages import _constants
>>> _constants.ASSET_META_TEMPLATE.format(key="front")
'.nexus-pages-front-assets.json'
>>> "preface_second" in _constants.PREFACE_REGIONS
True
"""

PREFACE_REGIONS = ("preface_first", "preface_second", "preface_third")
FOOTER_REGIONS = ("footer_first", "footer_second", "footer_third", "footer_fourth")
REGION_NAMES = (
    "header",
    "main_navigation",
    *PREFACE_REGIONS,
    "highlighted",
    "content_top",
    "help",
    "content",
    "footer",
    *FOOTER_REGIONS,
)

PRIMARY_COL = 12
SLIDER_LIBRARY = "nexus/slider-js"
ELEMENT_HELP_LIBRARY = "webform/webform.element.help"
SLIDE_IMAGE_DIR = "themes/nexus/assets/images/"

ASSET_META_TEMPLATE = ".nexus-pages-{key}-assets.json"
