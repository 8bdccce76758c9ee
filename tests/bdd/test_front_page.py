"""Behaviour tests for region-driven front page composition.

The scenarios in ``features/front_page.feature`` compose pages with the stock
Nexus theme and a recording asset registry, then assert on the resulting
HTML with BeautifulSoup.

Usage:
    pytest tests/bdd/test_front_page.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from nexus_pages.composer import PageComposer
from nexus_pages.models import PageContext, RegionSet, Slide, ThemeConfig
from nexus_pages.services import AttachedAssets, Services

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "front_page.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"regions": RegionSet(), "context": PageContext()}


@given("the stock Nexus theme")
def given_stock_theme(scenario_state: dict[str, object]) -> None:
    scenario_state["theme"] = ThemeConfig()


@given("a front page context with the slideshow enabled")
def given_front_context(scenario_state: dict[str, object]) -> None:
    scenario_state["context"] = PageContext(
        is_front=True,
        slideshow_display=True,
        base_path="/nexus/",
        slides=(
            Slide(heading="Mowing", description="Weekly cuts", url="/mow"),
            Slide(),
            Slide(description="Hedges and shrubs"),
        ),
    )


@given("a page where only the first footer region has content")
def given_footer_regions(scenario_state: dict[str, object]) -> None:
    scenario_state["regions"] = RegionSet(footer_first="A", footer_third="  ")
    scenario_state["context"] = PageContext(footer_col=6)


@when("I compose the page")
def when_compose(scenario_state: dict[str, object]) -> None:
    assets = AttachedAssets()
    composer = PageComposer(
        scenario_state["theme"],  # type: ignore[arg-type]
        services=Services(assets=assets),
    )
    html = composer.compose(
        scenario_state["regions"],  # type: ignore[arg-type]
        scenario_state["context"],  # type: ignore[arg-type]
    )
    scenario_state["assets"] = assets
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then("the slider library is attached once")
def then_slider_attached(scenario_state: dict[str, object]) -> None:
    assets: AttachedAssets = scenario_state["assets"]  # type: ignore[assignment]
    assert assets.libraries == ["nexus/slider-js"], (
        f"expected slider library once, got {assets.libraries!r}"
    )


@then("the slider library is not attached")
def then_slider_not_attached(scenario_state: dict[str, object]) -> None:
    assets: AttachedAssets = scenario_state["assets"]  # type: ignore[assignment]
    assert assets.libraries == [], f"expected no libraries, got {assets.libraries!r}"


@then("every slide slot renders an image under the base path")
def then_slide_images(scenario_state: dict[str, object]) -> None:
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    sources = [img["src"] for img in soup.select("#slidebox li img")]
    assert len(sources) == 4, f"expected four slide images, got {sources!r}"
    prefix = "/nexus/themes/nexus/assets/images/"
    assert all(src.startswith(prefix) for src in sources), (
        f"expected base_path-prefixed image sources, got {sources!r}"
    )


@then("only slides with a heading or description show a caption")
def then_captions(scenario_state: dict[str, object]) -> None:
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    flags = [
        item.select_one(".flex-caption") is not None
        for item in soup.select("#slidebox ul.slides > li")
    ]
    assert flags == [True, False, True, False], f"unexpected caption layout {flags!r}"


@then("the bottom wrapper holds a single footer block")
def then_single_footer_block(scenario_state: dict[str, object]) -> None:
    soup: BeautifulSoup = scenario_state["soup"]  # type: ignore[assignment]
    blocks = soup.select("#bottom div.footer-block")
    assert len(blocks) == 1, f"expected one footer block, got {len(blocks)}"
    assert blocks[0]["class"] == ["footer-block", "col-sm-6"]
    assert blocks[0].get_text(strip=True) == "A"
