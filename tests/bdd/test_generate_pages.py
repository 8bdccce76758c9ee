"""Behaviour tests for rendering the checked-in site configuration.

The scenario in ``features/generate_pages.feature`` renders the front page
from ``config/site.yaml`` into ``tmp_path`` through the ``pages generate``
handler and inspects the HTML and the asset sidecar it writes.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from nexus_pages import cli

REPO_ROOT = Path(__file__).resolve().parents[2]
scenarios(REPO_ROOT / "features" / "generate_pages.feature")


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("the repository site configuration")
def given_repo_config(scenario_state: dict[str, object]) -> None:
    scenario_state["config_path"] = REPO_ROOT / "config" / "site.yaml"


@when("I generate the front page into a temporary folder")
def when_generate(scenario_state: dict[str, object], tmp_path: Path) -> None:
    cli.generate(
        page="front",
        config=scenario_state["config_path"],  # type: ignore[arg-type]
        output_dir=tmp_path,
    )
    scenario_state["output_dir"] = tmp_path


@then("the front page HTML shows the branding block and preface area")
def then_front_html(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    soup = BeautifulSoup(
        (output_dir / "index.html").read_text(encoding="utf-8"), "html.parser"
    )
    assert soup.select_one("#logo img") is not None, "expected logo markup in branding"
    prefaces = soup.select("#preface-area .preface-block")
    assert len(prefaces) == 3, f"expected three preface blocks, got {len(prefaces)}"
    links = [link["href"] for link in soup.select("#colophon a")]
    assert links[-2:] == ["/sitemap", "/contact-us"], (
        f"unexpected footer links {links!r}"
    )


@then("the asset sidecar lists the slider library")
def then_sidecar(scenario_state: dict[str, object]) -> None:
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    meta = json.loads(
        (output_dir / ".nexus-pages-front-assets.json").read_text(encoding="utf-8")
    )
    assert meta["libraries"] == ["nexus/slider-js"], f"unexpected sidecar {meta!r}"
