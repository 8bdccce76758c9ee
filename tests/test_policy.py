"""Unit tests for the template operation allow-list.

Templates are written into ``tmp_path`` and handed to the composers, which
must reject operations outside their allow-list when they are built and
let sandbox errors raised during rendering propagate untouched.
"""

from __future__ import annotations

import typing as typ

import pytest
from jinja2.exceptions import SecurityError

from nexus_pages.composer import PAGE_POLICY, PageComposer
from nexus_pages.embeds import ElementHelpComposer, GalleryComposer
from nexus_pages.models import PageContext, RegionSet
from nexus_pages.policy import OperationNotAllowedError, policy_for
from nexus_pages.services import AttachedAssets, Services

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


def _write_page_template(tmp_path: Path, source: str) -> Path:
    (tmp_path / "page.jinja").write_text(source, encoding="utf-8")
    return tmp_path


def test_packaged_templates_pass_their_policies() -> None:
    """Every shipped template stays within its allow-list."""
    for composer_type in (PageComposer, GalleryComposer, ElementHelpComposer):
        composer = composer_type()
        assert composer.template is not None, (
            f"expected {composer_type.__name__} to load its template"
        )


@pytest.mark.parametrize(
    ("source", "kind", "name", "lineno"),
    [
        ("<div>\n\n{% include 'other.jinja' %}\n</div>", "tag", "include", 3),
        ("{% if page.header %}\n{{ page.header|upper }}\n{% endif %}", "filter", "upper", 2),
        ("<p>{{ range(3) }}</p>", "function", "range", 1),
        ("{% macro box() %}x{% endmacro %}", "tag", "macro", 1),
        ("<h1>{{ page.header.upper() }}</h1>", "method", "upper", 1),
        ("\n{{ site_name.replace('a', 'X') }}", "method", "replace", 2),
        ("{{ page['content']() }}", "method", "content", 1),
    ],
)
def test_disallowed_operations_fail_at_construction(
    tmp_path: Path, source: str, kind: str, name: str, lineno: int
) -> None:
    """The offending construct, template, and line are reported."""
    templates_dir = _write_page_template(tmp_path, source)
    with pytest.raises(OperationNotAllowedError) as excinfo:
        PageComposer(templates_dir=templates_dir)
    error = excinfo.value
    assert (error.kind, error.name, error.lineno) == (kind, name, lineno), (
        f"unexpected violation {(error.kind, error.name, error.lineno)!r}"
    )
    assert error.template_name == "page.jinja"
    assert f"line {lineno}" in str(error), f"expected line in message, got {error}"
    assert isinstance(error, SecurityError), "expected a Jinja SecurityError"


def test_first_violation_by_line_is_reported(tmp_path: Path) -> None:
    """With several violations the earliest line wins."""
    source = "{{ page.content }}\n{{ page.content|lower }}\n{% include 'x' %}"
    templates_dir = _write_page_template(tmp_path, source)
    with pytest.raises(OperationNotAllowedError) as excinfo:
        PageComposer(templates_dir=templates_dir)
    name = excinfo.value.name
    assert name == "lower", f"expected 'lower', got {name!r}"


def test_rejected_template_never_renders(tmp_path: Path, mocker: MockerFixture) -> None:
    """A rejected template makes no asset calls before the violation."""
    assets = mocker.Mock(spec=AttachedAssets)
    source = "{{ attach_library('nexus/slider-js') }}\n{{ page.content|title }}"
    templates_dir = _write_page_template(tmp_path, source)
    with pytest.raises(OperationNotAllowedError):
        PageComposer(templates_dir=templates_dir, services=Services(assets=assets))
    assets.attach.assert_not_called()


def test_custom_policy_can_widen_the_allow_list(tmp_path: Path) -> None:
    """Callers may supply a wider policy for their own templates."""
    source = "{{ page.content|upper }}"
    templates_dir = _write_page_template(tmp_path, source)
    policy = policy_for(
        tags=PAGE_POLICY.tags,
        filters=PAGE_POLICY.filters | {"upper"},
        functions=PAGE_POLICY.functions,
    )
    composer = PageComposer(templates_dir=templates_dir, policy=policy)
    html = composer.compose(RegionSet(content="mow"), PageContext())
    assert html.strip() == "MOW", f"expected upper-cased content, got {html!r}"


def test_sandbox_errors_propagate_from_compose(tmp_path: Path) -> None:
    """Unsafe attribute access inside an allowed template is not swallowed."""
    templates_dir = _write_page_template(tmp_path, "{{ page.__class__.mro }}")
    composer = PageComposer(templates_dir=templates_dir)
    with pytest.raises(SecurityError):
        composer.compose(RegionSet(), PageContext())


def test_methods_are_allowed_only_when_listed(tmp_path: Path) -> None:
    """A method call passes once the policy names that method."""
    templates_dir = _write_page_template(tmp_path, "{{ site_name.upper() }}")
    with pytest.raises(OperationNotAllowedError):
        PageComposer(templates_dir=templates_dir)
    policy = policy_for(
        tags=PAGE_POLICY.tags,
        filters=PAGE_POLICY.filters,
        functions=PAGE_POLICY.functions,
        methods=("upper",),
    )
    composer = PageComposer(templates_dir=templates_dir, policy=policy)
    html = composer.compose(RegionSet(), PageContext(site_name="nexus"))
    assert html.strip() == "NEXUS", f"expected upper-cased site name, got {html!r}"
