"""Shared Jinja environment wiring for the nexus_pages composers."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import FileSystemLoader, pass_context
from jinja2.sandbox import SandboxedEnvironment
from markupsafe import Markup

from .services import Services

if typ.TYPE_CHECKING:
    from jinja2 import Template
    from jinja2.runtime import Context

    from .policy import OperationPolicy

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_environment(templates_dir: Path, services: Services) -> SandboxedEnvironment:
    """Create a sandboxed environment bound to ``services``.

    Parameters
    ----------
    templates_dir : Path
        Directory holding the ``.jinja`` templates.
    services : Services
        Collaborators exposed to templates: every printed value goes through
        ``services.escaper.escape``, the ``striptags`` and ``t`` filters call
        the escaper and translator, and ``attach_library()`` records a library
        with the asset registry.

    Returns
    -------
    SandboxedEnvironment
        Environment with autoescape and trimmed blocks enabled.
    """

    # pass_context keeps both calls out of compile-time constant folding.
    @pass_context
    def attach_library(_context: Context, library: str) -> Markup:
        services.assets.attach(library)
        return Markup("")

    @pass_context
    def translate(_context: Context, text: object) -> str:
        return services.translator.translate(str(text))

    env = SandboxedEnvironment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        finalize=services.escaper.escape,
    )
    env.filters["striptags"] = services.escaper.strip_tags
    env.filters["t"] = translate
    env.globals["attach_library"] = attach_library
    return env


class TemplateComposer:
    """Base for composers that render one policy-checked template.

    Subclasses set ``template_name`` and ``policy``. Construction parses the
    template and runs the policy check, so a template using an operation
    outside the policy raises :class:`~nexus_pages.policy.OperationNotAllowedError`
    here and never renders.
    """

    template_name: typ.ClassVar[str]
    policy: OperationPolicy

    def __init__(
        self,
        *,
        services: Services | None = None,
        templates_dir: Path | None = None,
        policy: OperationPolicy | None = None,
    ) -> None:
        self.services = services or Services()
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        if policy is not None:
            self.policy = policy
        self.env = build_environment(self.templates_dir, self.services)
        self.policy.check_template(self.env, self.template_name)
        self.template: Template = self.env.get_template(self.template_name)


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateComposer", "build_environment"]
