"""Construction-time allow-list for template tags, filters, functions, and methods.

Each composer declares the operations its template may use. The template is
parsed and walked before anything renders, and the first construct outside
the policy is rejected with its template name and line number, so a bad
template fails when the composer is built rather than partway through a page.

Examples
--------
>>> from jinja2.sandbox import SandboxedEnvironment
>>> env = SandboxedEnvironment()
>>> policy = OperationPolicy(tags=frozenset({"if"}))
>>> policy.check(env.parse("{% if x %}{{ x|upper }}{% endif %}"), "demo")
Traceback (most recent call last):
...
nexus_pages.policy.OperationNotAllowedError: Filter 'upper' is not allowed in template 'demo' (line 1).
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from jinja2 import nodes
from jinja2.exceptions import SecurityError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment

TAG_NODES: tuple[tuple[type[nodes.Node], str], ...] = (
    (nodes.If, "if"),
    (nodes.For, "for"),
    (nodes.Assign, "set"),
    (nodes.AssignBlock, "set"),
    (nodes.Macro, "macro"),
    (nodes.CallBlock, "call"),
    (nodes.FilterBlock, "filter"),
    (nodes.With, "with"),
    (nodes.Block, "block"),
    (nodes.Extends, "extends"),
    (nodes.Include, "include"),
    (nodes.Import, "import"),
    (nodes.FromImport, "import"),
    (nodes.EvalContextModifier, "autoescape"),
    (nodes.ExprStmt, "do"),
    (nodes.Break, "break"),
    (nodes.Continue, "continue"),
)


class OperationNotAllowedError(SecurityError):
    """Raised when a template uses an operation outside its policy.

    Attributes
    ----------
    kind : str
        One of ``"tag"``, ``"filter"``, ``"function"``, or ``"method"``.
    name : str
        The offending construct, e.g. ``"include"``, ``"upper"`` or ``"replace"``.
    template_name : str
        Template that contains the construct.
    lineno : int
        Source line of the construct.
    """

    def __init__(
        self, kind: str, name: str, *, template_name: str, lineno: int
    ) -> None:
        self.kind = kind
        self.name = name
        self.template_name = template_name
        self.lineno = lineno
        super().__init__(
            f"{kind.capitalize()} '{name}' is not allowed in template "
            f"'{template_name}' (line {lineno})."
        )


@dc.dataclass(frozen=True, slots=True)
class OperationPolicy:
    """Fixed set of operations a template is permitted to use."""

    tags: frozenset[str] = frozenset()
    filters: frozenset[str] = frozenset()
    functions: frozenset[str] = frozenset()
    methods: frozenset[str] = frozenset()

    def violations(self, ast: nodes.Template) -> list[tuple[int, str, str]]:
        """Return ``(lineno, kind, name)`` for each disallowed construct, by line."""
        found: list[tuple[int, str, str]] = []
        for node in ast.find_all((nodes.Stmt, nodes.Filter, nodes.Call)):
            match node:
                case nodes.Filter(name=name) if name not in self.filters:
                    found.append((node.lineno, "filter", name))
                case nodes.Call(node=callee):
                    kind, name = _call_target(callee)
                    allowed = self.functions if kind == "function" else self.methods
                    if name not in allowed:
                        found.append((node.lineno, kind, name))
                case nodes.Stmt():
                    tag = _tag_name(node)
                    if tag is not None and tag not in self.tags:
                        found.append((node.lineno, "tag", tag))
        return sorted(found)

    def check(self, ast: nodes.Template, template_name: str) -> None:
        """Raise for the first disallowed construct in ``ast``."""
        found = self.violations(ast)
        if found:
            lineno, kind, name = found[0]
            raise OperationNotAllowedError(
                kind, name, template_name=template_name, lineno=lineno
            )

    def check_template(self, env: Environment, template_name: str) -> None:
        """Load, parse, and check ``template_name`` from ``env``'s loader."""
        if env.loader is None:  # pragma: no cover - composers always set a loader
            msg = "Environment has no template loader."
            raise TypeError(msg)
        source, filename, _uptodate = env.loader.get_source(env, template_name)
        self.check(env.parse(source, template_name, filename), template_name)


def _tag_name(node: nodes.Node) -> str | None:
    for node_type, tag in TAG_NODES:
        if isinstance(node, node_type):
            return tag
    return None


def _call_target(callee: nodes.Expr) -> tuple[str, str]:
    match callee:
        case nodes.Name(name=name):
            return "function", name
        case nodes.Getattr(attr=attr):
            return "method", attr
        case nodes.Getitem(arg=nodes.Const(value=str() as key)):
            return "method", key
    return "function", "<expression>"


def policy_for(
    *,
    tags: cabc.Iterable[str] = (),
    filters: cabc.Iterable[str] = (),
    functions: cabc.Iterable[str] = (),
    methods: cabc.Iterable[str] = (),
) -> OperationPolicy:
    """Build an :class:`OperationPolicy` from plain iterables."""
    return OperationPolicy(
        tags=frozenset(tags),
        filters=frozenset(filters),
        functions=frozenset(functions),
        methods=frozenset(methods),
    )


__all__ = ["OperationNotAllowedError", "OperationPolicy", "policy_for"]
