"""Rule declaration and dispatch engine for snippet rendering.

This module implements the rule-based architecture behind PageSmith's three
render operations. Handlers declare the snippet variants they render via the
``@renders`` decorator, which records lightweight metadata (operation, targeted
variants). At runtime the :class:`RenderEngine` collects those declarations
into a :class:`RenderRegistry` and dispatches every snippet to the single rule
registered for its variant and the requested operation.

Architecture

`Declaration layer`
: ``@renders`` stores a :class:`RuleDefinition` on every handler.

`Registry layer`
: :class:`RenderRegistry` indexes bound :class:`RenderRule` instances by
  operation and variant type, refusing ambiguous registrations.

`Execution layer`
: :class:`RenderEngine` looks up the rule for a snippet and invokes it. A
  snippet whose variant has no rule for the operation raises
  :class:`UnsupportedOperationError`; a value that is not a snippet at all
  raises :class:`TypeError`.

Handler signatures depend on the operation:

- ``HTML``: ``handler(node, state, context) -> HtmlResult``
- ``TITLE``: ``handler(node, context) -> str``
- ``UNSTRUCTURED``: ``handler(node, state, context) -> TextResult``
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, cast

from .exceptions import InvalidSnippetError, UnsupportedOperationError
from .snippets import SNIPPET_VARIANTS, is_snippet, variant_name


class RenderOperation(Enum):
    """Independent folds available over a snippet tree."""

    HTML = auto()
    """Render to escaped HTML, collecting script and stylesheet dependencies."""

    TITLE = auto()
    """Render to the escaped text of a ``<title>`` element."""

    UNSTRUCTURED = auto()
    """Render to raw text for attribute values and embedded code."""

    @property
    def label(self) -> str:
        return self.name.lower()


RuleCallable = Callable[..., Any]


@dataclass
class RenderRule:
    """Concrete rendering rule registered in the engine."""

    operation: RenderOperation
    variants: tuple[type, ...]
    name: str
    handler: RuleCallable


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by the decorator."""

    operation: RenderOperation
    variants: tuple[type, ...]
    name: str | None = None

    def bind(self, handler: RuleCallable) -> RenderRule:
        """Create a concrete rule instance bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return RenderRule(
            operation=self.operation,
            variants=self.variants,
            name=name,
            handler=handler,
        )


class RenderRegistry:
    """Container indexing render rules by operation and variant type."""

    def __init__(self) -> None:
        self._rules: dict[RenderOperation, dict[type, RenderRule]] = {}

    def register(self, rule: RenderRule) -> None:
        """Register a rule, refusing a second rule for the same variant and operation."""
        bucket = self._rules.setdefault(rule.operation, {})
        for variant in rule.variants:
            existing = bucket.get(variant)
            if existing is not None and existing.handler is not rule.handler:
                msg = (
                    f"Duplicate {rule.operation.label} rule for {variant.__name__}: "
                    f"'{existing.name}' and '{rule.name}'"
                )
                raise TypeError(msg)
        for variant in rule.variants:
            bucket[variant] = rule

    def lookup(self, operation: RenderOperation, variant: type) -> RenderRule | None:
        """Return the rule handling ``variant`` (or one of its bases) for ``operation``."""
        bucket = self._rules.get(operation, {})
        for candidate in variant.__mro__:
            rule = bucket.get(candidate)
            if rule is not None:
                return rule
        return None

    def supports(self, operation: RenderOperation, variant: str) -> bool:
        """Return True when every type of the named variant has a rule."""
        return all(
            self.lookup(operation, kind) is not None for kind in SNIPPET_VARIANTS[variant]
        )

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the support matrix."""
        entries: list[dict[str, object]] = []
        for variant, kinds in SNIPPET_VARIANTS.items():
            for operation in RenderOperation:
                rule = self.lookup(operation, kinds[0])
                entries.append(
                    {
                        "variant": variant,
                        "operation": operation.name,
                        "name": rule.name if rule is not None else None,
                    }
                )
        return entries


def renders(
    *variants: type,
    operation: RenderOperation = RenderOperation.HTML,
    name: str | None = None,
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator used to register snippet handlers."""
    if not variants:
        msg = "@renders requires at least one snippet type"
        raise TypeError(msg)
    definition = RuleDefinition(operation=operation, variants=tuple(variants), name=name)

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__render_rule__ = definition
        return handler

    return decorator


class RenderEngine:
    """Execution engine dispatching snippets to the registered rules."""

    def __init__(self, registry: RenderRegistry | None = None) -> None:
        self.registry = registry or RenderRegistry()

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__render_rule__", None)
            if definition is None and hasattr(handler, "__func__"):
                definition = getattr(handler.__func__, "__render_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(handler))

    def register(self, handler: RuleCallable) -> None:
        """Register a standalone callable decorated with ``@renders``."""
        definition = getattr(handler, "__render_rule__", None)
        if not isinstance(definition, RuleDefinition):
            msg = "Handler must be decorated with @renders"
            raise TypeError(msg)
        self.registry.register(definition.bind(handler))

    def dispatch(self, operation: RenderOperation, node: Any, *args: Any) -> Any:
        """Invoke the rule registered for ``node`` and ``operation``."""
        rule = self.registry.lookup(operation, type(node))
        if rule is None:
            if not is_snippet(node):
                msg = f"Cannot render a value of type {type(node).__name__!r} as a snippet"
                raise InvalidSnippetError(msg)
            raise UnsupportedOperationError(variant_name(node), operation.label)
        return rule.handler(node, *args)


__all__ = [
    "RenderEngine",
    "RenderOperation",
    "RenderRegistry",
    "RenderRule",
    "RuleDefinition",
    "renders",
]
