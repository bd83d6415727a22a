"""Component rewriter base class and the per-file rewrite context.

A rewriter owns what is unique to one legacy component family: its
prop table and the composite-prop logic no table can express. The
shared shape is always the same:

1. partition the element's attributes with the family's table;
2. apply the custom logic (composite props, children handling);
3. put style entries in a generated block, referenced either by a
   ``style`` attribute or by a wrapping ``View``;
4. plan one edit replacing the element, children kept as spans.

Custom logic never raises on unexpected input: it records a diagnostic
and degrades to passing props through.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ...ast_parser.jsx import expression_node, meaningful_children, tag_name
from ...ast_parser.models import Attribute, ElementUsage, SourceFile
from ...ast_parser.utils import line_indent
from ...config.config_loader import MigrationSettings
from ...constants import STYLESHEET_NAME, VIEW_TAG
from ..diagnostics import DiagnosticKind, Diagnostics, node_line
from ..edits import EditPlan, Fragment, Span
from ..partition import Partition, partition, read_value
from ..printer import Expr, JsxAttr, JsxNode, Printer
from ..props import Converter, PropTable
from ..styles import StyleSheetEmitter
from ..tokens import TokenContext

logger = logging.getLogger(__name__)


# ── Context ──────────────────────────────────────────────────────────


@dataclass
class RewriteContext:
    """Everything a rewriter needs for one file.

    Rewriters only *plan* edits here; nothing is applied until the
    engine renders the plan.
    """

    parsed: SourceFile
    settings: MigrationSettings
    diagnostics: Diagnostics
    plan: EditPlan
    printer: Printer
    styles: StyleSheetEmitter
    tokens: TokenContext
    required_imports: Dict[str, List[str]] = field(default_factory=dict)
    migrated: int = 0

    @property
    def source(self) -> bytes:
        return self.parsed.source

    def text(self, node) -> str:
        return self.parsed.node_text(node)

    def require_import(self, module: str, name: str) -> None:
        """Request ``import { name } from 'module'`` in the output."""
        names = self.required_imports.setdefault(module, [])
        if name not in names:
            names.append(name)

    def release_import(self, module: str, name: str) -> None:
        names = self.required_imports.get(module, [])
        if name in names:
            names.remove(name)
        if not names:
            self.required_imports.pop(module, None)

    def view_tag(self) -> str:
        self.require_import(self.settings.primitives_import, VIEW_TAG)
        return VIEW_TAG

    def warn(self, kind: DiagnosticKind, message: str, node=None) -> None:
        self.diagnostics.record(kind, message, line=node_line(node))


# ── Abstract Base Class ──────────────────────────────────────────────


class ComponentRewriter(ABC):
    """Abstract base for component rewriters."""

    # Prop values converted even though the prop itself stays direct
    direct_value_converters: Dict[str, Converter] = {}

    # ── Identity ─────────────────────────────────────────────────

    @property
    @abstractmethod
    def rewriter_id(self) -> str:
        """Unique identifier, e.g. ``"box"``."""
        ...

    @property
    @abstractmethod
    def source_components(self) -> Tuple[str, ...]:
        """Legacy export names this rewriter handles, e.g. ``("HStack", "VStack")``."""
        ...

    @property
    @abstractmethod
    def table(self) -> PropTable:
        """Prop classification table."""
        ...

    # ── Rewrite ──────────────────────────────────────────────────

    @abstractmethod
    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        """Plan the replacement of one element usage.

        Args:
            usage: The matched element
            ctx: Per-file rewrite context
        """
        ...

    def target_tag(self, usage: ElementUsage, ctx: RewriteContext) -> str:
        """Tag for the rewritten element.

        The local name is kept unless the target export has another name
        (``Box`` → ``View``).
        """
        target = ctx.settings.target_name(usage.component)
        return usage.tag if target == usage.component else target

    def retags(self, component: str, settings: MigrationSettings) -> bool:
        return settings.target_name(component) != component

    # ── Shared helpers ───────────────────────────────────────────

    def partition(self, usage: ElementUsage, ctx: RewriteContext) -> Partition:
        ctx.tokens.line = node_line(usage.node)
        return partition(usage.attributes, self.table, ctx.tokens, ctx.source)

    def value(self, attr: Optional[Attribute], ctx: RewriteContext) -> Any:
        """Literal value of an attribute, an Expr, or None when absent."""
        if attr is None:
            return None
        return read_value(attr, ctx.source)

    def attributes(
        self,
        part: Partition,
        ctx: RewriteContext,
        style: Optional[Any] = None,
        exclude: Tuple[str, ...] = (),
    ) -> List[JsxAttr]:
        """Output attributes for the kept, renamed and style props.

        Args:
            part: Partition of the element
            ctx: Rewrite context
            style: Style reference to attach; merged with an existing
                ``style`` attribute into an array
            exclude: Kept props the custom logic already consumed

        Returns:
            Attributes in source order, ``style`` last when newly added
        """
        result: List[JsxAttr] = []
        merged_style = False
        for name, attr in part.emitted():
            if attr.is_spread:
                result.append(JsxAttr(None, raw=(Span(attr.node.start_byte, attr.node.end_byte),)))
                continue
            if name in exclude:
                continue
            if name == "style" and style is not None and attr.name == "style":
                existing = expression_node(attr.value_node)
                if existing is not None:
                    result.append(JsxAttr("style", Expr(("[",) + _fragments(style) + (", ", Span(existing.start_byte, existing.end_byte), "]"))))
                    merged_style = True
                    continue
            converter = self.direct_value_converters.get(attr.name)
            if converter is not None and name == attr.name:
                value = read_value(attr, ctx.source)
                if not isinstance(value, Expr):
                    ctx.tokens.line = node_line(attr.node)
                    result.append(JsxAttr(name, converter(value, ctx.tokens)))
                    continue
            if name == attr.name:
                result.append(JsxAttr(name, raw=(Span(attr.node.start_byte, attr.node.end_byte),)))
            elif attr.value_node is None:
                result.append(JsxAttr(name))
            else:
                value = attr.value_node
                result.append(JsxAttr(name, raw=(f"{name}=", Span(value.start_byte, value.end_byte))))
        if style is not None and not merged_style:
            result.append(JsxAttr("style", style))
        return result

    def style_reference(
        self,
        usage: ElementUsage,
        part: Partition,
        ctx: RewriteContext,
        kind: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> Optional[Expr]:
        """Declare a style block for the element's style entries.

        Args:
            usage: The element
            part: Its partition
            ctx: Rewrite context
            kind: Block name prefix; defaults to the legacy component name
            extra: Properties added by custom logic, after the partitioned ones

        Returns:
            ``styles.<block>`` expression, or None when there is no style
        """
        properties = part.style_properties()
        for key, value in (extra or {}).items():
            properties.setdefault(key, value)
        if not properties:
            return None
        block = ctx.styles.declare(kind or usage.component)
        for key, value in properties.items():
            ctx.styles.add_property(block, key, value)
        ctx.require_import(ctx.settings.primitives_import, STYLESHEET_NAME)
        return Expr.of(ctx.styles.reference(block))

    def children(self, usage: ElementUsage) -> Optional[List[Fragment]]:
        """Original children as one span, or None for a self-closing element."""
        span = usage.children_range
        if span is None:
            return None
        return [Span(*span)]

    def meaningful_children(self, usage: ElementUsage, ctx: RewriteContext) -> list:
        return meaningful_children(usage.node, ctx.source)

    def child_tag(self, node, ctx: RewriteContext) -> str:
        if node.type not in ("jsx_element", "jsx_self_closing_element"):
            return ""
        return tag_name(node, ctx.source)

    def emit(
        self,
        usage: ElementUsage,
        ctx: RewriteContext,
        node: JsxNode,
        wrapper_style: Optional[Expr] = None,
    ) -> None:
        """Plan the replacement of ``usage`` with ``node``.

        Args:
            usage: Element being replaced
            ctx: Rewrite context
            node: Replacement element
            wrapper_style: When given, ``node`` is wrapped in a ``View``
                carrying this style
        """
        indent = line_indent(ctx.source, usage.node.start_byte)
        fragments = ctx.printer.element(node, indent)
        if wrapper_style is not None:
            wrapper = JsxNode(ctx.view_tag(), [JsxAttr("style", wrapper_style)])
            fragments = ctx.printer.wrap(wrapper, fragments, indent)
        ctx.plan.replace(
            usage.node.start_byte,
            usage.node.end_byte,
            fragments,
            label=f"{self.rewriter_id}:{usage.tag}",
        )
        ctx.migrated += 1


def _fragments(value: Any) -> Tuple[Fragment, ...]:
    if isinstance(value, Expr):
        return value.fragments
    return (str(value),)
