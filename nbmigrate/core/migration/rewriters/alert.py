"""Alert: ``Alert.Title`` / ``Alert.Description`` children become props."""

from typing import Any, Optional, Tuple

from ...ast_parser.jsx import element_children, expression_node, iter_elements, meaningful_children
from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..edits import Span
from ..partition import literal_value
from ..printer import Expr, JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    BORDER_PROP_NAMES,
    COLOR_PROP_NAMES,
    COMMON_DIRECT,
    THEME_PROPS,
    WRAPPER_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from .base import ComponentRewriter, RewriteContext

# Sub-component suffix → prop
SLOT_PROPS = {
    "Title": "title",
    "Description": "description",
}

REMOVED_SLOTS = ("Icon", "CloseButton")

ALERT_TABLE = PropTable(
    name="Alert",
    direct=COMMON_DIRECT | {"status", "title", "description", "onClose", "action"},
    style=WRAPPER_STYLE,
    drop=drop_set(BASE_DROP, THEME_PROPS, COLOR_PROP_NAMES, BORDER_PROP_NAMES, {"children"}),
    unknown_policy=UnknownPolicy.DROP,
)


class AlertRewriter(ComponentRewriter):
    """Folds the legacy compound alert into a ``title`` / ``description`` alert.

    Slots are looked up anywhere below the element, so layout wrappers
    around them (``<VStack><Alert.Title>…``) do not hide them. Any other
    content has no place in the target alert and is dropped with a
    warning.
    """

    @property
    def rewriter_id(self) -> str:
        return "alert"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Alert",)

    @property
    def table(self) -> PropTable:
        return ALERT_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        attributes = self.attributes(part, ctx)
        present = {attr.name for attr in attributes if attr.name}

        slots = {}
        slot_tags = set()
        for suffix in list(SLOT_PROPS) + list(REMOVED_SLOTS):
            slot_tags.add(f"{usage.tag}.{suffix}")
        for element in iter_elements(usage.node):
            if element.id == usage.node.id:
                continue
            tag = self.child_tag(element, ctx)
            if tag not in slot_tags:
                continue
            suffix = tag.split(".", 1)[1]
            if suffix in SLOT_PROPS and suffix not in slots:
                slots[suffix] = element

        for suffix, prop in SLOT_PROPS.items():
            element = slots.get(suffix)
            if element is None:
                continue
            if prop in present:
                ctx.warn(
                    DiagnosticKind.COLLISION,
                    f"<{usage.tag}> {prop} prop and <{usage.tag}.{suffix}> both given; keeping the prop",
                    element,
                )
                continue
            value = self._slot_value(element, usage, ctx)
            if value is not None:
                attributes.append(JsxAttr(prop, value))
                present.add(prop)

        for child in self.meaningful_children(usage, ctx):
            if self._holds_slot(child, slot_tags, ctx):
                continue
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> content {ctx.text(child)[:40]!r} has no place in the target alert; dropped",
                child,
            )

        if "description" not in present:
            ctx.warn(DiagnosticKind.MANUAL_REVIEW, f"<{usage.tag}> has no description", usage.node)

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(self.target_tag(usage, ctx), attributes, None)
        self.emit(usage, ctx, node, wrapper_style=style)

    def _holds_slot(self, node, slot_tags, ctx: RewriteContext) -> bool:
        return any(self.child_tag(e, ctx) in slot_tags for e in iter_elements(node))

    def _slot_value(self, element, usage: ElementUsage, ctx: RewriteContext) -> Optional[Any]:
        children = meaningful_children(element, ctx.source)
        if not children:
            return None
        if all(child.type == "jsx_text" for child in children):
            return " ".join(" ".join(ctx.text(child).split()) for child in children)
        if len(children) == 1 and children[0].type == "jsx_expression":
            inner = expression_node(children[0])
            if inner is not None:
                return literal_value(inner, ctx.source)
        # rich content stays as a fragment
        everything = element_children(element)
        return Expr(("<>", Span(everything[0].start_byte, everything[-1].end_byte), "</>"))
