"""Box → View with a generated style block."""

from typing import Any, Dict, Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..partition import Partition, read_value
from ..printer import Expr, JsxNode
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    COMMON_EVENTS,
    LAYOUT_PRIMITIVE_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from ..tokens import radius_value
from .base import ComponentRewriter, RewriteContext

# Card-like variants carry a default corner radius
VARIANT_RADIUS = {
    "container": "lg",
    "content": "md",
}

RADIUS_KEYS = (
    "borderRadius",
    "borderTopLeftRadius",
    "borderTopRightRadius",
    "borderBottomLeftRadius",
    "borderBottomRightRadius",
)

BOX_TABLE = PropTable(
    name="Box",
    direct=COMMON_DIRECT | COMMON_EVENTS | {"children", "style"},
    style=LAYOUT_PRIMITIVE_STYLE,
    drop=drop_set(
        BASE_DROP,
        {"colorScheme", "variant", "disableTopRounding", "disableBottomRounding"},
    ),
    unknown_policy=UnknownPolicy.KEEP,
)


def rounding_styles(usage: ElementUsage, part: Partition, ctx: RewriteContext) -> Dict[str, Any]:
    """Radius entries implied by ``variant`` and ``disable*Rounding``.

    Explicit radius props win over the variant default.
    """
    extra: Dict[str, Any] = {}
    styled = part.style_properties()

    variant_attr = usage.attribute("variant")
    if variant_attr is not None:
        variant = read_value(variant_attr, ctx.source)
        if isinstance(variant, str) and variant in VARIANT_RADIUS:
            if not any(key in styled for key in RADIUS_KEYS):
                extra["borderRadius"] = radius_value(VARIANT_RADIUS[variant], ctx.tokens)
        else:
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> {ctx.text(variant_attr.node)} has no equivalent; dropped",
                variant_attr.node,
            )

    corners = {
        "disableTopRounding": ("borderTopLeftRadius", "borderTopRightRadius"),
        "disableBottomRounding": ("borderBottomLeftRadius", "borderBottomRightRadius"),
    }
    for prop, keys in corners.items():
        attr = usage.attribute(prop)
        if attr is None or read_literal(attr, ctx) is False:
            continue
        for key in keys:
            extra[key] = 0
    return extra


def read_literal(attr, ctx: RewriteContext) -> Any:
    """Attribute value, with non-literal expressions treated as truthy markers."""
    value = read_value(attr, ctx.source)
    return True if isinstance(value, Expr) else value


class BoxRewriter(ComponentRewriter):
    """Rewrites ``<Box>`` as a ``View`` whose styling lives in the stylesheet."""

    @property
    def rewriter_id(self) -> str:
        return "box"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Box",)

    @property
    def table(self) -> PropTable:
        return BOX_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        style = self.style_reference(usage, part, ctx, extra=rounding_styles(usage, part, ctx))
        node = JsxNode(
            tag=self.target_tag(usage, ctx),
            attributes=self.attributes(part, ctx, style=style),
            children=self.children(usage),
        )
        self.emit(usage, ctx, node)
