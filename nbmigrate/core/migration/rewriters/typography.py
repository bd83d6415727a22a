"""Typography: text props stay, spacing forces a wrapping View."""

from typing import Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..printer import JsxNode
from ..props import (
    BASE_DROP,
    COLOR_PROP_NAMES,
    COMMON_DIRECT,
    WRAPPER_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from ..tokens import color_value
from .base import ComponentRewriter, RewriteContext

FONT_PROPS = ("fontFamily", "fontSize", "fontWeight", "fontStyle", "lineHeight", "letterSpacing")

TYPOGRAPHY_TABLE = PropTable(
    name="Typography",
    direct=COMMON_DIRECT | {
        "children",
        "type",
        "size",
        "color",
        "align",
        "textAlign",
        "numberOfLines",
        "ellipsizeMode",
        "selectable",
        "onPress",
    },
    style=WRAPPER_STYLE,
    drop=drop_set(BASE_DROP, COLOR_PROP_NAMES, FONT_PROPS, {"colorScheme", "variant"}),
    unknown_policy=UnknownPolicy.KEEP,
)


class TypographyRewriter(ComponentRewriter):
    """Typography never takes a style; spacing goes on a wrapper instead."""

    direct_value_converters = {"color": color_value}

    @property
    def rewriter_id(self) -> str:
        return "typography"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Typography",)

    @property
    def table(self) -> PropTable:
        return TYPOGRAPHY_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)

        fonts = [a for a in part.dropped if a.name in FONT_PROPS]
        if fonts:
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> font props are set by the type scale and were dropped: "
                f"{', '.join(a.name for a in fonts)}",
                fonts[0].node,
            )

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(self.target_tag(usage, ctx), self.attributes(part, ctx), self.children(usage))
        self.emit(usage, ctx, node, wrapper_style=style)
