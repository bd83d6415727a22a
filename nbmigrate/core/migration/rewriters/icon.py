"""Icon: token-mapped size, pixel width/height, remapped color."""

from typing import Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..printer import JsxNode
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    COMMON_EVENTS,
    MARGIN_STYLE,
    POSITION_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from ..tokens import color_value, icon_size_value, legacy_space_pixels
from .base import ComponentRewriter, RewriteContext

ICON_TABLE = PropTable(
    name="Icon",
    direct=COMMON_DIRECT | COMMON_EVENTS | {"name", "size", "width", "height", "color"},
    style={**MARGIN_STYLE, **POSITION_STYLE},
    drop=drop_set(BASE_DROP, {"colorScheme", "variant", "as", "viewBox", "children"}),
    unknown_policy=UnknownPolicy.KEEP,
)


class IconRewriter(ComponentRewriter):

    direct_value_converters = {
        "size": icon_size_value,
        "width": legacy_space_pixels,
        "height": legacy_space_pixels,
        "color": color_value,
    }

    @property
    def rewriter_id(self) -> str:
        return "icon"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Icon",)

    @property
    def table(self) -> PropTable:
        return ICON_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        if usage.attribute("name") is None:
            ctx.warn(DiagnosticKind.MANUAL_REVIEW, f"<{usage.tag}> has no name", usage.node)

        as_attr = usage.attribute("as")
        if as_attr is not None:
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> icon set {ctx.text(as_attr.node)} dropped; names resolve in the target icon set",
                as_attr.node,
            )

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(self.target_tag(usage, ctx), self.attributes(part, ctx), None)
        self.emit(usage, ctx, node, wrapper_style=style)
