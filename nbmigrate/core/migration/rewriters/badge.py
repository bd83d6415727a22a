"""Badge: text child → ``text``, ``colorScheme`` → ``state``."""

from typing import Tuple

from ...ast_parser.jsx import expression_node
from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..partition import literal_value
from ..printer import JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    COLOR_STYLE,
    COMMON_DIRECT,
    RADIUS_STYLE,
    WRAPPER_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from .base import ComponentRewriter, RewriteContext

DEFAULT_SIZE = "md"

BADGE_TABLE = PropTable(
    name="Badge",
    direct=COMMON_DIRECT | {"size", "text", "state"},
    transform={"colorScheme": "state"},
    style={**COLOR_STYLE, **RADIUS_STYLE, **WRAPPER_STYLE},
    drop=drop_set(
        BASE_DROP,
        {"variant", "leftIcon", "rightIcon", "startIcon", "endIcon", "children"},
    ),
    unknown_policy=UnknownPolicy.DROP,
)


class BadgeRewriter(ComponentRewriter):
    """Rewrites text badges; a badge with no text but styling is a dot indicator."""

    @property
    def rewriter_id(self) -> str:
        return "badge"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Badge",)

    @property
    def table(self) -> PropTable:
        return BADGE_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        attributes = self.attributes(part, ctx)
        names = {attr.name for attr in attributes if attr.name}
        children = None

        content = self.meaningful_children(usage, ctx)
        if content:
            if all(child.type == "jsx_text" for child in content):
                attributes.append(JsxAttr("text", " ".join(" ".join(ctx.text(c).split()) for c in content)))
            elif len(content) == 1 and content[0].type == "jsx_expression" and expression_node(content[0]) is not None:
                attributes.append(JsxAttr("text", literal_value(expression_node(content[0]), ctx.source)))
            else:
                ctx.warn(
                    DiagnosticKind.MANUAL_REVIEW,
                    f"<{usage.tag}> children are not plain text; kept as children",
                    usage.node,
                )
                children = self.children(usage)
            names.add("text")

        style = self.style_reference(usage, part, ctx)

        if "text" not in names and style is not None:
            # dot indicator
            self.emit(usage, ctx, JsxNode(ctx.view_tag(), [JsxAttr("style", style)], None))
            return

        if "size" not in names:
            attributes.append(JsxAttr("size", DEFAULT_SIZE))
        node = JsxNode(self.target_tag(usage, ctx), attributes, children)
        self.emit(usage, ctx, node, wrapper_style=style)
