"""HStack / VStack → one directional ``Stack``."""

from typing import Any, Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..printer import JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    COMMON_EVENTS,
    LAYOUT_PRIMITIVE_STYLE,
    PropTable,
    StyleRule,
    UnknownPolicy,
    drop_set,
)
from ..tokens import TokenContext, space_value
from .base import ComponentRewriter, RewriteContext
from .box import rounding_styles

DIRECTIONS = {
    "HStack": "row",
    "VStack": "column",
}

ALIGNMENT_KEYWORDS = {
    "start": "flex-start",
    "end": "flex-end",
    "between": "space-between",
    "around": "space-around",
    "evenly": "space-evenly",
}


def alignment_value(value: Any, ctx: TokenContext) -> Any:
    if isinstance(value, str):
        return ALIGNMENT_KEYWORDS.get(value, value)
    return value


STACK_TABLE = PropTable(
    name="Stack",
    direct=COMMON_DIRECT | COMMON_EVENTS | {"children", "style", "reverse"},
    transform={"reversed": "reverse"},
    style={
        "space": StyleRule(("gap",), space_value),
        "gap": StyleRule(("gap",), space_value),
        **LAYOUT_PRIMITIVE_STYLE,
        "align": StyleRule(("alignItems",), alignment_value),
        "justify": StyleRule(("justifyContent",), alignment_value),
    },
    drop=drop_set(BASE_DROP, {"colorScheme", "variant", "divider", "direction"}),
    unknown_policy=UnknownPolicy.KEEP,
)


class StackRewriter(ComponentRewriter):
    """Unifies ``HStack`` and ``VStack`` into ``Stack direction=...``.

    ``divider`` has no structural equivalent and is dropped with a
    warning. Style blocks are named after the legacy tag
    (``hstack0``, ``vstack0``).
    """

    @property
    def rewriter_id(self) -> str:
        return "stack"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return tuple(DIRECTIONS)

    @property
    def table(self) -> PropTable:
        return STACK_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)

        divider = usage.attribute("divider")
        if divider is not None:
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> divider has no Stack equivalent; dropped, add separators by hand",
                divider.node,
            )

        style = self.style_reference(usage, part, ctx, extra=rounding_styles(usage, part, ctx))
        attributes = [JsxAttr("direction", DIRECTIONS[usage.component])]
        attributes.extend(self.attributes(part, ctx, style=style))
        node = JsxNode(
            tag=self.target_tag(usage, ctx),
            attributes=attributes,
            children=self.children(usage),
        )
        self.emit(usage, ctx, node)
