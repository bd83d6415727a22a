"""Pressable: styling to the stylesheet, button role by default."""

from typing import Tuple

from ...ast_parser.models import ElementUsage
from ..printer import JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    COMMON_EVENTS,
    LAYOUT_PRIMITIVE_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from .base import ComponentRewriter, RewriteContext

PRESSABLE_TABLE = PropTable(
    name="Pressable",
    direct=COMMON_DIRECT | COMMON_EVENTS | {
        "children",
        "style",
        "disabled",
        "delayLongPress",
        "android_ripple",
        "unstable_pressDelay",
    },
    transform={"isDisabled": "disabled"},
    style=LAYOUT_PRIMITIVE_STYLE,
    drop=drop_set(
        BASE_DROP,
        {"colorScheme", "variant", "isPressed", "isHovered", "isFocused", "isFocusVisible"},
    ),
    unknown_policy=UnknownPolicy.KEEP,
)


class PressableRewriter(ComponentRewriter):

    @property
    def rewriter_id(self) -> str:
        return "pressable"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Pressable",)

    @property
    def table(self) -> PropTable:
        return PRESSABLE_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        style = self.style_reference(usage, part, ctx)
        attributes = self.attributes(part, ctx, style=style)
        if usage.attribute("onPress") is not None and usage.attribute("accessibilityRole") is None:
            attributes.append(JsxAttr("accessibilityRole", "button"))
        node = JsxNode(self.target_tag(usage, ctx), attributes, self.children(usage))
        self.emit(usage, ctx, node)
