"""Button: icon elements and children collapse into ``icon`` / ``text`` props."""

import logging
import re
from typing import List, Optional, Tuple

from ...ast_parser.jsx import JSX_ELEMENT_TYPES, expression_node, read_attributes
from ...ast_parser.models import Attribute, ElementUsage
from ..diagnostics import DiagnosticKind
from ..partition import literal_value, read_value
from ..printer import Expr, JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    COMMON_EVENTS,
    STYLE_PROP_NAMES,
    THEME_PROPS,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from .base import ComponentRewriter, RewriteContext

logger = logging.getLogger(__name__)

# legacy variant → (variant, type)
VARIANTS = {
    "solid": ("primary", "solid"),
    "outline": ("secondary", "solid"),
    "ghost": ("primary", "ghost"),
    "link": ("primary", "ghost"),
    "unstyled": ("primary", "ghost"),
}

SIZES = {"xs": "sm", "sm": "sm", "md": "md", "lg": "lg"}

ICON_PROPS = ("leftIcon", "startIcon")

UNSUPPORTED_ICON_PROPS = ("rightIcon", "endIcon")

_WHITESPACE = re.compile(r"\s+")

BUTTON_TABLE = PropTable(
    name="Button",
    direct=COMMON_DIRECT | COMMON_EVENTS | {"text", "icon", "disabled", "loading"},
    transform={"isDisabled": "disabled", "isLoading": "loading"},
    drop=drop_set(
        BASE_DROP,
        THEME_PROPS,
        STYLE_PROP_NAMES,
        ICON_PROPS,
        UNSUPPORTED_ICON_PROPS,
        {"children", "type", "isLoadingText", "spinnerPlacement"},
    ),
    unknown_policy=UnknownPolicy.DROP,
)


class ButtonRewriter(ComponentRewriter):
    """Rewrites legacy buttons to the ``text`` / ``icon`` / ``variant`` API."""

    @property
    def rewriter_id(self) -> str:
        return "button"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Button",)

    @property
    def table(self) -> PropTable:
        return BUTTON_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        extra: List[JsxAttr] = []

        icon = self._icon(usage, ctx)
        if icon is not None:
            extra.append(icon)

        for prop in UNSUPPORTED_ICON_PROPS:
            attr = usage.attribute(prop)
            if attr is not None:
                ctx.warn(
                    DiagnosticKind.DROPPED_PROP,
                    f"<{usage.tag}> {prop} is not supported by the target Button; dropped",
                    attr.node,
                )

        children = self.children(usage)
        text = self._text(usage, ctx)
        if text is not None:
            extra.append(text)
            children = None
        elif not self.meaningful_children(usage, ctx):
            children = None
            if icon is None:
                ctx.warn(
                    DiagnosticKind.UNSUPPORTED_COMPOSITE,
                    f"<{usage.tag}> has neither text nor icon",
                    usage.node,
                )

        extra.extend(self._variant(usage, ctx))

        size = usage.attribute("size")
        if size is not None:
            value = read_value(size, ctx.source)
            if isinstance(value, str):
                extra.append(JsxAttr("size", SIZES.get(value, value)))
            elif isinstance(value, Expr):
                extra.append(JsxAttr("size", value))

        styled = [a.name for a in part.dropped if a.name in STYLE_PROP_NAMES]
        if styled:
            ctx.warn(
                DiagnosticKind.DROPPED_PROP,
                f"<{usage.tag}> layout props are not supported by the target Button: "
                f"{', '.join(styled)}; wrap it in a View if the spacing matters",
                usage.node,
            )

        if usage.attribute("onPress") is None:
            ctx.warn(DiagnosticKind.MANUAL_REVIEW, f"<{usage.tag}> has no onPress handler", usage.node)

        attributes = self.attributes(part, ctx) + extra
        self.emit(usage, ctx, JsxNode(self.target_tag(usage, ctx), attributes, children))

    def _icon(self, usage: ElementUsage, ctx: RewriteContext) -> Optional[JsxAttr]:
        """``leftIcon={<Icon name="x" />}`` → ``icon="x"``."""
        attr: Optional[Attribute] = None
        for prop in ICON_PROPS:
            attr = usage.attribute(prop)
            if attr is not None:
                break
        if attr is None or attr.value_node is None:
            return None

        inner = expression_node(attr.value_node)
        if inner is not None and inner.type in JSX_ELEMENT_TYPES:
            for icon_attr in read_attributes(inner, ctx.source):
                if icon_attr.name == "name":
                    return JsxAttr("icon", read_value(icon_attr, ctx.source))
            ctx.warn(
                DiagnosticKind.UNSUPPORTED_COMPOSITE,
                f"<{usage.tag}> {attr.name} element has no name; icon dropped",
                attr.node,
            )
            return None

        if inner is None:
            return None
        ctx.warn(
            DiagnosticKind.MANUAL_REVIEW,
            f"<{usage.tag}> {attr.name} is not an icon element; passed as icon, check it is a name",
            attr.node,
        )
        return JsxAttr("icon", Expr.span(inner))

    def _text(self, usage: ElementUsage, ctx: RewriteContext) -> Optional[JsxAttr]:
        """Children → ``text`` when they are plain text or one expression."""
        children = self.meaningful_children(usage, ctx)
        if not children:
            return None

        if all(child.type == "jsx_text" for child in children):
            text = " ".join(_WHITESPACE.sub(" ", ctx.text(c)).strip() for c in children)
            return JsxAttr("text", text)

        if len(children) == 1 and children[0].type == "jsx_expression":
            inner = expression_node(children[0])
            if inner is not None and inner.type != "spread_element":
                return JsxAttr("text", literal_value(inner, ctx.source))

        ctx.warn(
            DiagnosticKind.MANUAL_REVIEW,
            f"<{usage.tag}> children are not plain text; kept as children",
            usage.node,
        )
        return None

    def _variant(self, usage: ElementUsage, ctx: RewriteContext) -> List[JsxAttr]:
        attr = usage.attribute("variant")
        if attr is None:
            return []
        value = read_value(attr, ctx.source)
        if isinstance(value, str) and value in VARIANTS:
            variant, kind = VARIANTS[value]
            return [JsxAttr("variant", variant), JsxAttr("type", kind)]
        ctx.warn(
            DiagnosticKind.DROPPED_PROP,
            f"<{usage.tag}> {ctx.text(attr.node)} has no target variant; dropped",
            attr.node,
        )
        return []
