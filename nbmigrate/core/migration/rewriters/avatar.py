"""Avatar: variant props collapse into one ``icon`` or ``image`` composite."""

from typing import Any, Dict, List, Optional, Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..printer import JsxAttr, JsxNode
from ..props import (
    BASE_DROP,
    COLOR_PROP_NAMES,
    COMMON_DIRECT,
    COMMON_EVENTS,
    WRAPPER_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from ..tokens import color_value
from .base import ComponentRewriter, RewriteContext

# In priority order
VARIANT_PROPS = ("iconName", "imageUri", "imageSource")

FILL_PROPS = ("bgColor", "bg", "backgroundColor", "background")

AVATAR_TABLE = PropTable(
    name="Avatar",
    direct=COMMON_DIRECT | COMMON_EVENTS | {"size", "letters", "icon", "image"},
    style=WRAPPER_STYLE,
    drop=drop_set(
        BASE_DROP,
        VARIANT_PROPS,
        COLOR_PROP_NAMES,
        {"colorScheme", "variant", "source", "children"},
    ),
    unknown_policy=UnknownPolicy.KEEP,
)


class AvatarRewriter(ComponentRewriter):
    """Rewrites the legacy avatar variants.

    Exactly one composite prop is produced, by priority
    ``iconName`` > ``imageUri`` > ``imageSource``:

    * ``icon={{ name, fill }}``, fill taken from ``bgColor`` / ``bg``
    * ``image={{ source: { uri } }}``
    * ``image={{ source }}``

    ``letters`` has no target equivalent and is kept, since dropping it
    would remove visible content.
    """

    @property
    def rewriter_id(self) -> str:
        return "avatar"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Avatar",)

    @property
    def table(self) -> PropTable:
        return AVATAR_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        composite = self._composite(usage, ctx)

        letters = usage.attribute("letters")
        if letters is not None:
            ctx.warn(
                DiagnosticKind.MANUAL_REVIEW,
                f"<{usage.tag}> letters has no target equivalent; passed through unchanged",
                letters.node,
            )

        migrated = any(usage.attribute(p) is not None for p in ("icon", "image"))
        if composite is None and letters is None and not migrated:
            ctx.warn(
                DiagnosticKind.UNSUPPORTED_COMPOSITE,
                f"<{usage.tag}> has none of {', '.join(VARIANT_PROPS)} or letters; "
                "emitted with direct props only",
                usage.node,
            )

        attributes = self.attributes(part, ctx)
        if composite is not None:
            attributes.append(composite)

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(self.target_tag(usage, ctx), attributes, None)
        self.emit(usage, ctx, node, wrapper_style=style)

    def _composite(self, usage: ElementUsage, ctx: RewriteContext) -> Optional[JsxAttr]:
        present = [prop for prop in VARIANT_PROPS if usage.attribute(prop) is not None]
        if not present:
            return None

        chosen = present[0]
        for ignored in present[1:]:
            ctx.warn(
                DiagnosticKind.UNSUPPORTED_COMPOSITE,
                f"<{usage.tag}> {ignored} is ignored because {chosen} takes priority",
                usage.attribute(ignored).node,
            )

        value = self.value(usage.attribute(chosen), ctx)
        if chosen == "iconName":
            icon: Dict[str, Any] = {"name": value}
            fill = self._fill(usage, ctx)
            if fill is not None:
                icon["fill"] = fill
            return JsxAttr("icon", icon)
        if chosen == "imageUri":
            return JsxAttr("image", {"source": {"uri": value}})
        return JsxAttr("image", {"source": value})

    def _fill(self, usage: ElementUsage, ctx: RewriteContext) -> Any:
        found: List[Any] = [usage.attribute(p) for p in FILL_PROPS if usage.attribute(p) is not None]
        if not found:
            return None
        return color_value(self.value(found[0], ctx), ctx.tokens)
