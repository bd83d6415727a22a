"""Switch: renamed value props, children and ``label`` become sub-components."""

from typing import List, Optional, Tuple

from ...ast_parser.models import ElementUsage
from ...ast_parser.utils import line_indent
from ..edits import Fragment, Span
from ..partition import read_value
from ..printer import INDENT, JsxNode, js_value
from ..props import (
    BASE_DROP,
    COMMON_DIRECT,
    THEME_PROPS,
    WRAPPER_STYLE,
    PropTable,
    UnknownPolicy,
    drop_set,
)
from .base import ComponentRewriter, RewriteContext

# Layout helpers of the legacy labelled switch
LAYOUT_ONLY_PROPS = frozenset({
    "hStackProps",
    "childrenProps",
    "labelProps",
    "switchPosition",
    "LeftElement",
})

SWITCH_TABLE = PropTable(
    name="Switch",
    direct=COMMON_DIRECT | {"value", "onValueChange", "disabled", "defaultValue"},
    transform={
        "isChecked": "value",
        "onToggle": "onValueChange",
        "onChange": "onValueChange",
        "isDisabled": "disabled",
        "defaultIsChecked": "defaultValue",
    },
    style=WRAPPER_STYLE,
    drop=drop_set(
        BASE_DROP,
        THEME_PROPS,
        LAYOUT_ONLY_PROPS,
        {"label", "children", "onTrackColor", "offTrackColor", "onThumbColor", "offThumbColor"},
    ),
    unknown_policy=UnknownPolicy.DROP,
)


def jsx_text_child(value) -> List[Fragment]:
    """A literal or expression printed as element content."""
    if isinstance(value, str) and not any(ch in value for ch in "{}<>"):
        return [value]
    return ["{", *js_value(value), "}"]


class SwitchRewriter(ComponentRewriter):
    """Rewrites the legacy labelled switch to ``Switch.Label`` / ``Switch.Description``."""

    @property
    def rewriter_id(self) -> str:
        return "switch"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Switch",)

    @property
    def table(self) -> PropTable:
        return SWITCH_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)
        tag = self.target_tag(usage, ctx)
        indent = line_indent(ctx.source, usage.node.start_byte)

        parts: List[List[Fragment]] = []
        label = self._label(usage, ctx)
        if label is not None:
            parts.append([f"<{tag}.Label>", *label, f"</{tag}.Label>"])
        description = usage.attribute("label")
        if description is not None:
            value = read_value(description, ctx.source)
            parts.append([f"<{tag}.Description>", *jsx_text_child(value), f"</{tag}.Description>"])

        children: Optional[List[Fragment]] = None
        if parts:
            children = []
            for fragments in parts:
                children.append("\n" + indent + INDENT)
                children.extend(fragments)
            children.append("\n" + indent)

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(tag, self.attributes(part, ctx), children)
        self.emit(usage, ctx, node, wrapper_style=style)

    def _label(self, usage: ElementUsage, ctx: RewriteContext) -> Optional[List[Fragment]]:
        children = self.meaningful_children(usage, ctx)
        if not children:
            return None
        if all(child.type == "jsx_text" for child in children):
            return [" ".join(word for child in children for word in ctx.text(child).split())]
        return [Span(children[0].start_byte, children[-1].end_byte)]
