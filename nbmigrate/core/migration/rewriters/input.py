"""Input: handler and placeholder renames, spacing moves to a wrapper."""

from typing import Tuple

from ...ast_parser.models import ElementUsage
from ..diagnostics import DiagnosticKind
from ..printer import JsxNode
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

# Kept as written; the target input has no structural equivalent
PASSTHROUGH_WITH_WARNING = ("InputLeftElement", "InputRightElement", "multiline", "secureTextEntry")

INPUT_TABLE = PropTable(
    name="Input",
    direct=COMMON_DIRECT | set(PASSTHROUGH_WITH_WARNING) | {
        "value",
        "defaultValue",
        "label",
        "onChange",
        "disabled",
        "error",
        "helperText",
        "editable",
        "maxLength",
        "keyboardType",
        "returnKeyType",
        "textContentType",
        "autoCapitalize",
        "autoComplete",
        "autoCorrect",
        "autoFocus",
        "onSubmitEditing",
        "onFocus",
        "onBlur",
    },
    transform={
        "onChangeText": "onChange",
        "placeholder": "label",
        "isDisabled": "disabled",
    },
    style=WRAPPER_STYLE,
    drop=drop_set(
        BASE_DROP,
        THEME_PROPS,
        COLOR_PROP_NAMES,
        BORDER_PROP_NAMES,
        {"placeholderTextColor", "fontSize", "fontFamily", "fontWeight", "isFullWidth"},
    ),
    unknown_policy=UnknownPolicy.KEEP,
)


class InputRewriter(ComponentRewriter):
    """Rewrites legacy text inputs; the target input takes no inline style."""

    @property
    def rewriter_id(self) -> str:
        return "input"

    @property
    def source_components(self) -> Tuple[str, ...]:
        return ("Input",)

    @property
    def table(self) -> PropTable:
        return INPUT_TABLE

    def rewrite(self, usage: ElementUsage, ctx: RewriteContext) -> None:
        part = self.partition(usage, ctx)

        for prop in PASSTHROUGH_WITH_WARNING:
            attr = usage.attribute(prop)
            if attr is not None:
                ctx.warn(
                    DiagnosticKind.MANUAL_REVIEW,
                    f"<{usage.tag}> {prop} passed through unchanged; check the target input supports it",
                    attr.node,
                )

        names = {name for name, _ in part.emitted()}
        if "label" not in names:
            ctx.warn(DiagnosticKind.MANUAL_REVIEW, f"<{usage.tag}> has no label or placeholder", usage.node)
        if "onChange" not in names:
            ctx.warn(DiagnosticKind.MANUAL_REVIEW, f"<{usage.tag}> has no onChange handler", usage.node)

        style = self.style_reference(usage, part, ctx)
        node = JsxNode(self.target_tag(usage, ctx), self.attributes(part, ctx), self.children(usage))
        self.emit(usage, ctx, node, wrapper_style=style)
