"""Prop classification tables.

Each target component gets one immutable :class:`PropTable` with four
disjoint buckets: DIRECT (kept verbatim), TRANSFORM (renamed 1:1),
STYLE (moved into the generated stylesheet, optionally converted) and
DROP (discarded). Anything else is *unrecognized* and the table's
unknown-prop policy decides whether it is kept or dropped; both warn.

Shared sets (pseudo-state props, platform and color-mode overrides,
theme props) are composed into the per-component DROP sets here; the
per-component tables themselves live next to their rewriters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from .tokens import TokenContext, color_value, dimension_value, radius_value, space_value

Converter = Callable[[Any, TokenContext], Any]


class UnknownPolicy(str, Enum):
    """What happens to an attribute no bucket claims."""

    KEEP = "keep"
    DROP = "drop"


@dataclass(frozen=True)
class StyleRule:
    """Style keys one prop writes to, in order, plus a value converter."""

    keys: Tuple[str, ...]
    converter: Optional[Converter] = None


@dataclass(frozen=True)
class PropTable:
    """Classification of every known prop of one component.

    Raises:
        ValueError: If a prop name appears in more than one bucket
    """

    name: str
    direct: FrozenSet[str] = frozenset()
    transform: Mapping[str, str] = field(default_factory=dict)
    style: Mapping[str, StyleRule] = field(default_factory=dict)
    drop: FrozenSet[str] = frozenset()
    unknown_policy: UnknownPolicy = UnknownPolicy.KEEP

    def __post_init__(self):
        buckets = {
            "direct": set(self.direct),
            "transform": set(self.transform),
            "style": set(self.style),
            "drop": set(self.drop),
        }
        names = list(buckets)
        overlaps = []
        for i, first in enumerate(names):
            for second in names[i + 1:]:
                shared = buckets[first] & buckets[second]
                if shared:
                    overlaps.append(f"{first}/{second}: {sorted(shared)}")
        if overlaps:
            raise ValueError(
                f"Prop table {self.name!r} has overlapping buckets: " + "; ".join(overlaps)
            )
        # style rank follows rule declaration order
        object.__setattr__(self, "_style_rank", {prop: i for i, prop in enumerate(self.style)})

    def classify(self, prop: str) -> str:
        """Bucket name for ``prop``: direct, transform, style, drop or unrecognized."""
        if prop in self.drop:
            return "drop"
        if prop in self.transform:
            return "transform"
        if prop in self.style:
            return "style"
        if prop in self.direct:
            return "direct"
        return "unrecognized"

    def style_rank(self, prop: str) -> int:
        return self._style_rank[prop]

    @property
    def known_props(self) -> FrozenSet[str]:
        return frozenset(self.direct) | frozenset(self.transform) | frozenset(self.style) | self.drop


# ── Shared prop sets ─────────────────────────────────────────────────

PSEUDO_PROPS = frozenset({
    "_hover", "_pressed", "_focus", "_focusVisible", "_disabled", "_invalid",
    "_readOnly", "_loading", "_checked", "_indeterminate", "_text", "_icon",
    "_stack", "_input", "_spinner", "_backdrop", "_content", "_closeButton",
})

PLATFORM_PROPS = frozenset({"_web", "_ios", "_android"})

COLOR_MODE_PROPS = frozenset({"_light", "_dark"})

THEME_PROPS = frozenset({"colorScheme", "variant", "size"})

# No target equivalent on any component
UNSUPPORTED_PROPS = frozenset({"shadow", "justifyItems", "justifySelf"})

COMMON_DIRECT = frozenset({
    "key", "ref", "testID", "nativeID", "onLayout", "pointerEvents", "hitSlop",
    "accessible", "accessibilityLabel", "accessibilityHint", "accessibilityRole",
    "accessibilityState", "accessibilityValue", "importantForAccessibility",
})

COMMON_EVENTS = frozenset({"onPress", "onLongPress", "onPressIn", "onPressOut", "onFocus", "onBlur"})


def drop_set(*groups: Iterable[str], keep: Iterable[str] = ()) -> FrozenSet[str]:
    """Union of ``groups`` minus the names a component handles itself."""
    merged = set()
    for group in groups:
        merged.update(group)
    return frozenset(merged - set(keep))


BASE_DROP = drop_set(PSEUDO_PROPS, PLATFORM_PROPS, COLOR_MODE_PROPS, UNSUPPORTED_PROPS)


# ── Style rule groups ────────────────────────────────────────────────
#
# Group order is the order style properties appear in generated blocks:
# color, padding, margin, radius, border, sizing, flexbox, layout,
# position, extra.


def _rules(converter: Optional[Converter], mapping: Dict[str, Tuple[str, ...]]) -> Dict[str, StyleRule]:
    return {prop: StyleRule(keys, converter) for prop, keys in mapping.items()}


COLOR_STYLE = _rules(color_value, {
    "bg": ("backgroundColor",),
    "bgColor": ("backgroundColor",),
    "background": ("backgroundColor",),
    "backgroundColor": ("backgroundColor",),
})

PADDING_STYLE = _rules(space_value, {
    "p": ("padding",),
    "padding": ("padding",),
    "px": ("paddingHorizontal",),
    "paddingX": ("paddingHorizontal",),
    "paddingHorizontal": ("paddingHorizontal",),
    "py": ("paddingVertical",),
    "paddingY": ("paddingVertical",),
    "paddingVertical": ("paddingVertical",),
    "pt": ("paddingTop",),
    "paddingTop": ("paddingTop",),
    "pb": ("paddingBottom",),
    "paddingBottom": ("paddingBottom",),
    "pl": ("paddingLeft",),
    "paddingLeft": ("paddingLeft",),
    "pr": ("paddingRight",),
    "paddingRight": ("paddingRight",),
    "ps": ("paddingStart",),
    "paddingStart": ("paddingStart",),
    "pe": ("paddingEnd",),
    "paddingEnd": ("paddingEnd",),
})

MARGIN_STYLE = _rules(space_value, {
    "m": ("margin",),
    "margin": ("margin",),
    "mx": ("marginHorizontal",),
    "marginX": ("marginHorizontal",),
    "marginHorizontal": ("marginHorizontal",),
    "my": ("marginVertical",),
    "marginY": ("marginVertical",),
    "marginVertical": ("marginVertical",),
    "mt": ("marginTop",),
    "marginTop": ("marginTop",),
    "mb": ("marginBottom",),
    "marginBottom": ("marginBottom",),
    "ml": ("marginLeft",),
    "marginLeft": ("marginLeft",),
    "mr": ("marginRight",),
    "marginRight": ("marginRight",),
    "ms": ("marginStart",),
    "marginStart": ("marginStart",),
    "me": ("marginEnd",),
    "marginEnd": ("marginEnd",),
})

RADIUS_STYLE = _rules(radius_value, {
    "rounded": ("borderRadius",),
    "borderRadius": ("borderRadius",),
    "roundedTop": ("borderTopLeftRadius", "borderTopRightRadius"),
    "roundedBottom": ("borderBottomLeftRadius", "borderBottomRightRadius"),
    "roundedLeft": ("borderTopLeftRadius", "borderBottomLeftRadius"),
    "roundedRight": ("borderTopRightRadius", "borderBottomRightRadius"),
    "roundedTopLeft": ("borderTopLeftRadius",),
    "borderTopLeftRadius": ("borderTopLeftRadius",),
    "roundedTopRight": ("borderTopRightRadius",),
    "borderTopRightRadius": ("borderTopRightRadius",),
    "roundedBottomLeft": ("borderBottomLeftRadius",),
    "borderBottomLeftRadius": ("borderBottomLeftRadius",),
    "roundedBottomRight": ("borderBottomRightRadius",),
    "borderBottomRightRadius": ("borderBottomRightRadius",),
})

BORDER_STYLE = {
    **_rules(None, {
        "borderWidth": ("borderWidth",),
        "borderTopWidth": ("borderTopWidth",),
        "borderBottomWidth": ("borderBottomWidth",),
        "borderLeftWidth": ("borderLeftWidth",),
        "borderRightWidth": ("borderRightWidth",),
        "borderStyle": ("borderStyle",),
    }),
    **_rules(color_value, {
        "borderColor": ("borderColor",),
        "borderTopColor": ("borderTopColor",),
        "borderBottomColor": ("borderBottomColor",),
        "borderLeftColor": ("borderLeftColor",),
        "borderRightColor": ("borderRightColor",),
    }),
}

SIZING_STYLE = _rules(dimension_value, {
    "w": ("width",),
    "width": ("width",),
    "h": ("height",),
    "height": ("height",),
    "minW": ("minWidth",),
    "minWidth": ("minWidth",),
    "minH": ("minHeight",),
    "minHeight": ("minHeight",),
    "maxW": ("maxWidth",),
    "maxWidth": ("maxWidth",),
    "maxH": ("maxHeight",),
    "maxHeight": ("maxHeight",),
})

# `size` means width + height only on layout primitives
BOX_SIZE_STYLE = _rules(dimension_value, {
    "size": ("width", "height"),
    "boxSize": ("width", "height"),
})

FLEXBOX_STYLE = _rules(None, {
    "flex": ("flex",),
    "flexGrow": ("flexGrow",),
    "flexShrink": ("flexShrink",),
    "flexBasis": ("flexBasis",),
    "flexWrap": ("flexWrap",),
    "flexDir": ("flexDirection",),
    "flexDirection": ("flexDirection",),
    "alignItems": ("alignItems",),
    "alignSelf": ("alignSelf",),
    "alignContent": ("alignContent",),
    "justifyContent": ("justifyContent",),
})

LAYOUT_STYLE = _rules(None, {
    "display": ("display",),
    "overflow": ("overflow",),
})

POSITION_STYLE = {
    **_rules(None, {"position": ("position",)}),
    **_rules(space_value, {
        "top": ("top",),
        "right": ("right",),
        "bottom": ("bottom",),
        "left": ("left",),
    }),
    **_rules(None, {"zIndex": ("zIndex",)}),
}

EXTRA_STYLE = _rules(None, {"opacity": ("opacity",)})

# Everything a layout primitive accepts, in emission order
LAYOUT_PRIMITIVE_STYLE = {
    **COLOR_STYLE,
    **PADDING_STYLE,
    **MARGIN_STYLE,
    **RADIUS_STYLE,
    **BORDER_STYLE,
    **SIZING_STYLE,
    **BOX_SIZE_STYLE,
    **FLEXBOX_STYLE,
    **LAYOUT_STYLE,
    **POSITION_STYLE,
    **EXTRA_STYLE,
}

# Spacing and placement only, for components that get a wrapping View
WRAPPER_STYLE = {
    **PADDING_STYLE,
    **MARGIN_STYLE,
    **SIZING_STYLE,
    **FLEXBOX_STYLE,
    **POSITION_STYLE,
}

STYLE_PROP_NAMES = frozenset(LAYOUT_PRIMITIVE_STYLE)

COLOR_PROP_NAMES = frozenset(COLOR_STYLE)

BORDER_PROP_NAMES = frozenset(RADIUS_STYLE) | frozenset(BORDER_STYLE)
