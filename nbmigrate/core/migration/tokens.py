"""Design token mapping.

Legacy and target scales have different sizes, so the tables are keyed
by pixel equivalence rather than by name. Tokens past the end of the
target scale clamp to its largest token (``3xl`` space, ``2xl`` radius);
that loss is intended and must stay as it is.

A lookup miss never raises: the token passes through unchanged and one
``UNMAPPED_TOKEN`` diagnostic is recorded.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Set, Union

from .diagnostics import DiagnosticKind, Diagnostics
from .printer import Expr, TokenRef

logger = logging.getLogger(__name__)

TokenKey = Union[str, int, float]

# ── Tables ───────────────────────────────────────────────────────────

SPACE_TOKEN_MAP: Dict[TokenKey, str] = {
    "2xs": "2xs",  # 2px
    "xs": "xs",  # 4px
    "sm": "sm",  # 8px
    "md": "md",  # 12px
    "lg": "lg",  # 16px
    "xl": "2xl",  # 24px
    "2xl": "3xl",  # 32px
    "3xl": "3xl",  # 40px, clamped
    # icon sizes
    14: "xl",
    18: "2xl",
}

RADIUS_TOKEN_MAP: Dict[TokenKey, str] = {
    "sm": "sm",
    "md": "md",
    "lg": "lg",
    "xl": "xl",
    "full": "2xl",  # clamped
}

COLOR_TOKEN_MAP: Dict[str, str] = {
    "white.900": "white.HW1",
    "white.0": "white.HW1",
    "black.900": "core.neutral.HN1",
    "gray": "core.neutral.HN3",
    "gray.100": "core.neutral.HN1",
    "gray.200": "core.neutral.HN2",
    "gray.300": "core.neutral.HN3",
    "gray.400": "core.neutral.HN4",
    "gray.500": "core.neutral.HN5",
    "gray.600": "core.neutral.HN6",
    "gray.700": "core.neutral.HN7",
    "gray.800": "core.neutral.HN8",
    "gray.900": "core.neutral.HN9",
    "account": "brand.primary",
    "account.solid.default": "brand.primary",
    "background.info": "feedback.info.subtle",
    "background.error": "feedback.error.subtle",
    "input.backgroundDefault": "background.secondary",
    "input.backgroundFocus": "background.secondary",
    "input.backgroundDisabled": "background.tertiary",
    "avatar.default": "background.primary",
    "avatar.info": "feedback.info.subtle",
    "avatar.success": "feedback.success.subtle",
}

# Never tokenised
LITERAL_COLORS = frozenset({"transparent"})

# Legacy numeric space scale in pixels
NB_SPACE_SCALE: Dict[TokenKey, int] = {i: i * 4 for i in range(11)}

# Values that are not scale tokens and pass through silently
_PASSTHROUGH_KEYWORDS = frozenset({"auto", "none", "inherit"})

_NUMERIC = re.compile(r"^-?\d+(\.\d+)?$")
_PIXELS = re.compile(r"^(-?\d+(\.\d+)?)px$")


# ── Context ──────────────────────────────────────────────────────────


@dataclass
class TokenContext:
    """Per-file token emission settings and the helpers used so far."""

    diagnostics: Diagnostics
    token_import: Optional[str] = None
    used_helpers: Set[str] = field(default_factory=set)
    line: int = 0

    def token(self, helper: str, path: str) -> Any:
        """Target token as a helper lookup, or a plain string without helpers."""
        if not self.token_import:
            return path
        self.used_helpers.add(helper)
        return TokenRef(helper, path)


# ── Lookup ───────────────────────────────────────────────────────────


def convert(
    scale_map: Mapping[TokenKey, Any],
    token: TokenKey,
    diagnostics: Optional[Diagnostics] = None,
    scale_name: str = "token",
    line: int = 0,
) -> Any:
    """Look up a legacy token in a scale map.

    Args:
        scale_map: Legacy token → target token
        token: Legacy token (string or number)
        diagnostics: Collector for the miss warning
        scale_name: Scale name used in the warning ("space", "radius", ...)
        line: Source line for the warning

    Returns:
        The mapped token, or ``token`` unchanged on a miss
    """
    try:
        return scale_map[token]
    except (KeyError, TypeError):
        pass
    message = f"Unmapped {scale_name} token {token!r}; passing it through unchanged"
    if diagnostics is not None:
        diagnostics.record(DiagnosticKind.UNMAPPED_TOKEN, message, line=line)
    else:
        logger.warning(message)
    return token


def normalize_value(value: Any) -> Any:
    """Numeric strings become numbers; ``"10px"`` becomes ``10``."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    match = _PIXELS.match(text)
    if match:
        text = match.group(1)
    if _NUMERIC.match(text):
        number = float(text)
        return int(number) if number.is_integer() else number
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Converters ───────────────────────────────────────────────────────
#
# All converters take (value, ctx) and return the value to emit. Source
# expressions (Expr) cannot be classified and pass through untouched.


def space_value(value: Any, ctx: TokenContext) -> Any:
    value = normalize_value(value)
    if isinstance(value, Expr) or _is_number(value) or not isinstance(value, str):
        return value
    if value.endswith("%") or value in _PASSTHROUGH_KEYWORDS:
        return value
    if value in SPACE_TOKEN_MAP:
        return ctx.token("space", SPACE_TOKEN_MAP[value])
    return convert(SPACE_TOKEN_MAP, value, ctx.diagnostics, "space", ctx.line)


def radius_value(value: Any, ctx: TokenContext) -> Any:
    value = normalize_value(value)
    if isinstance(value, Expr) or _is_number(value) or not isinstance(value, str):
        return value
    if value == "none":
        return 0
    if value.endswith("%"):
        return value
    if value in RADIUS_TOKEN_MAP:
        return ctx.token("radius", RADIUS_TOKEN_MAP[value])
    return convert(RADIUS_TOKEN_MAP, value, ctx.diagnostics, "radius", ctx.line)


def color_value(value: Any, ctx: TokenContext) -> Any:
    """Remap a color path; unknown paths are shared and pass silently."""
    if not isinstance(value, str):
        return value
    if value in LITERAL_COLORS or value.startswith(("#", "rgb", "hsl")):
        return value
    return ctx.token("color", COLOR_TOKEN_MAP.get(value, value))


def dimension_value(value: Any, ctx: TokenContext) -> Any:
    """Widths and heights take numbers and percentages, never space tokens."""
    value = normalize_value(value)
    if value == "full":
        return "100%"
    if isinstance(value, str) and value in SPACE_TOKEN_MAP:
        ctx.diagnostics.record(
            DiagnosticKind.MANUAL_REVIEW,
            f"Space token {value!r} is not a valid dimension; passing it through unchanged",
            line=ctx.line,
        )
    return value


def icon_size_value(value: Any, ctx: TokenContext) -> Any:
    """Icon sizes use the space map, numeric icon tokens included."""
    value = normalize_value(value)
    if isinstance(value, Expr) or isinstance(value, bool):
        return value
    if value in SPACE_TOKEN_MAP:
        return ctx.token("space", SPACE_TOKEN_MAP[value])
    return convert(SPACE_TOKEN_MAP, value, ctx.diagnostics, "icon size", ctx.line)


def legacy_space_pixels(value: Any, ctx: TokenContext) -> Any:
    """Legacy numeric space token (``4``) to pixels (``16``)."""
    value = normalize_value(value)
    if not _is_number(value):
        return value
    return convert(NB_SPACE_SCALE, value, ctx.diagnostics, "legacy space", ctx.line)
