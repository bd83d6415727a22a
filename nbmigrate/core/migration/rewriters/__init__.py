"""Component rewriters -- one per legacy component family.

All built-in rewriters are registered on import.  The
:class:`RewriterRegistry` is the single entry point for the engine to
find the rewriter of a legacy component.
"""

from .base import ComponentRewriter, RewriteContext
from .registry import RewriterRegistry

# ── Register built-in rewriters ──────────────────────────────────────

from .alert import AlertRewriter
from .avatar import AvatarRewriter
from .badge import BadgeRewriter
from .box import BoxRewriter
from .button import ButtonRewriter
from .icon import IconRewriter
from .input import InputRewriter
from .pressable import PressableRewriter
from .stack import StackRewriter
from .switch import SwitchRewriter
from .typography import TypographyRewriter

RewriterRegistry.register(BoxRewriter())
RewriterRegistry.register(StackRewriter())
RewriterRegistry.register(ButtonRewriter())
RewriterRegistry.register(SwitchRewriter())
RewriterRegistry.register(AvatarRewriter())
RewriterRegistry.register(InputRewriter())
RewriterRegistry.register(PressableRewriter())
RewriterRegistry.register(TypographyRewriter())
RewriterRegistry.register(AlertRewriter())
RewriterRegistry.register(BadgeRewriter())
RewriterRegistry.register(IconRewriter())

__all__ = [
    "AlertRewriter",
    "AvatarRewriter",
    "BadgeRewriter",
    "BoxRewriter",
    "ButtonRewriter",
    "ComponentRewriter",
    "IconRewriter",
    "InputRewriter",
    "PressableRewriter",
    "RewriteContext",
    "RewriterRegistry",
    "StackRewriter",
    "SwitchRewriter",
    "TypographyRewriter",
]
