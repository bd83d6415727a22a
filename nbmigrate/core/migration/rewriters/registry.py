"""Component rewriter registry.

Simple dict-based registry keyed by legacy component name. All
rewriters are registered at import time via ``rewriters/__init__.py``.
"""

import logging
from typing import Any, Dict, List, Optional

from .base import ComponentRewriter

logger = logging.getLogger(__name__)


class RewriterRegistry:
    """Registry for component rewriters.

    Class-level store so the engine can call
    ``RewriterRegistry.get_rewriter(...)`` without holding an instance.
    """

    _rewriters: Dict[str, ComponentRewriter] = {}

    @classmethod
    def register(cls, rewriter: ComponentRewriter) -> None:
        """Register a rewriter for every legacy component it handles."""
        for component in rewriter.source_components:
            cls._rewriters[component] = rewriter
        logger.debug(
            "Registered component rewriter: %s (%s)",
            rewriter.rewriter_id,
            ", ".join(rewriter.source_components),
        )

    @classmethod
    def get_rewriter(cls, component: str) -> Optional[ComponentRewriter]:
        """Get the rewriter for a legacy component.  ``None`` if not found."""
        return cls._rewriters.get(component)

    @classmethod
    def handles(cls, component: str) -> bool:
        return component in cls._rewriters

    @classmethod
    def list_rewriters(cls) -> List[Dict[str, Any]]:
        """List all registered rewriters with metadata."""
        seen = {}
        for rewriter in cls._rewriters.values():
            seen[rewriter.rewriter_id] = {
                "rewriter_id": rewriter.rewriter_id,
                "source_components": list(rewriter.source_components),
                "unknown_policy": rewriter.table.unknown_policy.value,
            }
        return list(seen.values())
