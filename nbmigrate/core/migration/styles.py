"""Stylesheet emitter.

Collects the style blocks of one file and prints them as a single
``StyleSheet.create`` declaration. Block names are ``<kind><index>``
with a separate counter per kind. Every element of the kind takes the
next index in traversal order, styled or not, so unchanged input always
produces the same names.
"""

import logging
import re
from collections import OrderedDict
from typing import Any, Dict, List

from .edits import Fragment
from .printer import js_value, property_key

logger = logging.getLogger(__name__)

DEFAULT_IDENTIFIER = "styles"
FALLBACK_IDENTIFIER = "migratedStyles"


class StyleSheetEmitter:
    """Per-file style accumulator."""

    def __init__(self, identifier: str = DEFAULT_IDENTIFIER):
        self.identifier = identifier
        self._blocks: "OrderedDict[str, OrderedDict[str, Any]]" = OrderedDict()
        self._counters: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    @property
    def is_empty(self) -> bool:
        return not self._blocks

    @property
    def blocks(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(props) for name, props in self._blocks.items()}

    def declare(self, element_kind: str) -> str:
        """Allocate the next block name for ``element_kind``.

        Args:
            element_kind: Component name, e.g. ``"Box"`` or ``"HStack"``

        Returns:
            Block name such as ``box0``
        """
        name = self.advance(element_kind)
        self._blocks[name] = OrderedDict()
        return name

    def advance(self, element_kind: str) -> str:
        """Consume the next index of ``element_kind`` without declaring a block."""
        kind = element_kind.lower()
        index = self._counters.get(kind, 0)
        self._counters[kind] = index + 1
        return f"{kind}{index}"

    def allocated(self, element_kind: str) -> int:
        """Number of indexes taken so far for ``element_kind``."""
        return self._counters.get(element_kind.lower(), 0)

    def discard_unreferenced(self, text: str) -> List[str]:
        """Drop the blocks ``text`` never references.

        Args:
            text: Rendered file content, stylesheet excluded

        Returns:
            Names of the dropped blocks
        """
        dropped = []
        for name in list(self._blocks):
            pattern = r"(?<![\w$.])" + re.escape(self.reference(name)) + r"(?![\w$])"
            if not re.search(pattern, text):
                del self._blocks[name]
                dropped.append(name)
        if dropped:
            logger.debug("Dropping unreferenced style blocks: %s", ", ".join(dropped))
        return dropped

    def add_property(self, block: str, key: str, value: Any) -> None:
        """Add one property; the first value written for a key is kept."""
        props = self._blocks[block]
        if key in props:
            logger.debug("Style %s.%s already set; keeping first value", block, key)
            return
        props[key] = value

    def reference(self, block: str) -> str:
        return f"{self.identifier}.{block}"

    def render(self, semicolon: str = "") -> List[Fragment]:
        """Fragments for the whole declaration; empty when nothing was declared.

        Args:
            semicolon: Statement terminator matching the file's style
        """
        if self.is_empty:
            return []
        out: List[Fragment] = [f"const {self.identifier} = StyleSheet.create({{\n"]
        for name, props in self._blocks.items():
            out.append(f"  {property_key(name)}: {{\n")
            for key, value in props.items():
                out.append(f"    {property_key(key)}: ")
                out.extend(js_value(value, indent="    ", multiline=True))
                out.append(",\n")
            out.append("  },\n")
        out.append("})" + semicolon + "\n")
        return out
