"""Attribute partitioner.

One generic algorithm over a :class:`PropTable`. Every attribute of a
matched element lands in exactly one bucket: direct, transformed,
style, dropped or unrecognized.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

import tree_sitter

from ..ast_parser.jsx import expression_node
from ..ast_parser.models import Attribute
from .diagnostics import DiagnosticKind, node_line
from .printer import Expr
from .props import PropTable, UnknownPolicy
from .tokens import TokenContext

logger = logging.getLogger(__name__)

_ESCAPE = re.compile(r"\\(.)")


@dataclass
class StyleEntry:
    """One style property produced by a STYLE prop."""

    key: str
    value: Any
    prop: str
    rank: Tuple[int, int]  # (rule declaration index, key index inside the rule)


@dataclass
class Partition:
    """Result of partitioning one element's attributes.

    Buckets keep source order. ``unrecognized`` holds every attribute no
    bucket claimed; ``keep_unrecognized`` says whether they are emitted.
    """

    direct: List[Attribute] = field(default_factory=list)
    transformed: List[Tuple[str, Attribute]] = field(default_factory=list)
    style: List[Attribute] = field(default_factory=list)
    style_entries: List[StyleEntry] = field(default_factory=list)
    dropped: List[Attribute] = field(default_factory=list)
    unrecognized: List[Attribute] = field(default_factory=list)
    keep_unrecognized: bool = True

    def style_properties(self) -> Dict[str, Any]:
        """Style key → value, in rule declaration order."""
        ordered = sorted(self.style_entries, key=lambda e: e.rank)
        return {entry.key: entry.value for entry in ordered}

    def emitted(self) -> List[Tuple[str, Attribute]]:
        """Attributes that stay on the element, in source order.

        Each item is ``(output name, source attribute)``; spreads carry an
        empty name.
        """
        items: List[Tuple[str, Attribute]] = [(a.name, a) for a in self.direct]
        items.extend(self.transformed)
        if self.keep_unrecognized:
            items.extend((a.name or "", a) for a in self.unrecognized)
        items.sort(key=lambda item: item[1].start_byte)
        return items

    def all_attributes(self) -> List[Attribute]:
        """Union of every bucket; used to check nothing was lost."""
        return (
            self.direct
            + [a for _, a in self.transformed]
            + self.style
            + self.dropped
            + self.unrecognized
        )


# ── Value reading ────────────────────────────────────────────────────


def _unquote(text: str) -> str:
    return _ESCAPE.sub(r"\1", text[1:-1])


def read_value(attr: Attribute, source: bytes) -> Any:
    """Literal value of an attribute, or an :class:`Expr` for anything else.

    ``p="4"`` → ``"4"``, ``p={4}`` → ``4``, ``isDisabled`` → ``True``,
    ``bg={theme.bg}`` → ``Expr`` over ``theme.bg``.
    """
    if attr.is_spread:
        return Expr.span(attr.node)
    if attr.value_node is None:
        return True
    if attr.value_node.type == "string":
        text = source[attr.value_node.start_byte:attr.value_node.end_byte].decode("utf-8")
        # JSX attribute strings have no escapes
        return text[1:-1]
    inner = expression_node(attr.value_node)
    if inner is None:
        return None
    return literal_value(inner, source)


def literal_value(node: tree_sitter.Node, source: bytes) -> Any:
    """Python value of a literal expression node, or an :class:`Expr`."""
    text = source[node.start_byte:node.end_byte].decode("utf-8")
    if node.type == "number":
        try:
            number = float(text.replace("_", ""))
        except ValueError:
            return Expr.span(node)
        return int(number) if number.is_integer() and "." not in text else number
    if node.type == "string":
        return _unquote(text)
    if node.type == "template_string" and not any(
        c.type == "template_substitution" for c in node.named_children
    ):
        return text[1:-1]
    if node.type in ("true", "false"):
        return node.type == "true"
    if node.type == "unary_expression" and text.startswith("-"):
        operand = node.child_by_field_name("argument")
        if operand is not None and operand.type == "number":
            value = literal_value(operand, source)
            if isinstance(value, (int, float)):
                return -value
    if node.type == "parenthesized_expression" and node.named_children:
        return literal_value(node.named_children[0], source)
    return Expr.span(node)


# ── Partition ────────────────────────────────────────────────────────


def partition(
    attributes: List[Attribute],
    table: PropTable,
    ctx: TokenContext,
    source: bytes,
) -> Partition:
    """Partition an element's attributes against a classification table.

    Args:
        attributes: Attributes in source order
        table: The component's PropTable
        ctx: Token context (diagnostics and token helpers)
        source: Raw source bytes the attributes point into

    Returns:
        Partition with every attribute in exactly one bucket
    """
    result = Partition(keep_unrecognized=table.unknown_policy == UnknownPolicy.KEEP)
    diagnostics = ctx.diagnostics
    component = table.name

    # Names that stay on the element as written
    existing: Set[str] = set()
    for attr in attributes:
        if attr.name is None:
            continue
        bucket = table.classify(attr.name)
        if bucket == "direct" or (bucket == "unrecognized" and result.keep_unrecognized):
            existing.add(attr.name)

    renamed: Dict[str, str] = {}  # new name → source prop that claimed it
    written: Dict[str, str] = {}  # style key → source prop that claimed it

    for attr in attributes:
        line = node_line(attr.node)
        if attr.is_spread:
            result.unrecognized.append(attr)
            action = "kept" if result.keep_unrecognized else "dropped"
            diagnostics.record(
                DiagnosticKind.UNRECOGNIZED_PROP,
                f"<{component}> spread attributes cannot be classified; {action}",
                line=line,
            )
            continue

        bucket = table.classify(attr.name)

        if bucket == "drop":
            result.dropped.append(attr)

        elif bucket == "transform":
            new_name = table.transform[attr.name]
            if new_name in existing or new_name in renamed:
                holder = renamed.get(new_name, new_name)
                diagnostics.record(
                    DiagnosticKind.COLLISION,
                    f"<{component}> '{attr.name}' renames to '{new_name}' "
                    f"but '{holder}' already provides it; dropping '{attr.name}'",
                    line=line,
                )
                result.dropped.append(attr)
            else:
                renamed[new_name] = attr.name
                result.transformed.append((new_name, attr))

        elif bucket == "style":
            result.style.append(attr)
            rule = table.style[attr.name]
            ctx.line = line
            value = read_value(attr, source)
            if rule.converter is not None:
                value = rule.converter(value, ctx)
            rank = table.style_rank(attr.name)
            for i, key in enumerate(rule.keys):
                if key in written:
                    diagnostics.record(
                        DiagnosticKind.COLLISION,
                        f"<{component}> style '{key}' from '{attr.name}' is already "
                        f"set by '{written[key]}'; keeping the first value",
                        line=line,
                    )
                    continue
                written[key] = attr.name
                result.style_entries.append(StyleEntry(key=key, value=value, prop=attr.name, rank=(rank, i)))

        elif bucket == "direct":
            result.direct.append(attr)

        else:
            result.unrecognized.append(attr)
            action = "kept as-is" if result.keep_unrecognized else "dropped"
            diagnostics.record(
                DiagnosticKind.UNRECOGNIZED_PROP,
                f"<{component}> prop '{attr.name}' is not recognised; {action}",
                line=line,
            )

    logger.debug(
        "Partitioned <%s>: %d direct, %d transformed, %d style, %d dropped, %d unrecognized",
        component,
        len(result.direct),
        len(result.transformed),
        len(result.style),
        len(result.dropped),
        len(result.unrecognized),
    )
    return result
