"""JS / JSX fragment printer for generated code.

Generated code follows one fixed policy so re-runs are stable: single
quotes for JS strings, double quotes for JSX attribute strings, 2-space
indentation, no tabs. Output is a list of edit fragments rather than a
string because kept source ranges (:class:`Span`) are only rendered
when the whole edit plan is applied.
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from .edits import Fragment, Indented, Span

INDENT = "  "

# Opening tags longer than this are broken onto one attribute per line
MAX_INLINE_WIDTH = 80

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class Expr:
    """A JS expression that is printed as-is.

    Either generated text (``Expr.of("styles.box0")``) or a kept range of
    the original source (``Expr.span(node)``).
    """

    fragments: Tuple[Fragment, ...]

    @classmethod
    def of(cls, text: str) -> "Expr":
        return cls((text,))

    @classmethod
    def span(cls, node) -> "Expr":
        return cls((Span(node.start_byte, node.end_byte),))


@dataclass(frozen=True)
class TokenRef:
    """A design token printed as a helper lookup, e.g. ``space.md``."""

    helper: str  # "space" | "radius" | "color"
    path: str  # "md", "2xl", "core.neutral.HN1"

    def render(self) -> str:
        out = self.helper
        for part in self.path.split("."):
            out += f".{part}" if _IDENTIFIER.match(part) else f"[{quote(part)}]"
        return out


@dataclass
class JsxAttr:
    """One attribute of a generated opening tag.

    ``value`` may be ``None`` (boolean shorthand), a ``str`` (printed as a
    double-quoted JSX string), an :class:`Expr` / :class:`TokenRef` / any
    other JS value (printed inside braces), or a raw fragment tuple that
    already contains the ``="..."`` / ``={...}`` part.
    """

    name: Optional[str]
    value: Any = None
    raw: Optional[Tuple[Fragment, ...]] = None  # verbatim attribute (spreads included)


@dataclass
class JsxNode:
    tag: str
    attributes: List[JsxAttr] = field(default_factory=list)
    children: Optional[List[Fragment]] = None  # None → self-closing


# ── JS values ────────────────────────────────────────────────────────


def quote(text: str) -> str:
    """Single-quoted JS string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
    )
    return f"'{escaped}'"


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def property_key(key: str) -> str:
    return key if _IDENTIFIER.match(key) else quote(key)


def js_value(value: Any, indent: str = "", multiline: bool = False) -> List[Fragment]:
    """Fragments for a Python value printed as a JS expression.

    Args:
        value: str, bool, int, float, None, dict, list, Expr or TokenRef
        indent: Indentation of the line the value starts on
        multiline: Print objects one property per line

    Returns:
        List of fragments
    """
    if isinstance(value, Expr):
        return list(value.fragments)
    if isinstance(value, TokenRef):
        return [value.render()]
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if value is None:
        return ["undefined"]
    if isinstance(value, (int, float)):
        return [format_number(value)]
    if isinstance(value, str):
        return [quote(value)]
    if isinstance(value, dict):
        return _js_object(value, indent, multiline)
    if isinstance(value, (list, tuple)):
        out: List[Fragment] = ["["]
        for i, item in enumerate(value):
            if i:
                out.append(", ")
            out.extend(js_value(item, indent, multiline))
        out.append("]")
        return out
    raise TypeError(f"Cannot print {type(value).__name__} as JS")


def _js_object(value: dict, indent: str, multiline: bool) -> List[Fragment]:
    if not value:
        return ["{}"]
    out: List[Fragment] = []
    if multiline:
        inner = indent + INDENT
        out.append("{\n")
        for key, item in value.items():
            out.append(f"{inner}{property_key(key)}: ")
            out.extend(js_value(item, inner, multiline))
            out.append(",\n")
        out.append(indent + "}")
        return out
    out.append("{ ")
    for i, (key, item) in enumerate(value.items()):
        if i:
            out.append(", ")
        out.append(f"{property_key(key)}: ")
        out.extend(js_value(item, indent, multiline))
    out.append(" }")
    return out


# ── JSX ──────────────────────────────────────────────────────────────


def jsx_attribute(attr: JsxAttr) -> List[Fragment]:
    if attr.raw is not None:
        return list(attr.raw)
    if attr.value is None:
        return [attr.name]
    value = attr.value
    if isinstance(value, str) and '"' not in value and "\n" not in value:
        return [f'{attr.name}="{value}"']
    return [f"{attr.name}={{", *js_value(value), "}"]


class Printer:
    """Lays out generated elements against one source buffer.

    The source is needed to measure kept spans when deciding whether an
    opening tag fits on one line.
    """

    def __init__(self, source: bytes):
        self.source = source

    def width(self, fragments: Sequence[Fragment]) -> int:
        total = 0
        for fragment in fragments:
            if isinstance(fragment, str):
                total += len(fragment)
            elif isinstance(fragment, Span):
                total += fragment.end - fragment.start
            else:
                total += self.width(fragment.fragments)
        return total

    def is_multiline(self, fragments: Sequence[Fragment]) -> bool:
        for fragment in fragments:
            if isinstance(fragment, str):
                if "\n" in fragment:
                    return True
            elif isinstance(fragment, Span):
                if b"\n" in self.source[fragment.start:fragment.end]:
                    return True
            elif self.is_multiline(fragment.fragments):
                return True
        return False

    def element(self, node: JsxNode, indent: str = "") -> List[Fragment]:
        """Fragments for a whole element.

        Children are placed verbatim between the tags; they carry their
        original line breaks and indentation.

        Args:
            node: Element to print
            indent: Indentation of the line the element starts on

        Returns:
            List of fragments
        """
        attrs = [jsx_attribute(a) for a in node.attributes]
        closer = " />" if node.children is None else ">"

        inline: List[Fragment] = ["<", node.tag]
        for attr in attrs:
            inline.append(" ")
            inline.extend(attr)
        fits = (
            len(indent) + self.width(inline) + len(closer) <= MAX_INLINE_WIDTH
            and not any(self.is_multiline(a) for a in attrs)
        )

        out: List[Fragment]
        if fits or not attrs:
            out = inline + [closer]
        else:
            out = ["<", node.tag]
            for attr in attrs:
                out.append("\n" + indent + INDENT)
                out.extend(attr)
            out.append("\n" + indent + ("/>" if node.children is None else ">"))

        if node.children is not None:
            out.extend(node.children)
            out.append(f"</{node.tag}>")
        return out

    def wrap(self, wrapper: JsxNode, inner: Sequence[Fragment], indent: str = "") -> List[Fragment]:
        """Place ``inner`` as the only child of ``wrapper``, one level deeper."""
        wrapper.children = [
            "\n" + indent + INDENT,
            Indented(tuple(inner), indent=INDENT),
            "\n" + indent,
        ]
        return self.element(wrapper, indent)
