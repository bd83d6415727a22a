"""Planned source edits.

tree-sitter trees are read-only, so rewriting is split in two passes:
the rewriters *plan* :class:`Edit` objects against the original bytes,
then :meth:`EditPlan.render` applies them all at once.

An edit replaces ``source[start:end]`` with a list of fragments:

* ``str``: literal text.
* :class:`Span`: a range of the original source, re-rendered with
  every other edit that falls inside it. This is how kept children and
  kept attribute values carry nested rewrites along.
* :class:`Indented`: a group of fragments whose line breaks get extra
  indentation, used when an element is moved inside a wrapper. Line
  breaks inside multi-line string and template literals are part of
  the value and keep their position.

Edits are either disjoint or strictly nested. An edit nested inside a
range that no span re-renders (a dropped attribute, say) disappears
with it.
"""

import bisect
import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# a line break followed by a non-empty line
_LINE_START = re.compile(rb"\n(?=[^\n])")

# reindented lines never start with a tab
_TAB = b"  "


@dataclass(frozen=True)
class Span:
    """Half-open byte range of the original source."""

    start: int
    end: int


@dataclass(frozen=True)
class Indented:
    fragments: Tuple["Fragment", ...]
    indent: str = "  "


Fragment = Union[str, Span, Indented]


@dataclass
class Edit:
    start: int
    end: int
    fragments: List[Fragment] = field(default_factory=list)
    label: str = ""

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def within(self, start: int, end: int) -> bool:
        return start <= self.start and self.end <= end


class EditPlan:
    """Accumulates edits against one source buffer and renders them.

    Args:
        source: Original bytes
        literal_ranges: Ranges of multi-line string and template
            literals; their line breaks are never re-indented
    """

    def __init__(self, source: bytes, literal_ranges: Sequence[Tuple[int, int]] = ()):
        self.source = source
        self._edits: List[Edit] = []
        self._frozen = sorted(
            position
            for start, end in literal_ranges
            for position in _newlines(source, start, end)
        )

    def __len__(self) -> int:
        return len(self._edits)

    @property
    def edits(self) -> List[Edit]:
        return list(self._edits)

    def replace(self, start: int, end: int, fragments: Sequence[Fragment], label: str = "") -> Edit:
        edit = Edit(start=start, end=end, fragments=list(fragments), label=label)
        self._edits.append(edit)
        return edit

    def insert(self, position: int, text: str, label: str = "") -> Edit:
        return self.replace(position, position, [text], label=label)

    def remove(self, start: int, end: int, label: str = "") -> Edit:
        return self.replace(start, end, [], label=label)

    # ── Rendering ────────────────────────────────────────────────

    def render(self) -> str:
        """Apply every planned edit and return the new text."""
        out = _Buffer()
        self._render_range(0, len(self.source), (), out)
        return out.getvalue().decode("utf-8")

    def render_fragments(self, fragments: Sequence[Fragment]) -> str:
        """Render a fragment list on its own (used by tests and measuring)."""
        out = _Buffer()
        self._render_fragments(fragments, (), out)
        return out.getvalue().decode("utf-8")

    def _copy_source(self, start: int, end: int, out: "_Buffer") -> None:
        low = bisect.bisect_left(self._frozen, start)
        high = bisect.bisect_left(self._frozen, end)
        out.write(self.source[start:end], [p - start for p in self._frozen[low:high]])

    def _render_range(self, start: int, end: int, ancestors: Tuple[int, ...], out: "_Buffer") -> None:
        candidates = [
            e for e in self._edits
            if id(e) not in ancestors and e.within(start, end)
        ]
        # insertions first at a shared offset, then the widest edit
        candidates.sort(key=lambda e: (e.start, 0 if e.is_insertion else 1, -e.end))

        cursor = start
        for edit in candidates:
            if edit.start < cursor:
                if edit.end > cursor:
                    logger.warning(
                        "Dropping overlapping edit %s [%d, %d)", edit.label, edit.start, edit.end
                    )
                # nested inside an edit already rendered
                continue
            self._copy_source(cursor, edit.start, out)
            self._render_fragments(edit.fragments, ancestors + (id(edit),), out)
            cursor = edit.end
        self._copy_source(cursor, end, out)

    def _render_fragments(self, fragments: Sequence[Fragment], ancestors: Tuple[int, ...], out: "_Buffer") -> None:
        for fragment in fragments:
            if isinstance(fragment, str):
                out.write(fragment.encode("utf-8"))
            elif isinstance(fragment, Span):
                self._render_range(fragment.start, fragment.end, ancestors, out)
            elif isinstance(fragment, Indented):
                inner = _Buffer()
                self._render_fragments(fragment.fragments, ancestors, inner)
                out.write(*_reindent(inner.getvalue(), inner.frozen, fragment.indent.encode("utf-8")))
            else:
                raise TypeError(f"Unknown fragment type: {type(fragment).__name__}")


class _Buffer:
    """Rendered bytes plus the offsets of line breaks inside literals."""

    def __init__(self):
        self._parts: List[bytes] = []
        self._size = 0
        self.frozen: List[int] = []

    def write(self, data: bytes, frozen: Sequence[int] = ()) -> None:
        self.frozen.extend(self._size + offset for offset in frozen)
        self._parts.append(data)
        self._size += len(data)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


def _newlines(source: bytes, start: int, end: int) -> List[int]:
    positions = []
    position = source.find(b"\n", start, end)
    while position != -1:
        positions.append(position)
        position = source.find(b"\n", position + 1, end)
    return positions


def _reindent(data: bytes, frozen: Sequence[int], indent: bytes) -> Tuple[bytes, List[int]]:
    """Indent every non-empty line after the first.

    Line breaks at ``frozen`` offsets belong to a literal and are left
    alone. Tabs in the leading whitespace of an indented line become
    spaces.

    Returns:
        Tuple of (indented bytes, frozen offsets in the result)
    """
    skip = set(frozen)
    out = []
    shifts: List[Tuple[int, int]] = []  # (offset in data, growth so far)
    cursor = 0
    growth = 0
    for match in _LINE_START.finditer(data):
        newline = match.start()
        if newline in skip:
            continue
        line_start = newline + 1
        lead_end = line_start
        while lead_end < len(data) and data[lead_end] in b" \t":
            lead_end += 1
        leading = indent + data[line_start:lead_end].replace(b"\t", _TAB)
        out.append(data[cursor:line_start])
        out.append(leading)
        cursor = lead_end
        growth += len(leading) - (lead_end - line_start)
        shifts.append((line_start, growth))
    out.append(data[cursor:])

    moved = []
    index = 0
    current = 0
    for offset in sorted(frozen):
        while index < len(shifts) and shifts[index][0] <= offset:
            current = shifts[index][1]
            index += 1
        moved.append(offset + current)
    return b"".join(out), moved
