"""Diagnostics collector.

Every rewrite decision that loses information or could not be made
with confidence is recorded here and logged as one warning line. The
collector is passed explicitly through the call chain so tests can
assert on what was recorded.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Categories of recoverable, per-element problems."""

    UNMAPPED_TOKEN = "unmapped_token"
    """Token not found in a token map; passed through unchanged."""

    UNRECOGNIZED_PROP = "unrecognized_prop"
    """Attribute not classified by any bucket (spreads included)."""

    UNSUPPORTED_COMPOSITE = "unsupported_composite"
    """Expected prop combination for a composite prop was not found."""

    COLLISION = "collision"
    """A renamed or style prop collided with one already written."""

    DROPPED_PROP = "dropped_prop"
    """A prop with visible effect was removed with no equivalent."""

    MANUAL_REVIEW = "manual_review"
    """The output is valid but needs a human look."""


@dataclass
class Diagnostic:
    kind: DiagnosticKind
    message: str
    file_path: str = ""
    line: int = 0  # 1-based, 0 when unknown

    def format(self) -> str:
        location = self.file_path or "<source>"
        if self.line:
            location = f"{location}:{self.line}"
        return f"{location}: [{self.kind.value}] {self.message}"


class Diagnostics:
    """Append-only diagnostics sink for one file."""

    def __init__(self, file_path: str = ""):
        self.file_path = file_path
        self._records: List[Diagnostic] = []

    def record(self, kind: DiagnosticKind, message: str, line: int = 0) -> Diagnostic:
        """Record one diagnostic and log it as a warning."""
        diagnostic = Diagnostic(kind=kind, message=message, file_path=self.file_path, line=line)
        self._records.append(diagnostic)
        logger.warning(diagnostic.format())
        return diagnostic

    @property
    def records(self) -> List[Diagnostic]:
        return list(self._records)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._records if d.kind == kind]

    def counts(self) -> Dict[str, int]:
        return dict(Counter(d.kind.value for d in self._records))

    def extend(self, other: "Diagnostics") -> None:
        self._records.extend(other._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)


def node_line(node: Optional[object]) -> int:
    """1-based line of a tree-sitter node, 0 when there is none."""
    if node is None:
        return 0
    return node.start_point[0] + 1
