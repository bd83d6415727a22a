"""AST Parser data models.

Read-only views over a tree-sitter tree: the parsed file, its import
statements and the JSX attributes the migration passes look at.
These are pure data containers, no rewriting logic.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import tree_sitter


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class SourceFile:
    """A parsed source file.

    Keeps the raw bytes next to the tree because every node offset
    (``start_byte`` / ``end_byte``) indexes into them.
    """

    file_path: str
    language: str  # "tsx" | "typescript"
    source: bytes
    tree: tree_sitter.Tree
    errors: List[ParseError] = field(default_factory=list)

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def text(self) -> str:
        return self.source.decode("utf-8")

    def node_text(self, node: tree_sitter.Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


@dataclass
class ImportSpecifier:
    """One binding introduced by an import statement."""

    kind: str  # "named" | "default" | "namespace"
    imported: str  # exported name; "default" / "*" for the other kinds
    local: str  # local identifier
    node: tree_sitter.Node
    inline_type: bool = False  # `import { type Foo }`


@dataclass
class ImportStatement:
    """A single ``import ... from '<path>'`` statement."""

    node: tree_sitter.Node
    source_path: str  # module path without quotes
    type_only: bool  # `import type { ... }`
    specifiers: List[ImportSpecifier] = field(default_factory=list)
    has_semicolon: bool = True

    @property
    def is_side_effect(self) -> bool:
        return not self.specifiers


@dataclass
class ImportBinding:
    """Local name → originating import, one row of the binding table."""

    local: str
    imported: str
    module: str
    type_only: bool
    kind: str = "named"
    statement: Optional[ImportStatement] = None
    specifier: Optional[ImportSpecifier] = None


@dataclass
class Attribute:
    """One JSX attribute, spreads included.

    ``value_node`` is the raw value as written: a ``string``, a
    ``jsx_expression`` or a nested element. It is ``None`` for boolean
    shorthand (``<Switch isDisabled />``) and for spreads.
    """

    name: Optional[str]  # None for `{...props}`
    node: tree_sitter.Node
    value_node: Optional[tree_sitter.Node] = None
    is_spread: bool = False

    @property
    def start_byte(self) -> int:
        return self.node.start_byte

    @property
    def label(self) -> str:
        return self.name if self.name is not None else "{...spread}"


@dataclass
class ElementUsage:
    """One JSX occurrence of an imported legacy component.

    Discovered once during a single traversal and consumed by exactly one
    rewriter.
    """

    node: tree_sitter.Node  # jsx_element | jsx_self_closing_element
    tag: str  # local tag name as written
    binding: ImportBinding
    attributes: List[Attribute]
    children: List[tree_sitter.Node]
    file_path: str
    opening: Optional[tree_sitter.Node] = None  # opening tag (the node itself when self-closing)
    closing: Optional[tree_sitter.Node] = None

    @property
    def component(self) -> str:
        """Legacy export name the tag resolves to (``Box`` for ``<B>``)."""
        return self.binding.imported

    @property
    def is_self_closing(self) -> bool:
        return self.closing is None

    @property
    def children_range(self) -> Optional[tuple]:
        if self.closing is None:
            return None
        return (self.opening.end_byte, self.closing.start_byte)

    def attribute(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None
