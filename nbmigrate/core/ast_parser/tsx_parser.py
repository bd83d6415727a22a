"""TSX / TypeScript AST parsers using tree-sitter.

Both grammars ship in ``tree_sitter_typescript``. JSX only parses with
the TSX grammar, so ``.tsx``, ``.jsx`` and ``.js`` files go through
:class:`TsxParser`; plain ``.ts`` files use :class:`TypeScriptParser`
(where ``<T>value`` is a type assertion, not an element).
"""

import logging
from typing import List, Optional

import tree_sitter
import tree_sitter_typescript

from .base import BaseLanguageParser
from .models import ImportSpecifier, ImportStatement, SourceFile

logger = logging.getLogger(__name__)

_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())
_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())


class TsxParser(BaseLanguageParser):
    """tree-sitter based TSX parser.

    Reads import statements into :class:`ImportStatement` objects:
    - default, namespace and named specifiers (with aliases)
    - statement-level ``import type`` and inline ``type`` specifiers
    - side-effect imports (no specifiers)
    """

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE

    def extract_imports(self, parsed: SourceFile) -> List[ImportStatement]:
        """Extract top-level import statements from the AST."""
        statements: List[ImportStatement] = []
        for child in parsed.root.children:
            if child.type != "import_statement":
                continue
            statement = self._read_import(child, parsed.source)
            if statement is not None:
                statements.append(statement)
        return statements

    def _read_import(
        self, node: tree_sitter.Node, source: bytes
    ) -> Optional[ImportStatement]:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            source_node = _get_child_by_type(node, "string")
        if source_node is None:
            # `import x = require('y')` and friends
            return None

        statement = ImportStatement(
            node=node,
            source_path=string_value(source_node, source),
            type_only=any(c.type == "type" for c in node.children),
            has_semicolon=node.children[-1].type == ";",
        )

        clause = _get_child_by_type(node, "import_clause")
        if clause is None:
            return statement

        for part in clause.named_children:
            if part.type == "identifier":
                name = _get_node_text(part, source)
                statement.specifiers.append(
                    ImportSpecifier(kind="default", imported="default", local=name, node=part)
                )
            elif part.type == "namespace_import":
                ident = _get_child_by_type(part, "identifier")
                if ident is not None:
                    statement.specifiers.append(
                        ImportSpecifier(
                            kind="namespace",
                            imported="*",
                            local=_get_node_text(ident, source),
                            node=part,
                        )
                    )
            elif part.type == "named_imports":
                for spec in part.named_children:
                    if spec.type != "import_specifier":
                        continue
                    name_node = spec.child_by_field_name("name")
                    alias_node = spec.child_by_field_name("alias")
                    if name_node is None:
                        continue
                    imported = _get_node_text(name_node, source)
                    local = _get_node_text(alias_node, source) if alias_node is not None else imported
                    statement.specifiers.append(
                        ImportSpecifier(
                            kind="named",
                            imported=imported,
                            local=local,
                            node=spec,
                            inline_type=any(c.type in ("type", "typeof") for c in spec.children),
                        )
                    )

        return statement


class TypeScriptParser(TsxParser):
    """Same import handling on the non-JSX TypeScript grammar."""

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE


# ── Helpers ──────────────────────────────────────────────────────────


def string_value(node: tree_sitter.Node, source: bytes) -> str:
    """Return the contents of a string literal node without its quotes."""
    text = _get_node_text(node, source)
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _get_node_text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _get_child_by_type(node: tree_sitter.Node, child_type: str) -> Optional[tree_sitter.Node]:
    for child in node.children:
        if child.type == child_type:
            return child
    return None
