"""Base interface for language-specific AST parsers.

Defines the Strategy pattern base class that the TSX and TypeScript
parsers implement. Shared parsing logic lives here; reading imports and
JSX elements out of the tree is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import tree_sitter

from .models import ImportStatement, ParseError, SourceFile

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extract_imports(): reads import statements from a parsed file
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'tsx', 'typescript')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def extract_imports(self, parsed: SourceFile) -> List[ImportStatement]:
        """Read the top-level import statements of a parsed file.

        Args:
            parsed: Parsed source file

        Returns:
            List of ImportStatement objects in source order
        """
        ...

    def parse_file(self, file_path: str) -> SourceFile:
        """Read and parse a source file.

        Args:
            file_path: Path to the source file

        Returns:
            Parsed SourceFile

        Raises:
            OSError: If the file cannot be read
        """
        with open(file_path, "r", encoding="utf-8") as f:
            source_text = f.read()
        return self.parse_source(source_text, file_path)

    def parse_source(self, source_text: str, file_path: str) -> SourceFile:
        """Parse source code string into a SourceFile.

        tree-sitter is error tolerant, so a file with syntax errors still
        yields a tree; the problem is logged and recorded on the result.

        Args:
            source_text: Source code as string
            file_path: File path (for metadata and log lines)

        Returns:
            SourceFile holding the tree and the raw bytes
        """
        errors: List[ParseError] = []
        source_bytes = source_text.encode("utf-8")

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        if tree.root_node.has_error:
            logger.warning("Tree-sitter reported parse errors in %s", file_path)
            errors.append(
                ParseError(
                    file_path=file_path,
                    line=0,
                    message="Tree-sitter reported parse errors in file",
                    severity="warning",
                )
            )

        return SourceFile(
            file_path=file_path,
            language=self.get_language(),
            source=source_bytes,
            tree=tree,
            errors=errors,
        )
