"""nbmigrate AST Parser: tree-sitter based TSX parsing.

Public API:
    parse_file(path) → SourceFile
    parse_source(source, file_path, language) → SourceFile
    detect_language(file_path) → str | None
"""

from .models import (
    Attribute,
    ElementUsage,
    ImportBinding,
    ImportSpecifier,
    ImportStatement,
    ParseError,
    SourceFile,
)
from .utils import detect_language, get_parser, is_supported_file, should_skip_directory

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "get_parser",
    "is_supported_file",
    "should_skip_directory",
    "Attribute",
    "ElementUsage",
    "ImportBinding",
    "ImportSpecifier",
    "ImportStatement",
    "ParseError",
    "SourceFile",
]


def parse_file(file_path: str) -> SourceFile:
    """Parse a source file.

    Unknown extensions fall back to the TSX grammar, which accepts plain
    JavaScript as well.

    Args:
        file_path: Path to the source file

    Returns:
        Parsed SourceFile
    """
    parser = get_parser(detect_language(file_path) or "tsx")
    return parser.parse_file(file_path)


def parse_source(source_text: str, file_path: str, language: str | None = None) -> SourceFile:
    """Parse source code string.

    Args:
        source_text: Source code as string
        file_path: File path (for metadata)
        language: Language identifier. If None, detected from file_path.

    Returns:
        Parsed SourceFile
    """
    if language is None:
        language = detect_language(file_path) or "tsx"
    return get_parser(language).parse_source(source_text, file_path)
