"""AST Parser utilities.

Language detection, parser registry, and tree helpers.
"""

import os
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

import tree_sitter

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# Extension → grammar mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".tsx": "tsx",
    ".jsx": "tsx",
    ".js": "tsx",
    ".ts": "typescript",
}

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    "__pycache__",
    ".git",
    "node_modules",
    "dist",
    "build",
    "coverage",
    "vendor",
    "ios",
    "android",
    ".expo",
    ".next",
})

# Parser registry, lazy-loaded to avoid import overhead
_parser_registry: Dict[str, "BaseLanguageParser"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect the grammar to parse a file with from its extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(language: str) -> "BaseLanguageParser":
    """Get a parser instance for the given language.

    Args:
        language: Language identifier ("tsx" or "typescript")

    Returns:
        Parser instance

    Raises:
        ValueError: If language is not supported
    """
    if language not in _parser_registry:
        if language == "tsx":
            from .tsx_parser import TsxParser
            _parser_registry["tsx"] = TsxParser()
        elif language == "typescript":
            from .tsx_parser import TypeScriptParser
            _parser_registry["typescript"] = TypeScriptParser()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _parser_registry[language]


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)

    Returns:
        True if directory should be skipped
    """
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")


def is_supported_file(file_path: str) -> bool:
    """Check if a file has a supported extension.

    Declaration files (``.d.ts``) never contain component usages.
    """
    if file_path.endswith(".d.ts"):
        return False
    return detect_language(file_path) is not None


# ── Tree helpers ─────────────────────────────────────────────────────


def walk(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Pre-order traversal of ``node`` and all its descendants.

    Iterative, so deeply nested JSX does not hit the recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def line_indent(source: bytes, position: int) -> str:
    """Leading whitespace of the line containing byte ``position``."""
    line_start = source.rfind(b"\n", 0, position) + 1
    indent = []
    for byte in source[line_start:position]:
        if byte not in (0x20, 0x09):
            break
        indent.append(" " if byte == 0x20 else "  ")
    return "".join(indent)


# String-like literals whose line breaks are part of the value
LITERAL_TYPES = frozenset({"string", "template_string"})


def literal_ranges(root: tree_sitter.Node) -> List[Tuple[int, int]]:
    """Byte ranges of the string and template literals spanning several lines."""
    ranges = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in LITERAL_TYPES:
            if node.start_point[0] != node.end_point[0]:
                ranges.append((node.start_byte, node.end_byte))
            continue
        stack.extend(node.children)
    return sorted(ranges)
