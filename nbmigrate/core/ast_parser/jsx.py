"""JSX accessors and scope helpers over a tree-sitter tree.

Everything here reads the tree; nothing mutates it. The migration
passes use these to find element usages, read attributes and children,
and decide whether a tag name is shadowed by a local binding.
"""

import logging
from typing import Dict, Iterator, List, Optional

import tree_sitter

from .models import Attribute, ElementUsage, ImportBinding, SourceFile
from .utils import walk

logger = logging.getLogger(__name__)

JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
})

# Node types whose direct statements can declare block-scoped bindings
BLOCK_TYPES = frozenset({"statement_block", "switch_case", "switch_default"})

DECLARATION_STATEMENTS = frozenset({"lexical_declaration", "variable_declaration"})

NAMED_DECLARATIONS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
})


# ── Elements ─────────────────────────────────────────────────────────


def iter_elements(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield JSX elements in document (pre-order) order, outer first."""
    for node in walk(root):
        if node.type in JSX_ELEMENT_TYPES:
            yield node


def opening_tag(element: tree_sitter.Node) -> tree_sitter.Node:
    """Opening tag of an element; a self-closing element is its own tag."""
    if element.type == "jsx_self_closing_element":
        return element
    tag = element.child_by_field_name("open_tag")
    if tag is not None:
        return tag
    for child in element.children:
        if child.type == "jsx_opening_element":
            return child
    return element


def closing_tag(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    if element.type == "jsx_self_closing_element":
        return None
    tag = element.child_by_field_name("close_tag")
    if tag is not None:
        return tag
    for child in element.children:
        if child.type == "jsx_closing_element":
            return child
    return None


def tag_name_node(element: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    tag = opening_tag(element)
    name = tag.child_by_field_name("name")
    if name is not None:
        return name
    for child in tag.named_children:
        if child.type in ("identifier", "member_expression", "nested_identifier", "jsx_namespace_name"):
            return child
    return None


def tag_name(element: tree_sitter.Node, source: bytes) -> str:
    """Tag as written, e.g. ``Box`` or ``Alert.Title``. Empty for fragments."""
    name = tag_name_node(element)
    if name is None:
        return ""
    return source[name.start_byte:name.end_byte].decode("utf-8")


def read_attributes(element: tree_sitter.Node, source: bytes) -> List[Attribute]:
    """Read the attributes of an element's opening tag, in source order.

    Args:
        element: jsx_element or jsx_self_closing_element
        source: Raw source bytes

    Returns:
        List of Attribute objects, spreads included
    """
    attributes: List[Attribute] = []
    for child in opening_tag(element).named_children:
        if child.type == "jsx_attribute":
            named = child.named_children
            if not named:
                continue
            name = source[named[0].start_byte:named[0].end_byte].decode("utf-8")
            value = named[-1] if len(named) > 1 else None
            attributes.append(Attribute(name=name, node=child, value_node=value))
        elif child.type == "jsx_expression":
            # `{...props}` in attribute position
            attributes.append(Attribute(name=None, node=child, is_spread=True))
    return attributes


def element_children(element: tree_sitter.Node) -> List[tree_sitter.Node]:
    """All nodes between the opening and closing tag, text included."""
    if element.type == "jsx_self_closing_element":
        return []
    opening = opening_tag(element)
    closing = closing_tag(element)
    return [
        child
        for child in element.children
        if child.id != opening.id and (closing is None or child.id != closing.id)
    ]


def meaningful_children(element: tree_sitter.Node, source: bytes) -> List[tree_sitter.Node]:
    """Children without whitespace-only text and ``{/* comments */}``."""
    result = []
    for child in element_children(element):
        if child.type == "jsx_text":
            if not source[child.start_byte:child.end_byte].strip():
                continue
        elif child.type == "jsx_expression" and expression_node(child) is None:
            continue
        elif child.type == "comment":
            continue
        result.append(child)
    return result


def expression_node(value: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    """Unwrap ``{expr}`` to ``expr``; other value nodes are returned as-is."""
    if value is None:
        return None
    if value.type != "jsx_expression":
        return value
    for child in value.named_children:
        if child.type != "comment":
            return child
    return None


# ── Scopes ───────────────────────────────────────────────────────────


def pattern_identifiers(node: Optional[tree_sitter.Node]) -> List[tree_sitter.Node]:
    """Identifier nodes bound by a declaration or parameter pattern."""
    if node is None:
        return []
    kind = node.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [node]
    if kind in ("required_parameter", "optional_parameter"):
        return pattern_identifiers(node.child_by_field_name("pattern"))
    if kind == "pair_pattern":
        return pattern_identifiers(node.child_by_field_name("value"))
    if kind in ("assignment_pattern", "object_assignment_pattern"):
        return pattern_identifiers(node.child_by_field_name("left"))
    if kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
        found: List[tree_sitter.Node] = []
        for child in node.named_children:
            found.extend(pattern_identifiers(child))
        return found
    return []


def declared_identifiers(statement: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Name nodes a single statement declares in its enclosing scope."""
    if statement.type == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        return declared_identifiers(declaration) if declaration is not None else []
    if statement.type in DECLARATION_STATEMENTS:
        names: List[tree_sitter.Node] = []
        for declarator in statement.named_children:
            if declarator.type == "variable_declarator":
                names.extend(pattern_identifiers(declarator.child_by_field_name("name")))
        return names
    if statement.type in NAMED_DECLARATIONS:
        name = statement.child_by_field_name("name")
        return [name] if name is not None else []
    return []


def _parameter_identifiers(function: tree_sitter.Node) -> List[tree_sitter.Node]:
    single = function.child_by_field_name("parameter")
    if single is not None:
        return pattern_identifiers(single)
    return pattern_identifiers(function.child_by_field_name("parameters"))


def is_shadowed(node: tree_sitter.Node, name: str, source: bytes) -> bool:
    """True when ``name`` at ``node`` resolves to a local, non-import binding.

    Checks enclosing function parameters, block-level ``const``/``let``/
    ``var`` declarations and local function or class declarations. The
    program scope is not checked: a top-level redeclaration of an
    imported name is a syntax error.
    """
    encoded = name.encode("utf-8")

    def _matches(nodes: List[tree_sitter.Node]) -> bool:
        return any(source[n.start_byte:n.end_byte] == encoded for n in nodes)

    ancestor = node.parent
    while ancestor is not None and ancestor.type != "program":
        if ancestor.type in FUNCTION_TYPES:
            if _matches(_parameter_identifiers(ancestor)):
                return True
            if ancestor.type in ("function_expression", "function"):
                # a named function expression binds its own name inside
                own = ancestor.child_by_field_name("name")
                if own is not None and _matches([own]):
                    return True
        elif ancestor.type in BLOCK_TYPES:
            for statement in ancestor.named_children:
                if _matches(declared_identifiers(statement)):
                    return True
        elif ancestor.type == "catch_clause":
            if _matches(pattern_identifiers(ancestor.child_by_field_name("parameter"))):
                return True
        ancestor = ancestor.parent
    return False


# ── Usages ───────────────────────────────────────────────────────────


def find_element_usages(
    parsed: SourceFile, bindings: Dict[str, ImportBinding]
) -> List[ElementUsage]:
    """Collect JSX usages whose tag resolves to one of ``bindings``.

    Only plain identifier tags are matched; member tags such as
    ``<Alert.Title>`` belong to their parent element's rewrite. Type-only
    bindings never name an element. Usages come back outer first.

    Args:
        parsed: Parsed source file
        bindings: Import Binding Table (local name → binding)

    Returns:
        List of ElementUsage objects in document order
    """
    usages: List[ElementUsage] = []
    source = parsed.source
    for element in iter_elements(parsed.root):
        name_node = tag_name_node(element)
        if name_node is None or name_node.type != "identifier":
            continue
        tag = source[name_node.start_byte:name_node.end_byte].decode("utf-8")
        binding = bindings.get(tag)
        if binding is None or binding.type_only:
            continue
        if is_shadowed(element, tag, source):
            logger.debug("Skipping <%s> in %s: shadowed by a local binding", tag, parsed.file_path)
            continue
        usages.append(
            ElementUsage(
                node=element,
                tag=tag,
                binding=binding,
                attributes=read_attributes(element, source),
                children=element_children(element),
                file_path=parsed.file_path,
                opening=opening_tag(element),
                closing=closing_tag(element),
            )
        )
    return usages
