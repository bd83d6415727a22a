"""Unused-binding pruner.

Reference counting over the file's top-level bindings: import
specifiers, non-exported ``const``/``let``/``var`` declarators
(destructured names included) and non-exported type aliases.

Each round collects the bindings, then every reference position
(values, types, generic arguments, indexed-access types, template
substitutions, JSX tags), and removes bindings nobody references.
Removing one declaration can orphan another, so rounds repeat on the
re-parsed output until nothing changes.

There is no scope or control-flow analysis: any identifier with a
binding's name keeps it alive.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

import tree_sitter

from ..ast_parser import parse_source
from ..ast_parser.jsx import DECLARATION_STATEMENTS, JSX_ELEMENT_TYPES, pattern_identifiers
from ..ast_parser.models import SourceFile
from .edits import EditPlan

logger = logging.getLogger(__name__)

MAX_ROUNDS = 10

REFERENCE_TYPES = frozenset({"identifier", "type_identifier", "shorthand_property_identifier"})

JSX_PRESENCE_TYPES = JSX_ELEMENT_TYPES | {"jsx_fragment"}

# The JSX transform of the classic runtime references React implicitly
JSX_IMPLICIT_BINDING = "React"

# Initializer nodes that run code when the declaration is evaluated
EFFECT_TYPES = frozenset({
    "call_expression",
    "new_expression",
    "await_expression",
    "assignment_expression",
    "augmented_assignment_expression",
    "update_expression",
    "yield_expression",
    "delete_expression",
})

DEFERRED_TYPES = frozenset({"arrow_function", "function_expression", "function", "class"})


@dataclass
class Binding:
    """One removable top-level binding."""

    name: str
    name_nodes: List[tree_sitter.Node]
    kind: str  # "import" | "declarator" | "property" | "type"
    node: tree_sitter.Node  # specifier / declarator / pattern property / alias


@dataclass
class _Scan:
    bindings: List[Binding] = field(default_factory=list)
    excluded: Set[int] = field(default_factory=set)
    references: Set[str] = field(default_factory=set)


# ── Traversal ────────────────────────────────────────────────────────


def _walk_skipping(node: tree_sitter.Node, skip: frozenset) -> Iterator[tree_sitter.Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if current.type in skip:
            continue
        stack.extend(reversed(current.children))


def _is_effect_free(value: Optional[tree_sitter.Node]) -> bool:
    """True when evaluating ``value`` cannot run code.

    Function and class bodies are skipped: defining them runs nothing.
    """
    if value is None:
        return True
    for node in _walk_skipping(value, DEFERRED_TYPES):
        if node.type in EFFECT_TYPES:
            return False
    return True


def _list_items(container: tree_sitter.Node) -> List[tree_sitter.Node]:
    return [child for child in container.named_children if child.type != "comment"]


def _remove_items(plan: EditPlan, items: List[tree_sitter.Node], dead: Set[int]) -> None:
    """Remove dead entries of a comma list, keeping at least one live entry.

    A dead entry takes the separator after it; a dead run at the end of
    the list takes the separator before it.
    """
    count = len(items)
    trailing = count
    while trailing > 0 and items[trailing - 1].id in dead:
        trailing -= 1
    for index in range(trailing):
        item = items[index]
        if item.id in dead:
            plan.remove(item.start_byte, items[index + 1].start_byte, label="prune")
    if trailing < count:
        plan.remove(items[trailing - 1].end_byte, items[count - 1].end_byte, label="prune")


def _remove_statement(plan: EditPlan, statement: tree_sitter.Node, source: bytes) -> None:
    end = statement.end_byte
    if source[end:end + 1] == b"\n":
        end += 1
    plan.remove(statement.start_byte, end, label="prune")


# ── Collection ───────────────────────────────────────────────────────


def _import_bindings(statement: tree_sitter.Node, source: bytes) -> List[Binding]:
    clause = next((c for c in statement.children if c.type == "import_clause"), None)
    if clause is None:
        # side-effect import
        return []
    found: List[Binding] = []
    for part in clause.named_children:
        if part.type == "identifier":
            found.append(Binding(_text(part, source), [part], "import", part))
        elif part.type == "namespace_import":
            ident = next((c for c in part.named_children if c.type == "identifier"), None)
            if ident is not None:
                found.append(Binding(_text(ident, source), [ident], "import", part))
        elif part.type == "named_imports":
            for spec in part.named_children:
                if spec.type != "import_specifier":
                    continue
                local = spec.child_by_field_name("alias")
                if local is None:
                    local = spec.child_by_field_name("name")
                if local is not None:
                    found.append(Binding(_text(local, source), [local], "import", spec))
    return found


def _declarator_bindings(declarator: tree_sitter.Node, source: bytes) -> List[Binding]:
    name = declarator.child_by_field_name("name")
    if name is None:
        return []
    if name.type == "object_pattern":
        properties = _list_items(name)
        if not any(p.type == "rest_pattern" for p in properties):
            found = []
            for prop in properties:
                names = pattern_identifiers(prop)
                if names:
                    found.append(Binding(_text(names[0], source), names, "property", prop))
            return found
    names = pattern_identifiers(name)
    if not names:
        return []
    return [Binding(_text(names[0], source), names, "declarator", declarator)]


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8")


def _scan(parsed: SourceFile) -> _Scan:
    source = parsed.source
    scan = _Scan()
    skip_subtrees: Set[int] = set()

    for statement in parsed.root.named_children:
        if statement.type == "import_statement":
            skip_subtrees.add(statement.id)
            scan.bindings.extend(_import_bindings(statement, source))
        elif statement.type in DECLARATION_STATEMENTS:
            for declarator in statement.named_children:
                if declarator.type == "variable_declarator":
                    scan.bindings.extend(_declarator_bindings(declarator, source))
        elif statement.type == "type_alias_declaration":
            name = statement.child_by_field_name("name")
            if name is not None:
                scan.bindings.append(Binding(_text(name, source), [name], "type", statement))

    for binding in scan.bindings:
        scan.excluded.update(n.id for n in binding.name_nodes)

    has_jsx = False
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        if node.id in skip_subtrees:
            continue
        if node.type in JSX_PRESENCE_TYPES:
            has_jsx = True
        if node.type in REFERENCE_TYPES and node.id not in scan.excluded:
            scan.references.add(_text(node, source))
        stack.extend(node.children)

    if has_jsx:
        scan.references.add(JSX_IMPLICIT_BINDING)
    return scan


# ── Removal ──────────────────────────────────────────────────────────


def _plan_imports(plan: EditPlan, statement: tree_sitter.Node, dead: Set[int], source: bytes) -> None:
    clause = next((c for c in statement.children if c.type == "import_clause"), None)
    parts = [p for p in clause.named_children if p.type in ("identifier", "namespace_import", "named_imports")]

    def _part_alive(part: tree_sitter.Node) -> bool:
        if part.type == "named_imports":
            return any(s.id not in dead for s in part.named_children if s.type == "import_specifier")
        return part.id not in dead

    alive = [p for p in parts if _part_alive(p)]
    if not alive:
        _remove_statement(plan, statement, source)
        return

    if len(parts) == 2 and len(alive) == 1:
        # `D, { a }` / `D, * as NS` with one side dead
        first, second = parts
        if alive[0].id == first.id:
            plan.remove(first.end_byte, second.end_byte, label="prune")
        else:
            plan.remove(first.start_byte, second.start_byte, label="prune")
        return

    for part in alive:
        if part.type == "named_imports":
            specifiers = [s for s in part.named_children if s.type == "import_specifier"]
            if any(s.id in dead for s in specifiers):
                _remove_items(plan, specifiers, dead)


def _plan_declaration(
    plan: EditPlan, statement: tree_sitter.Node, dead: Set[int], source: bytes
) -> Set[int]:
    """Plan removals inside one declaration statement.

    Returns:
        Ids of unused declarators kept because their initializer has
        side effects
    """
    declarators = [d for d in statement.named_children if d.type == "variable_declarator"]
    removed: Set[int] = set()
    partial: List[Tuple[tree_sitter.Node, List[tree_sitter.Node]]] = []
    skipped: Set[int] = set()

    for declarator in declarators:
        name = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if declarator.id in dead:
            whole = True
            properties: List[tree_sitter.Node] = []
        elif name is not None and name.type == "object_pattern":
            properties = [p for p in _list_items(name) if pattern_identifiers(p)]
            dead_properties = [p for p in properties if p.id in dead]
            if not dead_properties:
                continue
            whole = len(dead_properties) == len(properties)
        else:
            continue

        if whole:
            if _is_effect_free(value):
                removed.add(declarator.id)
            else:
                logger.debug("Keeping unused %s: initializer has side effects", _text(name, source))
                skipped.add(declarator.id)
        else:
            partial.append((name, _list_items(name)))

    if declarators and len(removed) == len(declarators):
        _remove_statement(plan, statement, source)
        return skipped
    if removed:
        _remove_items(plan, declarators, removed)
    for pattern, items in partial:
        if pattern.parent is not None and pattern.parent.id in removed:
            continue
        _remove_items(plan, items, dead)
    return skipped


def _is_dead(binding: Binding, references: Set[str], source: bytes) -> bool:
    return not any(_text(n, source) in references for n in binding.name_nodes)


def _declarator_of(binding: Binding) -> tree_sitter.Node:
    if binding.kind == "property":
        # property → object_pattern → variable_declarator
        return binding.node.parent.parent
    return binding.node


def prune(parsed: SourceFile) -> Tuple[str, List[str]]:
    """Run one pruning round.

    Args:
        parsed: Parsed source file

    Returns:
        Tuple of (new text, names removed this round)
    """
    scan = _scan(parsed)
    source = parsed.source
    dead_bindings = [b for b in scan.bindings if _is_dead(b, scan.references, source)]
    if not dead_bindings:
        return parsed.text, []

    dead: Set[int] = {b.node.id for b in dead_bindings}
    dead_imports = [b.node for b in dead_bindings if b.kind == "import"]
    kept: Set[int] = set()
    plan = EditPlan(source)

    for statement in parsed.root.named_children:
        if statement.type == "import_statement":
            if any(statement.start_byte <= n.start_byte and n.end_byte <= statement.end_byte for n in dead_imports):
                _plan_imports(plan, statement, dead, source)
        elif statement.type in DECLARATION_STATEMENTS:
            kept |= _plan_declaration(plan, statement, dead, source)
        elif statement.type == "type_alias_declaration" and statement.id in dead:
            _remove_statement(plan, statement, source)

    if not len(plan):
        return parsed.text, []
    removed = [
        b.name for b in dead_bindings
        if b.kind in ("import", "type") or _declarator_of(b).id not in kept
    ]
    return plan.render(), removed


def prune_source(source_text: str, file_path: str = "<memory>", language: Optional[str] = None) -> Tuple[str, List[str]]:
    """Remove unused top-level bindings until none are left.

    Exported declarations and side-effect imports are never touched. A
    file that does not parse cleanly is returned unchanged.

    Args:
        source_text: File contents
        file_path: Path used to pick the grammar and for logging
        language: Grammar override

    Returns:
        Tuple of (new text, removed binding names in removal order)
    """
    text = source_text
    removed: List[str] = []
    for _ in range(MAX_ROUNDS):
        parsed = parse_source(text, file_path, language)
        if parsed.root.has_error:
            logger.warning("Skipping prune of %s: file has syntax errors", file_path)
            return text, removed
        new_text, names = prune(parsed)
        if new_text == text:
            break
        text = new_text
        removed.extend(names)
    if removed:
        logger.debug("Pruned %s from %s", ", ".join(removed), file_path)
    return text, removed
