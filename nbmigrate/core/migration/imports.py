"""Import rewriter.

Two jobs:

* :func:`redirect` / :func:`redirect_source`: point imports at a new
  module path, keeping specifiers and the ``type`` marker as written.
* :class:`ImportRewriter`: split legacy component imports. Every
  specifier goes to its component's target module, grouped per module
  path and type-only flag. Specifiers without a rewriter stay on the
  legacy path (or move to the fallback path). Helper imports requested
  by rewriters (``View``, ``StyleSheet``, token helpers) are merged into
  an existing import from the same module when there is one.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..ast_parser import parse_source
from ..ast_parser.models import ImportBinding, ImportSpecifier, ImportStatement, SourceFile
from ..ast_parser.utils import get_parser
from ..config.config_loader import MigrationSettings
from .diagnostics import DiagnosticKind, Diagnostics, node_line
from .edits import EditPlan, Fragment, Span
from .printer import MAX_INLINE_WIDTH, quote
from .rewriters.registry import RewriterRegistry

logger = logging.getLogger(__name__)


# ── Binding table ────────────────────────────────────────────────────


def build_binding_table(
    statements: List[ImportStatement], settings: MigrationSettings
) -> Dict[str, ImportBinding]:
    """Local name → binding, for imports from the legacy paths only."""
    table: Dict[str, ImportBinding] = {}
    for statement in statements:
        if not settings.is_legacy_path(statement.source_path):
            continue
        for spec in statement.specifiers:
            table[spec.local] = ImportBinding(
                local=spec.local,
                imported=spec.imported,
                module=statement.source_path,
                type_only=statement.type_only or spec.inline_type,
                kind=spec.kind,
                statement=statement,
                specifier=spec,
            )
    return table


# ── Rendering ────────────────────────────────────────────────────────


@dataclass
class ImportGroup:
    """Specifiers bound for one ``import ... from '<module>'`` statement."""

    module: str
    type_only: bool = False
    default: Optional[str] = None
    namespace: Optional[str] = None
    named: List[str] = field(default_factory=list)

    def add(self, kind: str, text: str) -> None:
        if kind == "default":
            self.default = self.default or text
        elif kind == "namespace":
            self.namespace = self.namespace or text
        elif text not in self.named:
            self.named.append(text)

    @property
    def is_empty(self) -> bool:
        return not (self.default or self.namespace or self.named)

    def render(self, semicolon: str = "") -> str:
        head = "import type " if self.type_only else "import "
        tail = f" from {quote(self.module)}{semicolon}"
        statements = []
        default = self.default
        if self.namespace:
            # `import D, * as NS` cannot also carry named specifiers
            clause = f"{default}, {self.namespace}" if default else self.namespace
            statements.append(head + clause + tail)
            default = None
        if self.named:
            prefix = f"{default}, " if default else ""
            inline = head + prefix + "{ " + ", ".join(self.named) + " }" + tail
            if len(inline) <= MAX_INLINE_WIDTH:
                statements.append(inline)
            else:
                body = "".join(f"  {name},\n" for name in self.named)
                statements.append(head + prefix + "{\n" + body + "}" + tail)
        elif default:
            statements.append(head + default + tail)
        return "\n".join(statements)


def specifier_text(spec: ImportSpecifier, source: bytes) -> str:
    """A named specifier as written (``Button as Btn``, ``type ButtonProps``)."""
    return " ".join(source[spec.node.start_byte:spec.node.end_byte].decode("utf-8").split())


def _local_name(entry: str) -> str:
    """Local binding of a rendered specifier (`Button as Btn` → `Btn`)."""
    return entry.split()[-1]


# ── Split / relocate ─────────────────────────────────────────────────


class ImportRewriter:
    """Plans the import edits of one file after its elements are rewritten."""

    def __init__(
        self,
        parsed: SourceFile,
        settings: MigrationSettings,
        diagnostics: Diagnostics,
        plan: EditPlan,
    ):
        self.parsed = parsed
        self.settings = settings
        self.diagnostics = diagnostics
        self.plan = plan

    def _owner_of_type(self, name: str) -> Optional[str]:
        for component, target in self.settings.targets.items():
            if name in target.types and self._migrates(component):
                return component
        return None

    def _migrates(self, component: str) -> bool:
        return RewriterRegistry.handles(component) and self.settings.is_enabled(component)

    def _retagged_component_for_type(self, name: str) -> Optional[str]:
        for component in self.settings.targets:
            if name == f"{component}Props" and self._migrates(component):
                if self.settings.target_name(component) != component:
                    return component
        return None

    def relocatable(self, statements: List[ImportStatement]) -> bool:
        """True when at least one legacy specifier would move."""
        for statement in statements:
            for spec in statement.specifiers:
                if spec.kind != "named":
                    continue
                if self._migrates(spec.imported) or self._owner_of_type(spec.imported):
                    return True
        return False

    def rewrite(
        self,
        legacy: List[ImportStatement],
        others: List[ImportStatement],
        required: Dict[str, List[str]],
    ) -> int:
        """Plan the import edits.

        Args:
            legacy: Import statements from legacy paths, in source order
            others: Every other import statement of the file
            required: Helper imports requested by rewriters (module → names)

        Returns:
            Number of specifiers relocated
        """
        source = self.parsed.source
        semicolon = ";" if any(s.has_semicolon for s in legacy) else ""
        groups: "OrderedDict[Tuple[str, bool], ImportGroup]" = OrderedDict()
        moved_count = 0

        def group_for(module: str, type_only: bool) -> ImportGroup:
            key = (module, type_only)
            if key not in groups:
                groups[key] = ImportGroup(module=module, type_only=type_only)
            return groups[key]

        replacements: List[Tuple[ImportStatement, Optional[ImportGroup]]] = []
        for statement in legacy:
            kept_module = self.settings.fallback_import or statement.source_path
            kept = ImportGroup(module=kept_module, type_only=statement.type_only)
            moved_any = False

            for spec in statement.specifiers:
                if spec.kind != "named":
                    kept.add(spec.kind, source[spec.node.start_byte:spec.node.end_byte].decode("utf-8"))
                    continue

                text = specifier_text(spec, source)
                is_type = statement.type_only or spec.inline_type
                component = spec.imported

                if not is_type and self._migrates(component) and self.settings.target_for(component):
                    target = self.settings.target_for(component)
                    name = self.settings.target_name(component)
                    entry = name if name != component else text
                    group_for(target.module, statement.type_only).add("named", entry)
                    moved_any = True
                    moved_count += 1
                    continue

                owner = self._owner_of_type(component)
                if owner is not None:
                    target = self.settings.target_for(owner)
                    group_for(target.module, statement.type_only).add("named", text)
                    moved_any = True
                    moved_count += 1
                    continue

                retagged = self._retagged_component_for_type(component)
                if retagged is not None:
                    self.diagnostics.record(
                        DiagnosticKind.MANUAL_REVIEW,
                        f"{component} has no {self.settings.target_name(retagged)} equivalent; "
                        f"left on {kept_module!r}",
                        line=node_line(spec.node),
                    )
                kept.add("named", text)

            if moved_any or self.settings.fallback_import:
                replacements.append((statement, kept))
            else:
                replacements.append((statement, None))

        for module, names in required.items():
            group = group_for(module, False)
            for name in names:
                group.add("named", name)
        self._merge_into_existing(groups, others)

        new_text = "\n".join(group.render(semicolon) for group in groups.values() if not group.is_empty)
        self._plan(replacements, new_text, semicolon)
        if moved_count:
            logger.debug("Relocated %d legacy specifier(s) in %s", moved_count, self.parsed.file_path)
        return moved_count

    def _merge_into_existing(self, groups, others: List[ImportStatement]) -> None:
        """Fold groups into an import the file already has from the same module."""
        for key, group in list(groups.items()):
            statement = next(
                (
                    s for s in others
                    if s.source_path == group.module and s.type_only == group.type_only and not s.is_side_effect
                ),
                None,
            )
            if statement is None:
                continue
            bound = {spec.local for spec in statement.specifiers}
            missing = [entry for entry in group.named if _local_name(entry) not in bound]
            named = [spec for spec in statement.specifiers if spec.kind == "named"]
            if not missing:
                del groups[key]
            elif named:
                self.plan.insert(
                    named[-1].node.end_byte, "".join(f", {entry}" for entry in missing), label="import-merge"
                )
                del groups[key]
            elif not any(spec.kind == "namespace" for spec in statement.specifiers):
                self.plan.insert(
                    statement.specifiers[0].node.end_byte,
                    ", { " + ", ".join(missing) + " }",
                    label="import-merge",
                )
                del groups[key]
            else:
                # `import * as NS` cannot take named specifiers
                group.named = missing

    def _plan(
        self,
        replacements: List[Tuple[ImportStatement, Optional[ImportGroup]]],
        new_text: str,
        semicolon: str,
    ) -> None:
        source = self.parsed.source
        for index, (statement, kept) in enumerate(replacements):
            start, end = statement.node.start_byte, statement.node.end_byte
            pieces: List[Fragment] = []
            if kept is None:
                pieces.append(Span(start, end))
            elif not kept.is_empty:
                pieces.append(kept.render(semicolon if statement.has_semicolon else ""))
            if index == 0 and new_text:
                if pieces:
                    pieces.append("\n")
                pieces.append(new_text)

            if kept is None and not (index == 0 and new_text):
                continue
            if not pieces:
                # drop the line with the statement
                if end < len(source) and source[end:end + 1] == b"\n":
                    end += 1
            self.plan.replace(start, end, pieces, label="import-split")


# ── Redirect ─────────────────────────────────────────────────────────


def redirect(statement: ImportStatement, new_path: str, source: bytes) -> str:
    """Statement text with only its module path changed.

    Specifiers, the ``type`` marker and the quote style stay as written.
    """
    node = statement.node
    source_node = node.child_by_field_name("source")
    if source_node is None:
        return source[node.start_byte:node.end_byte].decode("utf-8")
    quote_char = chr(source[source_node.start_byte])
    head = source[node.start_byte:source_node.start_byte].decode("utf-8")
    tail = source[source_node.end_byte:node.end_byte].decode("utf-8")
    return f"{head}{quote_char}{new_path}{quote_char}{tail}"


def _redirected_path(path: str, old: str, new: str) -> Optional[str]:
    if path == old:
        return new
    if path.startswith(old + "/"):
        return new + path[len(old):]
    return None


def redirect_source(source_text: str, file_path: str, old: str, new: str) -> Tuple[str, int]:
    """Point every import (and re-export) of ``old`` at ``new``.

    Sub-paths follow along: ``old/Button`` becomes ``new/Button``.

    Args:
        source_text: File contents
        file_path: Path used to pick the grammar
        old: Module path to replace
        new: Replacement module path

    Returns:
        Tuple of (new text, number of statements changed)
    """
    parsed = parse_source(source_text, file_path)
    plan = EditPlan(parsed.source)
    changed = 0
    statements = get_parser(parsed.language).extract_imports(parsed)
    for statement in statements:
        target = _redirected_path(statement.source_path, old, new)
        if target is None:
            continue
        plan.replace(
            statement.node.start_byte,
            statement.node.end_byte,
            [redirect(statement, target, parsed.source)],
            label="redirect",
        )
        changed += 1

    # `export { X } from 'old'`
    for child in parsed.root.children:
        if child.type != "export_statement":
            continue
        source_node = child.child_by_field_name("source")
        if source_node is None:
            continue
        path = parsed.node_text(source_node)[1:-1]
        target = _redirected_path(path, old, new)
        if target is None:
            continue
        quote_char = parsed.node_text(source_node)[0]
        plan.replace(
            source_node.start_byte,
            source_node.end_byte,
            [f"{quote_char}{target}{quote_char}"],
            label="redirect",
        )
        changed += 1

    if not changed:
        return source_text, 0
    return plan.render(), changed
