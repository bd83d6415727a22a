"""Migration engine.

Runs the passes over one file in a fixed order:

1. parse and build the import binding table for the legacy paths;
2. find element usages and let each component rewriter plan its edit;
3. rename non-JSX references of retagged components (``typeof Box``);
4. append the generated stylesheet;
5. split and relocate the legacy imports, merge helper imports;
6. render every planned edit at once;
7. prune bindings left unused (re-parsing the rendered text).

A file without a legacy import comes back byte-identical. One element
whose rewrite fails is logged and left as written; the rest of the file
is still migrated.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..ast_parser import parse_source
from ..ast_parser.jsx import declared_identifiers, find_element_usages, is_shadowed
from ..ast_parser.models import ImportBinding, ImportStatement, SourceFile
from ..ast_parser.utils import get_parser, literal_ranges, walk
from ..config.config_loader import MigrationSettings
from ..constants import STYLESHEET_NAME
from .diagnostics import DiagnosticKind, Diagnostics, node_line
from .edits import EditPlan
from .imports import ImportRewriter, build_binding_table
from .printer import Printer
from .prune import prune_source
from .rewriters import RewriteContext, RewriterRegistry
from .styles import DEFAULT_IDENTIFIER, FALLBACK_IDENTIFIER, StyleSheetEmitter
from .tokens import TokenContext

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    """Outcome of migrating one file."""

    file_path: str
    original: str
    output: str
    diagnostics: Diagnostics
    migrated: int = 0  # elements rewritten
    relocated: int = 0  # import specifiers moved
    pruned: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output != self.original


def migrate_source(
    source_text: str,
    file_path: str = "<memory>",
    settings: Optional[MigrationSettings] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> MigrationResult:
    """Migrate the legacy component usages of one file.

    Args:
        source_text: File contents
        file_path: Path used to pick the grammar and in diagnostics
        settings: Migration settings; defaults when None
        diagnostics: Collector to record into; a new one when None

    Returns:
        MigrationResult with the rewritten text
    """
    if settings is None:
        settings = MigrationSettings()
    if diagnostics is None:
        diagnostics = Diagnostics(file_path)
    result = MigrationResult(
        file_path=file_path, original=source_text, output=source_text, diagnostics=diagnostics
    )

    parsed = parse_source(source_text, file_path)
    statements = get_parser(parsed.language).extract_imports(parsed)
    legacy = [s for s in statements if settings.is_legacy_path(s.source_path)]
    if not legacy:
        return result
    others = [s for s in statements if not settings.is_legacy_path(s.source_path)]

    bindings = build_binding_table(legacy, settings)
    usages = [
        u for u in find_element_usages(parsed, bindings) if _migrates_component(u.component, settings)
    ]

    plan = EditPlan(parsed.source, literal_ranges(parsed.root))
    import_rewriter = ImportRewriter(parsed, settings, diagnostics, plan)
    if not usages and not import_rewriter.relocatable(legacy):
        logger.debug("Nothing to migrate in %s", file_path)
        return result

    ctx = RewriteContext(
        parsed=parsed,
        settings=settings,
        diagnostics=diagnostics,
        plan=plan,
        printer=Printer(parsed.source),
        styles=StyleSheetEmitter(_stylesheet_identifier(parsed, statements)),
        tokens=TokenContext(diagnostics, token_import=settings.token_import),
    )

    for usage in usages:
        rewriter = RewriterRegistry.get_rewriter(usage.component)
        allocated = ctx.styles.allocated(usage.component)
        try:
            rewriter.rewrite(usage, ctx)
        except Exception as e:
            logger.error(
                "Rewriter %s failed on <%s> in %s: %s",
                rewriter.rewriter_id, usage.tag, file_path, e,
                exc_info=True,
            )
            diagnostics.record(
                DiagnosticKind.MANUAL_REVIEW,
                f"<{usage.tag}> left unchanged: rewrite failed ({e})",
                line=node_line(usage.node),
            )
        if ctx.styles.allocated(usage.component) == allocated:
            ctx.styles.advance(usage.component)

    _rename_references(ctx, bindings)

    # usages inside a range their parent dropped leave blocks nobody uses
    if not ctx.styles.is_empty:
        ctx.styles.discard_unreferenced(plan.render())
        if ctx.styles.is_empty:
            ctx.release_import(settings.primitives_import, STYLESHEET_NAME)

    semicolon = ";" if any(s.has_semicolon for s in statements) else ""
    if not ctx.styles.is_empty:
        separator = "\n" if parsed.source.endswith(b"\n") else "\n\n"
        ctx.plan.replace(
            len(parsed.source),
            len(parsed.source),
            [separator] + ctx.styles.render(semicolon),
            label="stylesheet",
        )

    if settings.token_import:
        for helper in sorted(ctx.tokens.used_helpers):
            ctx.require_import(settings.token_import, helper)

    result.relocated = import_rewriter.rewrite(legacy, others, ctx.required_imports)
    result.migrated = ctx.migrated
    output = plan.render()

    if settings.prune_unused:
        output, result.pruned = prune_source(output, file_path, parsed.language)

    result.output = output
    logger.info(
        "Migrated %s: %d element(s), %d import(s) moved, %d warning(s)",
        file_path, result.migrated, result.relocated, len(diagnostics),
    )
    return result


def _migrates_component(component: str, settings: MigrationSettings) -> bool:
    return (
        RewriterRegistry.handles(component)
        and settings.is_enabled(component)
        and settings.target_for(component) is not None
    )


def _stylesheet_identifier(parsed: SourceFile, statements: List[ImportStatement]) -> str:
    """``styles`` unless the file already binds that name at top level."""
    taken = {spec.local for statement in statements for spec in statement.specifiers}
    for statement in parsed.root.named_children:
        taken.update(parsed.node_text(n) for n in declared_identifiers(statement))
    return FALLBACK_IDENTIFIER if DEFAULT_IDENTIFIER in taken else DEFAULT_IDENTIFIER


def _rename_references(ctx: RewriteContext, bindings: Dict[str, ImportBinding]) -> None:
    """Point non-JSX references of retagged components at the new name.

    ``Box`` becomes ``View`` in ``typeof Box`` or ``styled(Box)``. Tags of
    rewritten elements are covered by their own edits; references inside
    a dropped attribute disappear with it.
    """
    renames: Dict[str, str] = {}
    for local, binding in bindings.items():
        if binding.kind != "named" or binding.type_only:
            continue
        if not _migrates_component(binding.imported, ctx.settings):
            continue
        target = ctx.settings.target_name(binding.imported)
        if target != binding.imported:
            renames[local] = target
    if not renames:
        return

    source = ctx.source
    for node in walk(ctx.parsed.root):
        if node.type not in ("identifier", "shorthand_property_identifier"):
            continue
        name = ctx.text(node)
        target = renames.get(name)
        if target is None or name == target:
            continue
        if _in_import(node) or is_shadowed(node, name, source):
            continue
        replacement = f"{name}: {target}" if node.type == "shorthand_property_identifier" else target
        ctx.plan.replace(node.start_byte, node.end_byte, [replacement], label="rename")


def _in_import(node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type == "import_statement":
            return True
        if parent.type == "program":
            return False
        parent = parent.parent
    return False
