# nbmigrate Migration Engine - NativeBase → Nordlys/Aurora codemod
# Per-file passes: resolve imports, rewrite elements, emit stylesheet,
# split imports, prune unused bindings

from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from .engine import MigrationResult, migrate_source
from .imports import redirect, redirect_source
from .prune import prune_source
from .rewriters import RewriterRegistry

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "MigrationResult",
    "RewriterRegistry",
    "migrate_source",
    "prune_source",
    "redirect",
    "redirect_source",
]
