import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Tuple

from .core.ast_parser import is_supported_file, should_skip_directory
from .core.config import MigrationSettings, load_settings
from .core.exceptions import ConfigError
from .core.migration import Diagnostics, migrate_source, prune_source, redirect_source


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging.

    Diagnostics are warnings, so they go to stderr with everything else;
    stdout only carries the summary line.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    """Aggregated per-run counters."""
    scanned: int = 0
    changed: int = 0
    migrated: int = 0
    warnings: int = 0
    failed: int = 0

    def summary(self) -> str:
        line = (
            f"{self.scanned} file(s) scanned, {self.changed} changed, "
            f"{self.migrated} element(s) migrated, {self.warnings} warning(s)"
        )
        if self.failed:
            line += f", {self.failed} failed"
        return line


def iter_source_files(paths: List[str]) -> Iterator[Path]:
    """Yield supported source files under ``paths`` in a stable order.

    Directories are walked recursively, skipping dependency and build
    directories. Explicit file arguments are taken as given when their
    extension is supported.
    """
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if is_supported_file(str(path)):
                yield path
            else:
                logger.debug("Skipping unsupported file %s", path)
        elif path.is_dir():
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(d for d in dirs if not should_skip_directory(d))
                for name in sorted(files):
                    if is_supported_file(name):
                        yield Path(root) / name
        else:
            logger.warning("Path not found: %s", path)


def run_files(
    paths: List[str],
    transform: Callable[[str, str], Tuple[str, int, int]],
    dry_run: bool = False,
) -> RunStats:
    """Apply ``transform`` to every source file and write back changes.

    Args:
        paths: Files or directories given on the command line
        transform: ``(text, path) -> (new text, elements migrated, warnings)``
        dry_run: Report changes without writing them

    Returns:
        Aggregated RunStats
    """
    stats = RunStats()
    for path in iter_source_files(paths):
        stats.scanned += 1
        try:
            original = path.read_text(encoding="utf-8")
            output, migrated, warnings = transform(original, str(path))
        except Exception as e:
            # the file stays as it was
            logger.error("Failed to process %s: %s", path, e, exc_info=True)
            stats.failed += 1
            continue

        stats.migrated += migrated
        stats.warnings += warnings
        if output == original:
            continue
        stats.changed += 1
        if dry_run:
            logger.info("Would rewrite %s", path)
        else:
            path.write_text(output, encoding="utf-8")
            logger.info("Rewrote %s", path)
    return stats


# ── Commands ─────────────────────────────────────────────────────────


def cmd_migrate(args: argparse.Namespace) -> int:
    settings: MigrationSettings = load_settings(args.config)
    if args.no_prune:
        settings = settings.model_copy(update={"prune_unused": False})

    def transform(text: str, file_path: str) -> Tuple[str, int, int]:
        diagnostics = Diagnostics(file_path)
        result = migrate_source(text, file_path, settings, diagnostics)
        return result.output, result.migrated, len(diagnostics)

    stats = run_files(args.paths, transform, dry_run=args.dry_run)
    print(stats.summary())
    return 0


def cmd_redirect(args: argparse.Namespace) -> int:
    def transform(text: str, file_path: str) -> Tuple[str, int, int]:
        output, _ = redirect_source(text, file_path, args.old, args.new)
        return output, 0, 0

    stats = run_files(args.paths, transform, dry_run=args.dry_run)
    print(stats.summary())
    return 0


def cmd_prune(args: argparse.Namespace) -> int:
    def transform(text: str, file_path: str) -> Tuple[str, int, int]:
        output, _ = prune_source(text, file_path)
        return output, 0, 0

    stats = run_files(args.paths, transform, dry_run=args.dry_run)
    print(stats.summary())
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Report files that would change without writing them"
    )

    parser = argparse.ArgumentParser(
        prog="nbmigrate",
        description="nbmigrate - NativeBase to Nordlys/Aurora codemod",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate", parents=[common], help="Migrate legacy components")
    migrate.add_argument("paths", nargs="+", metavar="PATH", help="Files or directories")
    migrate.add_argument("--config", type=str, default=None, help="Settings file (nbmigrate.yaml)")
    migrate.add_argument("--no-prune", action="store_true", help="Keep bindings left unused")
    migrate.set_defaults(handler=cmd_migrate)

    redirect = subparsers.add_parser("redirect", parents=[common], help="Point imports at a new module")
    redirect.add_argument("paths", nargs="+", metavar="PATH", help="Files or directories")
    redirect.add_argument("--from", dest="old", required=True, help="Module path to replace")
    redirect.add_argument("--to", dest="new", required=True, help="Replacement module path")
    redirect.set_defaults(handler=cmd_redirect)

    prune = subparsers.add_parser("prune", parents=[common], help="Remove unused top-level bindings")
    prune.add_argument("paths", nargs="+", metavar="PATH", help="Files or directories")
    prune.set_defaults(handler=cmd_prune)

    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point for nbmigrate."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        return args.handler(args)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
