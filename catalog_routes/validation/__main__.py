"""Command-line entry point for the slug consistency gate.

python -m catalog_routes.validation brand --ndjson export.ndjson
python -m catalog_routes.validation repair product --sanity [--apply]

Exit codes: 0 no hard issues, 1 hard issues (or failed repairs), 2 usage or configuration error.
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.config.settings import Settings
from catalog_routes.content.application.ports import ContentRepositoryPort
from catalog_routes.content.domain.models import CONTENT_TYPES
from catalog_routes.content.infrastructure.cache import TtlCache
from catalog_routes.content.infrastructure.ndjson_repository import NdjsonContentRepository
from catalog_routes.content.infrastructure.sanity_repository import SanityContentRepository
from catalog_routes.content.infrastructure.sanity_writer import SanitySlugWriter
from catalog_routes.errors import ConfigurationError, RepositoryError
from catalog_routes.validation.validate import run_repair, run_validate

EXIT_CONFIG_ERROR = 2


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("validate", *argv)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("content_type", choices=CONTENT_TYPES, help="Content type to scan")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--ndjson", type=Path, help="CMS dataset export, one document per line")
    source.add_argument("--sanity", action="store_true", help="Query the CMS over HTTP")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m catalog_routes.validation",
        description="Check CMS slugs for routing defects; non-zero exit blocks deployment.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Scan one content type (default command)")
    _add_source_arguments(validate_parser)
    validate_parser.add_argument("--report", type=Path, default=None, help="Path of the JSON report")
    validate_parser.add_argument("--issues", type=Path, default=None, help="Path of the JSONL issue rows")
    validate_parser.add_argument("--workers", type=int, default=None, help="Worker threads for classification")
    validate_parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    repair_parser = subparsers.add_parser("repair", help="Audited slug repair (dry-run unless --apply)")
    _add_source_arguments(repair_parser)
    repair_parser.add_argument("--apply", action="store_true", help="Patch repaired slugs into the CMS")
    repair_parser.add_argument("--audit", type=Path, default=None, help="Path of the JSONL audit log")

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _build_repository(args: argparse.Namespace, settings: Settings) -> ContentRepositoryPort:
    if args.ndjson is not None:
        return NdjsonContentRepository(args.ndjson)
    cache = TtlCache(max_size=settings.cache_max_size, ttl=settings.cache_ttl_seconds)
    return SanityContentRepository.from_settings(settings, cache=cache)


def _run_validate(args: argparse.Namespace, settings: Settings) -> int:
    result = run_validate(
        args.content_type,
        _build_repository(args, settings),
        report_path=args.report,
        issues_path=args.issues,
        workers=args.workers,
        show_progress=not args.no_progress,
        settings=settings,
    )
    return result.exit_code


def _run_repair(args: argparse.Namespace, settings: Settings) -> int:
    writer = None
    if args.apply:
        if args.ndjson is not None:
            raise ConfigurationError("--apply needs --sanity; an export file cannot be patched")
        writer = SanitySlugWriter.from_settings(settings)
    result = run_repair(
        args.content_type,
        _build_repository(args, settings),
        apply=args.apply,
        writer=writer,
        audit_path=args.audit,
        settings=settings,
    )
    mode = "dry-run" if result.dry_run else "applied"
    print(
        f"Slug repair [{result.content_type}] {mode}: candidates={result.candidates} "
        f"applied={result.applied} skipped_collisions={len(result.skipped_collisions)} failed={len(result.failed)}"
    )
    return result.exit_code


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    try:
        if args.command == "repair":
            return _run_repair(args, settings)
        return _run_validate(args, settings)
    except (ConfigurationError, RepositoryError) as exc:
        logger.error("Slug validation could not run: {}", exc)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
