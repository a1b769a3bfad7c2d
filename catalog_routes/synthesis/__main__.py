"""Command-line entry point for static artifact synthesis.

python -m catalog_routes.synthesis --out out --manifest manifest.json
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.config.settings import Settings
from catalog_routes.content.infrastructure.cache import TtlCache
from catalog_routes.content.infrastructure.ndjson_repository import NdjsonContentRepository
from catalog_routes.content.infrastructure.sanity_repository import SanityContentRepository
from catalog_routes.errors import ConfigurationError, VerificationError
from catalog_routes.synthesis.synthesize import run_synthesize


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m catalog_routes.synthesis",
        description="Fill the static export with a page for every canonical catalog route.",
    )
    parser.add_argument("--out", type=Path, default=None, help="Build output directory (default: CATALOG_OUTPUT_DIR or out)")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--manifest", type=Path, help="JSON manifest with locales, brands and ids")
    source.add_argument("--ndjson", type=Path, help="CMS dataset export, one document per line")
    source.add_argument("--sanity", action="store_true", help="Query the CMS over HTTP")
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        default=None,
        help="Restrict synthesis to this locale (repeatable)",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker threads for file creation")
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Fail instead of using the built-in shell when no template is found",
    )
    parser.add_argument("--report", type=Path, default=None, help="Path of the JSON report")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    try:
        repository = None
        if args.ndjson is not None:
            repository = NdjsonContentRepository(args.ndjson)
        elif args.sanity:
            cache = TtlCache(max_size=settings.cache_max_size, ttl=settings.cache_ttl_seconds)
            repository = SanityContentRepository.from_settings(settings, cache=cache)

        result = run_synthesize(
            args.out,
            manifest_path=args.manifest,
            repository=repository,
            locales=args.locales,
            workers=args.workers,
            allow_fallback=not args.no_fallback,
            report_path=args.report,
            show_progress=not args.no_progress,
            settings=settings,
        )
    except ConfigurationError as exc:
        logger.error("Synthesis aborted: {}", exc)
        return 1
    except VerificationError as exc:
        logger.error("Synthesis verification failed: {}", exc)
        return 1

    print(
        f"created={result.created} already_present={result.already_present} "
        f"index_created={result.index_created} degraded={result.degraded}"
    )
    for locale, counts in result.by_locale.items():
        print(f"  {locale}: created={counts['created']} already_present={counts['already_present']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
