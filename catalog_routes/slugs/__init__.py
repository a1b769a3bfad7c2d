"""Slug normalizer package."""

from catalog_routes.slugs.domain import (
    build_slug_record,
    classify,
    clean_slug,
    compose_url,
    repair_slug,
    split_url,
)

__all__ = [
    "build_slug_record",
    "classify",
    "clean_slug",
    "compose_url",
    "repair_slug",
    "split_url",
]
