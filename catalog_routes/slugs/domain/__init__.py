"""Slug types, rules and the normalizer functions."""

from catalog_routes.slugs.domain.normalizer import (
    UrlParts,
    build_slug_record,
    classify,
    clean_slug,
    compose_url,
    duplicate_key,
    encode_segment,
    recompose_url,
    repair_slug,
    split_url,
)
from catalog_routes.slugs.domain.types import IssueTag, SlugRecord

__all__ = [
    "build_slug_record",
    "classify",
    "clean_slug",
    "compose_url",
    "duplicate_key",
    "encode_segment",
    "IssueTag",
    "recompose_url",
    "repair_slug",
    "SlugRecord",
    "split_url",
    "UrlParts",
]
