"""Slug normalization: the one place slug strings are cleaned, classified and composed.

`clean_slug` only removes what is unambiguously noise (surrounding whitespace and a
trailing document extension). Character-class and case problems are reported by
`classify` instead of being silently corrected, so authoring errors stay visible.
The only function allowed to rewrite characters is `repair_slug`, which backs the
explicit, audited repair command.
"""

from dataclasses import dataclass
from urllib.parse import quote, unquote

from catalog_routes.slugs.domain.rules import (
    DISALLOWED_CHAR_RE,
    EXTENSION_SUFFIX_RE,
    HYPHEN_RUN_RE,
    ISSUE_ORDER,
    PATH_SEPARATOR_RE,
    WHITESPACE_RE,
    WHITESPACE_RUN_RE,
)
from catalog_routes.slugs.domain.types import IssueTag, SlugRecord


def _strip_extensions(value: str) -> str:
    while True:
        match = EXTENSION_SUFFIX_RE.search(value)
        if not match:
            return value
        value = value[: match.start()].strip()


def clean_slug(raw: str | None) -> str:
    """Trim whitespace and strip known document-extension suffixes.

    `clean_slug(clean_slug(x)) == clean_slug(x)` holds for every input. An empty result
    means the owning entity is not routable.
    """
    if not raw:
        return ""
    return _strip_extensions(str(raw).strip())


def classify(raw: str | None) -> tuple[IssueTag, ...]:
    """Return the defects of the raw (uncleaned) slug in a fixed tag order."""
    if raw is None:
        return ("missing",)
    raw = str(raw)
    if not raw.strip():
        return ("empty",)

    found: set[IssueTag] = set()
    trimmed = raw.strip()
    body = _strip_extensions(trimmed)
    if body != trimmed:
        found.add("hasExtension")
    if DISALLOWED_CHAR_RE.search(WHITESPACE_RE.sub("", body)):
        found.add("hasSpecialChars")
    if WHITESPACE_RE.search(raw):
        found.add("hasWhitespace")
    if raw != raw.lower():
        found.add("hasUpperCase")
    return tuple(tag for tag in ISSUE_ORDER if tag in found)


def build_slug_record(raw: str | None) -> SlugRecord:
    return SlugRecord(raw=raw, cleaned=clean_slug(raw), issues=classify(raw))


def duplicate_key(raw: str | None) -> str:
    # Paths that differ only by case collide on case-insensitive hosts and after repair.
    return clean_slug(raw).casefold()


def encode_segment(segment: str) -> str:
    return quote(segment, safe="")


def is_path_safe_segment(segment: str | None) -> bool:
    """True when *segment* can be one directory name under an output root.

    Rejects empty values, `.` and `..`, and anything containing a path separator.
    """
    if not segment or segment in (".", ".."):
        return False
    return not PATH_SEPARATOR_RE.search(segment)


@dataclass(frozen=True)
class UrlParts:
    locale: str
    brand_slug: str
    item_slug: str | None = None
    section: str | None = None


def compose_url(locale: str, brand_slug: str | None, item_slug: str | None = None, *, section: str = "products") -> str:
    """Build `/{locale}/brands/{brand}/[{section}/{item}/]` with every segment encoded on its own.

    Returns "" when the brand or item slug cleans to nothing; callers must treat that as
    "not routable" instead of linking to a path with an empty segment.
    """
    brand = clean_slug(brand_slug)
    if not locale or not brand:
        return ""
    segments = [locale, "brands", brand]
    if item_slug is not None:
        item = clean_slug(item_slug)
        if not item or not section:
            return ""
        segments.extend([section, item])
    return "/" + "/".join(encode_segment(s) for s in segments) + "/"


def split_url(url: str) -> UrlParts | None:
    """Inverse of `compose_url`; returns None for paths of any other shape."""
    parts = url.strip("/").split("/")
    if len(parts) not in (3, 5) or parts[1] != "brands" or not all(parts):
        return None
    decoded = [unquote(p) for p in parts]
    if len(decoded) == 3:
        return UrlParts(locale=decoded[0], brand_slug=decoded[2])
    return UrlParts(locale=decoded[0], brand_slug=decoded[2], item_slug=decoded[4], section=decoded[3])


def recompose_url(parts: UrlParts) -> str:
    if parts.item_slug is None:
        return compose_url(parts.locale, parts.brand_slug)
    return compose_url(parts.locale, parts.brand_slug, parts.item_slug, section=parts.section or "products")


def repair_slug(raw: str | None) -> str:
    """Canonical slug policy: cleaned, hyphen-separated, allowed characters only, lower-case."""
    value = clean_slug(raw)
    value = WHITESPACE_RUN_RE.sub("-", value)
    value = DISALLOWED_CHAR_RE.sub("-", value)
    value = HYPHEN_RUN_RE.sub("-", value).strip("-")
    return value.lower()
