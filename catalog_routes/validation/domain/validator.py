"""Slug consistency checks over one content type.

Classification is per entity and order-free. Duplicate detection is a reduce step over
all classified entities that groups by value, so the result does not depend on the order
(or thread) in which entities were classified.
"""

from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Any, Iterable

from catalog_routes.content.domain.models import ContentEntity
from catalog_routes.slugs.domain.normalizer import build_slug_record, duplicate_key
from catalog_routes.validation.domain.severity import ISSUE_CATEGORIES, has_hard_issue


@dataclass(frozen=True)
class EntityFinding:
    entity_id: str
    content_type: str
    scope: str | None
    raw_slug: str | None
    cleaned_slug: str
    issues: tuple[str, ...]
    duplicate_ids: tuple[str, ...] = ()

    @property
    def is_hard(self) -> bool:
        return has_hard_issue(self.issues)


@dataclass(frozen=True)
class DuplicateGroup:
    content_type: str
    scope: str | None
    slug_key: str
    entity_ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "content_type": self.content_type,
            "scope": self.scope,
            "slug_key": self.slug_key,
            "entity_ids": list(self.entity_ids),
        }


def inspect_entity(entity: ContentEntity) -> EntityFinding:
    record = build_slug_record(entity.raw_slug)
    return EntityFinding(
        entity_id=entity.id,
        content_type=entity.content_type,
        scope=entity.scope,
        raw_slug=entity.raw_slug,
        cleaned_slug=record.cleaned,
        issues=tuple(record.issues),
    )


def duplicate_groups(findings: Iterable[EntityFinding]) -> list[DuplicateGroup]:
    """Groups of two or more distinct entity ids sharing a cleaned slug within one scope."""
    groups: dict[tuple[str, str | None, str], set[str]] = defaultdict(set)
    for finding in findings:
        key = duplicate_key(finding.raw_slug)
        # Unroutable slugs are already reported as missing/empty.
        if not key:
            continue
        groups[(finding.content_type, finding.scope, key)].add(finding.entity_id)
    result = [
        DuplicateGroup(content_type=content_type, scope=scope, slug_key=key, entity_ids=tuple(sorted(ids)))
        for (content_type, scope, key), ids in groups.items()
        if len(ids) > 1
    ]
    return sorted(result, key=lambda g: g.entity_ids)


def mark_duplicates(findings: Iterable[EntityFinding]) -> list[EntityFinding]:
    """Return findings sorted by entity id with `duplicate` added to every grouped entity."""
    findings = list(findings)
    group_by_id: dict[str, tuple[str, ...]] = {}
    for group in duplicate_groups(findings):
        for entity_id in group.entity_ids:
            group_by_id[entity_id] = group.entity_ids

    marked: list[EntityFinding] = []
    for finding in findings:
        group = group_by_id.get(finding.entity_id)
        if group is None:
            marked.append(finding)
            continue
        marked.append(replace(finding, issues=(*finding.issues, "duplicate"), duplicate_ids=group))
    return sorted(marked, key=lambda f: f.entity_id)


def count_issues(findings: Iterable[EntityFinding]) -> dict[str, int]:
    counts = {category: 0 for category in ISSUE_CATEGORIES}
    for finding in findings:
        for tag in finding.issues:
            counts[tag] += 1
    return counts
