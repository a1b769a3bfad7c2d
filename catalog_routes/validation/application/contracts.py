from dataclasses import dataclass
from typing import Any

from catalog_routes.validation.domain.severity import severity_of
from catalog_routes.validation.domain.validator import DuplicateGroup, EntityFinding


@dataclass(frozen=True)
class SlugIssueRecord:
    entity_id: str
    content_type: str
    scope: str | None
    raw_slug: str | None
    cleaned_slug: str
    issues: tuple[str, ...]
    duplicate_ids: tuple[str, ...]

    @classmethod
    def from_finding(cls, finding: EntityFinding) -> "SlugIssueRecord":
        return cls(
            entity_id=finding.entity_id,
            content_type=finding.content_type,
            scope=finding.scope,
            raw_slug=finding.raw_slug,
            cleaned_slug=finding.cleaned_slug,
            issues=finding.issues,
            duplicate_ids=finding.duplicate_ids,
        )

    @property
    def hard_issues(self) -> tuple[str, ...]:
        return tuple(tag for tag in self.issues if severity_of(tag) == "hard")

    @property
    def soft_issues(self) -> tuple[str, ...]:
        return tuple(tag for tag in self.issues if severity_of(tag) == "soft")

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "content_type": self.content_type,
            "scope": self.scope,
            "raw_slug": self.raw_slug,
            "cleaned_slug": self.cleaned_slug,
            "issues": list(self.issues),
            "hard": list(self.hard_issues),
            "soft": list(self.soft_issues),
            "duplicate_ids": list(self.duplicate_ids),
        }


@dataclass(frozen=True)
class ValidationReportRecord:
    content_type: str
    total_entities: int
    entities_with_issues: int
    counts: dict[str, int]
    hard_count: int
    soft_count: int
    duplicate_groups: tuple[DuplicateGroup, ...]
    issues: tuple[SlugIssueRecord, ...]
    duration_ms: int
    generated_at: str

    @property
    def exit_code(self) -> int:
        return 1 if self.hard_count > 0 else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "content_type": self.content_type,
            "total_entities": self.total_entities,
            "entities_with_issues": self.entities_with_issues,
            "counts": self.counts,
            "hard_count": self.hard_count,
            "soft_count": self.soft_count,
            "exit_code": self.exit_code,
            "duplicate_groups": [group.to_dict() for group in self.duplicate_groups],
            "issues": [row.to_dict() for row in self.issues],
            "duration_ms": self.duration_ms,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class RepairAuditRecord:
    entity_id: str
    content_type: str
    before: str | None
    after: str
    applied: bool
    reason: str
    source: str
    policy_version: str
    at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "content_type": self.content_type,
            "before": self.before,
            "after": self.after,
            "applied": self.applied,
            "reason": self.reason,
            "source": self.source,
            "policy_version": self.policy_version,
            "at": self.at,
        }
