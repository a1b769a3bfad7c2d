from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.content.application.ports import ContentRepositoryPort, SlugWriterPort
from catalog_routes.content.domain.models import CONTENT_TYPES, ContentEntity
from catalog_routes.errors import ConfigurationError, RepositoryError
from catalog_routes.slugs.domain.normalizer import duplicate_key, repair_slug
from catalog_routes.slugs.domain.rules import SLUG_POLICY_VERSION
from catalog_routes.validation.application.contracts import RepairAuditRecord
from catalog_routes.validation.application.ports import AuditSinkPort


@dataclass(frozen=True)
class RepairSlugsCommand:
    content_type: str
    apply: bool = False


@dataclass(frozen=True)
class RepairSlugsResult:
    content_type: str
    candidates: int
    applied: int
    skipped_collisions: tuple[str, ...]
    failed: tuple[str, ...]
    dry_run: bool

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


@dataclass(frozen=True)
class RepairPlan:
    entity: ContentEntity
    after: str
    source: str = "slug"


def plan_repairs(entities: Sequence[ContentEntity]) -> tuple[list[RepairPlan], set[str]]:
    """Planned repairs plus the ids skipped because their repaired slug would collide.

    A slug that is missing, empty or repairs to nothing is replaced by one derived from the
    entity title.

    A repair collides when another entity in the same scope would end up with the same
    slug, whether that entity is repaired too or keeps its current slug. Skipping one
    repair can create a new collision, so skipping repeats until nothing changes.
    """
    plans: list[RepairPlan] = []
    for entity in entities:
        after = repair_slug(entity.raw_slug)
        if after:
            if after != entity.raw_slug:
                plans.append(RepairPlan(entity=entity, after=after))
            continue
        # Nothing routable is left of the slug, so derive one from the title.
        derived = repair_slug(entity.title)
        if derived:
            plans.append(RepairPlan(entity=entity, after=derived, source="title"))

    planned_ids = {plan.entity.id for plan in plans}
    skipped: set[str] = set()
    while True:
        final_keys: Counter[tuple[str | None, str]] = Counter()
        for entity in entities:
            if entity.id in planned_ids and entity.id not in skipped:
                continue
            key = duplicate_key(entity.raw_slug)
            if key:
                final_keys[(entity.scope, key)] += 1
        for plan in plans:
            if plan.entity.id not in skipped:
                final_keys[(plan.entity.scope, plan.after.casefold())] += 1

        newly_skipped = {
            plan.entity.id
            for plan in plans
            if plan.entity.id not in skipped and final_keys[(plan.entity.scope, plan.after.casefold())] > 1
        }
        if not newly_skipped:
            return plans, skipped
        skipped |= newly_skipped


class RepairSlugsUseCase:
    """Explicit, audited slug repair. Dry-run unless the command says `apply`."""

    def __init__(
        self,
        repository: ContentRepositoryPort,
        audit_sink: AuditSinkPort,
        writer: SlugWriterPort | None = None,
    ) -> None:
        self.repository = repository
        self.audit_sink = audit_sink
        self.writer = writer

    def execute(self, command: RepairSlugsCommand) -> RepairSlugsResult:
        if command.content_type not in CONTENT_TYPES:
            raise ConfigurationError(
                f"Unknown content type '{command.content_type}'. Expected one of: {', '.join(CONTENT_TYPES)}"
            )
        if command.apply and self.writer is None:
            raise ConfigurationError("Applying repairs requires a slug writer")

        applied = 0
        failed: list[str] = []
        try:
            entities = sorted(self.repository.list_entities(command.content_type), key=lambda e: e.id)
            plans, skipped = plan_repairs(entities)
            logger.info(
                "Repair use case started: content_type={}, entities={}, candidates={}, from_title={}, skipped_collisions={}, apply={}",
                command.content_type,
                len(entities),
                len(plans),
                sum(1 for plan in plans if plan.source == "title"),
                len(skipped),
                command.apply,
            )
            for plan in plans:
                entity = plan.entity
                if entity.id in skipped:
                    logger.warning(
                        "Repair skipped, slug would collide: content_type={}, entity_id={}, before={!r}, after={!r}",
                        command.content_type,
                        entity.id,
                        entity.raw_slug,
                        plan.after,
                    )
                    self._audit(command, plan, applied=False, reason="collision")
                    continue
                if not command.apply:
                    self._audit(command, plan, applied=False, reason="dry_run")
                    continue
                try:
                    self.writer.patch_slug(entity.id, plan.after)
                except RepositoryError as exc:
                    logger.error("Repair failed: entity_id={}, error={}", entity.id, exc)
                    failed.append(entity.id)
                    self._audit(command, plan, applied=False, reason="write_failed")
                    continue
                applied += 1
                self._audit(command, plan, applied=True, reason="applied")
        finally:
            self.audit_sink.close()

        result = RepairSlugsResult(
            content_type=command.content_type,
            candidates=len(plans),
            applied=applied,
            skipped_collisions=tuple(sorted(skipped)),
            failed=tuple(failed),
            dry_run=not command.apply,
        )
        logger.info(
            "Repair use case completed: content_type={}, candidates={}, applied={}, skipped_collisions={}, failed={}, dry_run={}",
            result.content_type,
            result.candidates,
            result.applied,
            len(result.skipped_collisions),
            len(result.failed),
            result.dry_run,
        )
        return result

    def _audit(self, command: RepairSlugsCommand, plan: RepairPlan, *, applied: bool, reason: str) -> None:
        self.audit_sink.write_audit(
            RepairAuditRecord(
                entity_id=plan.entity.id,
                content_type=command.content_type,
                before=plan.entity.raw_slug,
                after=plan.after,
                applied=applied,
                reason=reason,
                source=plan.source,
                policy_version=SLUG_POLICY_VERSION,
                at=datetime.now(timezone.utc).isoformat(),
            )
        )
