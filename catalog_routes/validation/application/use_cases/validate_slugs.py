from dataclasses import dataclass

from catalog_routes.config.logger_config import logger
from catalog_routes.content.domain.models import CONTENT_TYPES
from catalog_routes.errors import ConfigurationError
from catalog_routes.validation.application.workflows.validation_pipeline import ValidationConfig, ValidationPipeline


@dataclass(frozen=True)
class ValidateSlugsCommand:
    content_type: str
    workers: int = 1
    show_progress: bool = True


@dataclass(frozen=True)
class ValidateSlugsResult:
    content_type: str
    total_entities: int
    entities_with_issues: int
    counts: dict[str, int]
    hard_count: int
    soft_count: int
    duplicate_groups: tuple[tuple[str, ...], ...]
    exit_code: int


class ValidateSlugsUseCase:
    def __init__(self, pipeline: ValidationPipeline) -> None:
        self.pipeline = pipeline

    def execute(self, command: ValidateSlugsCommand) -> ValidateSlugsResult:
        if command.content_type not in CONTENT_TYPES:
            raise ConfigurationError(
                f"Unknown content type '{command.content_type}'. Expected one of: {', '.join(CONTENT_TYPES)}"
            )
        logger.info(
            "Validation use case started: content_type={}, workers={}",
            command.content_type,
            command.workers,
        )
        report = self.pipeline.run(
            ValidationConfig(
                content_type=command.content_type,
                workers=command.workers,
                show_progress=command.show_progress,
            )
        )
        return ValidateSlugsResult(
            content_type=report.content_type,
            total_entities=report.total_entities,
            entities_with_issues=report.entities_with_issues,
            counts=report.counts,
            hard_count=report.hard_count,
            soft_count=report.soft_count,
            duplicate_groups=tuple(group.entity_ids for group in report.duplicate_groups),
            exit_code=report.exit_code,
        )
