from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter

from tqdm import tqdm

from catalog_routes.config.logger_config import logger
from catalog_routes.content.domain.models import ContentKey
from catalog_routes.errors import VerificationError
from catalog_routes.routing.domain.canonical import canonical_route
from catalog_routes.synthesis.application.contracts import ArtifactEntry, LocaleCounts, SynthesisReportRecord
from catalog_routes.synthesis.application.ports import (
    ArtifactWriterPort,
    ManifestStorePort,
    SynthesisReportSinkPort,
)
from catalog_routes.synthesis.domain.models import SynthesisManifest, TemplateArtifact
from catalog_routes.synthesis.domain.verification import find_missing, index_paths, must_exist_paths


@dataclass(frozen=True)
class SynthesisConfig:
    out_dir: str
    redirects_source: str | None = "public/_redirects"
    workers: int = 1
    show_progress: bool = True


class SynthesisPipeline:
    def __init__(
        self,
        writer: ArtifactWriterPort,
        template: TemplateArtifact,
        report_sink: SynthesisReportSinkPort,
        manifest_store: ManifestStorePort | None = None,
    ) -> None:
        self.writer = writer
        self.template = template
        self.report_sink = report_sink
        self.manifest_store = manifest_store

    def run(self, manifest: SynthesisManifest, config: SynthesisConfig) -> SynthesisReportRecord:
        started = perf_counter()
        out_dir = Path(config.out_dir)
        keys = list(manifest.keys())
        workers = max(1, config.workers)
        logger.info(
            "Synthesis pipeline started: out_dir={}, locales={}, brands={}, tuples={}, workers={}, template_source={}, degraded={}",
            str(out_dir),
            len(manifest.locales),
            len(manifest.brands),
            len(keys),
            workers,
            self.template.source,
            self.template.degraded,
        )

        index_created = 0
        entries: list[ArtifactEntry] = []
        try:
            for path in index_paths(manifest, out_dir):
                if self.writer.ensure_file(path, self.template.content) == "synthesized":
                    index_created += 1

            # Keys are unique, so each worker owns its paths outright.
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = executor.map(lambda key: self._materialize(key, out_dir), keys)
                for entry in tqdm(
                    results,
                    total=len(keys),
                    desc="Synthesizing artifacts",
                    unit="file",
                    leave=True,
                    disable=not config.show_progress,
                ):
                    entries.append(entry)

            redirects_copied = False
            if config.redirects_source:
                redirects_copied = self.writer.copy_redirects(Path(config.redirects_source))

            if self.manifest_store is not None:
                self.manifest_store.replace_all(entries)
        finally:
            if self.manifest_store is not None:
                self.manifest_store.close()

        by_locale = self._count_by_locale(manifest, entries)
        created = sum(c.created for c in by_locale.values())
        already_present = sum(c.already_present for c in by_locale.values())
        missing = find_missing(must_exist_paths(manifest, out_dir))

        report = SynthesisReportRecord(
            out_dir=str(out_dir),
            total_tuples=len(keys),
            created=created,
            already_present=already_present,
            index_created=index_created,
            by_locale=by_locale,
            template_source=self.template.source,
            degraded=self.template.degraded,
            redirects_copied=redirects_copied,
            missing_paths=tuple(missing),
            duration_ms=int((perf_counter() - started) * 1000),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        self.report_sink.write_report(report)
        for locale, counts in by_locale.items():
            logger.info(
                "Synthesis locale summary: locale={}, created={}, already_present={}",
                locale,
                counts.created,
                counts.already_present,
            )
        logger.info(
            "Synthesis pipeline completed: duration_ms={}, tuples={}, created={}, already_present={}, index_created={}, redirects_copied={}, degraded={}",
            report.duration_ms,
            report.total_tuples,
            report.created,
            report.already_present,
            report.index_created,
            report.redirects_copied,
            report.degraded,
        )
        if missing:
            logger.error("Synthesis verification failed: missing_count={}, missing={}", len(missing), missing)
            raise VerificationError(missing)
        return report

    def _materialize(self, key: ContentKey, out_dir: Path) -> ArtifactEntry:
        path = canonical_route(key).to_file_path(out_dir)
        origin = self.writer.ensure_file(path, self.template.content)
        return ArtifactEntry(content_key=key, file_path=str(path), origin=origin)

    @staticmethod
    def _count_by_locale(manifest: SynthesisManifest, entries: list[ArtifactEntry]) -> dict[str, LocaleCounts]:
        created = {locale: 0 for locale in manifest.locales}
        present = {locale: 0 for locale in manifest.locales}
        for entry in entries:
            locale = entry.content_key.locale
            if entry.origin == "synthesized":
                created[locale] += 1
            else:
                present[locale] += 1
        return {
            locale: LocaleCounts(created=created[locale], already_present=present[locale])
            for locale in manifest.locales
        }
