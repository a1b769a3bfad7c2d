from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from catalog_routes.synthesis.application.contracts import ArtifactEntry, ArtifactOrigin, SynthesisReportRecord


@runtime_checkable
class ArtifactWriterPort(Protocol):
    def ensure_file(self, path: Path, content: bytes) -> ArtifactOrigin: ...
    """Create *path* with *content* unless it already exists; never overwrites."""

    def copy_redirects(self, source: Path) -> bool: ...
    """Copy the redirect rules file into the output root. False when the source is absent."""


@runtime_checkable
class ManifestStorePort(Protocol):
    def replace_all(self, entries: Sequence[ArtifactEntry]) -> None: ...
    """Drop every stored entry and persist *entries* in one transaction."""

    def close(self) -> None: ...


@runtime_checkable
class SynthesisReportSinkPort(Protocol):
    def write_report(self, report: SynthesisReportRecord) -> None: ...
