class CatalogRoutesError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(CatalogRoutesError):
    """Fatal setup problem: no manifest, no usable template, missing CMS settings."""


class ContentValidationError(CatalogRoutesError):
    """A CMS document is missing a field its content type requires."""

    def __init__(self, content_type: str, document_id: str | None, field: str) -> None:
        self.content_type = content_type
        self.document_id = document_id
        self.field = field
        super().__init__(f"{content_type} document {document_id or '<unknown>'} is missing required field '{field}'")


class RepositoryError(CatalogRoutesError):
    """The content repository could not be read."""


class VerificationError(CatalogRoutesError):
    """Paths that must exist after synthesis are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"{len(self.missing)} required artifact(s) missing: {', '.join(self.missing)}")
