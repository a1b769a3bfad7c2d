from pathlib import Path
from typing import Sequence

from catalog_routes.config.logger_config import logger
from catalog_routes.errors import ConfigurationError
from catalog_routes.synthesis.domain.models import TemplateArtifact

FALLBACK_SOURCE = "<builtin-shell>"

# Minimal self-contained page used when no build template can be found.
FALLBACK_SHELL = (
    b"<!DOCTYPE html>\n"
    b'<html lang="en">\n'
    b"<head>\n"
    b'<meta charset="utf-8">\n'
    b'<meta name="viewport" content="width=device-width, initial-scale=1">\n'
    b"<title>Loading</title>\n"
    b"</head>\n"
    b'<body><div id="__next"></div></body>\n'
    b"</html>\n"
)


def resolve_candidates(candidates: Sequence[str], out_dir: str | Path, default_locale: str) -> list[Path]:
    out = str(out_dir)
    return [Path(c.format(out=out, default_locale=default_locale)) for c in candidates]


def locate_template(
    candidates: Sequence[str],
    *,
    out_dir: str | Path,
    default_locale: str,
    allow_fallback: bool = True,
) -> TemplateArtifact:
    """Return the first existing, non-empty candidate, else the built-in shell.

    Candidates are probed once each, in order. With `allow_fallback=False` a miss raises
    `ConfigurationError`.
    """
    resolved = resolve_candidates(candidates, out_dir, default_locale)
    for path in resolved:
        try:
            if not path.is_file():
                continue
            content = path.read_bytes()
        except OSError as exc:
            logger.warning("Template candidate unreadable: path={}, error={}", str(path), exc)
            continue
        if not content.strip():
            logger.warning("Template candidate is empty: path={}", str(path))
            continue
        logger.info("Template located: path={}, bytes={}", str(path), len(content))
        return TemplateArtifact(content=content, source=str(path))

    probed = ", ".join(str(p) for p in resolved)
    if not allow_fallback:
        raise ConfigurationError(f"No template artifact found. Probed: {probed}")
    logger.warning("No template artifact found, running in degraded mode with the built-in shell: probed={}", probed)
    return TemplateArtifact(content=FALLBACK_SHELL, source=FALLBACK_SOURCE, degraded=True)
