from pathlib import Path

from catalog_routes.routing.domain.canonical import canonical_route
from catalog_routes.synthesis.domain.models import SynthesisManifest


def index_paths(manifest: SynthesisManifest, out_dir: str | Path) -> list[Path]:
    """Root index followed by one index per locale."""
    root = Path(out_dir)
    return [root / "index.html", *(root / locale / "index.html" for locale in manifest.locales)]


def must_exist_paths(manifest: SynthesisManifest, out_dir: str | Path) -> list[Path]:
    paths = index_paths(manifest, out_dir)
    for locale in manifest.locales:
        first = next(manifest.keys_for_locale(locale), None)
        if first is not None:
            paths.append(canonical_route(first).to_file_path(out_dir))
    return paths


def find_missing(paths: list[Path]) -> list[str]:
    return [str(path) for path in paths if not path.is_file()]
