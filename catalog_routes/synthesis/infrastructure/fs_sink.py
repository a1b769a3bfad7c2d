import shutil
from pathlib import Path

from catalog_routes.config.logger_config import logger
from catalog_routes.synthesis.application.contracts import ArtifactOrigin
from catalog_routes.synthesis.application.ports import ArtifactWriterPort


class StaticTreeWriter(ArtifactWriterPort):
    def __init__(self, out_dir: str | Path) -> None:
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)

    def ensure_file(self, path: Path, content: bytes) -> ArtifactOrigin:
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            # "x" fails if the file exists, so the check and the write are one step.
            with path.open("xb") as fp:
                fp.write(content)
        except FileExistsError:
            return "build"
        logger.debug("Artifact synthesized: path={}", str(path))
        return "synthesized"

    def copy_redirects(self, source: Path) -> bool:
        if not source.is_file():
            logger.warning("Redirect rules not found, skipping copy: source={}", str(source))
            return False
        target = self.out_dir / "_redirects"
        shutil.copyfile(source, target)
        logger.info("Redirect rules copied: source={}, target={}", str(source), str(target))
        return True
