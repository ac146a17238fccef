"""Where a report's files live while it is built and after it is published.

Each job is rendered into ``OUT_DIR/<slug>.tmp`` and only moved to
``OUT_DIR/<slug>`` once every artifact exists, so a half-built report is
never left in the published location.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Tuple

from . import config
from .models import Artifact, ReportJob, get_session

logger = logging.getLogger(__name__)

ARTIFACT_NAMES = {
    "pdf": "report.pdf",
    "preview_1": "preview_1.png",
    "preview_2": "preview_2.png",
    "bundle": "bundle.zip",
    "request": "request.json",
    "error": "error.log",
    "readme": "README.txt",
}
PREVIEW_TYPES = ("preview_1", "preview_2")

ArtifactList = List[Tuple[str, Path]]


class ReportWorkspace:
    def __init__(self, slug: str, root: Path | None = None) -> None:
        self.slug = slug
        self.root = root or config.OUT_DIR
        self.staging = self.root / f"{slug}.tmp"
        self.final = self.root / slug
        self.artifacts: ArtifactList = []

    def __enter__(self) -> "ReportWorkspace":
        if self.staging.exists():
            shutil.rmtree(self.staging)
        self.staging.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        if exc_type is not None:
            shutil.rmtree(self.staging, ignore_errors=True)

    def path(self, artifact_type: str) -> Path:
        return self.staging / ARTIFACT_NAMES[artifact_type]

    def add(self, artifact_type: str, path: Path | None = None) -> Path:
        """Register a file written into the staging directory."""
        path = path or self.path(artifact_type)
        self.artifacts.append((artifact_type, path))
        return path

    def files(self, *artifact_types: str) -> List[Path]:
        return [path for kind, path in self.artifacts if kind in artifact_types]

    def publish(self) -> ArtifactList:
        """Replace ``OUT_DIR/<slug>`` with the staged files; returns their final paths."""
        if self.final.exists():
            shutil.rmtree(self.final)
        self.staging.replace(self.final)
        logger.debug("Published %d artifact(s) to %s", len(self.artifacts), self.final)
        return [(kind, self.final / path.relative_to(self.staging)) for kind, path in self.artifacts]


def write_error(slug: str, message: str, root: Path | None = None) -> Path:
    report_dir = (root or config.OUT_DIR) / slug
    report_dir.mkdir(parents=True, exist_ok=True)
    path = report_dir / ARTIFACT_NAMES["error"]
    path.write_text(message, encoding="utf-8")
    return path


def record_artifacts(job: ReportJob, artifacts: Iterable[tuple[str, Path]]) -> None:
    with get_session() as session:
        for artifact_type, path in artifacts:
            session.add(
                Artifact(
                    job_id=job.id,
                    type=artifact_type,
                    path=str(path.relative_to(config.OUT_DIR)),
                )
            )
        session.commit()
