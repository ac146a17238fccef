from __future__ import annotations

import json
import logging
from typing import Iterable

from ..models import JobStatus, ReportJob, get_session, init_db
from ..pdf.preview import render_previews
from ..storage import PREVIEW_TYPES, ArtifactList, ReportWorkspace, record_artifacts, write_error
from .package import create_bundle, create_readme
from .render import build_report


logger = logging.getLogger(__name__)


def process_job(job: ReportJob) -> tuple[int, ArtifactList]:
    """Render one job and publish it to ``OUT_DIR/<slug>/``; returns the page count and artifacts."""
    request = job.request()
    with ReportWorkspace(job.slug) as workspace:
        pdf_path = workspace.add("pdf")
        page_count = build_report(request, pdf_path).page_count

        previews = render_previews(pdf_path, [workspace.path(kind) for kind in PREVIEW_TYPES])
        for kind, path in zip(PREVIEW_TYPES, previews):
            workspace.add(kind, path)

        request_path = workspace.add("request")
        request_path.write_text(json.dumps(request, indent=2), encoding="utf-8")

        create_readme(workspace.add("readme"), job.title, page_count)
        members = workspace.files("pdf", *PREVIEW_TYPES, "request", "readme")
        create_bundle(workspace.add("bundle"), members)
        return page_count, workspace.publish()


def run_pipeline(jobs: Iterable[ReportJob]) -> dict[str, list[str]]:
    init_db()
    results: dict[str, list[str]] = {"READY": [], "FAILED": []}
    with get_session() as session:
        for job in jobs:
            artifacts: ArtifactList = []
            error: str | None = None
            fail_code = "PIPELINE_ERROR"
            try:
                page_count, artifacts = process_job(job)
                job.page_count = page_count
            except (KeyError, ValueError) as exc:
                logger.exception("Invalid report request for %s", job.slug)
                fail_code = "INVALID_REQUEST"
                error = str(exc) or exc.__class__.__name__
            except Exception as exc:
                logger.exception("Pipeline error for %s", job.slug)
                error = str(exc) or exc.__class__.__name__

            if error is None:
                job.status = JobStatus.READY
                job.fail_code = None
                job.fail_detail = None
            else:
                job.status = JobStatus.FAILED
                job.fail_code = fail_code
                job.fail_detail = error
            session.add(job)
            session.commit()
            session.refresh(job)

            if job.status == JobStatus.READY:
                record_artifacts(job, artifacts)
                logger.info("Report %s ready (%d page(s))", job.slug, job.page_count)
                results["READY"].append(job.slug)
            else:
                write_error(job.slug, error or "Unknown error")
                results["FAILED"].append(job.slug)
    return results
