from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Iterable, List

from slugify import slugify

from sqlmodel import select

from ..config import REPORT_KINDS
from ..models import JobStatus, ReportJob, get_session, init_db


REQUIRED_FIELDS = {"kind", "title"}


def load_requests(json_path: Path) -> List[dict]:
    if not json_path.exists():
        raise FileNotFoundError(f"Request file not found: {json_path}")
    with json_path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Request file is not valid JSON: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("reports", [])
    if not isinstance(payload, list):
        raise ValueError("Request file must hold a list of reports")
    requests = [item for item in payload if item]
    for item in requests:
        if not isinstance(item, dict):
            raise ValueError("Each report request must be an object")
        missing = REQUIRED_FIELDS - set(item)
        if missing:
            raise ValueError(f"Request missing fields: {', '.join(sorted(missing))}")
    if not requests:
        raise ValueError("Request file has no reports")
    return requests


def slug_from_title(title: str) -> str:
    slug = slugify(title)
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5(title.encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from title")
    return slug


def ingest_requests(json_path: Path) -> List[ReportJob]:
    init_db()
    requests = load_requests(json_path)
    seen = set()
    jobs: List[ReportJob] = []
    for request in requests:
        kind = str(request["kind"]).strip().lower()
        title = str(request["title"]).strip()
        if not kind or not title:
            raise ValueError("Report requests must include kind and title")
        if kind not in REPORT_KINDS:
            raise ValueError(f"Unsupported report kind: {kind}")
        key = (kind, title.lower())
        if key in seen:
            raise ValueError(f"Duplicate title for kind: {kind} - {title}")
        seen.add(key)
        jobs.append(
            ReportJob(
                kind=kind,
                title=title,
                slug=slug_from_title(title),
                request_json=json.dumps({**request, "kind": kind, "title": title}),
                status=JobStatus.DRAFT,
            )
        )
    with get_session() as session:
        session.add_all(jobs)
        session.commit()
        for job in jobs:
            session.refresh(job)
    return jobs


def list_jobs(statuses: Iterable[JobStatus], kind: str | None = None) -> List[ReportJob]:
    init_db()
    with get_session() as session:
        statement = select(ReportJob)
        if kind:
            statement = statement.where(ReportJob.kind == kind)
        if statuses:
            statement = statement.where(ReportJob.status.in_(list(statuses)))
        return list(session.exec(statement))
