from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, SQLModel, create_engine, Session

from . import config


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    DRAFT = "DRAFT"
    READY = "READY"
    FAILED = "FAILED"


class ReportJob(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    kind: str
    title: str
    slug: str = Field(index=True)
    request_json: str = "{}"
    status: JobStatus = Field(default=JobStatus.DRAFT)
    page_count: Optional[int] = None
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    def request(self) -> dict:
        return json.loads(self.request_json or "{}")


class Artifact(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="reportjob.id")
    type: str
    path: str
    created_at: datetime = Field(default_factory=_utcnow)


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)
    _migrate_db()


def _migrate_db() -> None:
    """Add columns introduced after the first release to existing databases."""
    try:
        inspector = inspect(engine)
        if "reportjob" not in inspector.get_table_names():
            return
        columns = {col["name"] for col in inspector.get_columns("reportjob")}
        if "page_count" not in columns:
            with engine.begin() as conn:
                conn.execute(text("ALTER TABLE reportjob ADD COLUMN page_count INTEGER"))
    except SQLAlchemyError:
        # schema already current or database not created yet
        pass


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
