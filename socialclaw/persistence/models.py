"""Data models for execution state kept by the hosting service."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

ExecutionStatus = Literal["queued", "running", "succeeded", "failed", "blocked"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExecutionEventRecord(BaseModel):
    """One row of the execution event log."""

    id: Optional[int] = None
    tenant_id: str
    execution_id: str
    level: str = "info"
    event_type: str
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)


class ExecutionRecord(BaseModel):
    """Persisted execution state keyed by tenant and execution id."""

    tenant_id: str
    execution_id: str
    status: ExecutionStatus = "queued"
    attempts: int = 0
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    events: list[ExecutionEventRecord] = Field(default_factory=list)
