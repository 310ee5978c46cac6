"""Repository abstractions the worker consumes."""

from __future__ import annotations

from typing import Any, Protocol

from ..contracts import WorkflowDefinition
from .models import ExecutionRecord


class WorkflowStore(Protocol):
    """Read access to immutable workflow version snapshots."""

    async def get_workflow_version(
        self, tenant_id: str, workflow_id: str, version: int
    ) -> WorkflowDefinition | None:
        """Return the workflow snapshot or ``None`` when it does not exist."""


class ExecutionEventLog(Protocol):
    """Durable execution status and event log."""

    async def mark_running(self, tenant_id: str, execution_id: str, attempts: int) -> None:
        """Record that an attempt of the execution has started."""

    async def append_event(
        self,
        tenant_id: str,
        execution_id: str,
        level: str,
        event_type: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Append a lifecycle event."""

    async def mark_finished(
        self,
        tenant_id: str,
        execution_id: str,
        status: str,
        error_message: str | None = None,
    ) -> None:
        """Record the terminal status of the execution."""

    async def get_execution(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionRecord | None:
        """Retrieve the execution by id."""
