"""In-memory implementation of the workflow store and execution log."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from ..contracts import WorkflowDefinition
from .models import ExecutionEventRecord, ExecutionRecord
from .repository import ExecutionEventLog, WorkflowStore


class InMemoryExecutionStore(WorkflowStore, ExecutionEventLog):
    """Keep workflow versions and execution logs in local memory.

    Useful for tests and the CLI. Data is not persisted across process
    restarts.
    """

    def __init__(self) -> None:
        self._workflows: Dict[Tuple[str, str, int], WorkflowDefinition] = {}
        self._executions: Dict[Tuple[str, str], ExecutionRecord] = {}
        self._event_id = 0

    # ------------------------------------------------------------------
    def save_workflow(self, workflow: WorkflowDefinition) -> None:
        key = (workflow.tenant_id, workflow.id, workflow.version)
        self._workflows[key] = workflow

    async def get_workflow_version(
        self, tenant_id: str, workflow_id: str, version: int
    ) -> WorkflowDefinition | None:
        return self._workflows.get((tenant_id, workflow_id, version))

    # ------------------------------------------------------------------
    def _record(self, tenant_id: str, execution_id: str) -> ExecutionRecord:
        key = (tenant_id, execution_id)
        record = self._executions.get(key)
        if record is None:
            record = ExecutionRecord(tenant_id=tenant_id, execution_id=execution_id)
            self._executions[key] = record
        return record

    async def mark_running(self, tenant_id: str, execution_id: str, attempts: int) -> None:
        record = self._record(tenant_id, execution_id)
        record.status = "running"
        record.attempts = attempts
        record.started_at = record.started_at or datetime.now(timezone.utc)

    async def append_event(
        self,
        tenant_id: str,
        execution_id: str,
        level: str,
        event_type: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        self._event_id += 1
        self._record(tenant_id, execution_id).events.append(
            ExecutionEventRecord(
                id=self._event_id,
                tenant_id=tenant_id,
                execution_id=execution_id,
                level=level,
                event_type=event_type,
                payload=payload or {},
            )
        )

    async def mark_finished(
        self,
        tenant_id: str,
        execution_id: str,
        status: str,
        error_message: str | None = None,
    ) -> None:
        record = self._record(tenant_id, execution_id)
        record.status = status
        record.error_message = error_message
        record.finished_at = datetime.now(timezone.utc)

    async def get_execution(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionRecord | None:
        return self._executions.get((tenant_id, execution_id))

    async def list_executions(self) -> list[ExecutionRecord]:
        return list(self._executions.values())
