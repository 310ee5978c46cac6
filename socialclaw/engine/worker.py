"""Execution worker: load a workflow snapshot, run it, log the outcome."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..config import EngineConfig, load_config
from ..constants import POLICY_ERROR_CODES
from ..contracts import ExecutionOutcome, NodeEvent, TriggerEvent, WorkflowNode
from ..errors import WorkflowVersionNotFound
from ..metrics import ExecutionMetrics, default_metrics
from ..persistence import ExecutionEventLog, WorkflowStore
from .actions import ActionDispatcher
from .runtime import WorkflowRuntime

logger = logging.getLogger(__name__)


class ExecutionJob(BaseModel):
    """Queued request to execute one workflow version."""

    execution_id: str
    tenant_id: str
    workflow_id: str
    workflow_version: int
    trigger_type: str
    trigger_payload: Dict[str, Any] = Field(default_factory=dict)
    attempt: int = 1

    def trigger_event(self) -> TriggerEvent:
        return TriggerEvent(
            trigger_type=self.trigger_type,
            trigger_payload=self.trigger_payload,
            execution_id=self.execution_id,
        )


def _is_blocked(error: BaseException) -> bool:
    code = getattr(error, "code", None)
    if code in POLICY_ERROR_CODES:
        return True
    message = str(error)
    return any(c in message for c in POLICY_ERROR_CODES)


class ExecutionWorker:
    """Runs queued executions against a workflow store and event log.

    The worker does not retry. A failed job is re-queued by the caller with
    the same ``execution_id``; deduplication belongs to the store.
    """

    def __init__(
        self,
        store: WorkflowStore,
        event_log: ExecutionEventLog,
        dispatcher: Optional[ActionDispatcher] = None,
        config: Optional[EngineConfig] = None,
        metrics: Optional[ExecutionMetrics] = None,
    ) -> None:
        self._store = store
        self._event_log = event_log
        self._config = config or load_config()
        self._metrics = metrics or default_metrics()
        if dispatcher is None and not self._config.execution_dry_run:
            raise ValueError("Live execution requires a dispatcher with channel senders")
        self._runtime = WorkflowRuntime(
            dispatcher, max_pending_approvals=self._config.max_pending_approvals
        )

    async def execute(self, job: ExecutionJob) -> ExecutionOutcome:
        """Execute ``job`` and record its lifecycle.

        Policy failures are marked ``blocked``, anything else ``failed``;
        the error is re-raised in both cases.
        """
        started = time.perf_counter()
        try:
            outcome = await self._execute(job)
        except Exception as e:
            status = "blocked" if _is_blocked(e) else "failed"
            self._metrics.record(status, time.perf_counter() - started)
            logger.error(
                f"Execution {job.execution_id} for workflow {job.workflow_id} {status}: {e}"
            )
            await self._event_log.append_event(
                job.tenant_id,
                job.execution_id,
                "error",
                "execution.failed",
                {"message": str(e)},
            )
            await self._event_log.mark_finished(
                job.tenant_id, job.execution_id, status, error_message=str(e)
            )
            raise
        self._metrics.record("succeeded", time.perf_counter() - started)
        return outcome

    async def _execute(self, job: ExecutionJob) -> ExecutionOutcome:
        await self._event_log.mark_running(job.tenant_id, job.execution_id, job.attempt)
        await self._event_log.append_event(
            job.tenant_id,
            job.execution_id,
            "info",
            "execution.started",
            {"attempt": job.attempt, "triggerType": job.trigger_type},
        )

        workflow = await self._store.get_workflow_version(
            job.tenant_id, job.workflow_id, job.workflow_version
        )
        if workflow is None:
            raise WorkflowVersionNotFound(f"{job.workflow_id}@{job.workflow_version}")

        async def record(node: WorkflowNode, event: NodeEvent) -> None:
            await self._event_log.append_event(
                job.tenant_id,
                job.execution_id,
                event.level,
                event.event_type,
                {"nodeId": node.id, "nodeType": node.type, **event.details},
            )

        outcome = await self._runtime.handle(
            workflow,
            job.trigger_event(),
            self._config.max_actions,
            on_node_event=record,
        )

        await self._event_log.append_event(
            job.tenant_id,
            job.execution_id,
            "info",
            "execution.completed",
            {"result": "ok", "actionsExecuted": outcome.actions_executed},
        )
        await self._event_log.mark_finished(job.tenant_id, job.execution_id, "succeeded")
        logger.info(f"Execution {job.execution_id} succeeded")
        return outcome
