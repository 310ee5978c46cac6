"""Execution worker tests."""

from pathlib import Path

import pytest
import yaml
from prometheus_client import CollectorRegistry

from socialclaw.config import EngineConfig
from socialclaw.contracts import WorkflowDefinition
from socialclaw.engine import ActionDispatcher, ExecutionJob, ExecutionWorker
from socialclaw.errors import ExecutionCapExceeded, UnsupportedAction, WorkflowVersionNotFound
from socialclaw.metrics import ExecutionMetrics
from socialclaw.persistence import InMemoryExecutionStore


def _load_workflow(**overrides) -> WorkflowDefinition:
    path = Path(__file__).parent.parent / "fixtures" / "reengage_workflow.yaml"
    document = yaml.safe_load(path.read_text())
    document.update(overrides)
    return WorkflowDefinition.model_validate(document)


def _job(**overrides) -> ExecutionJob:
    params = dict(
        execution_id="exec-1",
        tenant_id="tenant-acme",
        workflow_id="wf-reengage",
        workflow_version=3,
        trigger_type="lead.inactive",
        trigger_payload={"noReply": True, "lead": {"email": "lead@example.com"}},
    )
    params.update(overrides)
    return ExecutionJob(**params)


@pytest.fixture
def store():
    store = InMemoryExecutionStore()
    store.save_workflow(_load_workflow())
    return store


@pytest.mark.asyncio
async def test_successful_execution_is_logged(store):
    worker = ExecutionWorker(store, store, config=EngineConfig())
    outcome = await worker.execute(_job())
    assert outcome.actions_executed == 1

    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "succeeded"
    assert record.attempts == 1
    event_types = [e.event_type for e in record.events]
    assert event_types[0] == "execution.started"
    assert event_types[-1] == "execution.completed"
    assert "node.action.executed" in event_types
    executed = next(e for e in record.events if e.event_type == "node.action.executed")
    assert executed.payload["nodeId"] == "follow-up"
    assert record.events[-1].payload == {"result": "ok", "actionsExecuted": 1}


@pytest.mark.asyncio
async def test_condition_stop_still_succeeds(store):
    worker = ExecutionWorker(store, store, config=EngineConfig())
    outcome = await worker.execute(_job(trigger_payload={"noReply": False}))
    assert outcome.actions_executed == 0
    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "succeeded"


@pytest.mark.asyncio
async def test_unsupported_action_marks_blocked():
    store = InMemoryExecutionStore()
    workflow = _load_workflow(
        nodes=[{"id": "x", "type": "action", "config": {"action": "shell.exec"}}],
        actions=["shell.exec"],
    )
    store.save_workflow(workflow)
    worker = ExecutionWorker(store, store, config=EngineConfig())
    with pytest.raises(UnsupportedAction):
        await worker.execute(_job())

    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "blocked"
    assert "unsupported_action" in record.error_message
    assert record.events[-1].event_type == "execution.failed"
    assert record.events[-1].level == "error"


@pytest.mark.asyncio
async def test_cap_from_config_marks_blocked(store):
    worker = ExecutionWorker(store, store, config=EngineConfig(max_actions=0))
    with pytest.raises(ExecutionCapExceeded):
        await worker.execute(_job())
    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "blocked"


@pytest.mark.asyncio
async def test_missing_workflow_version_fails(store):
    worker = ExecutionWorker(store, store, config=EngineConfig())
    with pytest.raises(WorkflowVersionNotFound):
        await worker.execute(_job(workflow_version=9))
    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "failed"
    assert "workflow_version_not_found" in record.error_message


@pytest.mark.asyncio
async def test_handler_error_marks_failed(store):
    async def broken(request, context):
        raise RuntimeError("email_send_failed:503")

    worker = ExecutionWorker(
        store, store, dispatcher=ActionDispatcher({"email.send": broken}), config=EngineConfig()
    )
    with pytest.raises(RuntimeError, match="email_send_failed:503"):
        await worker.execute(_job())
    record = await store.get_execution("tenant-acme", "exec-1")
    assert record.status == "failed"


def test_live_mode_requires_dispatcher(store):
    with pytest.raises(ValueError):
        ExecutionWorker(store, store, config=EngineConfig(execution_dry_run=False))


def _executions(registry, status):
    return registry.get_sample_value(
        "socialclaw_workflow_executions_total", {"status": status}
    ) or 0.0


@pytest.mark.asyncio
async def test_metrics_count_succeeded_and_blocked_runs(store):
    registry = CollectorRegistry()
    metrics = ExecutionMetrics(registry)

    worker = ExecutionWorker(store, store, config=EngineConfig(), metrics=metrics)
    await worker.execute(_job())

    capped = ExecutionWorker(store, store, config=EngineConfig(max_actions=0), metrics=metrics)
    with pytest.raises(ExecutionCapExceeded):
        await capped.execute(_job(execution_id="exec-2"))

    assert _executions(registry, "succeeded") == 1.0
    assert _executions(registry, "blocked") == 1.0
    assert _executions(registry, "failed") == 0.0
    assert registry.get_sample_value("socialclaw_workflow_execution_seconds_count") == 1.0


@pytest.mark.asyncio
async def test_metrics_count_failed_runs(store):
    registry = CollectorRegistry()
    worker = ExecutionWorker(
        store, store, config=EngineConfig(), metrics=ExecutionMetrics(registry)
    )
    with pytest.raises(WorkflowVersionNotFound):
        await worker.execute(_job(workflow_version=9))
    assert _executions(registry, "failed") == 1.0
    assert registry.get_sample_value("socialclaw_workflow_execution_seconds_count") == 0.0


def test_job_exposes_trigger_event():
    event = _job().trigger_event()
    assert event.trigger_type == "lead.inactive"
    assert event.execution_id == "exec-1"
    assert event.trigger_payload["noReply"] is True
