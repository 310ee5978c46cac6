"""Deterministic workflow runtime.

Nodes are processed strictly in list order; there is no graph routing. Each
run owns its counters and event buffer, so concurrent runs of the same
workflow need no coordination. Delay nodes are recorded but never slept,
which keeps replays of the same execution deterministic.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ..contracts import (
    ActionConfig,
    ConditionConfig,
    DelayConfig,
    EventLevel,
    ExecutionOutcome,
    NodeEvent,
    TriggerConfig,
    TriggerEvent,
    WorkflowDefinition,
    WorkflowNode,
)
from ..utils.payload import read_path
from .actions import ActionContext, ActionDispatcher, ActionRequest
from .handlers import dry_run_dispatcher
from .safety import enforce_safety_limits

logger = logging.getLogger(__name__)

NodeObserver = Callable[[WorkflowNode, NodeEvent], Awaitable[None]]


def _same(left: Any, right: Any) -> bool:
    # bool is an int subclass; keep True distinct from 1.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def evaluate_condition(config: ConditionConfig, payload: Dict[str, Any]) -> bool:
    """Apply ``config.operator`` to the value found at ``config.path``."""
    op = config.operator.strip().lower()
    left = read_path(payload, config.path) if config.path else None
    if op == "exists":
        return left is not None and left != ""
    if op == "equals":
        return _same(left, config.value)
    if op == "not_equals":
        return not _same(left, config.value)
    if op == "is_true":
        return left is True
    logger.warning(f"Unknown condition operator '{config.operator}', evaluating as false")
    return False


class WorkflowRuntime:
    """Walks a workflow's nodes for one trigger event."""

    def __init__(
        self,
        dispatcher: Optional[ActionDispatcher] = None,
        *,
        max_pending_approvals: Optional[int] = None,
    ) -> None:
        self._dispatcher = dispatcher or dry_run_dispatcher()
        self._max_pending_approvals = max_pending_approvals

    async def run(
        self,
        workflow: WorkflowDefinition,
        trigger_type: str,
        trigger_payload: Dict[str, Any],
        execution_id: str,
        max_actions: int,
        *,
        on_node_event: Optional[NodeObserver] = None,
        pending_approvals: int = 0,
    ) -> ExecutionOutcome:
        """Execute ``workflow`` once and return the outcome.

        The observer is awaited for every event before the runtime moves on;
        any exception it raises aborts the run. Action handler exceptions
        propagate unchanged and earlier side effects are not rolled back.

        Raises:
            UnsupportedAction: An action node uses an identifier that is not
                allow-listed.
            ExecutionCapExceeded: More action nodes were reached than
                ``max_actions`` permits.
            InvalidNodeConfig: A node's config does not fit its type.
        """
        outcome = ExecutionOutcome()
        payload = dict(trigger_payload or {})
        context = ActionContext(
            execution_id=execution_id,
            tenant_id=workflow.tenant_id,
            client_id=workflow.client_id,
            trigger_payload=payload,
        )

        async def emit(
            node: WorkflowNode,
            event_type: str,
            level: EventLevel = "info",
            details: Optional[Dict[str, Any]] = None,
        ) -> None:
            event = NodeEvent(
                level=level,
                event_type=event_type,
                node_id=node.id,
                node_type=node.type,
                details=details or {},
            )
            outcome.events.append(event)
            if on_node_event is not None:
                await on_node_event(node, event)

        logger.info(
            f"Starting workflow {workflow.id} v{workflow.version} execution_id={execution_id}"
        )
        for node in workflow.nodes:
            await emit(node, "node.enter")
            config = node.typed_config()

            if isinstance(config, TriggerConfig):
                declared = config.event.strip()
                if declared and declared != trigger_type:
                    logger.warning(
                        f"Trigger node {node.id} declares '{declared}' but execution_id={execution_id} "
                        f"was triggered by '{trigger_type}'"
                    )
                    await emit(
                        node,
                        "node.trigger.mismatch_ignored",
                        "warn",
                        {"triggerType": trigger_type, "declared": declared},
                    )
                else:
                    await emit(node, "node.trigger.matched", details={"triggerType": trigger_type})

            elif isinstance(config, ConditionConfig):
                passed = evaluate_condition(config, payload)
                await emit(
                    node,
                    "node.condition.evaluated",
                    "info" if passed else "warn",
                    {"passed": passed},
                )
                if not passed and config.stop_on_false:
                    await emit(node, "execution.stopped_by_condition", "warn")
                    logger.info(
                        f"Condition {node.id} stopped execution_id={execution_id} "
                        f"after {outcome.actions_executed} action(s)"
                    )
                    outcome.stopped_by_condition = node.id
                    return outcome

            elif isinstance(config, DelayConfig):
                await emit(node, "node.delay.completed", details={"hours": config.hours})

            elif isinstance(config, ActionConfig):
                action = self._dispatcher.ensure_supported(config.action)
                enforce_safety_limits(
                    max_actions,
                    pending_approvals,
                    outcome.actions_executed + 1,
                    max_pending_approvals=self._max_pending_approvals,
                )
                request = ActionRequest(node_id=node.id, action=action, config=node.config)
                result = await self._dispatcher.dispatch(request, context)
                outcome.actions_executed += 1
                await emit(node, "node.action.executed", details=result)

        logger.info(
            f"Workflow {workflow.id} finished execution_id={execution_id} "
            f"actions_executed={outcome.actions_executed}"
        )
        return outcome

    async def handle(
        self,
        workflow: WorkflowDefinition,
        event: TriggerEvent,
        max_actions: int,
        *,
        on_node_event: Optional[NodeObserver] = None,
        pending_approvals: int = 0,
    ) -> ExecutionOutcome:
        """Run ``workflow`` for a received :class:`TriggerEvent`."""
        return await self.run(
            workflow,
            event.trigger_type,
            event.trigger_payload,
            event.execution_id,
            max_actions,
            on_node_event=on_node_event,
            pending_approvals=pending_approvals,
        )


async def run_workflow(
    workflow: WorkflowDefinition,
    trigger_type: str,
    trigger_payload: Dict[str, Any],
    execution_id: str,
    max_actions: int,
    *,
    on_node_event: Optional[NodeObserver] = None,
    dispatcher: Optional[ActionDispatcher] = None,
    pending_approvals: int = 0,
    max_pending_approvals: Optional[int] = None,
) -> ExecutionOutcome:
    """Convenience wrapper around :meth:`WorkflowRuntime.run`."""
    runtime = WorkflowRuntime(dispatcher, max_pending_approvals=max_pending_approvals)
    return await runtime.run(
        workflow,
        trigger_type,
        trigger_payload,
        execution_id,
        max_actions,
        on_node_event=on_node_event,
        pending_approvals=pending_approvals,
    )
