"""Deterministic workflow execution engine."""

from .actions import ActionContext, ActionDispatcher, ActionRequest
from .handlers import DRY_RUN_HANDLERS, dry_run_dispatcher
from .runtime import WorkflowRuntime, evaluate_condition, run_workflow
from .safety import enforce_safety_limits
from .validator import ValidationResult, validate_workflow
from .worker import ExecutionJob, ExecutionWorker

__all__ = [
    "ActionContext",
    "ActionDispatcher",
    "ActionRequest",
    "DRY_RUN_HANDLERS",
    "dry_run_dispatcher",
    "WorkflowRuntime",
    "evaluate_condition",
    "run_workflow",
    "enforce_safety_limits",
    "ValidationResult",
    "validate_workflow",
    "ExecutionJob",
    "ExecutionWorker",
]
