"""SocialClaw: deterministic workflow execution for multi-channel marketing."""

from .config import EngineConfig, load_config
from .contracts import (
    ExecutionOutcome,
    NodeEvent,
    TriggerEvent,
    WorkflowDefinition,
    WorkflowNode,
    WorkflowStatus,
)
from .engine import (
    ActionDispatcher,
    ExecutionWorker,
    WorkflowRuntime,
    enforce_safety_limits,
    run_workflow,
    validate_workflow,
)
from .errors import (
    ExecutionCapExceeded,
    PolicyViolation,
    UnsupportedAction,
    WorkflowError,
)
from .integrations import (
    assess_channel,
    build_fix_suggestions,
    evaluate_whatsapp_contract,
)

__version__ = "0.1.0"
__all__ = [
    "EngineConfig",
    "load_config",
    "ExecutionOutcome",
    "NodeEvent",
    "TriggerEvent",
    "WorkflowDefinition",
    "WorkflowNode",
    "WorkflowStatus",
    "ActionDispatcher",
    "ExecutionWorker",
    "WorkflowRuntime",
    "enforce_safety_limits",
    "run_workflow",
    "validate_workflow",
    "ExecutionCapExceeded",
    "PolicyViolation",
    "UnsupportedAction",
    "WorkflowError",
    "assess_channel",
    "build_fix_suggestions",
    "evaluate_whatsapp_contract",
]
