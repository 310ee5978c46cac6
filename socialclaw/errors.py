"""Exception types raised by the workflow engine."""

from __future__ import annotations

from .constants import (
    APPROVAL_QUEUE_OVERFLOW,
    EXECUTION_CAP_EXCEEDED,
    INVALID_ACTION_PAYLOAD,
    INVALID_NODE_CONFIG,
    UNSUPPORTED_ACTION,
    WORKFLOW_VERSION_NOT_FOUND,
)


class WorkflowError(Exception):
    """Base class for engine errors. ``code`` is stable across releases."""

    code: str = "workflow_error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = f"{self.code}:{detail}" if detail else self.code
        super().__init__(message)


class PolicyViolation(WorkflowError):
    """A safety policy blocked the execution. Fatal to the current run."""


class ExecutionCapExceeded(PolicyViolation):
    code = EXECUTION_CAP_EXCEEDED


class UnsupportedAction(PolicyViolation):
    code = UNSUPPORTED_ACTION


class ApprovalQueueOverflow(PolicyViolation):
    code = APPROVAL_QUEUE_OVERFLOW


class InvalidNodeConfig(WorkflowError):
    code = INVALID_NODE_CONFIG

    def __init__(self, node_id: str, reasons: list[str]) -> None:
        self.node_id = node_id
        self.reasons = list(reasons)
        super().__init__(f"{node_id}:{'; '.join(self.reasons)}")


class InvalidActionPayload(WorkflowError):
    code = INVALID_ACTION_PAYLOAD


class WorkflowVersionNotFound(WorkflowError):
    code = WORKFLOW_VERSION_NOT_FOUND
