"""Safety caps applied before any side-effecting action."""

from __future__ import annotations

from typing import Optional

from ..errors import ApprovalQueueOverflow, ExecutionCapExceeded


def enforce_safety_limits(
    max_actions: int,
    pending_approvals: int,
    requested_actions: int,
    *,
    max_pending_approvals: Optional[int] = None,
) -> None:
    """Raise if ``requested_actions`` would exceed the per-execution cap.

    ``pending_approvals`` is only checked when ``max_pending_approvals`` is
    configured; otherwise it is accepted and ignored.

    Raises:
        ApprovalQueueOverflow: Too many approvals are waiting.
        ExecutionCapExceeded: ``requested_actions > max_actions``.
    """
    if max_pending_approvals is not None and pending_approvals > max_pending_approvals:
        raise ApprovalQueueOverflow(f"{pending_approvals}>{max_pending_approvals}")
    if requested_actions > max_actions:
        raise ExecutionCapExceeded(f"{requested_actions}>{max_actions}")
