"""Persistence contracts for workflow snapshots and execution logs.

The engine itself never persists anything; the hosting service provides a
durable implementation of these protocols. The in-memory store backs tests
and the CLI.
"""

from __future__ import annotations

from .inmemory import InMemoryExecutionStore
from .models import ExecutionEventRecord, ExecutionRecord, ExecutionStatus
from .repository import ExecutionEventLog, WorkflowStore

__all__ = [
    "ExecutionEventLog",
    "ExecutionEventRecord",
    "ExecutionRecord",
    "ExecutionStatus",
    "InMemoryExecutionStore",
    "WorkflowStore",
]
