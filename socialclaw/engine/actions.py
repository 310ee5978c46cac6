"""Allow-listed action dispatch."""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from ..constants import SUPPORTED_ACTIONS
from ..errors import UnsupportedAction

logger = logging.getLogger(__name__)


class ActionContext(BaseModel):
    """Execution-scoped data handed to every handler."""

    execution_id: str
    tenant_id: str = ""
    client_id: str = ""
    trigger_payload: Dict[str, Any] = Field(default_factory=dict)


class ActionRequest(BaseModel):
    """A single action node ready to be dispatched."""

    node_id: str
    action: str
    config: Dict[str, Any] = Field(default_factory=dict)

    def idempotency_key(self, context: ActionContext) -> str:
        """Stable key for deduplicating retries of the same execution step."""
        raw = (
            f"{context.execution_id}:{self.node_id}:{normalize_action(self.action)}:"
            f"{json.dumps(self.config, sort_keys=True, default=str)}"
        )
        digest = hashlib.sha1(raw.encode()).hexdigest()
        return f"exec:{context.execution_id}:{self.node_id}:{digest}"


ActionHandler = Callable[[ActionRequest, ActionContext], Awaitable[Dict[str, Any]]]


def normalize_action(action: Any) -> str:
    return str(action or "").strip().lower()


class ActionDispatcher:
    """Maps allow-listed action identifiers to their handlers.

    Unknown identifiers always raise :class:`UnsupportedAction`, as do
    allow-listed identifiers without a registered handler.
    """

    def __init__(
        self,
        handlers: Optional[Mapping[str, ActionHandler]] = None,
        allowed: Iterable[str] = SUPPORTED_ACTIONS,
    ) -> None:
        self._allowed = frozenset(normalize_action(a) for a in allowed)
        self._handlers: Dict[str, ActionHandler] = {}
        for action, handler in (handlers or {}).items():
            self.register(action, handler)

    @property
    def allowed(self) -> frozenset[str]:
        return self._allowed

    def is_supported(self, action: str) -> bool:
        return normalize_action(action) in self._allowed

    def register(self, action: str, handler: ActionHandler) -> None:
        """Register ``handler`` for an allow-listed ``action``."""
        key = normalize_action(action)
        if key not in self._allowed:
            raise UnsupportedAction(key)
        self._handlers[key] = handler

    def ensure_supported(self, action: str) -> str:
        key = normalize_action(action)
        if key not in self._allowed or key not in self._handlers:
            raise UnsupportedAction(key)
        return key

    async def dispatch(
        self, request: ActionRequest, context: ActionContext
    ) -> Dict[str, Any]:
        """Run the handler for ``request``. Handler errors propagate verbatim."""
        key = self.ensure_supported(request.action)
        logger.debug(
            f"Dispatching {key} for node {request.node_id} execution_id={context.execution_id}"
        )
        result = await self._handlers[key](request, context)
        return dict(result or {})
