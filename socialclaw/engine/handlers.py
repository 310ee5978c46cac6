"""Dry-run channel handlers.

These validate the action payload exactly as the live senders would and
report delivery without touching the network. Live senders are provided by
the hosting service and registered on an :class:`ActionDispatcher` in their
place.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InvalidActionPayload
from ..utils.payload import read_path
from .actions import ActionContext, ActionDispatcher, ActionHandler, ActionRequest

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return str(value or "").strip()


async def send_whatsapp_template(
    request: ActionRequest, context: ActionContext
) -> Dict[str, Any]:
    to = _text(request.config.get("to") or read_path(context.trigger_payload, "lead.phone"))
    template = _text(request.config.get("template"))
    if not to or not template:
        raise InvalidActionPayload(f"{request.node_id}:whatsapp.send_template")
    logger.info(f"[dry-run] whatsapp template {template!r} to {to} node={request.node_id}")
    return {"action": request.action, "delivered": True, "dryRun": True}


async def send_email(request: ActionRequest, context: ActionContext) -> Dict[str, Any]:
    to = _text(request.config.get("to") or read_path(context.trigger_payload, "lead.email"))
    template = _text(request.config.get("template"))
    if not to or not template:
        raise InvalidActionPayload(f"{request.node_id}:email.send")
    logger.info(f"[dry-run] email template {template!r} to {to} node={request.node_id}")
    return {"action": request.action, "delivered": True, "dryRun": True}


async def update_crm_status(
    request: ActionRequest, context: ActionContext
) -> Dict[str, Any]:
    status = _text(request.config.get("status"))
    if not status:
        raise InvalidActionPayload(f"{request.node_id}:crm.update_status")
    return {"action": request.action, "updated": True, "status": status}


DRY_RUN_HANDLERS: Dict[str, ActionHandler] = {
    "whatsapp.send_template": send_whatsapp_template,
    "email.send": send_email,
    "crm.update_status": update_crm_status,
}


def dry_run_dispatcher() -> ActionDispatcher:
    return ActionDispatcher(DRY_RUN_HANDLERS)
