"""Remediation suggestions derived from a readiness contract."""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional

from pydantic import BaseModel

from .channels import get_channel

VerificationStatus = Literal["passed", "failed", "partial", ""]


class Suggestion(BaseModel):
    id: str
    title: str
    action: str


def build_fix_suggestions(
    connected: bool,
    verified: bool,
    test_send_passed: bool,
    stale: bool,
    live_allowed: bool,
    latest_verification_status: Optional[VerificationStatus] = None,
    *,
    channel: str = "whatsapp",
    missing_credentials: Optional[Iterable[str]] = None,
) -> List[Suggestion]:
    """Return ordered, de-duplicated next steps for an unready channel.

    Order is fixed: missing credentials, then live-verify policy, then
    verification and freshness. Identical inputs give identical output.

    Args:
        missing_credentials: Names of the channel credentials known to be
            absent. When omitted and the channel is not connected, every
            required credential is reported.
    """
    spec = get_channel(channel)
    out: List[Suggestion] = []

    if not connected:
        missing = (
            set(spec.credential_names)
            if missing_credentials is None
            else set(missing_credentials)
        )
        for credential in spec.credentials:
            if credential.name in missing:
                out.append(
                    Suggestion(
                        id=credential.suggestion_id,
                        title=credential.title,
                        action=credential.action,
                    )
                )

    if not live_allowed:
        out.append(
            Suggestion(
                id="enable_live_verify",
                title="Enable live verify mode",
                action="Set VERIFY_ALLOW_LIVE=true in secure environment and rerun verify",
            )
        )
    elif not test_send_passed and not stale and latest_verification_status != "failed":
        out.append(
            Suggestion(
                id="run_live_verify",
                title="Run live test-send verification",
                action=f"POST /v1/clients/:clientId/credentials/{spec.name}/verify {{ mode: \"live\" }}",
            )
        )

    if stale or latest_verification_status == "failed":
        out.append(
            Suggestion(
                id="refresh_verification",
                title="Refresh stale verification evidence",
                action="Run live verify again to refresh verification timestamp",
            )
        )
    return out
