"""Channel readiness: contract plus suggestions for one set of facts."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import VerificationConfig
from .channels import get_channel
from .contract import IntegrationContract, Timestamp, evaluate_contract
from .suggestions import Suggestion, VerificationStatus, build_fix_suggestions


class CredentialFacts(BaseModel):
    """Raw facts supplied by the credential and verification store."""

    credentials: Dict[str, bool] = Field(default_factory=dict)
    latest_verification_status: Optional[VerificationStatus] = None
    latest_verification_at: Timestamp = None

    @property
    def latest_live_verification_ok(self) -> bool:
        return self.latest_verification_status == "passed"


class ChannelReadiness(BaseModel):
    channel: str
    contract: IntegrationContract
    suggestions: List[Suggestion] = Field(default_factory=list)


def assess_channel(
    channel: str,
    facts: CredentialFacts,
    verification: Optional[VerificationConfig] = None,
    *,
    now: Optional[datetime] = None,
) -> ChannelReadiness:
    """Evaluate ``channel`` and attach the fixes needed to make it ready."""
    spec = get_channel(channel)
    verification = verification or VerificationConfig()
    present = {name: bool(facts.credentials.get(name)) for name in spec.credential_names}
    contract = evaluate_contract(
        present.values(),
        facts.latest_live_verification_ok,
        facts.latest_verification_at,
        verification.max_age_days(spec.name),
        now=now,
    )
    suggestions = build_fix_suggestions(
        connected=contract.connected,
        verified=contract.verified,
        test_send_passed=contract.test_send_passed,
        stale=contract.stale,
        live_allowed=verification.allow_live,
        latest_verification_status=facts.latest_verification_status,
        channel=spec.name,
        missing_credentials=[name for name, ok in present.items() if not ok],
    )
    return ChannelReadiness(channel=spec.name, contract=contract, suggestions=suggestions)
