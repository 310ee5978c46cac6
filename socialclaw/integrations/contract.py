"""Integration readiness contracts.

A channel is ready when every required credential is present and the most
recent live verification passed within the freshness window. Everything here
is pure: ``now`` is read at most once per call and may be injected.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Union

from pydantic import BaseModel

Timestamp = Union[datetime, str, None]

DAY = timedelta(hours=24)


class IntegrationContract(BaseModel):
    """Derived readiness verdict for one channel of one client."""

    ready: bool
    connected: bool
    verified: bool
    test_send_passed: bool
    stale: bool


def _parse_timestamp(value: Timestamp) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def is_stale(verified_at: Timestamp, max_age_days: int, now: datetime) -> bool:
    """Return ``True`` when ``verified_at`` is missing or older than the window.

    The window is ``max_age_days`` fixed 24h units, not calendar days.
    """
    at = _parse_timestamp(verified_at)
    if at is None:
        return True
    window = max(1, int(max_age_days)) * DAY
    return now - at > window


def evaluate_contract(
    credentials_present: Iterable[bool],
    latest_live_verification_ok: bool,
    latest_live_verification_at: Timestamp,
    max_age_days: int,
    *,
    now: Optional[datetime] = None,
) -> IntegrationContract:
    """Compute the readiness contract for any channel."""
    now = _parse_timestamp(now) or datetime.now(timezone.utc)
    connected = all(bool(p) for p in credentials_present)
    stale = is_stale(latest_live_verification_at, max_age_days, now)
    verified = bool(latest_live_verification_ok) and not stale
    return IntegrationContract(
        ready=connected and verified,
        connected=connected,
        verified=verified,
        test_send_passed=verified,
        stale=stale,
    )


def evaluate_whatsapp_contract(
    has_access_token: bool,
    has_phone_number_id: bool,
    latest_live_verification_ok: bool,
    latest_live_verification_at: Timestamp,
    max_age_days: int,
    *,
    now: Optional[datetime] = None,
) -> IntegrationContract:
    return evaluate_contract(
        (has_access_token, has_phone_number_id),
        latest_live_verification_ok,
        latest_live_verification_at,
        max_age_days,
        now=now,
    )


def evaluate_email_contract(
    has_api_key: bool,
    has_from_email: bool,
    latest_live_verification_ok: bool,
    latest_live_verification_at: Timestamp,
    max_age_days: int,
    *,
    now: Optional[datetime] = None,
) -> IntegrationContract:
    return evaluate_contract(
        (has_api_key, has_from_email),
        latest_live_verification_ok,
        latest_live_verification_at,
        max_age_days,
        now=now,
    )
