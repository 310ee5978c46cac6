from __future__ import annotations

import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_MAX_ACTIONS, DEFAULT_VERIFICATION_MAX_AGE_DAYS


class VerificationConfig(BaseModel):
    """Freshness windows for live channel verification."""

    whatsapp_max_age_days: int = Field(default=DEFAULT_VERIFICATION_MAX_AGE_DAYS, ge=1)
    email_max_age_days: int = Field(default=DEFAULT_VERIFICATION_MAX_AGE_DAYS, ge=1)
    allow_live: bool = False

    def max_age_days(self, channel: str) -> int:
        if channel == "email":
            return self.email_max_age_days
        return self.whatsapp_max_age_days


class EngineConfig(BaseModel):
    """Top-level configuration model."""

    max_actions: int = Field(default=DEFAULT_MAX_ACTIONS, ge=0)
    max_pending_approvals: Optional[int] = None
    execution_dry_run: bool = True
    verification: VerificationConfig = Field(default_factory=VerificationConfig)


_ENV_OVERRIDES = (
    ("SOCIALCLAW_MAX_ACTIONS", None, "max_actions"),
    ("EXECUTION_DRY_RUN", None, "execution_dry_run"),
    ("VERIFY_ALLOW_LIVE", "verification", "allow_live"),
    ("WHATSAPP_VERIFICATION_MAX_AGE_DAYS", "verification", "whatsapp_max_age_days"),
    ("EMAIL_VERIFICATION_MAX_AGE_DAYS", "verification", "email_max_age_days"),
)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(data)
    verification = dict(merged.get("verification") or {})
    for env_name, section, field in _ENV_OVERRIDES:
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        target = verification if section == "verification" else merged
        target[field] = raw.strip()
    if verification:
        merged["verification"] = verification
    return merged


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to SOCIALCLAW_CONFIG env
            variable or 'socialclaw.yaml' in the current directory.

    Environment variables override file values, so deployments can flip
    dry-run or live verification without editing the file. Overrides go
    through the same validation as the file.

    Raises:
        pydantic.ValidationError: If the merged values are out of range or
            of the wrong type.
    """

    config_path = path or os.getenv("SOCIALCLAW_CONFIG", "socialclaw.yaml")
    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    return EngineConfig(**_apply_env_overrides(data))
