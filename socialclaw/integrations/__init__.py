"""Integration readiness evaluation for external channels."""

from .channels import CHANNELS, ChannelSpec, get_channel
from .contract import (
    IntegrationContract,
    evaluate_contract,
    evaluate_email_contract,
    evaluate_whatsapp_contract,
)
from .readiness import ChannelReadiness, CredentialFacts, assess_channel
from .suggestions import Suggestion, build_fix_suggestions

__all__ = [
    "CHANNELS",
    "ChannelSpec",
    "get_channel",
    "IntegrationContract",
    "evaluate_contract",
    "evaluate_email_contract",
    "evaluate_whatsapp_contract",
    "ChannelReadiness",
    "CredentialFacts",
    "assess_channel",
    "Suggestion",
    "build_fix_suggestions",
]
