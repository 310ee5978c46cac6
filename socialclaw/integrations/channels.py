"""Per-channel credential requirements and remediation wording."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class CredentialRequirement(BaseModel):
    """A credential a channel needs, with the suggestion that fixes it."""

    name: str
    suggestion_id: str
    title: str
    action: str


class ChannelSpec(BaseModel):
    name: str
    provider: str
    credentials: List[CredentialRequirement]

    @property
    def credential_names(self) -> List[str]:
        return [c.name for c in self.credentials]


WHATSAPP = ChannelSpec(
    name="whatsapp",
    provider="whatsapp",
    credentials=[
        CredentialRequirement(
            name="access_token",
            suggestion_id="connect_access_token",
            title="Connect WhatsApp access token",
            action="POST /v1/clients/:clientId/credentials/whatsapp with accessToken",
        ),
        CredentialRequirement(
            name="phone_number_id",
            suggestion_id="set_phone_number_id",
            title="Set WhatsApp phone number id",
            action="POST /v1/clients/:clientId/credentials/whatsapp with phoneNumberId",
        ),
    ],
)

EMAIL = ChannelSpec(
    name="email",
    provider="email_sendgrid",
    credentials=[
        CredentialRequirement(
            name="api_key",
            suggestion_id="connect_api_key",
            title="Connect SendGrid API key",
            action="POST /v1/clients/:clientId/credentials/email with apiKey",
        ),
        CredentialRequirement(
            name="from_email",
            suggestion_id="set_from_email",
            title="Set sender email address",
            action="POST /v1/clients/:clientId/credentials/email with fromEmail",
        ),
    ],
)

CHANNELS: Dict[str, ChannelSpec] = {c.name: c for c in (WHATSAPP, EMAIL)}


def get_channel(name: str) -> ChannelSpec:
    try:
        return CHANNELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unsupported channel: {name}") from None
