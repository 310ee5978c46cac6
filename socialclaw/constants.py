"""Shared constants for the socialclaw engine."""

DEFAULT_MAX_ACTIONS = 200
DEFAULT_VERIFICATION_MAX_AGE_DAYS = 30

# Static allow-list of side-effecting action identifiers.
SUPPORTED_ACTIONS = frozenset(
    {
        "email.send",
        "whatsapp.send_template",
        "crm.update_status",
    }
)

# Error codes surfaced to the API layer. These strings are stable.
EXECUTION_CAP_EXCEEDED = "execution_cap_exceeded"
UNSUPPORTED_ACTION = "unsupported_action"
APPROVAL_QUEUE_OVERFLOW = "approval_queue_overflow"
INVALID_ACTION_PAYLOAD = "invalid_action_payload"
INVALID_NODE_CONFIG = "invalid_node_config"
WORKFLOW_VERSION_NOT_FOUND = "workflow_version_not_found"

POLICY_ERROR_CODES = frozenset(
    {EXECUTION_CAP_EXCEEDED, UNSUPPORTED_ACTION, APPROVAL_QUEUE_OVERFLOW}
)
