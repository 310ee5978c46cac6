"""Workflow contract model tests."""

import pytest
from pydantic import ValidationError

from socialclaw.contracts import (
    ActionConfig,
    ConditionConfig,
    DelayConfig,
    TriggerConfig,
    WorkflowNode,
    WorkflowStatus,
)
from socialclaw.errors import InvalidNodeConfig


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (WorkflowStatus.DRAFT, WorkflowStatus.APPROVED, True),
        (WorkflowStatus.APPROVED, WorkflowStatus.ARCHIVED, True),
        (WorkflowStatus.DRAFT, WorkflowStatus.ARCHIVED, False),
        (WorkflowStatus.APPROVED, WorkflowStatus.DRAFT, False),
        (WorkflowStatus.ARCHIVED, WorkflowStatus.APPROVED, False),
        (WorkflowStatus.ARCHIVED, WorkflowStatus.ARCHIVED, False),
    ],
)
def test_status_only_moves_forward(current, target, allowed):
    assert current.can_transition_to(target) is allowed


def test_typed_config_variants():
    trigger = WorkflowNode(id="t", type="trigger", config={"event": "lead.inactive"})
    condition = WorkflowNode(
        id="c", type="condition", config={"operator": "is_true", "path": "noReply", "stopOnFalse": True}
    )
    action = WorkflowNode(
        id="a", type="action", config={"action": "email.send", "template": "t1"}
    )
    delay = WorkflowNode(id="d", type="delay", config={"hours": 6})

    assert isinstance(trigger.typed_config(), TriggerConfig)
    parsed_condition = condition.typed_config()
    assert isinstance(parsed_condition, ConditionConfig)
    assert parsed_condition.stop_on_false is True
    parsed_action = action.typed_config()
    assert isinstance(parsed_action, ActionConfig)
    assert parsed_action.model_extra == {"template": "t1"}
    assert isinstance(delay.typed_config(), DelayConfig)


def test_condition_defaults():
    config = WorkflowNode(id="c", type="condition", config={"path": "lead.email"}).typed_config()
    assert config.operator == "exists"
    assert config.stop_on_false is False


def test_invalid_config_reports_node_and_reason():
    node = WorkflowNode(id="d1", type="delay", config={"hours": -1})
    with pytest.raises(InvalidNodeConfig) as exc:
        node.typed_config()
    assert exc.value.node_id == "d1"
    assert exc.value.reasons[0].startswith("hours ")


def test_nodes_are_immutable():
    node = WorkflowNode(id="t", type="trigger", config={})
    with pytest.raises(ValidationError):
        node.id = "other"
