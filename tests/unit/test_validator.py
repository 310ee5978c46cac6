"""Workflow definition validation tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
import yaml

from socialclaw.contracts import WorkflowDefinition
from socialclaw.engine import validate_workflow


@pytest.fixture
def document():
    path = Path(__file__).parent.parent / "fixtures" / "reengage_workflow.yaml"
    return yaml.safe_load(path.read_text())


def _has(errors, prefix):
    return any(e.startswith(prefix + " ") for e in errors)


def test_valid_workflow(document):
    result = validate_workflow(document)
    assert result.ok is True
    assert result.errors == []


def test_accepts_parsed_definition(document):
    assert validate_workflow(WorkflowDefinition.model_validate(document)).ok


def test_accumulates_all_structural_errors(document):
    document["name"] = "ab"
    document["version"] = 0
    document["status"] = "live"
    document["triggers"] = []
    document["nodes"] = []
    result = validate_workflow(document)
    assert result.ok is False
    for location in ("/name", "/version", "/status", "/triggers", "/nodes"):
        assert _has(result.errors, location), result.errors


def test_missing_fields_are_reported(document):
    del document["tenantId"]
    del document["metadata"]["createdAt"]
    result = validate_workflow(document)
    assert "/tenantId Field required" in result.errors
    assert "/metadata/createdAt Field required" in result.errors


@pytest.mark.parametrize("version", ["1", True, 1.5, -2])
def test_version_must_be_positive_integer(document, version):
    document["version"] = version
    result = validate_workflow(document)
    assert not result.ok
    assert _has(result.errors, "/version")


def test_created_at_must_be_timestamp(document):
    document["metadata"]["createdAt"] = "last tuesday"
    result = validate_workflow(document)
    assert "/metadata/createdAt must match format date-time" in result.errors

    document["metadata"]["createdAt"] = "2026-10-01"
    assert not validate_workflow(document).ok


@pytest.mark.parametrize("created_at", ["2026-10-01T09:00:00", "2026-10-01T09:00:00.123"])
def test_created_at_requires_offset(document, created_at):
    document["metadata"]["createdAt"] = created_at
    result = validate_workflow(document)
    assert "/metadata/createdAt must match format date-time" in result.errors


def test_created_at_accepts_datetime_objects(document):
    document["metadata"]["createdAt"] = datetime(2026, 10, 1, 9, tzinfo=timezone.utc)
    assert validate_workflow(document).ok

    document["metadata"]["createdAt"] = datetime(2026, 10, 1, 9)
    assert not validate_workflow(document).ok


def test_node_shape_errors(document):
    document["nodes"][0]["type"] = "loop"
    document["nodes"][1]["config"] = ["not", "an", "object"]
    del document["nodes"][2]["id"]
    result = validate_workflow(document)
    assert _has(result.errors, "/nodes/0/type")
    assert _has(result.errors, "/nodes/1/config")
    assert "/nodes/2/id Field required" in result.errors


def test_actions_and_conditions_types(document):
    document["actions"] = []
    document["conditions"] = [1]
    result = validate_workflow(document)
    assert _has(result.errors, "/actions")
    assert _has(result.errors, "/conditions/0")


def test_empty_conditions_allowed(document):
    document["conditions"] = []
    assert validate_workflow(document).ok


@pytest.mark.parametrize("candidate", [None, "workflow", 42, ["a"]])
def test_non_object_candidate(candidate):
    result = validate_workflow(candidate)
    assert result.ok is False
    assert result.errors == ["/ must be object"]


def test_duplicate_node_ids(document):
    document["nodes"][3]["id"] = "wait"
    result = validate_workflow(document)
    assert "/nodes/2/id duplicate node id 'wait'" in result.errors
    assert "/nodes/3/id duplicate node id 'wait'" in result.errors


def test_action_must_be_declared(document):
    document["nodes"][3]["config"]["action"] = "whatsapp.send_template"
    result = validate_workflow(document)
    assert result.errors == [
        "/nodes/3/config/action 'whatsapp.send_template' is not listed in /actions"
    ]


def test_node_config_errors_accumulate(document):
    del document["nodes"][1]["config"]["path"]
    document["nodes"][2]["config"]["hours"] = -4
    del document["nodes"][3]["config"]["action"]
    result = validate_workflow(document)
    assert "/nodes/1/config/path Field required" in result.errors
    assert _has(result.errors, "/nodes/2/config/hours")
    assert "/nodes/3/config/action Field required" in result.errors


def test_validation_does_not_mutate_input(document):
    snapshot = yaml.safe_dump(document)
    validate_workflow(document)
    assert yaml.safe_dump(document) == snapshot
