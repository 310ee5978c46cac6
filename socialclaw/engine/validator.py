"""Structural validation of workflow definitions before storage or execution."""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Mapping

from pydantic import BaseModel, Field, ValidationError

from ..contracts import WorkflowDefinition
from ..errors import InvalidNodeConfig
from .actions import normalize_action


class ValidationResult(BaseModel):
    ok: bool
    errors: List[str] = Field(default_factory=list)


def _pointer(loc: tuple) -> str:
    return "/" + "/".join(str(part) for part in loc) if loc else "/"


def _format_errors(error: ValidationError) -> List[str]:
    out = []
    for err in error.errors():
        message = err["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        out.append(f"{_pointer(err['loc'])} {message}")
    return out


def _semantic_errors(workflow: WorkflowDefinition) -> List[str]:
    errors: List[str] = []

    counts = Counter(node.id for node in workflow.nodes)
    for index, node in enumerate(workflow.nodes):
        if counts[node.id] > 1:
            errors.append(f"/nodes/{index}/id duplicate node id '{node.id}'")

    declared = {normalize_action(a) for a in workflow.actions}
    for index, node in enumerate(workflow.nodes):
        try:
            config = node.typed_config()
        except InvalidNodeConfig as e:
            errors.extend(f"/nodes/{index}/config/{reason}" for reason in e.reasons)
            continue
        if node.type == "action" and normalize_action(config.action) not in declared:
            errors.append(
                f"/nodes/{index}/config/action '{config.action}' is not listed in /actions"
            )
    return errors


def validate_workflow(candidate: Any) -> ValidationResult:
    """Validate ``candidate`` and collect every violation found.

    Never raises. Structural errors are reported first; semantic checks
    (unique node ids, per-type node config, declared actions) only run once
    the structure is sound.
    """
    if isinstance(candidate, WorkflowDefinition):
        workflow = candidate
    elif not isinstance(candidate, Mapping):
        return ValidationResult(ok=False, errors=["/ must be object"])
    else:
        try:
            workflow = WorkflowDefinition.model_validate(dict(candidate))
        except ValidationError as e:
            return ValidationResult(ok=False, errors=_format_errors(e))

    errors = _semantic_errors(workflow)
    if errors:
        return ValidationResult(ok=False, errors=errors)
    return ValidationResult(ok=True)
