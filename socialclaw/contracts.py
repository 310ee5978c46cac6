"""Core workflow contracts for the socialclaw engine."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .errors import InvalidNodeConfig

NodeType = Literal["trigger", "condition", "action", "delay"]
EventLevel = Literal["info", "warn", "error"]


class _CamelModel(BaseModel):
    """Accepts camelCase documents as well as snake_case keyword arguments."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkflowStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    ARCHIVED = "archived"

    def can_transition_to(self, target: "WorkflowStatus") -> bool:
        """Lifecycle only moves forward: draft -> approved -> archived."""
        order = [WorkflowStatus.DRAFT, WorkflowStatus.APPROVED, WorkflowStatus.ARCHIVED]
        return order.index(target) == order.index(self) + 1


class TriggerConfig(_CamelModel):
    """Advisory trigger declaration. Not matched against the incoming event."""

    event: str = ""


class ConditionConfig(_CamelModel):
    operator: str = "exists"
    path: str
    value: Any = None
    stop_on_false: bool = False


class ActionConfig(_CamelModel):
    """Action identifier plus handler-specific params (``to``, ``template``...)."""

    model_config = ConfigDict(extra="allow")

    action: StrictStr = Field(min_length=1)


class DelayConfig(_CamelModel):
    hours: float = Field(default=0, ge=0)


NodeConfig = Union[TriggerConfig, ConditionConfig, ActionConfig, DelayConfig]

_CONFIG_TYPES: Dict[str, type[BaseModel]] = {
    "trigger": TriggerConfig,
    "condition": ConditionConfig,
    "action": ActionConfig,
    "delay": DelayConfig,
}


class WorkflowNode(_CamelModel):
    """One step in a workflow. ``config`` keys depend on ``type``."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr
    type: NodeType
    config: Dict[str, Any]

    def typed_config(self) -> NodeConfig:
        """Parse ``config`` into the variant matching ``type``.

        Raises:
            InvalidNodeConfig: If the config does not fit the node type.
        """
        try:
            return _CONFIG_TYPES[self.type].model_validate(self.config)
        except ValidationError as e:
            reasons = [
                f"{'/'.join(str(p) for p in err['loc'])} {err['msg']}"
                for err in e.errors()
            ]
            raise InvalidNodeConfig(self.id, reasons) from e


class WorkflowMetadata(_CamelModel):
    created_by: StrictStr
    created_at: StrictStr
    intent: Optional[StrictStr] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _ensure_timestamp(cls, v: Any) -> Any:
        # YAML loaders resolve unquoted timestamps to datetime objects.
        if isinstance(v, datetime):
            parsed, v = v, v.isoformat()
        elif isinstance(v, date):
            raise ValueError("must match format date-time")
        elif isinstance(v, str):
            if "T" not in v.upper():
                raise ValueError("must match format date-time")
            try:
                parsed = datetime.fromisoformat(v)
            except ValueError:
                raise ValueError("must match format date-time") from None
        else:
            return v
        if parsed.tzinfo is None:
            raise ValueError("must match format date-time")
        return v


class WorkflowDefinition(_CamelModel):
    """Versioned, tenant-scoped workflow. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(min_length=1)
    tenant_id: StrictStr = Field(min_length=1)
    client_id: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=3)
    version: StrictInt = Field(ge=1)
    status: WorkflowStatus
    triggers: List[StrictStr] = Field(min_length=1)
    nodes: List[WorkflowNode] = Field(min_length=1)
    actions: List[StrictStr] = Field(min_length=1)
    conditions: List[StrictStr]
    metadata: WorkflowMetadata


class TriggerEvent(_CamelModel):
    """Business event that starts one execution."""

    trigger_type: str
    trigger_payload: Dict[str, Any] = Field(default_factory=dict)
    execution_id: str


class NodeEvent(_CamelModel):
    """Lifecycle event emitted while a node is processed."""

    level: EventLevel = "info"
    event_type: str
    node_id: str
    node_type: NodeType
    details: Dict[str, Any] = Field(default_factory=dict)


class ExecutionOutcome(_CamelModel):
    """Summary of one run. Not persisted by the engine."""

    actions_executed: int = 0
    stopped_by_condition: Optional[str] = None
    events: List[NodeEvent] = Field(default_factory=list)
