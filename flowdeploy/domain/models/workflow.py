"""Workflow document model.

Mirrors the camelCase JSON layout of a normalized workflow definition.
Every field is optional: incomplete documents must load so the deployment
validator can report what is missing instead of failing at parse time.
Unknown keys (labels, triggers, timers, comments) are ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from flowdeploy.domain.models.references import DocumentStr, Reference


class _DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Script(_DocumentModel):
    """Mapping or rule body. Deployed scripts have location 'inline'."""

    location: str | None = None
    code: str | None = None


class ExecutionTask(_DocumentModel):
    order: int | None = None
    task: Reference | None = None
    mapping: Script | None = None


class ViewBinding(_DocumentModel):
    """View reference plus its display options.

    Documents may give a view either as a flat reference or wrapped as
    ``{view, loadData, extensions}``; both load into this shape.
    """

    view: Reference
    load_data: Any = None
    extensions: Any = None


def _coerce_view_binding(value: Any) -> Any:
    if value is None or isinstance(value, ViewBinding):
        return value
    # Wrapper only when the inner view is actually populated.
    if isinstance(value, dict) and value.get("view"):
        return value
    return {"view": value}


class Transition(_DocumentModel):
    key: DocumentStr | None = None
    target: DocumentStr | None = None
    trigger_type: int | None = None
    version_strategy: str | None = None
    schema_ref: Reference | None = Field(default=None, alias="schema")
    view: ViewBinding | None = None
    rule: Script | None = None
    mapping: Script | None = None
    on_execution_tasks: list[ExecutionTask] | None = None

    @field_validator("view", mode="before")
    @classmethod
    def _normalize_view(cls, v: Any) -> Any:
        return _coerce_view_binding(v)


class SharedTransition(Transition):
    available_in: list[DocumentStr] | None = None


class SubFlow(_DocumentModel):
    type: str | None = None
    process: Reference | None = None
    mapping: Script | None = None


class State(_DocumentModel):
    key: DocumentStr | None = None
    # 0 is a legitimate discriminator value; only None means missing.
    state_type: int | str | None = None
    state_sub_type: int | None = None
    version_strategy: str | None = None
    view: ViewBinding | None = None
    on_entries: list[ExecutionTask] | None = None
    on_exits: list[ExecutionTask] | None = None
    transitions: list[Transition] | None = None
    sub_flow: SubFlow | None = None

    @field_validator("view", mode="before")
    @classmethod
    def _normalize_view(cls, v: Any) -> Any:
        return _coerce_view_binding(v)


class WorkflowAttributes(_DocumentModel):
    type: str | None = None
    states: list[State] | None = None
    start_transition: Transition | None = None
    shared_transitions: list[SharedTransition] | None = None
    functions: list[Reference] | None = None
    extensions: list[Reference] | None = None
    # Alternative name for extensions
    features: list[Reference] | None = None


class Workflow(_DocumentModel):
    """Root aggregate of a workflow definition."""

    key: DocumentStr | None = None
    domain: DocumentStr | None = None
    flow: DocumentStr | None = None
    version: DocumentStr | None = None
    flow_version: DocumentStr | None = None
    tags: list[str] | None = None
    attributes: WorkflowAttributes | None = None
