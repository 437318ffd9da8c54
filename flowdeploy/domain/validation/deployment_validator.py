"""
Deployment validation for normalized workflows.

Certifies that a workflow which has already been through reference
resolution and script inlining is safe to deploy:
- required workflow fields are present
- every reachable reference is explicit and fully populated
- scripts are inlined and carry code
- states, transitions and shared transitions have their required fields

Findings are appended to a NormalizationContext; nothing is raised and the
workflow is never modified.
"""

import logging

from flowdeploy.domain.constants import (
    INLINE_LOCATION,
    MAPPER_FILE_MARKER,
    SCRIPT_FILE_SUFFIX,
)
from flowdeploy.domain.models.diagnostics import (
    NormalizationContext,
    add_error,
    add_warning,
)
from flowdeploy.domain.models.references import ExplicitRef, UnresolvedRef, is_unresolved
from flowdeploy.domain.models.workflow import (
    ExecutionTask,
    Script,
    SharedTransition,
    State,
    Transition,
    ViewBinding,
    Workflow,
    WorkflowAttributes,
)

logger = logging.getLogger(__name__)


class DeploymentValidator:
    """Validates normalized workflows before deployment."""

    def validate(self, workflow: Workflow, context: NormalizationContext) -> None:
        """Run every deployment check and record findings in context.

        Args:
            workflow: Normalized workflow document (read only)
            context: Diagnostic sink; grows on every call, never deduplicated
        """
        logger.debug(f"Validating workflow {workflow.domain}/{workflow.key}")

        attributes = workflow.attributes or WorkflowAttributes()

        self._validate_workflow_structure(workflow, context)
        self._validate_references(attributes, context)
        self._validate_scripts(attributes, context)

        for state in attributes.states or []:
            self._validate_state(state, context)

        for transition in attributes.shared_transitions or []:
            self._validate_shared_transition(transition, context)

        if attributes.start_transition is not None:
            self._validate_transition(attributes.start_transition, "startTransition", context)

    # --- Structure ---

    def _validate_workflow_structure(self, workflow: Workflow, context: NormalizationContext) -> None:
        if not workflow.key:
            add_error("Workflow missing required field: key", context)
        if not workflow.domain:
            add_error("Workflow missing required field: domain", context)
        if not workflow.flow:
            add_error("Workflow missing required field: flow", context)
        if not workflow.version:
            add_error("Workflow missing required field: version", context)
        if workflow.attributes is None:
            add_error("Workflow missing required field: attributes", context)

        attributes = workflow.attributes or WorkflowAttributes()
        if not attributes.states:
            add_error("Workflow must have at least one state", context)
        if attributes.start_transition is None:
            add_error("Workflow missing required field: attributes.startTransition", context)

    # --- References ---

    def _validate_references(self, attributes: WorkflowAttributes, context: NormalizationContext) -> None:
        for i, ref in enumerate(attributes.functions or []):
            self._check_reference(ref, "Function", f"functions[{i}]", context)

        for i, ref in enumerate(attributes.extensions or []):
            self._check_reference(ref, "Extension", f"extensions[{i}]", context)

        for i, ref in enumerate(attributes.features or []):
            self._check_reference(ref, "Feature", f"features[{i}]", context)

        for state in attributes.states or []:
            self._validate_state_references(state, context)

        for i, transition in enumerate(attributes.shared_transitions or []):
            self._validate_transition_references(transition, f"sharedTransition[{i}]", context)

        if attributes.start_transition is not None:
            self._validate_transition_references(attributes.start_transition, "startTransition", context)

    def _validate_state_references(self, state: State, context: NormalizationContext) -> None:
        location = f"state:{state.key}"

        self._check_view(state.view, f"{location}.view", context)

        for i, task in enumerate(state.on_entries or []):
            self._validate_execution_task_references(task, f"{location}.onEntries[{i}]", context)

        for i, task in enumerate(state.on_exits or []):
            self._validate_execution_task_references(task, f"{location}.onExits[{i}]", context)

        for i, transition in enumerate(state.transitions or []):
            self._validate_transition_references(transition, f"{location}.transitions[{i}]", context)

        if state.sub_flow is not None and state.sub_flow.process is not None:
            self._check_reference(
                state.sub_flow.process, "Subflow process", f"{location}.subFlow.process", context
            )

    def _validate_transition_references(
        self,
        transition: Transition,
        location: str,
        context: NormalizationContext,
    ) -> None:
        if transition.schema_ref is not None:
            self._check_reference(transition.schema_ref, "Schema", f"{location}.schema", context)

        self._check_view(transition.view, f"{location}.view", context)

        for i, task in enumerate(transition.on_execution_tasks or []):
            self._validate_execution_task_references(task, f"{location}.onExecutionTasks[{i}]", context)

    def _validate_execution_task_references(
        self,
        task: ExecutionTask,
        location: str,
        context: NormalizationContext,
    ) -> None:
        if task.task is not None:
            self._check_reference(task.task, "Task", f"{location}.task", context)

    def _check_view(self, view: ViewBinding | None, location: str, context: NormalizationContext) -> None:
        # Only the inner reference is checked; loadData/extensions are not.
        if view is not None:
            self._check_reference(view.view, "View", location, context)

    def _check_reference(
        self,
        ref: UnresolvedRef | ExplicitRef,
        kind: str,
        location: str,
        context: NormalizationContext,
    ) -> None:
        """Report an unresolved reference, or the unusable fields of an explicit one."""
        if is_unresolved(ref):
            add_error(f"{kind} reference not normalized: {location}", context)
            return

        for field in ref.missing_fields():
            add_error(f"Reference missing or unresolved {field}: {location}", context)

    # --- Scripts ---

    def _validate_scripts(self, attributes: WorkflowAttributes, context: NormalizationContext) -> None:
        start = attributes.start_transition
        if start is not None:
            for i, task in enumerate(start.on_execution_tasks or []):
                self._validate_execution_task_scripts(
                    task, f"startTransition.onExecutionTasks[{i}]", context
                )

        for i, transition in enumerate(attributes.shared_transitions or []):
            self._validate_transition_scripts(transition, f"sharedTransition[{i}]", context)

        for state in attributes.states or []:
            self._validate_state_scripts(state, context)

    def _validate_state_scripts(self, state: State, context: NormalizationContext) -> None:
        location = f"state:{state.key}"

        for i, task in enumerate(state.on_entries or []):
            self._validate_execution_task_scripts(task, f"{location}.onEntries[{i}]", context)

        for i, task in enumerate(state.on_exits or []):
            self._validate_execution_task_scripts(task, f"{location}.onExits[{i}]", context)

        for i, transition in enumerate(state.transitions or []):
            self._validate_transition_scripts(transition, f"{location}.transitions[{i}]", context)

        if state.sub_flow is not None and state.sub_flow.mapping is not None:
            self._validate_script_inlined(state.sub_flow.mapping, f"{location}.subFlow.mapping", context)

    def _validate_transition_scripts(
        self,
        transition: Transition,
        location: str,
        context: NormalizationContext,
    ) -> None:
        if transition.rule is not None:
            self._validate_script_inlined(transition.rule, f"{location}.rule", context)

        for i, task in enumerate(transition.on_execution_tasks or []):
            self._validate_execution_task_scripts(task, f"{location}.onExecutionTasks[{i}]", context)

    def _validate_execution_task_scripts(
        self,
        task: ExecutionTask,
        location: str,
        context: NormalizationContext,
    ) -> None:
        if task.mapping is not None:
            self._validate_script_inlined(task.mapping, f"{location}.mapping", context)

    def _validate_script_inlined(self, script: Script, location: str, context: NormalizationContext) -> None:
        """Warn when a script still points at a source file or carries no code.

        The .csx and mapper.json checks are independent and may both fire.
        """
        source = script.location
        if source is not None and source != INLINE_LOCATION:
            if source.endswith(SCRIPT_FILE_SUFFIX):
                add_warning(f"Script not inlined, may fail deployment: {location} ({source})", context)
            if MAPPER_FILE_MARKER in source:
                add_warning(f"Mapper not compiled, may fail deployment: {location} ({source})", context)

        if not script.code or script.code.strip() == "":
            add_warning(f"Script has no code content: {location}", context)

    # --- Elements ---

    def _validate_state(self, state: State, context: NormalizationContext) -> None:
        if not state.key:
            add_error("State missing required field: key", context)
        if state.state_type is None:
            add_error(f"State missing required field: stateType (state: {state.key})", context)

    def _validate_shared_transition(self, transition: SharedTransition, context: NormalizationContext) -> None:
        if not transition.key:
            add_error("Shared transition missing required field: key", context)
        if not transition.available_in:
            add_error(f"Shared transition missing availableIn: {transition.key}", context)
        self._validate_transition(transition, f"sharedTransition:{transition.key}", context)

    def _validate_transition(self, transition: Transition, location: str, context: NormalizationContext) -> None:
        if not transition.key:
            add_error(f"Transition missing required field: key ({location})", context)
        if not transition.target:
            add_error(f"Transition missing required field: target ({location})", context)
