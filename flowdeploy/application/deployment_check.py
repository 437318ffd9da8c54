"""Pre-deployment check of a normalized workflow.

Wraps DeploymentValidator with a fresh context per run and turns the
collected diagnostics into a pass/fail result.
"""

import logging

from pydantic import BaseModel, Field

from flowdeploy.domain.models.diagnostics import (
    Diagnostic,
    NormalizationContext,
    NormalizationOptions,
    NormalizationStats,
)
from flowdeploy.domain.models.workflow import Workflow
from flowdeploy.domain.validation import DeploymentValidator

logger = logging.getLogger(__name__)


class DeploymentCheckResult(BaseModel):
    success: bool
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)
    stats: NormalizationStats = Field(default_factory=NormalizationStats)


def count_transitions(workflow: Workflow) -> int:
    """Count the start transition plus shared and per-state transitions."""
    attributes = workflow.attributes
    if attributes is None:
        return 0

    count = 1 if attributes.start_transition is not None else 0
    count += len(attributes.shared_transitions or [])
    for state in attributes.states or []:
        count += len(state.transitions or [])
    return count


def _build_stats(workflow: Workflow) -> NormalizationStats:
    states = workflow.attributes.states if workflow.attributes else None
    return NormalizationStats(
        total_states=len(states or []),
        total_transitions=count_transitions(workflow),
    )


def check_workflow(
    workflow: Workflow,
    options: NormalizationOptions | None = None,
    validator: DeploymentValidator | None = None,
) -> DeploymentCheckResult:
    """Validate a workflow and decide whether it may be deployed.

    Args:
        workflow: Normalized workflow document
        options: Validation options; warnings only fail the check when
            fail_on_warnings is set
        validator: Validator to use (a new one by default)

    Returns:
        DeploymentCheckResult with the diagnostics of this run
    """
    context = NormalizationContext(
        options=options or NormalizationOptions(),
        stats=_build_stats(workflow),
    )

    (validator or DeploymentValidator()).validate(workflow, context)

    success = not context.has_errors and (
        not context.has_warnings or not context.options.fail_on_warnings
    )

    logger.info(
        f"Checked workflow {workflow.domain}/{workflow.key}: "
        f"states={context.stats.total_states} "
        f"transitions={context.stats.total_transitions} "
        f"errors={len(context.errors)} "
        f"warnings={len(context.warnings)} "
        f"success={success}"
    )

    return DeploymentCheckResult(
        success=success,
        errors=list(context.errors),
        warnings=list(context.warnings),
        stats=context.stats,
    )
