"""Domain models for the workflow deployment validator."""

from .references import (
    ExplicitRef,
    Reference,
    UnresolvedRef,
    is_unresolved,
)

from .workflow import (
    ExecutionTask,
    Script,
    SharedTransition,
    State,
    SubFlow,
    Transition,
    ViewBinding,
    Workflow,
    WorkflowAttributes,
)
from .diagnostics import (
    Diagnostic,
    NormalizationContext,
    NormalizationOptions,
    NormalizationStats,
    add_error,
    add_warning,
)


__all__ = [
    "ExplicitRef",
    "Reference",
    "UnresolvedRef",
    "is_unresolved",
    "ExecutionTask",
    "Script",
    "SharedTransition",
    "State",
    "SubFlow",
    "Transition",
    "ViewBinding",
    "Workflow",
    "WorkflowAttributes",
    "Diagnostic",
    "NormalizationContext",
    "NormalizationOptions",
    "NormalizationStats",
    "add_error",
    "add_warning",
]
