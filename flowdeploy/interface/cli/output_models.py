from typing import Literal
from pydantic import BaseModel, Field


class BaseOutput(BaseModel):
    schema_version: int = 1
    command: Literal["validate"]
    exit_code: int
    error: str | None = None


class WorkflowValidationResult(BaseModel):
    """Result of validating a single workflow file."""

    path: str
    success: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    # Set when the file could not be loaded at all.
    error: str | None = None


class ValidateOutput(BaseOutput):
    """Output for validate command."""

    command: Literal["validate"] = "validate"
    results: list[WorkflowValidationResult] = Field(default_factory=list)
    all_passed: bool = True
