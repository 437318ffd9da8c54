from pydantic import BaseModel, Field

from flowdeploy.domain.constants import ERROR_TYPE, WARNING_TYPE


class Diagnostic(BaseModel):
    """A single finding. Errors block deployment; warnings are advisory."""

    type: str
    message: str


class NormalizationOptions(BaseModel):
    fail_on_warnings: bool = False


class NormalizationStats(BaseModel):
    total_states: int = 0
    total_transitions: int = 0


class NormalizationContext(BaseModel):
    """Accumulator for diagnostics produced during one validation run.

    Append-only; identical messages are never merged.
    """

    options: NormalizationOptions = Field(default_factory=NormalizationOptions)
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)
    stats: NormalizationStats = Field(default_factory=NormalizationStats)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def add_error(message: str, context: NormalizationContext) -> None:
    context.errors.append(Diagnostic(type=ERROR_TYPE, message=message))


def add_warning(message: str, context: NormalizationContext) -> None:
    context.warnings.append(Diagnostic(type=WARNING_TYPE, message=message))
