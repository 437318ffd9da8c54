"""Domain-level exceptions for flowdeploy."""

from pathlib import Path


class WorkflowLoadError(Exception):
    """Raised when a workflow document cannot be read or parsed."""

    def __init__(self, message: str, *, path: Path | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"
