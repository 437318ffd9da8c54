"""Domain validation utilities."""

from .deployment_validator import DeploymentValidator

__all__ = [
    "DeploymentValidator",
]
