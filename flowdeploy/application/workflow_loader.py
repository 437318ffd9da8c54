"""Load workflow documents from JSON or YAML files."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from flowdeploy.domain.constants import WORKFLOW_JSON_SUFFIXES, WORKFLOW_YAML_SUFFIXES
from flowdeploy.domain.errors import WorkflowLoadError
from flowdeploy.domain.models.workflow import Workflow

logger = logging.getLogger(__name__)


def _error_location(loc: tuple[Any, ...]) -> str:
    """Render a pydantic error location as a dotted path, e.g. attributes.states[0].key."""
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered or "<root>"


def parse_workflow(data: Any, *, path: Path | None = None) -> Workflow:
    """Validate an in-memory document into a Workflow.

    Raises:
        WorkflowLoadError: If the root is not a mapping or the shape is invalid
    """
    if not isinstance(data, dict):
        raise WorkflowLoadError("Workflow document root must be a mapping", path=path)

    try:
        return Workflow.model_validate(data)
    except ValidationError as e:
        locations = ", ".join(_error_location(err["loc"]) for err in e.errors())
        raise WorkflowLoadError(f"Invalid workflow document at {locations}", path=path, cause=e) from e


def load_workflow(path: Path) -> Workflow:
    """Read and parse a workflow file.

    JSON is used for .json files and YAML for .yaml/.yml files.

    Raises:
        WorkflowLoadError: If the file is missing, unreadable or malformed
    """
    suffix = path.suffix.lower()
    if suffix not in WORKFLOW_JSON_SUFFIXES + WORKFLOW_YAML_SUFFIXES:
        raise WorkflowLoadError(f"Unsupported workflow file type '{suffix}'", path=path)

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise WorkflowLoadError("Workflow file not found", path=path, cause=e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise WorkflowLoadError("Failed to read workflow file", path=path, cause=e) from e

    if suffix in WORKFLOW_JSON_SUFFIXES:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise WorkflowLoadError("Malformed JSON", path=path, cause=e) from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise WorkflowLoadError("Malformed YAML", path=path, cause=e) from e

    workflow = parse_workflow(data, path=path)
    logger.debug(f"Loaded workflow {workflow.domain}/{workflow.key} from {path}")
    return workflow
