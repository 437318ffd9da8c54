import copy
from pathlib import Path
from typing import Any, Callable

import pytest

from flowdeploy.domain.models.diagnostics import NormalizationContext
from flowdeploy.domain.models.workflow import Workflow


def _ref(key: str, flow: str) -> dict[str, str]:
    return {"key": key, "domain": "core", "flow": flow, "version": "1.0.0"}


def _inline(code: str = "cmV0dXJuIHRydWU7") -> dict[str, str]:
    return {"location": "inline", "code": code}


_VALID_WORKFLOW: dict[str, Any] = {
    "key": "account-opening",
    "domain": "core",
    "flow": "sys-flows",
    "version": "1.0.0",
    "tags": ["banking"],
    "attributes": {
        "type": "F",
        "functions": [_ref("get-customer", "sys-functions")],
        "extensions": [_ref("customer-profile", "sys-extensions")],
        "features": [_ref("feature-flags", "sys-extensions")],
        "startTransition": {
            "key": "start",
            "target": "draft",
            "triggerType": 0,
            "versionStrategy": "Minor",
            "onExecutionTasks": [
                {"order": 1, "task": _ref("init-task", "sys-tasks"), "mapping": _inline()},
            ],
        },
        "states": [
            {
                "key": "draft",
                "stateType": 1,
                "versionStrategy": "Minor",
                "labels": [{"label": "Draft", "language": "en"}],
                "view": {"view": _ref("draft-view", "sys-views"), "loadData": True, "extensions": ["customer-profile"]},
                "onEntries": [
                    {"order": 1, "task": _ref("audit-task", "sys-tasks"), "mapping": _inline()},
                ],
                "onExits": [
                    {"order": 1, "task": _ref("notify-task", "sys-tasks"), "mapping": _inline()},
                ],
                "transitions": [
                    {
                        "key": "submit",
                        "target": "review",
                        "triggerType": 0,
                        "versionStrategy": "Minor",
                        "schema": _ref("submit-schema", "sys-schemas"),
                        "view": _ref("submit-view", "sys-views"),
                        "rule": _inline(),
                        "onExecutionTasks": [
                            {"order": 1, "task": _ref("submit-task", "sys-tasks"), "mapping": _inline()},
                        ],
                    },
                ],
            },
            {
                "key": "review",
                "stateType": 4,
                "subFlow": {
                    "type": "S",
                    "process": _ref("kyc-check", "sys-flows"),
                    "mapping": _inline(),
                },
                "transitions": [
                    {"key": "approve", "target": "done", "triggerType": 1},
                ],
            },
            {
                "key": "done",
                "stateType": 3,
                "stateSubType": 1,
            },
        ],
        "sharedTransitions": [
            {
                "key": "cancel",
                "target": "done",
                "triggerType": 0,
                "availableIn": ["draft", "review"],
                "rule": _inline(),
                "onExecutionTasks": [
                    {"order": 1, "task": _ref("cancel-task", "sys-tasks"), "mapping": _inline()},
                ],
            },
        ],
    },
}


@pytest.fixture
def workflow_doc() -> dict[str, Any]:
    """Raw document of a fully normalized workflow that passes every check.

    Returned as a fresh deep copy so tests can break it freely.
    """
    return copy.deepcopy(_VALID_WORKFLOW)


@pytest.fixture
def make_workflow() -> Callable[[dict[str, Any]], Workflow]:
    """Parse a raw document into a Workflow."""
    return Workflow.model_validate


@pytest.fixture
def context() -> NormalizationContext:
    """Empty diagnostic sink."""
    return NormalizationContext()


@pytest.fixture
def explicit_ref() -> Callable[..., dict[str, str]]:
    """Factory for explicit reference dicts."""

    def _factory(key: str = "some-component", flow: str = "sys-tasks", **overrides: str) -> dict[str, str]:
        ref = _ref(key, flow)
        ref.update(overrides)
        return ref

    return _factory


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer config in ~/.flowdeploy out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
