"""Component references used throughout a workflow document.

A reference is either unresolved (a bare ``{"ref": "..."}`` pointer left by
authoring tools) or explicit (``{key, domain, flow, version}``). Only
explicit references may be deployed.
"""

from typing import Annotated, Any, Union

from pydantic import BaseModel, BeforeValidator, Discriminator, Tag

from flowdeploy.domain.constants import UNRESOLVED


REFERENCE_FIELDS = ("key", "domain", "flow", "version")


def _scalar_to_str(value: Any) -> Any:
    # YAML reads `version: 1.0` as a float; identifiers are always strings.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


DocumentStr = Annotated[str, BeforeValidator(_scalar_to_str)]


class UnresolvedRef(BaseModel):
    """Bare pointer that the normalizer has not rewritten yet."""

    ref: DocumentStr | None = None


class ExplicitRef(BaseModel):
    """Fully-qualified pointer to a deployable component.

    Fields are optional so that a half-resolved reference can still be
    loaded and reported on.
    """

    key: DocumentStr | None = None
    domain: DocumentStr | None = None
    flow: DocumentStr | None = None
    version: DocumentStr | None = None

    def missing_fields(self) -> list[str]:
        """Return fields that are empty or still hold the UNRESOLVED sentinel.

        Order is always key, domain, flow, version.
        """
        missing = []
        for name in REFERENCE_FIELDS:
            value = getattr(self, name)
            if not value or value == UNRESOLVED:
                missing.append(name)
        return missing


def _reference_shape(value: Any) -> str:
    # Any mapping carrying a 'ref' property is unresolved, regardless of other keys.
    if isinstance(value, dict):
        return "unresolved" if "ref" in value else "explicit"
    if isinstance(value, UnresolvedRef):
        return "unresolved"
    return "explicit"


Reference = Annotated[
    Union[
        Annotated[UnresolvedRef, Tag("unresolved")],
        Annotated[ExplicitRef, Tag("explicit")],
    ],
    Discriminator(_reference_shape),
]


def is_unresolved(ref: UnresolvedRef | ExplicitRef) -> bool:
    return isinstance(ref, UnresolvedRef)
