import pytest
from pydantic import TypeAdapter, ValidationError

from flowdeploy.domain.models.references import (
    ExplicitRef,
    Reference,
    UnresolvedRef,
    is_unresolved,
)


@pytest.fixture
def adapter() -> TypeAdapter:
    return TypeAdapter(Reference)


class TestReferenceShape:
    def test_ref_property_selects_unresolved(self, adapter):
        ref = adapter.validate_python({"ref": "tasks/audit.json"})

        assert isinstance(ref, UnresolvedRef)
        assert ref.ref == "tasks/audit.json"
        assert is_unresolved(ref)

    def test_ref_property_wins_over_explicit_fields(self, adapter):
        ref = adapter.validate_python({"ref": "x", "key": "k", "domain": "d", "flow": "f", "version": "1"})

        assert isinstance(ref, UnresolvedRef)

    def test_null_ref_is_still_unresolved(self, adapter):
        assert isinstance(adapter.validate_python({"ref": None}), UnresolvedRef)

    def test_explicit_fields_select_explicit(self, adapter):
        ref = adapter.validate_python({"key": "k", "domain": "d", "flow": "f", "version": "1.0.0"})

        assert isinstance(ref, ExplicitRef)
        assert not is_unresolved(ref)

    def test_partial_explicit_reference_loads(self, adapter):
        ref = adapter.validate_python({"key": "k"})

        assert isinstance(ref, ExplicitRef)
        assert ref.domain is None

    def test_model_instances_pass_through(self, adapter):
        unresolved = UnresolvedRef(ref="a")
        explicit = ExplicitRef(key="k")

        assert adapter.validate_python(unresolved) == unresolved
        assert adapter.validate_python(explicit) == explicit

    def test_non_mapping_rejected(self, adapter):
        with pytest.raises(ValidationError):
            adapter.validate_python("tasks/audit.json")


class TestMissingFields:
    def test_complete_reference_has_no_missing_fields(self):
        ref = ExplicitRef(key="k", domain="d", flow="f", version="1.0.0")

        assert ref.missing_fields() == []

    def test_missing_fields_in_fixed_order(self):
        ref = ExplicitRef(version="", flow="UNRESOLVED", key="k")

        assert ref.missing_fields() == ["domain", "flow", "version"]

    def test_sentinel_is_case_sensitive(self):
        ref = ExplicitRef(key="unresolved", domain="d", flow="f", version="1")

        assert ref.missing_fields() == []
