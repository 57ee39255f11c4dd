"""Tests for SBOM schema validation."""

import pytest

from core.exceptions import SbomValidationError
from core.schema import (
    ComponentType,
    HashAlgorithm,
    RelationshipType,
    validate_insert,
    validate_partial_update,
)


class TestValidateInsert:
    """Tests for full SBOM payload validation."""

    def test_valid_payload_round_trips(self, sbom_payload):
        """Test that a valid payload dumps back to the same record."""
        result = validate_insert(sbom_payload)

        assert result.to_record() == sbom_payload

    def test_full_component_keeps_camel_case_keys(self, sbom_payload, full_component):
        """Test that optional component fields survive with wire names."""
        sbom_payload["components"] = [full_component]

        record = validate_insert(sbom_payload).to_record()

        assert record["components"][0] == full_component
        assert "downloadLocation" in record["components"][0]

    def test_unknown_keys_are_dropped(self, sbom_payload):
        """Test that keys outside the schema are not stored."""
        sbom_payload["id"] = 99
        sbom_payload["components"][0]["bom-ref"] = "x"

        record = validate_insert(sbom_payload).to_record()

        assert "id" not in record
        assert "bom-ref" not in record["components"][0]

    def test_duplicate_components_allowed(self, sbom_payload):
        """Test that the same name/version may appear twice."""
        sbom_payload["components"].append(dict(sbom_payload["components"][0]))

        record = validate_insert(sbom_payload).to_record()

        assert len(record["components"]) == 2

    def test_relationships_not_checked_against_components(self, sbom_payload):
        """Test that relationship endpoints are free text."""
        sbom_payload["metadata"]["relationships"] = [{
            "sourceComponent": "not-a-component",
            "targetComponent": "libfoo",
            "relationshipType": "DEPENDS_ON",
        }]

        record = validate_insert(sbom_payload).to_record()

        assert record["metadata"]["relationships"][0]["sourceComponent"] == "not-a-component"

    @pytest.mark.parametrize("field", ["name", "version", "format"])
    def test_rejects_empty_top_level_strings(self, sbom_payload, field):
        """Test that name, version and format must be non-empty."""
        sbom_payload[field] = ""

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert field in exc_info.value.message

    @pytest.mark.parametrize("field", ["name", "version", "format", "components", "metadata"])
    def test_rejects_missing_fields(self, sbom_payload, field):
        """Test that every top-level field is required."""
        del sbom_payload[field]

        with pytest.raises(SbomValidationError):
            validate_insert(sbom_payload)

    def test_rejects_component_with_empty_name(self, sbom_payload):
        """Test that component name must be non-empty."""
        sbom_payload["components"][0]["name"] = ""

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "components.0.name" in exc_info.value.message

    def test_rejects_unknown_component_type(self, sbom_payload):
        """Test that component type must be in the fixed set."""
        sbom_payload["components"][0]["type"] = "plugin"

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "components.0.type" in exc_info.value.message

    def test_rejects_unknown_hash_algorithm(self, sbom_payload):
        """Test that hash algorithms are restricted."""
        sbom_payload["components"][0]["hashes"] = [{"algorithm": "SHA3-256", "value": "abc"}]

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "hashes.0.algorithm" in exc_info.value.message

    def test_rejects_unknown_relationship_type(self, sbom_payload):
        """Test that relationship types are restricted."""
        sbom_payload["metadata"]["relationships"] = [{
            "sourceComponent": "a",
            "targetComponent": "b",
            "relationshipType": "REQUIRES",
        }]

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "relationshipType" in exc_info.value.message

    @pytest.mark.parametrize("field", ["timestamp", "tools", "authors"])
    def test_rejects_incomplete_metadata(self, sbom_payload, field):
        """Test that metadata requires timestamp, tools and authors."""
        del sbom_payload["metadata"][field]

        with pytest.raises(SbomValidationError):
            validate_insert(sbom_payload)

    def test_aggregates_all_violations(self, sbom_payload):
        """Test that every violation is reported, not only the first."""
        sbom_payload["name"] = ""
        sbom_payload["components"][0]["type"] = "plugin"

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert len(exc_info.value.violations) == 2
        assert "; " in exc_info.value.message

    @pytest.mark.parametrize("payload", [None, [], "sbom", 42])
    def test_rejects_non_object(self, payload):
        """Test that only JSON objects are accepted."""
        with pytest.raises(SbomValidationError):
            validate_insert(payload)

    def test_rejects_non_string_name(self, sbom_payload):
        """Test that numbers are not coerced into names."""
        sbom_payload["name"] = 5

        with pytest.raises(SbomValidationError):
            validate_insert(sbom_payload)

    def test_rejects_null_optional_component_field(self, sbom_payload):
        """Test that an optional field may be omitted but not null."""
        sbom_payload["components"][0]["supplier"] = None

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "supplier cannot be null" in exc_info.value.message

    def test_rejects_null_under_wire_name(self, sbom_payload):
        sbom_payload["components"][0]["downloadLocation"] = None

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "downloadLocation" in exc_info.value.message

    def test_rejects_null_relationships(self, sbom_payload):
        sbom_payload["metadata"]["relationships"] = None

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "relationships cannot be null" in exc_info.value.message

    def test_rejects_null_author_email(self, sbom_payload):
        sbom_payload["metadata"]["authors"] = [{"name": "Jane", "email": None}]

        with pytest.raises(SbomValidationError) as exc_info:
            validate_insert(sbom_payload)

        assert "metadata.authors.0" in exc_info.value.message
        assert "email" in exc_info.value.message


class TestValidatePartialUpdate:
    """Tests for partial update validation."""

    def test_empty_update_is_valid(self):
        """Test that no fields at all is a valid update."""
        assert validate_partial_update({}).to_fields() == {}

    def test_only_supplied_fields_are_returned(self):
        """Test that absent fields are not reported as set."""
        fields = validate_partial_update({"version": "1.3"}).to_fields()

        assert fields == {"version": "1.3"}

    def test_empty_components_list_is_kept(self):
        """Test that clearing components is expressible."""
        fields = validate_partial_update({"components": []}).to_fields()

        assert fields == {"components": []}

    def test_supplied_components_must_be_complete(self):
        """Test that partially-specified components are rejected."""
        with pytest.raises(SbomValidationError):
            validate_partial_update({"components": [{"name": "libfoo"}]})

    def test_rejects_empty_name(self):
        """Test that a supplied name must be non-empty."""
        with pytest.raises(SbomValidationError):
            validate_partial_update({"name": ""})

    def test_rejects_explicit_null(self):
        """Test that null cannot clear a required field."""
        with pytest.raises(SbomValidationError) as exc_info:
            validate_partial_update({"metadata": None})

        assert "metadata" in exc_info.value.message

    def test_id_is_ignored(self):
        """Test that the id cannot be changed through an update."""
        assert validate_partial_update({"id": 7}).to_fields() == {}


class TestEnumerations:
    """Tests for the fixed value sets."""

    def test_component_types(self):
        assert {t.value for t in ComponentType} == {
            "library", "framework", "application", "container",
            "operating-system", "device", "file",
        }

    def test_hash_algorithms(self):
        assert {a.value for a in HashAlgorithm} == {"SHA-1", "SHA-256", "SHA-512", "MD5"}

    def test_relationship_types(self):
        assert len(RelationshipType) == 7
        assert RelationshipType("TEST_DEPENDENCY_OF") is RelationshipType.TEST_DEPENDENCY_OF
