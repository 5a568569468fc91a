"""
Unit tests for request parsing and entity id normalization.
"""

import pytest

from embedding_service.errors import InvalidInput
from embedding_service.models.request_models import (
    EntityReference,
    normalize_entity_id,
    parse_entity_reference,
)

ENTITY_TYPES = {"meeting", "task", "ticket"}


class TestNormalizeEntityId:
    """Tests for normalize_entity_id."""

    @pytest.mark.parametrize("raw, expected", [
        ("abc-123", "abc-123"),
        ("  42 ", "42"),
        (42, "42"),
        (0, "0"),
        (7.0, "7"),
        (1.5, "1.5"),
    ])
    def test_valid_ids(self, raw, expected):
        assert normalize_entity_id(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", True, False, float("nan"), float("inf"), [1], {"id": 1}])
    def test_invalid_ids(self, raw):
        assert normalize_entity_id(raw) is None


class TestParseEntityReference:
    """Tests for parse_entity_reference."""

    def test_entity_type_and_id(self):
        reference = parse_entity_reference({"entity_type": "task", "entity_id": 42}, ENTITY_TYPES)

        assert reference == EntityReference(entity_type="task", entity_id="42")

    def test_legacy_meeting_id(self):
        reference = parse_entity_reference({"meeting_id": 7}, ENTITY_TYPES)

        assert reference == EntityReference(entity_type="meeting", entity_id="7")

    def test_meeting_id_overrides_entity_fields(self):
        body = {"entity_type": "ticket", "entity_id": 1, "meeting_id": "m-9"}
        reference = parse_entity_reference(body, ENTITY_TYPES)

        assert reference == EntityReference(entity_type="meeting", entity_id="m-9")

    def test_null_meeting_id_is_ignored(self):
        body = {"entity_type": "task", "entity_id": 3, "meeting_id": None}
        reference = parse_entity_reference(body, ENTITY_TYPES)

        assert reference.entity_type == "task"

    @pytest.mark.parametrize("body", [None, [], "task", 42])
    def test_non_object_body_rejected(self, body):
        with pytest.raises(InvalidInput):
            parse_entity_reference(body, ENTITY_TYPES)

    def test_missing_entity_type_rejected(self):
        with pytest.raises(InvalidInput, match="entity_type is required"):
            parse_entity_reference({"entity_id": 1}, ENTITY_TYPES)

    @pytest.mark.parametrize("entity_type", ["project", "", "TASK", 5])
    def test_unsupported_entity_type_rejected(self, entity_type):
        with pytest.raises(InvalidInput, match="unsupported entity_type"):
            parse_entity_reference({"entity_type": entity_type, "entity_id": 1}, ENTITY_TYPES)

    @pytest.mark.parametrize("entity_id", [None, "", True, {"id": 1}])
    def test_bad_entity_id_rejected(self, entity_id):
        with pytest.raises(InvalidInput, match="entity_id"):
            parse_entity_reference({"entity_type": "task", "entity_id": entity_id}, ENTITY_TYPES)

    def test_missing_entity_id_rejected(self):
        with pytest.raises(InvalidInput):
            parse_entity_reference({"entity_type": "task"}, ENTITY_TYPES)

    def test_configured_entity_types_are_respected(self):
        reference = parse_entity_reference({"entity_type": "project", "entity_id": "p1"}, {"project"})

        assert reference.entity_type == "project"
