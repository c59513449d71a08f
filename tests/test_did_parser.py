"""Tests for schema extraction from dids."""

import pytest

from foxden_doi.errors import SchemaConflictError
from foxden_doi.utils.did_parser import extract_schema


class TestExtractSchema:
    """Test schema extraction from the beamline segment."""

    def test_schema_from_first_segment(self):
        """Test that the beamline value is the schema."""
        assert extract_schema("beamline=id1a3/experiment=42") == "id1a3"

    def test_schema_from_leading_slash_did(self):
        """Test that a leading slash does not hide the beamline segment."""
        did = "/beamline=3a/btr=test-1234-a/cycle=2023-3/sample_name=PAT-1"
        assert extract_schema(did) == "3a"

    def test_missing_beamline_is_empty_schema(self):
        """Test that a did without beamline maps to the empty schema."""
        assert extract_schema("experiment=42/sample=Fe2O3") == ""

    def test_empty_did(self):
        """Test that an empty did maps to the empty schema."""
        assert extract_schema("") == ""

    def test_first_beamline_segment_wins(self):
        """Test that only the first beamline segment is used."""
        assert extract_schema("beamline=id1a3/beamline=id3a") == "id1a3"

    def test_key_must_be_a_segment_prefix(self):
        """A key that merely ends with 'beamline' is not the schema segment."""
        assert extract_schema("old_beamline=id3a/experiment=1") == ""

    @pytest.mark.parametrize("did", [
        "beamline=id1a3,id3a/experiment=42",
        "/beamline=3a,3b/btr=x",
        "beamline=,/x=1",
    ])
    def test_multiple_schemas_rejected(self, did):
        """Test that a comma in the beamline value raises SchemaConflictError."""
        with pytest.raises(SchemaConflictError) as exc_info:
            extract_schema(did)

        assert exc_info.value.did == did
        assert "," in exc_info.value.schema
        assert "multiple schemas" in str(exc_info.value)
