"""Unit tests for the concept_progress table layout."""

from masterly.kernel.models import ConceptProgress


class TestConceptProgressColumns:
    """One engine-written modification timestamp per record."""

    def test_last_updated_is_the_only_modification_stamp(self):
        columns = ConceptProgress.__table__.c
        assert "last_updated" in columns
        assert "updated_at" not in columns
        assert columns["last_updated"].onupdate is None

    def test_created_at_set_by_database(self):
        created_at = ConceptProgress.__table__.c["created_at"]
        assert created_at.server_default is not None
        assert created_at.nullable is False
