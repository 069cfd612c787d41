"""Tests for the directory schema definition."""

import os

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from rider_directory.db.database import init_database
from rider_directory.db.schema import CampaignRider, Rider, Tag


class TestDatabaseCreation:
    """Test database creation."""

    def test_database_creation(self, temp_sqlite_db):
        """Creates database with all tables."""
        session_maker = init_database(f"sqlite:///{temp_sqlite_db}")
        assert os.path.exists(temp_sqlite_db)

        inspector = inspect(session_maker.kw["bind"])
        tables = inspector.get_table_names()

        assert "riders" in tables
        assert "tags" in tables
        assert "riders_tags" in tables
        assert "campaigns_riders" in tables

    def test_creates_missing_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "directory.db"
        init_database(f"sqlite:///{db_path}")
        assert db_path.exists()

    def test_in_memory_database(self):
        session_maker = init_database("sqlite:///:memory:")
        with session_maker() as session:
            assert session.query(Rider).count() == 0


class TestRidersTable:
    def test_riders_table_columns(self, session_maker):
        inspector = inspect(session_maker.kw["bind"])
        columns = {col["name"]: col for col in inspector.get_columns("riders")}

        for name in ("id", "name", "email", "phone", "pronouns", "postal", "city"):
            assert name in columns
        assert columns["id"]["primary_key"] == 1

    def test_defaults_applied_on_insert(self, session):
        rider = Rider(name="Ada", email="ada@example.com", phone="14169671111")
        session.add(rider)
        session.commit()

        assert rider.city == "Toronto"
        assert rider.province == "Ontario"
        assert rider.country == "Canada"
        assert rider.inserted_at is not None

    def test_email_is_unique(self, session):
        session.add(Rider(name="A", email="same@example.com", phone="14169671111"))
        session.add(Rider(name="B", email="same@example.com", phone="14169672222"))
        with pytest.raises(IntegrityError):
            session.commit()


class TestRelationships:
    def test_rider_tags_many_to_many(self, session):
        rider = Rider(name="Ada", email="ada@example.com", phone="14169671111")
        session.add_all([Tag(name="cargo", riders=[rider]), Tag(name="downtown", riders=[rider])])
        session.commit()

        assert sorted(tag.name for tag in rider.tags) == ["cargo", "downtown"]

    def test_participations_deleted_with_rider(self, session):
        rider = Rider(name="Ada", email="ada@example.com", phone="14169671111")
        rider.participations = [CampaignRider(campaign_id=1), CampaignRider(campaign_id=2)]
        session.add(rider)
        session.commit()

        session.delete(rider)
        session.commit()

        assert session.query(CampaignRider).count() == 0
