"""Tests for rider attribute validation."""

import pytest

from rider_directory.changeset import RiderAttrs, build_changeset, rider_values
from rider_directory.db.schema import Rider


def valid_attrs(**overrides):
    attrs = {
        "name": "Alice Martin",
        "email": "Alice@Example.com",
        "phone": "416-967-1111",
    }
    attrs.update(overrides)
    return attrs


@pytest.mark.unit
class TestRiderAttrs:
    def test_normalizes_contact_fields(self):
        attrs = RiderAttrs.model_validate(valid_attrs(postal="m5v2t6"))
        assert attrs.email == "alice@example.com"
        assert attrs.phone == "14169671111"
        assert attrs.postal == "M5V 2T6"

    def test_defaults_location(self):
        attrs = RiderAttrs.model_validate(valid_attrs())
        assert (attrs.city, attrs.province, attrs.country) == ("Toronto", "Ontario", "Canada")

    def test_blank_postal_becomes_none(self):
        assert RiderAttrs.model_validate(valid_attrs(postal="")).postal is None

    def test_phone_region_from_context(self):
        attrs = RiderAttrs.model_validate(
            valid_attrs(phone="020 7219 3000"), context={"phone_region": "GB"}
        )
        assert attrs.phone == "442072193000"

    def test_unknown_keys_ignored(self):
        attrs = RiderAttrs.model_validate(valid_attrs(favourite_colour="green"))
        assert not hasattr(attrs, "favourite_colour")


@pytest.mark.unit
class TestBuildChangeset:
    def test_new_rider_changes_hold_every_value(self):
        changeset = build_changeset(None, valid_attrs())

        assert changeset.valid
        assert changeset.changes["email"] == "alice@example.com"
        assert changeset.changes["city"] == "Toronto"
        assert changeset.data is None

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("name", "   "),
            ("email", "alice-at-example.com"),
            ("phone", "call me"),
            ("postal", "12345"),
        ],
    )
    def test_invalid_field_reported(self, field, value):
        changeset = build_changeset(None, valid_attrs(**{field: value}))

        assert not changeset.valid
        assert [error["field"] for error in changeset.errors] == [field]
        assert changeset.changes == {}

    def test_missing_required_fields(self):
        changeset = build_changeset(None, {})
        assert {error["field"] for error in changeset.errors} == {"name", "email", "phone"}

    def test_existing_rider_only_reports_differences(self):
        rider = Rider(
            name="Alice Martin",
            email="alice@example.com",
            phone="14169671111",
            city="Toronto",
            province="Ontario",
            country="Canada",
        )

        changeset = build_changeset(rider, {"name": "Alice M.", "phone": "(416) 967-1111"})

        assert changeset.valid
        assert changeset.changes == {"name": "Alice M."}

    def test_stored_foreign_phone_survives_unrelated_change(self):
        rider = Rider(name="Priya", email="priya@example.co.uk", phone="447911123456")

        changeset = build_changeset(rider, {"name": "Priya S."})

        assert changeset.valid
        assert changeset.changes == {"name": "Priya S."}

    def test_apply_sets_changes(self):
        rider = Rider(name="Old", email="a@example.com", phone="14169671111")
        changeset = build_changeset(rider, {"name": "New"})

        changeset.apply(rider)

        assert rider.name == "New"

    def test_attrs_keys_stringified(self):
        changeset = build_changeset(None, valid_attrs())
        assert set(changeset.attrs) == {"name", "email", "phone"}

    def test_rider_values_skips_unset(self):
        rider = Rider(name="Ada")
        assert rider_values(rider) == {"name": "Ada"}
