"""Tests for database mappers."""

import json

import pytest

from taxpj.database.mappers import (
    profile_to_record,
    profiles_from_json,
    profiles_to_json,
    record_to_profile,
)
from taxpj.domain.entities import ConfigProfile, LayoutType


@pytest.fixture
def profile():
    return ConfigProfile(
        id="1735689600000",
        name="CAIXA ECONÔMICA",
        bank_code="5",
        asset_code="120",
        liability_code="410",
        layout_type=LayoutType.CAIXA_FIC_GIRO,
    )


class TestProfileMapper:
    """Tests for profile record mapping."""

    def test_profile_to_record(self, profile):
        assert profile_to_record(profile) == {
            "id": "1735689600000",
            "name": "CAIXA ECONÔMICA",
            "bankCode": "5",
            "assetCode": "120",
            "liabilityCode": "410",
            "layoutType": "CAIXA_FIC_GIRO",
        }

    def test_record_to_profile(self, profile):
        assert record_to_profile(profile_to_record(profile)) == profile

    def test_numeric_id_becomes_string(self, profile):
        record = profile_to_record(profile)
        record["id"] = 1735689600000

        assert record_to_profile(record).id == "1735689600000"

    def test_record_missing_field(self, profile):
        record = profile_to_record(profile)
        del record["bankCode"]

        with pytest.raises(ValueError):
            record_to_profile(record)

    def test_record_unknown_layout(self, profile):
        record = profile_to_record(profile)
        record["layoutType"] = "ITAU"

        with pytest.raises(ValueError):
            record_to_profile(record)


class TestProfileJson:
    """Tests for the stored JSON array."""

    def test_json_keeps_non_ascii(self, profile):
        raw = profiles_to_json([profile])

        assert "ECONÔMICA" in raw
        assert isinstance(json.loads(raw), list)

    def test_json_array_required(self):
        with pytest.raises(ValueError):
            profiles_from_json('{"id": "1"}')

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            profiles_from_json("[")
