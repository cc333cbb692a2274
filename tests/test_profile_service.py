"""Tests for the bank profile domain service."""

import json

import pytest

from taxpj.domain.entities import LayoutType
from taxpj.domain.errors import NotFoundError, ValidationError
from taxpj.domain.profile import LEGACY_STORAGE_KEYS, STORAGE_KEY
from taxpj.utils.profile_resolver import resolve_profile


def test_create_profile_defaults_name_from_layout(profile_service):
    profile = profile_service.create_profile(
        bank_code="5",
        asset_code="120",
        liability_code="410",
        layout_type=LayoutType.CAIXA_FIC_GIRO,
    )

    assert profile.name == "CAIXA ECONÔMICA"
    assert profile.layout_type == LayoutType.CAIXA_FIC_GIRO
    assert profile.id.isdigit()
    assert profile_service.get_profile(profile.id) == profile


def test_create_profile_uppercases_name(profile_service):
    profile = profile_service.create_profile(
        name="Banco Inter",
        bank_code="7",
        asset_code="121",
        liability_code="411",
        layout_type="GENERIC_INVESTMENT",
    )

    assert profile.name == "BANCO INTER"


def test_create_profile_requires_every_field(profile_service):
    with pytest.raises(ValidationError) as exc_info:
        profile_service.create_profile(
            bank_code="",
            asset_code="120",
            liability_code="410",
            layout_type=LayoutType.BRADESCO_INVEST_FACIL,
        )

    assert "bank_code" in str(exc_info.value)
    assert profile_service.list_profiles() == []


def test_create_profile_requires_layout(profile_service):
    with pytest.raises(ValidationError, match="layout_type"):
        profile_service.create_profile(
            name="X", bank_code="1", asset_code="2", liability_code="3", layout_type=None
        )


def test_create_profile_rejects_unknown_layout(profile_service):
    with pytest.raises(ValidationError, match="Unknown layout"):
        profile_service.create_profile(
            bank_code="1", asset_code="2", liability_code="3", layout_type="ITAU"
        )


def test_profile_ids_are_unique(profile_service):
    ids = {
        profile_service.create_profile(
            name=f"Bank {i}",
            bank_code="1",
            asset_code="2",
            liability_code="3",
            layout_type=LayoutType.GENERIC_INVESTMENT,
        ).id
        for i in range(5)
    }

    assert len(ids) == 5
    assert len(profile_service.list_profiles()) == 5


def test_profiles_stored_as_camel_case_json(temp_db, sample_profile):
    records = json.loads(temp_db.get_setting(STORAGE_KEY))

    assert records == [
        {
            "id": sample_profile.id,
            "name": "BANCO DO BRASIL",
            "bankCode": "5",
            "assetCode": "120",
            "liabilityCode": "410",
            "layoutType": "BANCO_DO_BRASIL_INVEST",
        }
    ]


def test_update_profile(profile_service, sample_profile):
    updated = profile_service.update_profile(sample_profile.id, bank_code="9")

    assert updated.bank_code == "9"
    assert updated.asset_code == "120"
    assert profile_service.get_profile(sample_profile.id).bank_code == "9"


def test_layout_change_requires_new_codes(profile_service, sample_profile):
    with pytest.raises(ValidationError, match="bank_code"):
        profile_service.update_profile(sample_profile.id, layout_type=LayoutType.CAIXA_FIC_GIRO)

    updated = profile_service.update_profile(
        sample_profile.id,
        layout_type=LayoutType.CAIXA_FIC_GIRO,
        bank_code="8",
        asset_code="130",
        liability_code="420",
    )
    assert updated.layout_type == LayoutType.CAIXA_FIC_GIRO
    assert updated.name == "BANCO DO BRASIL"


def test_update_missing_profile(profile_service):
    with pytest.raises(NotFoundError):
        profile_service.update_profile("nope", bank_code="1")


def test_remove_profile(profile_service, sample_profile):
    profile_service.remove_profile(sample_profile.id)

    assert profile_service.get_profile(sample_profile.id) is None


def test_remove_last_profile_deletes_entry(temp_db, profile_service, sample_profile):
    profile_service.remove_profile(sample_profile.id)

    assert temp_db.get_setting(STORAGE_KEY) is None


def test_remove_missing_profile(profile_service):
    with pytest.raises(NotFoundError):
        profile_service.remove_profile("nope")


def test_clear_profiles_removes_legacy_keys(temp_db, profile_service, sample_profile):
    temp_db.set_setting(LEGACY_STORAGE_KEYS[0], "[]")
    temp_db.set_setting("unrelated", "keep")

    profile_service.clear_profiles()

    assert profile_service.list_profiles() == []
    assert temp_db.list_setting_keys() == ["unrelated"]


def test_corrupt_storage_reads_as_empty(temp_db, profile_service):
    temp_db.set_setting(STORAGE_KEY, "{not json")

    assert profile_service.list_profiles() == []


def test_resolve_profile_by_id_or_name(profile_service, sample_profile):
    assert resolve_profile(profile_service, sample_profile.id) == sample_profile
    assert resolve_profile(profile_service, "banco do brasil") == sample_profile

    with pytest.raises(NotFoundError):
        resolve_profile(profile_service, "Bradesco")
