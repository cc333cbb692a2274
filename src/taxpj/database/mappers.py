"""Mapper functions to convert between domain profiles and stored JSON.

Stored records use camelCase keys, matching the profile export format, so
a saved profile list can be moved between installations as-is.
"""

import json
from typing import Any, Iterable

from taxpj.domain.entities import ConfigProfile, LayoutType


def profile_to_record(profile: ConfigProfile) -> dict[str, str]:
    """Convert a domain ConfigProfile to a JSON-ready record."""
    return {
        "id": profile.id,
        "name": profile.name,
        "bankCode": profile.bank_code,
        "assetCode": profile.asset_code,
        "liabilityCode": profile.liability_code,
        "layoutType": profile.layout_type.value,
    }


def record_to_profile(record: dict[str, Any]) -> ConfigProfile:
    """Convert a stored record to a domain ConfigProfile.

    Raises:
        ValueError: If the record is missing fields or has an unknown layout
    """
    try:
        return ConfigProfile(
            id=str(record["id"]),
            name=record["name"],
            bank_code=record["bankCode"],
            asset_code=record["assetCode"],
            liability_code=record["liabilityCode"],
            layout_type=LayoutType(record["layoutType"]),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid profile record {record!r}: {e}")


def profiles_to_json(profiles: Iterable[ConfigProfile]) -> str:
    """Serialize profiles to the stored JSON array."""
    return json.dumps([profile_to_record(p) for p in profiles], ensure_ascii=False)


def profiles_from_json(raw: str) -> list[ConfigProfile]:
    """Deserialize the stored JSON array.

    Raises:
        ValueError: If the text is not a JSON array of profile records
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Stored profiles are not a JSON array")
    return [record_to_profile(record) for record in data]
