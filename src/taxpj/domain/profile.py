"""Bank profile domain service."""

import time
from dataclasses import replace
from typing import Optional

import structlog

from taxpj.database.base import Database
from taxpj.database import mappers
from taxpj.domain import state as app_state
from taxpj.domain.entities import ConfigProfile, LayoutType
from taxpj.domain.errors import (
    NotFoundError,
    ValidationError,
    missing_profile_fields,
    profile_not_found,
)

logger = structlog.get_logger(__name__)

STORAGE_KEY = "taxpj_profiles_v21"
# Earlier storage keys, removed together with the current one on a full clear
LEGACY_STORAGE_KEYS = tuple(f"taxpj_profiles_v{i}" for i in range(10, 21))


class ProfileService:
    """Service for managing bank profiles.

    Profiles are loaded from the store on every read and saved after every
    committed change.
    """

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_profiles(self) -> list[ConfigProfile]:
        """List stored profiles.

        A missing or undecodable entry is an empty profile list.

        Returns:
            Profiles in creation order
        """
        raw = self.db.get_setting(STORAGE_KEY)
        if raw is None:
            return []
        try:
            return mappers.profiles_from_json(raw)
        except ValueError as e:
            logger.warning("profiles_decode_failed", key=STORAGE_KEY, error=str(e))
            return []

    def get_profile(self, profile_id: str) -> Optional[ConfigProfile]:
        """Get a profile by ID.

        Args:
            profile_id: Profile ID

        Returns:
            Profile or None if not found
        """
        for profile in self.list_profiles():
            if profile.id == str(profile_id):
                return profile
        return None

    def create_profile(
        self,
        bank_code: str,
        asset_code: str,
        liability_code: str,
        layout_type: Optional[LayoutType | str],
        name: Optional[str] = None,
    ) -> ConfigProfile:
        """Create a profile.

        Args:
            bank_code: Ledger account of the bank
            asset_code: Ledger account of the investment asset
            liability_code: Ledger account of the financial revenue
            layout_type: Statement layout of the bank
            name: Bank name; defaults to the layout's bank name

        Returns:
            The stored profile, with its name uppercased

        Raises:
            ValidationError: If a field is blank or the layout is unknown
        """
        layout = self._parse_layout(layout_type)
        if not name and layout is not None:
            name = layout.bank_name

        self._validate(name, bank_code, asset_code, liability_code, layout)

        profiles = self.list_profiles()
        profile = ConfigProfile(
            id=self._next_id(profiles),
            name=name.upper(),
            bank_code=bank_code,
            asset_code=asset_code,
            liability_code=liability_code,
            layout_type=layout,
        )

        state = app_state.upsert_profile(app_state.AppState(profiles=tuple(profiles)), profile)
        self._save(state.profiles)
        logger.info("profile_created", profile_id=profile.id, name=profile.name)
        return profile

    def update_profile(
        self,
        profile_id: str,
        name: Optional[str] = None,
        bank_code: Optional[str] = None,
        asset_code: Optional[str] = None,
        liability_code: Optional[str] = None,
        layout_type: Optional[LayoutType | str] = None,
    ) -> ConfigProfile:
        """Update a profile. Fields left as None keep their value.

        Changing the layout clears the account codes, which must then be
        given again in the same call.

        Raises:
            NotFoundError: If the profile does not exist
            ValidationError: If the result has a blank field
        """
        existing = self.get_profile(profile_id)
        if existing is None:
            raise NotFoundError(profile_not_found(profile_id))

        updates: dict[str, object] = {}
        layout = self._parse_layout(layout_type) if layout_type is not None else None
        if layout is not None and layout != existing.layout_type:
            updates.update(layout_type=layout, bank_code="", asset_code="", liability_code="")
        for field_name, value in (
            ("name", name),
            ("bank_code", bank_code),
            ("asset_code", asset_code),
            ("liability_code", liability_code),
        ):
            if value is not None:
                updates[field_name] = value

        profile = replace(existing, **updates)
        self._validate(
            profile.name,
            profile.bank_code,
            profile.asset_code,
            profile.liability_code,
            profile.layout_type,
        )

        state = app_state.upsert_profile(
            app_state.AppState(profiles=tuple(self.list_profiles())), profile
        )
        self._save(state.profiles)
        logger.info("profile_updated", profile_id=profile.id)
        return profile

    def remove_profile(self, profile_id: str) -> None:
        """Remove a profile.

        Raises:
            NotFoundError: If the profile does not exist
        """
        profiles = self.list_profiles()
        if not any(p.id == str(profile_id) for p in profiles):
            raise NotFoundError(profile_not_found(profile_id))

        state = app_state.remove_profile(app_state.AppState(profiles=tuple(profiles)), profile_id)
        self._save(state.profiles)
        logger.info("profile_removed", profile_id=profile_id)

    def clear_profiles(self) -> None:
        """Remove every profile, including entries left under older keys."""
        state = app_state.clear_profiles(app_state.AppState(profiles=tuple(self.list_profiles())))
        self._save(state.profiles)
        for key in LEGACY_STORAGE_KEYS:
            self.db.delete_setting(key)
        logger.info("profiles_cleared")

    def _save(self, profiles: tuple[ConfigProfile, ...]) -> None:
        if not profiles:
            self.db.delete_setting(STORAGE_KEY)
        else:
            self.db.set_setting(STORAGE_KEY, mappers.profiles_to_json(profiles))

    @staticmethod
    def _parse_layout(layout_type: Optional[LayoutType | str]) -> Optional[LayoutType]:
        if layout_type is None or layout_type == "":
            return None
        try:
            return LayoutType(layout_type)
        except ValueError:
            raise ValidationError(f"Unknown layout '{layout_type}'")

    @staticmethod
    def _validate(name, bank_code, asset_code, liability_code, layout) -> None:
        missing = [
            field_name
            for field_name, value in (
                ("name", name),
                ("bank_code", bank_code),
                ("asset_code", asset_code),
                ("liability_code", liability_code),
                ("layout_type", layout),
            )
            if not value
        ]
        if missing:
            raise ValidationError(missing_profile_fields(missing))

    @staticmethod
    def _next_id(profiles: list[ConfigProfile]) -> str:
        """Millisecond timestamp, bumped past any id already taken."""
        taken = {p.id for p in profiles}
        candidate = int(time.time() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
