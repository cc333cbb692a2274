"""Utility for resolving bank profile names to IDs."""

from taxpj.domain.entities import ConfigProfile
from taxpj.domain.errors import NotFoundError
from taxpj.domain.profile import ProfileService


def resolve_profile(profile_service: ProfileService, profile: str) -> ConfigProfile:
    """Resolve a profile ID or name to a profile.

    IDs are tried first; names match case-insensitively since they are
    stored uppercased.

    Args:
        profile_service: ProfileService instance
        profile: Profile ID or name

    Returns:
        The matching profile

    Raises:
        NotFoundError: If no profile matches
    """
    found = profile_service.get_profile(profile)
    if found is not None:
        return found

    for candidate in profile_service.list_profiles():
        if candidate.name.upper() == profile.strip().upper():
            return candidate

    raise NotFoundError(f"Bank profile '{profile}' not found")
