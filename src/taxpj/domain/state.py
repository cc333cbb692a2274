"""In-memory application state.

State is never edited in place: every operation returns a new AppState,
and transactions are only ever appended wholesale or cleared.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable

from taxpj.domain.entities import ConfigProfile, Transaction


@dataclass(frozen=True)
class AppState:
    """Bank profiles and imported transactions of a session."""

    profiles: tuple[ConfigProfile, ...] = field(default_factory=tuple)
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)


def append_transactions(state: AppState, transactions: Iterable[Transaction]) -> AppState:
    """Append a completed import to the transaction list."""
    return replace(state, transactions=state.transactions + tuple(transactions))


def clear_transactions(state: AppState) -> AppState:
    """Drop every transaction, keeping the profiles."""
    return replace(state, transactions=())


def upsert_profile(state: AppState, profile: ConfigProfile) -> AppState:
    """Replace the profile with the same id, or append it."""
    if any(p.id == profile.id for p in state.profiles):
        profiles = tuple(profile if p.id == profile.id else p for p in state.profiles)
    else:
        profiles = state.profiles + (profile,)
    return replace(state, profiles=profiles)


def remove_profile(state: AppState, profile_id: str) -> AppState:
    """Remove a profile. Transactions that reference it are kept untouched."""
    return replace(
        state,
        profiles=tuple(p for p in state.profiles if str(p.id) != str(profile_id)),
    )


def clear_profiles(state: AppState) -> AppState:
    """Remove every profile."""
    return replace(state, profiles=())
