"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional


class Database(ABC):
    """Abstract key-value store for taxpj configuration."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get the raw value stored under a key, or None."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Store a raw value under a key, replacing any previous value."""
        pass

    @abstractmethod
    def delete_setting(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def list_setting_keys(self) -> list[str]:
        """List stored keys in alphabetical order."""
        pass
