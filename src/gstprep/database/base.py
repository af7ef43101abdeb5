"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Mapping, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from gstprep.domain.entities import AccountCategory, Profile, UploadRecord


class Database(ABC):
    """Store for the state carried between working sessions.

    Holds profiles (users and agents' managed clients), each profile's
    account table and payee mapping, and the upload history.
    """

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

    # Profile operations
    @abstractmethod
    def create_profile(
        self,
        name: str,
        agent_id: Optional[int] = None,
        company_name: Optional[str] = None,
        ird_number: Optional[str] = None,
    ) -> int:
        """Create a profile. Returns profile ID."""
        pass

    @abstractmethod
    def get_profile(self, profile_id: int) -> Optional[Profile]:
        """Get profile by ID."""
        pass

    @abstractmethod
    def get_profile_by_name(self, name: str) -> Optional[Profile]:
        """Get profile by name."""
        pass

    @abstractmethod
    def list_profiles(self, agent_id: Optional[int] = None) -> list[Profile]:
        """List profiles; with ``agent_id`` only that agent's clients."""
        pass

    # Account table operations
    @abstractmethod
    def get_account_categories(self, profile_id: int) -> list[AccountCategory]:
        """Get the stored account table of a profile (may be empty)."""
        pass

    @abstractmethod
    def replace_account_categories(
        self, profile_id: int, categories: Sequence[AccountCategory]
    ) -> None:
        """Replace a profile's account table in one transaction.

        Raises:
            StateError: If the table could not be stored
        """
        pass

    # Payee mapping operations
    @abstractmethod
    def get_payee_mapping(self, profile_id: int) -> dict[str, str]:
        """Get a profile's payee -> category mapping."""
        pass

    @abstractmethod
    def replace_payee_mapping(self, profile_id: int, mapping: Mapping[str, str]) -> None:
        """Replace a profile's payee mapping in one transaction.

        Raises:
            StateError: If the mapping could not be stored
        """
        pass

    # Upload history operations
    @abstractmethod
    def add_upload_record(
        self,
        profile_id: int,
        file_names: Sequence[str],
        bank: str,
        total_transactions: int,
    ) -> int:
        """Record a processed batch. Returns record ID."""
        pass

    @abstractmethod
    def list_upload_records(
        self,
        profile_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[UploadRecord]:
        """List a profile's upload history, newest first."""
        pass
