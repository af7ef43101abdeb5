"""Profile domain service."""

from typing import Optional

from gstprep.database.base import Database
from gstprep.domain.entities import Profile
from gstprep.domain.errors import NotFoundError, ValidationError, profile_not_found


class ProfileService:
    """Service for managing users and agents' managed clients."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_profile(self, name: str) -> int:
        """Create a user profile.

        Args:
            name: Profile name

        Returns:
            Profile ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the name is already used
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Profile name cannot be empty")
        return self.db.create_profile(name=name)

    def create_client(
        self,
        agent_name: str,
        name: str,
        company_name: Optional[str] = None,
        ird_number: Optional[str] = None,
    ) -> int:
        """Create a client profile managed by an agent.

        Args:
            agent_name: Name of the managing profile
            name: Client profile name
            company_name: Optional company name
            ird_number: Optional IRD number

        Returns:
            Profile ID

        Raises:
            NotFoundError: If the agent doesn't exist
            ValidationError: If the agent is itself a client
            ConflictError: If the name is already used
        """
        agent = self.require_profile(agent_name)
        if agent.agent_id is not None:
            raise ValidationError(f"Profile '{agent_name}' is a client and cannot manage clients")
        name = (name or "").strip()
        if not name:
            raise ValidationError("Profile name cannot be empty")
        return self.db.create_profile(
            name=name,
            agent_id=agent.id,
            company_name=company_name,
            ird_number=ird_number,
        )

    def get_profile(self, profile_id: int) -> Optional[Profile]:
        """Get profile by ID."""
        return self.db.get_profile(profile_id)

    def require_profile(self, name: str) -> Profile:
        """Get profile by name.

        Raises:
            NotFoundError: If no profile has this name
        """
        profile = self.db.get_profile_by_name(name)
        if profile is None:
            raise NotFoundError(profile_not_found(name))
        return profile

    def list_profiles(self) -> list[Profile]:
        """List all profiles."""
        return self.db.list_profiles()

    def list_clients(self, agent_name: str) -> list[Profile]:
        """List the clients of an agent."""
        agent = self.require_profile(agent_name)
        return self.db.list_profiles(agent_id=agent.id)

    def display_name(self, profile: Profile) -> str:
        """Name used in export file names."""
        return profile.company_name or profile.name
