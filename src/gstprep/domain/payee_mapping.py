"""Payee mapping domain service."""

from typing import Mapping

from gstprep.database.base import Database
from gstprep.domain.account_table import AccountTableService
from gstprep.domain.classifier import PayeeMapping, freeze_mapping, learn_category, normalize_payee
from gstprep.domain.errors import NotFoundError, ValidationError, category_not_found, profile_not_found
from gstprep.logging_setup import get_logger

_logger = get_logger("gstprep.payee_mapping")


class PayeeMappingService:
    """Service for reading and storing learned payee mappings."""

    def __init__(self, db: Database):
        """Initialize payee mapping service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_table_service = AccountTableService(db)

    def get_mapping(self, profile_id: int) -> PayeeMapping:
        """Get a profile's mapping as a read-only value.

        Raises:
            NotFoundError: If the profile doesn't exist
        """
        if self.db.get_profile(profile_id) is None:
            raise NotFoundError(profile_not_found(profile_id))
        return freeze_mapping(self.db.get_payee_mapping(profile_id))

    def save_mapping(self, profile_id: int, mapping: Mapping[str, str]) -> PayeeMapping:
        """Store a whole mapping.

        Raises:
            StateError: If the mapping could not be stored
        """
        self.db.replace_payee_mapping(profile_id, dict(mapping))
        _logger.info("Saved payee mapping for profile %s (%d entries)", profile_id, len(mapping))
        return freeze_mapping(mapping)

    def set_category(self, profile_id: int, payee: str, category: str) -> PayeeMapping:
        """Send a payee to a category on future uploads.

        Raises:
            ValidationError: If the payee is empty
            NotFoundError: If the category is not in the profile's account table
        """
        if not (payee or "").strip():
            raise ValidationError("Payee cannot be empty")
        table = self.account_table_service.get_table(profile_id)
        if category not in table:
            raise NotFoundError(category_not_found(category))
        mapping = learn_category(self.get_mapping(profile_id), payee, category)
        return self.save_mapping(profile_id, mapping)

    def remove_payee(self, profile_id: int, payee: str) -> PayeeMapping:
        """Forget a learned payee.

        Raises:
            NotFoundError: If the payee has no mapping
        """
        mapping = dict(self.get_mapping(profile_id))
        key = normalize_payee(payee)
        if key not in mapping:
            raise NotFoundError(f"No mapping for payee '{key}'")
        del mapping[key]
        return self.save_mapping(profile_id, mapping)
