"""Chart of accounts: categories with GST claim ratios and account codes."""

import uuid
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, Optional

from gstprep.database.base import Database
from gstprep.domain.classifier import UNCATEGORIZED
from gstprep.domain.entities import AccountCategory
from gstprep.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_not_deletable,
    category_not_found,
    profile_not_found,
)
from gstprep.logging_setup import get_logger
from gstprep.utils.natural_sort import code_sort_key

_logger = get_logger("gstprep.account_table")


def _core(id: str, name: str, ratio: str, code: str) -> AccountCategory:
    return AccountCategory(id=id, name=name, ratio=Decimal(ratio), code=code, is_deletable=False)


DEFAULT_ACCOUNT_TABLE: tuple[AccountCategory, ...] = (
    _core("1", "Sales", "1.0", "200"),
    _core("2", "Sales - Zero Rated", "0.0", "205"),
    _core("3", "Purchases", "1.0", "210"),
    _core("4", "Promotion & Marketing", "1.0", "290"),
    _core("5", "Entertainment", "0.5", "327"),
    _core("6", "General Expenses", "1.0", "335"),
    _core("7", "Insurance", "1.0", "340"),
    _core("8", "Power", "1.0", "384"),
    _core("9", "Motor Vehicle Expenses", "0.25", "410"),
    _core("10", "Home Office Expenses", "0.25", "425"),
    _core("11", "Rates", "1.0", "440"),
    _core("12", "Staff Expenses", "1.0", "457"),
    _core("13", "Mobile Phone", "1.0", "464"),
    _core("14", "Travel - National", "1.0", "469"),
    _core("15", "Travel - International", "0.0", "470"),
    _core("17", "GST Payment or Refund", "0.0", "630"),
    _core("18", "Transfers", "0.0", "997"),
    _core("19", "Uncategorized", "0.0", "998"),
)

UNCATEGORIZED_CATEGORY = DEFAULT_ACCOUNT_TABLE[-1]


def parse_ratio(value) -> Decimal:
    """Validate a claim ratio in [0, 1].

    Raises:
        ValidationError: If the value is not a number in range
    """
    try:
        ratio = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"GST ratio must be a number, got '{value}'")
    if not ratio.is_finite() or ratio < 0 or ratio > 1:
        raise ValidationError(f"GST ratio must be between 0 and 1, got {value}")
    return ratio


def category_sort_key(category: AccountCategory) -> tuple:
    """Sort by code (numeric-aware, empty codes last), then name."""
    return code_sort_key(category.code, category.name)


class AccountTable:
    """Immutable set of account categories with unique names."""

    def __init__(self, categories: Iterable[AccountCategory] = ()):
        self._categories = tuple(categories)
        self._by_name = {}
        for category in self._categories:
            if not category.name or not category.name.strip():
                raise ValidationError("Account category name cannot be empty")
            if category.name in self._by_name:
                raise ConflictError(f"Account category '{category.name}' already exists")
            parse_ratio(category.ratio)
            self._by_name[category.name] = category

    @classmethod
    def default(cls) -> "AccountTable":
        return cls(DEFAULT_ACCOUNT_TABLE)

    def __iter__(self) -> Iterator[AccountCategory]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountTable):
            return NotImplemented
        return self._categories == other._categories

    def __repr__(self) -> str:
        return f"AccountTable({len(self._categories)} categories)"

    @property
    def categories(self) -> tuple[AccountCategory, ...]:
        return self._categories

    def find(self, name: str) -> Optional[AccountCategory]:
        """Exact-name lookup; None when absent."""
        return self._by_name.get(name)

    def ratio_for(self, name: str) -> Decimal:
        category = self.find(name)
        return category.ratio if category is not None else Decimal("0")

    def code_for(self, name: str) -> str:
        category = self.find(name)
        return category.code if category is not None else ""

    def sorted(self) -> list[AccountCategory]:
        """Categories in display order."""
        return sorted(self._categories, key=category_sort_key)

    def with_category(self, category: AccountCategory) -> "AccountTable":
        return AccountTable(self._categories + (category,))

    def replacing(self, name: str, category: AccountCategory) -> "AccountTable":
        if name not in self._by_name:
            raise NotFoundError(category_not_found(name))
        return AccountTable(category if c.name == name else c for c in self._categories)

    def without(self, name: str) -> "AccountTable":
        if name not in self._by_name:
            raise NotFoundError(category_not_found(name))
        return AccountTable(c for c in self._categories if c.name != name)

    def ensure_uncategorized(self) -> "AccountTable":
        """Return a table that contains the "Uncategorized" fallback."""
        if UNCATEGORIZED in self._by_name:
            return self
        return self.with_category(UNCATEGORIZED_CATEGORY)


class AccountTableService:
    """Service for managing a profile's account table."""

    def __init__(self, db: Database):
        """Initialize account table service.

        Args:
            db: Database instance
        """
        self.db = db

    def _profile(self, profile_id: int):
        profile = self.db.get_profile(profile_id)
        if profile is None:
            raise NotFoundError(profile_not_found(profile_id))
        return profile

    def get_table(self, profile_id: int) -> AccountTable:
        """Get the active account table of a profile.

        A profile without its own table uses its agent's table, and failing
        that the default table.

        Args:
            profile_id: Profile ID

        Returns:
            AccountTable that always contains "Uncategorized"

        Raises:
            NotFoundError: If the profile doesn't exist
        """
        profile = self._profile(profile_id)
        categories = self.db.get_account_categories(profile.id)
        if not categories and profile.agent_id is not None:
            categories = self.db.get_account_categories(profile.agent_id)
        if not categories:
            return AccountTable.default()
        return AccountTable(categories).ensure_uncategorized()

    def save_table(self, profile_id: int, table: AccountTable) -> AccountTable:
        """Store a whole account table.

        Raises:
            NotFoundError: If the profile doesn't exist
            StateError: If the table could not be stored
        """
        self._profile(profile_id)
        table = table.ensure_uncategorized()
        self.db.replace_account_categories(profile_id, table.categories)
        _logger.info("Saved account table for profile %s (%d categories)", profile_id, len(table))
        return table

    def add_category(
        self, profile_id: int, name: str, ratio, code: str = ""
    ) -> AccountCategory:
        """Add a deletable category.

        Args:
            profile_id: Profile ID
            name: Category name, unique within the table
            ratio: GST claim ratio in [0, 1]
            code: Account code (may be empty)

        Returns:
            The new category

        Raises:
            ConflictError: If the name is already used
            ValidationError: If the name is empty or the ratio is out of range
        """
        name = (name or "").strip()
        category = AccountCategory(
            id=str(uuid.uuid4()),
            name=name,
            ratio=parse_ratio(ratio),
            code=(code or "").strip(),
            is_deletable=True,
        )
        table = self.get_table(profile_id).with_category(category)
        self.save_table(profile_id, table)
        return category

    def update_category(
        self,
        profile_id: int,
        name: str,
        new_name: Optional[str] = None,
        ratio=None,
        code: Optional[str] = None,
    ) -> AccountCategory:
        """Edit a category's name, ratio or code.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If ``new_name`` is already used
            ValidationError: If the ratio is out of range
        """
        table = self.get_table(profile_id)
        current = table.find(name)
        if current is None:
            raise NotFoundError(category_not_found(name))

        updated = AccountCategory(
            id=current.id,
            name=new_name.strip() if new_name is not None else current.name,
            ratio=parse_ratio(ratio) if ratio is not None else current.ratio,
            code=code.strip() if code is not None else current.code,
            is_deletable=current.is_deletable,
        )
        self.save_table(profile_id, table.replacing(name, updated))
        return updated

    def delete_category(self, profile_id: int, name: str) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If it is a core category
        """
        table = self.get_table(profile_id)
        category = table.find(name)
        if category is None:
            raise NotFoundError(category_not_found(name))
        if not category.is_deletable:
            raise DependencyError(category_not_deletable(name))
        self.save_table(profile_id, table.without(name))

    def reset_to_default(self, profile_id: int) -> AccountTable:
        """Reset to the agent's table for clients, else the default table."""
        profile = self._profile(profile_id)
        table = AccountTable.default()
        if profile.agent_id is not None:
            agent_categories = self.db.get_account_categories(profile.agent_id)
            if agent_categories:
                table = AccountTable(agent_categories)
        return self.save_table(profile_id, table)
