"""Shared domain error messages and error types."""

from typing import Iterable, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked because the entity is protected or still in use."""


class FormatError(ValidationError):
    """A bank export could not be read as a transaction file."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class StateError(DomainError):
    """Persisting carried state (account table or payee mapping) failed."""


def profile_not_found(profile: object) -> str:
    """Return message for missing profile."""
    return f"Profile '{profile}' not found"


def category_not_found(name: str) -> str:
    """Return message for missing account category."""
    return f"Account category '{name}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction in the working session."""
    return f"Transaction '{transaction_id}' not found"


def unknown_bank(bank_name: str, supported: Iterable[str]) -> str:
    """Return message for an unsupported bank identifier."""
    return f"Unknown bank '{bank_name}'. Supported banks: {', '.join(supported)}"


def header_not_found(file_name: str, amount_field: str) -> str:
    """Return message when no transaction header row can be located."""
    return (
        f"Could not find a valid transaction header row in {file_name}. "
        f"Please ensure the file contains columns like 'Date' and '{amount_field}'."
    )


def unsupported_file_type(file_name: str) -> str:
    """Return message for a non-CSV upload."""
    return f"Unsupported file type: {file_name}. Please upload a CSV file."


def category_not_deletable(name: str) -> str:
    """Return message when deleting a core account category."""
    return f"Account category '{name}' is a core category and cannot be deleted"


def save_failed(what: str, error: Exception) -> str:
    """Return message when carried state could not be persisted."""
    return f"Failed to save {what}: {error}. Your changes have been reverted."
