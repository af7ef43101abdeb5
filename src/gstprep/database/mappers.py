"""Mapper functions to convert between domain models and SQLAlchemy models."""

from decimal import Decimal

from gstprep.domain import entities as domain
from gstprep.database.models import (
    AccountCategory as ORMAccountCategory,
    Profile as ORMProfile,
    UploadRecord as ORMUploadRecord,
)


def profile_to_domain(orm_profile: ORMProfile) -> domain.Profile:
    """Convert SQLAlchemy Profile model to domain Profile entity."""
    return domain.Profile(
        id=orm_profile.id,
        name=orm_profile.name,
        agent_id=orm_profile.agent_id,
        company_name=orm_profile.company_name,
        ird_number=orm_profile.ird_number,
        created_at=orm_profile.created_at,
    )


def account_category_to_domain(orm_category: ORMAccountCategory) -> domain.AccountCategory:
    """Convert SQLAlchemy AccountCategory model to domain AccountCategory entity."""
    return domain.AccountCategory(
        id=orm_category.category_key,
        name=orm_category.name,
        ratio=Decimal(orm_category.ratio),
        code=orm_category.code or "",
        is_deletable=orm_category.is_deletable,
    )


def account_category_to_orm(
    category: domain.AccountCategory, profile_id: int, position: int
) -> ORMAccountCategory:
    """Convert domain AccountCategory entity to a new SQLAlchemy row."""
    return ORMAccountCategory(
        profile_id=profile_id,
        category_key=category.id,
        name=category.name,
        ratio=str(category.ratio),
        code=category.code or "",
        is_deletable=category.is_deletable,
        position=position,
    )


def upload_record_to_domain(orm_record: ORMUploadRecord) -> domain.UploadRecord:
    """Convert SQLAlchemy UploadRecord model to domain UploadRecord entity."""
    file_names = tuple(n for n in (orm_record.file_names or "").split("\n") if n)
    return domain.UploadRecord(
        id=orm_record.id,
        profile_id=orm_record.profile_id,
        uploaded_at=orm_record.uploaded_at,
        file_names=file_names,
        bank=orm_record.bank,
        total_transactions=orm_record.total_transactions,
    )
