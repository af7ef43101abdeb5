"""SQLAlchemy models for the gstprep database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Profile(Base):
    """A user, or a client managed by an agent."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    agent_id = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    company_name = Column(String, nullable=True)
    ird_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    agent = relationship("Profile", remote_side=[id], backref="clients")
    account_categories = relationship(
        "AccountCategory", back_populates="profile", cascade="all, delete-orphan"
    )
    payee_mappings = relationship(
        "PayeeMapping", back_populates="profile", cascade="all, delete-orphan"
    )
    upload_records = relationship(
        "UploadRecord", back_populates="profile", cascade="all, delete-orphan"
    )


class AccountCategory(Base):
    """Chart of accounts entry of one profile."""

    __tablename__ = "account_categories"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    category_key = Column(String, nullable=False)
    name = Column(String, nullable=False)
    # str(Decimal) of the ratio as entered
    ratio = Column(String, nullable=False)
    code = Column(String, default="", nullable=False)
    is_deletable = Column(Boolean, default=True, nullable=False)
    position = Column(Integer, default=0, nullable=False)

    __table_args__ = (UniqueConstraint("profile_id", "name", name="uq_profile_category_name"),)

    # Relationships
    profile = relationship("Profile", back_populates="account_categories")


class PayeeMapping(Base):
    """Learned payee -> category override."""

    __tablename__ = "payee_mappings"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    payee = Column(String, nullable=False)
    category_name = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("profile_id", "payee", name="uq_profile_payee"),)

    # Relationships
    profile = relationship("Profile", back_populates="payee_mappings")


class UploadRecord(Base):
    """Processed upload batch."""

    __tablename__ = "upload_records"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    uploaded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    # Newline separated
    file_names = Column(String, default="", nullable=False)
    bank = Column(String, nullable=False)
    total_transactions = Column(Integer, default=0, nullable=False)

    # Relationships
    profile = relationship("Profile", back_populates="upload_records")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
