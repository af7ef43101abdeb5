"""Shared pytest fixtures for gstprep tests."""

import logging
import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

import gstprep.logging_setup as logging_setup
from gstprep.database.factories import create_sqlite_database
from gstprep.database.sqlalchemy_db import SQLAlchemyDatabase
from gstprep.domain.account_table import AccountTable, AccountTableService
from gstprep.domain.entities import Transaction
from gstprep.domain.payee_mapping import PayeeMappingService
from gstprep.domain.profile import ProfileService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


def _reset_package_logging():
    logger = logging.getLogger("gstprep")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging_setup._CONFIGURED = False


@pytest.fixture(autouse=True)
def isolated_logging():
    """Start and end every test with unconfigured package logging.

    CLI invocations call configure_logging, which is process-wide.
    """
    _reset_package_logging()
    yield logging.getLogger("gstprep")
    _reset_package_logging()


@pytest.fixture
def readonly_db(temp_db):
    """Open the temporary database a second time without write access."""
    db = SQLAlchemyDatabase(f"sqlite:///file:{temp_db.database_path}?mode=ro&uri=true")
    db.connect()
    yield db
    db.disconnect()


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def account_table_service(temp_db):
    """Create an AccountTableService with a temporary database."""
    return AccountTableService(temp_db)


@pytest.fixture
def mapping_service(temp_db):
    """Create a PayeeMappingService with a temporary database."""
    return PayeeMappingService(temp_db)


@pytest.fixture
def sample_profile(profile_service):
    """Create a sample profile for testing."""
    profile_id = profile_service.create_profile("Test User")
    return profile_service.get_profile(profile_id)


@pytest.fixture
def default_table():
    """The built-in account table."""
    return AccountTable.default()


@pytest.fixture
def make_transaction():
    """Build a transaction with sensible defaults."""

    def _make(amount, payee="Payee", description="", category=None, id="t-0", date="2024-01-31"):
        return Transaction(
            id=id,
            date=date,
            payee=payee,
            description=description,
            amount=Decimal(str(amount)),
            category=category,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
