"""Tests for PayeeMappingService."""

import pytest

from gstprep.domain.errors import NotFoundError, StateError, ValidationError


def test_new_profile_has_empty_mapping(mapping_service, sample_profile):
    assert dict(mapping_service.get_mapping(sample_profile.id)) == {}


def test_set_category_upper_cases_payee(mapping_service, sample_profile):
    mapping_service.set_category(sample_profile.id, "Joe's Cafe", "Staff Expenses")
    assert dict(mapping_service.get_mapping(sample_profile.id)) == {"JOE'S CAFE": "Staff Expenses"}


def test_set_category_overwrites(mapping_service, sample_profile):
    mapping_service.set_category(sample_profile.id, "BP", "Motor Vehicle Expenses")
    mapping_service.set_category(sample_profile.id, "bp", "Travel - National")
    assert mapping_service.get_mapping(sample_profile.id)["BP"] == "Travel - National"


def test_set_category_requires_known_category(mapping_service, sample_profile):
    with pytest.raises(NotFoundError):
        mapping_service.set_category(sample_profile.id, "BP", "Fuel")


def test_set_category_requires_payee(mapping_service, sample_profile):
    with pytest.raises(ValidationError):
        mapping_service.set_category(sample_profile.id, " ", "Sales")


def test_remove_payee(mapping_service, sample_profile):
    mapping_service.set_category(sample_profile.id, "BP", "Motor Vehicle Expenses")
    mapping_service.remove_payee(sample_profile.id, "bp")
    assert "BP" not in mapping_service.get_mapping(sample_profile.id)

    with pytest.raises(NotFoundError):
        mapping_service.remove_payee(sample_profile.id, "bp")


def test_mapping_is_per_profile(mapping_service, profile_service, sample_profile):
    other_id = profile_service.create_profile("Other")
    mapping_service.set_category(sample_profile.id, "BP", "Motor Vehicle Expenses")
    assert dict(mapping_service.get_mapping(other_id)) == {}


def test_unknown_profile(mapping_service):
    with pytest.raises(NotFoundError):
        mapping_service.get_mapping(42)


def test_save_failure_raises_state_error(mapping_service, sample_profile, temp_db, monkeypatch):
    from sqlalchemy.exc import OperationalError

    session = temp_db._get_session()

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", failing_commit)

    with pytest.raises(StateError) as excinfo:
        mapping_service.save_mapping(sample_profile.id, {"BP": "Sales"})
    assert "reverted" in str(excinfo.value)
