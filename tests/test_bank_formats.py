"""Tests for the bank format registry."""

import pytest

from gstprep.domain.bank_formats import BANK_FORMATS, get_bank_format, list_bank_names
from gstprep.domain.errors import ValidationError


def test_registry_lists_supported_banks():
    assert list_bank_names() == ["ASB", "BNZ", "Westpac", "Kiwibank", "ANZ"]


def test_lookup_ignores_case():
    assert get_bank_format("westpac") is BANK_FORMATS["Westpac"]
    assert get_bank_format(" anz ").bank_name == "ANZ"


def test_description_fields_in_priority_order():
    assert get_bank_format("Kiwibank").description_fields == (
        "Description",
        "Particulars",
        "Other Party",
    )
    assert get_bank_format("ASB").description_fields == ("Payee", "Memo")


def test_every_bank_reads_amount_column():
    assert {f.amount_field for f in BANK_FORMATS.values()} == {"Amount"}


def test_unknown_bank_raises():
    with pytest.raises(ValidationError) as excinfo:
        get_bank_format("Monzo")
    assert "Unknown bank 'Monzo'" in str(excinfo.value)
    assert "ASB" in str(excinfo.value)
