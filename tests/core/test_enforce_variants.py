"""Variant Enforcement — tests for the pure itemData membership check.

Tests cover:
    - Empty variant set accepts any integer
    - Non-empty set accepts members, rejects non-members
    - Duplicate variant values are allowed
    - validate_item_data raises DomainValidationError with the given field
"""

import pytest

from maintenance_api.core.enforce_variants import (
    ITEM_DATA_NOT_IN_VARIANTS,
    check_item_data,
    validate_item_data,
)
from maintenance_api.core.errors import DomainValidationError


# ─── check_item_data ─────────────────────────────────────────────

@pytest.mark.parametrize("item_data", [-5, 0, 1, 25, 99, 2**31])
def test_empty_variants_accept_any_integer(item_data):
    assert check_item_data(item_data, []) is None


def test_member_value_is_accepted():
    assert check_item_data(25, [20, 25, 30]) is None


def test_non_member_returns_error_descriptor():
    error = check_item_data(99, [20, 25, 30])
    assert error is not None
    assert error["error_code"] == "ITEM_DATA_NOT_IN_VARIANTS"
    assert error["allowed_values"] == [20, 25, 30]
    assert error["item_data"] == 99


def test_duplicate_variant_values_are_allowed():
    assert check_item_data(1, [1, 1, 2]) is None


def test_accepts_generator_of_values():
    assert check_item_data(2, (v for v in [1, 2, 3])) is None


# ─── validate_item_data ──────────────────────────────────────────

def test_validate_passes_silently_for_member():
    validate_item_data(30, [20, 25, 30])


def test_validate_raises_for_non_member():
    with pytest.raises(DomainValidationError) as exc:
        validate_item_data(99, [20, 25, 30])
    assert ITEM_DATA_NOT_IN_VARIANTS in exc.value.message
    assert exc.value.field == "itemData"
    assert exc.value.http_status == 400


def test_validate_reports_custom_field_path():
    with pytest.raises(DomainValidationError) as exc:
        validate_item_data(4, [1, 2], field="Settings[0].Items[1].itemData")
    assert exc.value.field == "Settings[0].Items[1].itemData"
    assert exc.value.context.field == "Settings[0].Items[1].itemData"
