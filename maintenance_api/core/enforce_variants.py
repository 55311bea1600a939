"""Variant Membership Enforcement — validates a SettingItem's active value.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Empty variant set accepts any integer
    - Non-empty variant set requires itemData to equal at least one variant value
    - Duplicate variant values are allowed (membership is existential)

Design Decisions:
    - check_* returns error dict, validate_* raises: the store raises, tests and
      callers that collect errors use the dict form
    - Same check for aggregate create, standalone create and patch, so no write path
      can skip it
"""

from collections.abc import Iterable

from maintenance_api.core.errors import DomainValidationError


ITEM_DATA_NOT_IN_VARIANTS = "itemData not in allowed variant set"


def check_item_data(item_data: int, variant_values: Iterable[int]) -> dict | None:
    """Return an error descriptor when item_data is outside the variant set."""
    allowed = list(variant_values)
    if not allowed or item_data in allowed:
        return None
    return {
        "status": "error",
        "error_code": "ITEM_DATA_NOT_IN_VARIANTS",
        "message": ITEM_DATA_NOT_IN_VARIANTS,
        "item_data": item_data,
        "allowed_values": allowed,
    }


def validate_item_data(
    item_data: int, variant_values: Iterable[int], field: str = "itemData",
) -> None:
    """Raise DomainValidationError when item_data violates the membership rule."""
    error = check_item_data(item_data, variant_values)
    if error:
        raise DomainValidationError(
            f"{ITEM_DATA_NOT_IN_VARIANTS}: {item_data} "
            f"(allowed: {error['allowed_values']})",
            field=field,
        )
