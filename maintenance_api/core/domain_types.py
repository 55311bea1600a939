"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Entity ids are store-assigned positive integers, never reused
    - Every numeric wire field (ids, number, itemData, value) fits in INT32_MIN..INT32_MAX
    - PatchOp enumerates every supported patch operation; anything else is rejected
    - PatchField is the closed set of SettingItem fields a patch may touch

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MaintenanceId = NewType("MaintenanceId", int)
SettingId = NewType("SettingId", int)
SettingItemId = NewType("SettingItemId", int)
DataVariantId = NewType("DataVariantId", int)


# ─── Enums ───────────────────────────────────────────────────────

class PatchOp(str, Enum):
    """Supported JSON Patch operations. add on an object member behaves as replace."""
    ADD = "add"
    REPLACE = "replace"
    TEST = "test"


class PatchField(str, Enum):
    """Patchable SettingItem fields, keyed by their wire name."""
    NAME = "name"
    DESCRIPTION = "description"
    ITEM_DATA = "itemData"
    DATA_VARIANTS = "DataVariants"


class EntityType(str, Enum):
    """Entity names used in errors and log records."""
    MAINTENANCE = "Maintenance"
    SETTING = "Setting"
    SETTING_ITEM = "SettingItem"
    DATA_VARIANT = "DataVariant"


# ─── Value Range ─────────────────────────────────────────────────

# Numeric fields are 32-bit on the wire; values outside are rejected at the boundary
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
