"""Patch Engine — closed, schema-driven field patching for SettingItem.

Invariants:
    - All functions are PURE: apply_patch copies the snapshot, never mutates it
    - Only the fields in PATCH_SCHEMA can be touched; /id and nested paths are rejected
    - DataVariants is replaced as a whole list, never per element; variant objects
      copied from a GET (with id and settingItemId) are accepted as-is
    - Integers must fit in INT32_MIN..INT32_MAX, like the request schemas
    - Any malformed operation raises PatchError before anything is applied

Design Decisions:
    - JSON Patch (RFC 6902) document shape kept for wire compatibility, but the
      op/path space is closed instead of reflective
    - Path segments match case-insensitively: /itemdata and /ItemData both resolve
    - Snapshot is a plain dict keyed by wire names: the store builds it from the
      ORM row and writes the validated candidate back
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable

from maintenance_api.core.domain_types import INT32_MAX, INT32_MIN, PatchField, PatchOp
from maintenance_api.core.errors import PatchError


@dataclass(frozen=True)
class PatchOperation:
    """One parsed patch operation against a single SettingItem field."""
    op: PatchOp
    field: PatchField
    value: Any


def _is_int(value: Any) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return INT32_MIN <= value <= INT32_MAX


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


# Keys a GET emits. id and settingItemId are dropped: replaced variants get
# fresh ids
_VARIANT_KEYS = {"value", "description", "id", "settingItemId"}


def _is_variant_list(value: Any) -> bool:
    if not isinstance(value, list):
        return False
    for variant in value:
        if not isinstance(variant, dict):
            return False
        if set(variant) - _VARIANT_KEYS:
            return False
        if not _is_int(variant.get("value")):
            return False
        if not _is_str(variant.get("description", "")):
            return False
    return True


PATCH_SCHEMA: dict[PatchField, tuple[Callable[[Any], bool], str]] = {
    PatchField.NAME: (_is_str, "a string"),
    PatchField.DESCRIPTION: (_is_str, "a string"),
    PatchField.ITEM_DATA: (_is_int, "a 32-bit integer"),
    PatchField.DATA_VARIANTS: (
        _is_variant_list,
        "a list of {value: 32-bit integer, description: string} objects",
    ),
}

_FIELDS_BY_SEGMENT = {f.value.lower(): f for f in PatchField}


def _parse_op(raw: Any, index: int) -> PatchOp:
    try:
        return PatchOp(raw)
    except ValueError:
        raise PatchError(
            f"Operation {index}: unsupported op {raw!r} "
            f"(supported: {', '.join(o.value for o in PatchOp)})",
            operation_index=index,
        ) from None


def _parse_path(raw: Any, index: int) -> PatchField:
    if not isinstance(raw, str) or not raw.startswith("/"):
        raise PatchError(
            f"Operation {index}: path must be a JSON pointer like '/itemData'",
            operation_index=index,
        )
    segments = raw[1:].split("/")
    if len(segments) != 1:
        raise PatchError(
            f"Operation {index}: nested path {raw!r} is not patchable",
            operation_index=index,
        )
    field = _FIELDS_BY_SEGMENT.get(segments[0].lower())
    if field is None:
        raise PatchError(
            f"Operation {index}: unknown field {raw!r}",
            operation_index=index,
        )
    return field


def parse_patch_document(document: Any) -> list[PatchOperation]:
    """Parse a raw JSON Patch document into typed operations. Raises PatchError."""
    if not isinstance(document, list):
        raise PatchError("Patch document must be a list of operations")
    operations = []
    for index, raw in enumerate(document):
        if not isinstance(raw, dict):
            raise PatchError(
                f"Operation {index}: must be an object", operation_index=index,
            )
        op = _parse_op(raw.get("op"), index)
        field = _parse_path(raw.get("path"), index)
        if "value" not in raw:
            raise PatchError(
                f"Operation {index}: '{op.value}' requires a value",
                operation_index=index,
            )
        value = raw["value"]
        check, expected = PATCH_SCHEMA[field]
        if not check(value):
            raise PatchError(
                f"Operation {index}: {field.value} must be {expected}",
                operation_index=index,
            )
        if field is PatchField.DATA_VARIANTS:
            value = [
                {"value": v["value"], "description": v.get("description", "")}
                for v in value
            ]
        operations.append(PatchOperation(op=op, field=field, value=value))
    return operations


def apply_patch(snapshot: dict, operations: list[PatchOperation]) -> dict:
    """Apply operations in order to a copy of snapshot and return the candidate."""
    candidate = copy.deepcopy(snapshot)
    for index, operation in enumerate(operations):
        key = operation.field.value
        if operation.op is PatchOp.TEST:
            if candidate.get(key) != operation.value:
                raise PatchError(
                    f"Operation {index}: test failed for /{key}",
                    operation_index=index,
                )
            continue
        candidate[key] = copy.deepcopy(operation.value)
    return candidate
