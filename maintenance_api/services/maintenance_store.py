"""Maintenance Store — transactional CRUD over the Maintenance aggregate and SettingItems.

Invariants:
    - Every mutating operation runs inside _transaction(): write lock held,
      commit on success, rollback on any exception (no partial cascade)
    - Variant membership validated before anything is written, on every write path
    - Cascade delete walks the parent->child FK index bottom-up in one transaction
    - Reads use populate_existing: a session never serves stale identity-map rows
    - IdMismatchError raised before storage is touched

Design Decisions:
    - Explicit cascade instead of ORM delete-cascade configuration: the walk is
      visible here and does not depend on relationship settings
    - Patch read-modify-validate-write happens entirely under the write lock with
      SELECT ... FOR UPDATE, so a patch validates against the row it overwrites
    - Hydrated re-read happens before commit: results never depend on reads made
      after the lock is released
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from maintenance_api.core.domain_types import (
    EntityType, MaintenanceId, PatchField, SettingItemId,
)
from maintenance_api.core.enforce_variants import validate_item_data
from maintenance_api.core.errors import (
    DomainValidationError, IdMismatchError, ResourceNotFoundError,
)
from maintenance_api.core.patch_engine import apply_patch, parse_patch_document
from maintenance_api.models import DataVariant, Maintenance, Setting, SettingItem
from maintenance_api.schemas.maintenance import (
    DataVariantCreate, MaintenanceCreate, MaintenanceUpdate,
    SettingItemCreate, SettingItemDraft,
)

logger = logging.getLogger(__name__)


class MaintenanceStore:
    """Repository for the Maintenance tree, bound to one request-scoped session."""

    def __init__(self, db: AsyncSession, write_lock: asyncio.Lock):
        self._db = db
        self._write_lock = write_lock

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[None, None]:
        async with self._write_lock:
            try:
                yield
                await self._db.commit()
            except Exception:
                await self._db.rollback()
                raise

    # ─── Maintenance aggregate ───────────────────────────────────

    async def list_maintenances(self) -> list[Maintenance]:
        result = await self._db.execute(
            select(Maintenance)
            .order_by(Maintenance.id)
            .execution_options(populate_existing=True),
        )
        return list(result.scalars().all())

    async def has_maintenances(self) -> bool:
        found = await self._db.scalar(select(Maintenance.id).limit(1))
        return found is not None

    async def get_maintenance(self, maintenance_id: MaintenanceId) -> Maintenance:
        maintenance = await self._find_maintenance(maintenance_id)
        if maintenance is None:
            raise ResourceNotFoundError(EntityType.MAINTENANCE.value, maintenance_id)
        return maintenance

    async def create_maintenance(self, draft: MaintenanceCreate) -> Maintenance:
        """Insert a whole aggregate atomically and return it hydrated."""
        _validate_maintenance_draft(draft)
        maintenance = _build_maintenance(draft)
        async with self._transaction():
            self._db.add(maintenance)
            await self._db.flush()
            created = await self.get_maintenance(maintenance.id)
        logger.info(
            f"Created maintenance {created.id} (number={created.number}, "
            f"settings={len(created.settings)})",
            extra={"entity_type": EntityType.MAINTENANCE.value, "entity_id": created.id},
        )
        return created

    async def create_maintenances_if_empty(
        self, drafts: list[MaintenanceCreate],
    ) -> list[Maintenance] | None:
        """Insert every draft in one transaction, but only into an empty store.

        Returns the hydrated aggregates, or None when a Maintenance already exists.
        The emptiness check runs under the write lock, so two callers cannot both
        see an empty store.
        """
        for draft in drafts:
            _validate_maintenance_draft(draft)
        async with self._transaction():
            if await self.has_maintenances():
                return None
            aggregates = [_build_maintenance(d) for d in drafts]
            self._db.add_all(aggregates)
            await self._db.flush()
            created = [await self.get_maintenance(m.id) for m in aggregates]
        logger.info(
            f"Created {len(created)} maintenances in one transaction",
            extra={"entity_type": EntityType.MAINTENANCE.value},
        )
        return created

    async def update_maintenance(
        self, maintenance_id: MaintenanceId, draft: MaintenanceUpdate,
    ) -> None:
        """Replace top-level fields only. Nested Settings are left untouched."""
        if draft.id != maintenance_id:
            raise IdMismatchError(maintenance_id, draft.id)
        async with self._transaction():
            result = await self._db.execute(
                select(Maintenance)
                .where(Maintenance.id == maintenance_id)
                .with_for_update()
                .execution_options(populate_existing=True),
            )
            maintenance = result.scalar_one_or_none()
            if maintenance is None:
                raise ResourceNotFoundError(EntityType.MAINTENANCE.value, maintenance_id)
            maintenance.number = draft.number
            maintenance.description = draft.description
        logger.info(
            f"Updated maintenance {maintenance_id}",
            extra={"entity_type": EntityType.MAINTENANCE.value, "entity_id": maintenance_id},
        )

    async def delete_maintenance(self, maintenance_id: MaintenanceId) -> None:
        """Delete a Maintenance and everything reachable from it."""
        async with self._transaction():
            found = await self._db.scalar(
                select(Maintenance.id).where(Maintenance.id == maintenance_id),
            )
            if found is None:
                raise ResourceNotFoundError(EntityType.MAINTENANCE.value, maintenance_id)
            setting_ids = select(Setting.id).where(
                Setting.maintenance_id == maintenance_id,
            )
            item_ids = select(SettingItem.id).where(
                SettingItem.setting_id.in_(setting_ids),
            )
            variants = await self._delete_where(
                DataVariant, DataVariant.setting_item_id.in_(item_ids),
            )
            items = await self._delete_where(
                SettingItem, SettingItem.setting_id.in_(setting_ids),
            )
            settings = await self._delete_where(
                Setting, Setting.maintenance_id == maintenance_id,
            )
            await self._delete_where(Maintenance, Maintenance.id == maintenance_id)
        logger.info(
            f"Deleted maintenance {maintenance_id} with {settings} settings, "
            f"{items} items, {variants} variants",
            extra={"entity_type": EntityType.MAINTENANCE.value, "entity_id": maintenance_id},
        )

    # ─── SettingItem ─────────────────────────────────────────────

    async def get_setting_item(self, item_id: SettingItemId) -> SettingItem:
        item = await self._find_setting_item(item_id)
        if item is None:
            raise ResourceNotFoundError(EntityType.SETTING_ITEM.value, item_id)
        return item

    async def create_setting_item(self, draft: SettingItemCreate) -> SettingItem:
        """Attach a new SettingItem to an existing Setting."""
        validate_item_data(draft.item_data, [v.value for v in draft.data_variants])
        item = _build_item(draft)
        item.setting_id = draft.setting_id
        async with self._transaction():
            parent = await self._db.scalar(
                select(Setting.id).where(Setting.id == draft.setting_id),
            )
            if parent is None:
                raise DomainValidationError(
                    f"{EntityType.SETTING.value} '{draft.setting_id}' does not exist",
                    field="settingId",
                )
            self._db.add(item)
            await self._db.flush()
            created = await self.get_setting_item(item.id)
        logger.info(
            f"Created setting item {created.id} under setting {draft.setting_id}",
            extra={"entity_type": EntityType.SETTING_ITEM.value, "entity_id": created.id},
        )
        return created

    async def patch_setting_item(
        self, item_id: SettingItemId, document: Any,
    ) -> SettingItem:
        """Apply a patch document; the stored item is unchanged unless all of it is valid."""
        operations = parse_patch_document(document)
        async with self._transaction():
            result = await self._db.execute(
                select(SettingItem)
                .where(SettingItem.id == item_id)
                .with_for_update()
                .execution_options(populate_existing=True),
            )
            item = result.scalar_one_or_none()
            if item is None:
                raise ResourceNotFoundError(EntityType.SETTING_ITEM.value, item_id)

            snapshot = _item_snapshot(item)
            candidate = apply_patch(snapshot, operations)
            variants = candidate[PatchField.DATA_VARIANTS.value]
            validate_item_data(
                candidate[PatchField.ITEM_DATA.value], [v["value"] for v in variants],
            )

            item.name = candidate[PatchField.NAME.value]
            item.description = candidate[PatchField.DESCRIPTION.value]
            item.item_data = candidate[PatchField.ITEM_DATA.value]
            if variants != snapshot[PatchField.DATA_VARIANTS.value]:
                await self._delete_where(
                    DataVariant, DataVariant.setting_item_id == item_id,
                )
                self._db.add_all([
                    DataVariant(
                        setting_item_id=item_id,
                        value=v["value"],
                        description=v["description"],
                    )
                    for v in variants
                ])
            await self._db.flush()
            patched = await self.get_setting_item(item_id)
        logger.info(
            f"Patched setting item {item_id}",
            extra={
                "entity_type": EntityType.SETTING_ITEM.value,
                "entity_id": item_id,
                "operation_count": len(operations),
            },
        )
        return patched

    async def delete_setting_item(self, item_id: SettingItemId) -> None:
        async with self._transaction():
            found = await self._db.scalar(
                select(SettingItem.id).where(SettingItem.id == item_id),
            )
            if found is None:
                raise ResourceNotFoundError(EntityType.SETTING_ITEM.value, item_id)
            variants = await self._delete_where(
                DataVariant, DataVariant.setting_item_id == item_id,
            )
            await self._delete_where(SettingItem, SettingItem.id == item_id)
        logger.info(
            f"Deleted setting item {item_id} with {variants} variants",
            extra={"entity_type": EntityType.SETTING_ITEM.value, "entity_id": item_id},
        )

    # ─── Helpers ─────────────────────────────────────────────────

    async def _find_maintenance(self, maintenance_id: int) -> Maintenance | None:
        result = await self._db.execute(
            select(Maintenance)
            .where(Maintenance.id == maintenance_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def _find_setting_item(self, item_id: int) -> SettingItem | None:
        result = await self._db.execute(
            select(SettingItem)
            .where(SettingItem.id == item_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def _delete_where(self, model: type, condition) -> int:
        result = await self._db.execute(
            delete(model)
            .where(condition)
            .execution_options(synchronize_session="fetch"),
        )
        return result.rowcount


def _validate_maintenance_draft(draft: MaintenanceCreate) -> None:
    for s_index, setting in enumerate(draft.settings):
        for i_index, item in enumerate(setting.items):
            validate_item_data(
                item.item_data,
                [v.value for v in item.data_variants],
                field=f"Settings[{s_index}].Items[{i_index}].itemData",
            )


def _build_maintenance(draft: MaintenanceCreate) -> Maintenance:
    return Maintenance(
        number=draft.number,
        description=draft.description,
        settings=[
            Setting(
                name=s.name,
                description=s.description,
                items=[_build_item(i) for i in s.items],
            )
            for s in draft.settings
        ],
    )


def _build_variants(drafts: list[DataVariantCreate]) -> list[DataVariant]:
    return [DataVariant(value=v.value, description=v.description) for v in drafts]


def _build_item(draft: SettingItemDraft) -> SettingItem:
    return SettingItem(
        name=draft.name,
        description=draft.description,
        item_data=draft.item_data,
        data_variants=_build_variants(draft.data_variants),
    )


def _item_snapshot(item: SettingItem) -> dict:
    """Plain-dict view of a SettingItem keyed by patchable wire names."""
    return {
        PatchField.NAME.value: item.name,
        PatchField.DESCRIPTION.value: item.description,
        PatchField.ITEM_DATA.value: item.item_data,
        PatchField.DATA_VARIANTS.value: [
            {"value": v.value, "description": v.description}
            for v in item.data_variants
        ],
    }
