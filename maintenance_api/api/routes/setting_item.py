"""SettingItem Routes — standalone access to items inside the Maintenance tree.

Invariants:
    - PATCH body is forwarded verbatim to the patch engine (JSON Patch shape)
    - A rejected patch leaves the stored item unchanged
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from maintenance_api.api.dependencies import EntityIdPath, get_store
from maintenance_api.schemas.maintenance import SettingItemCreate, SettingItemRead
from maintenance_api.services.maintenance_store import MaintenanceStore

router = APIRouter(prefix="/api/maintenance/settingitem", tags=["setting-items"])


@router.get("/{item_id}", response_model=SettingItemRead)
async def get_setting_item(
    item_id: EntityIdPath, store: MaintenanceStore = Depends(get_store),
):
    return await store.get_setting_item(item_id)


@router.post(
    "", response_model=SettingItemRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_setting_item(
    body: SettingItemCreate,
    response: Response,
    store: MaintenanceStore = Depends(get_store),
):
    """Attach a new item to an existing Setting (settingId)."""
    item = await store.create_setting_item(body)
    response.headers["Location"] = f"{router.prefix}/{item.id}"
    return item


@router.patch("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def patch_setting_item(
    item_id: EntityIdPath,
    document: Any = Body(...),
    store: MaintenanceStore = Depends(get_store),
):
    """Apply a JSON Patch document, e.g. [{"op": "replace", "path": "/itemData", "value": 30}]."""
    await store.patch_setting_item(item_id, document)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_setting_item(
    item_id: EntityIdPath, store: MaintenanceStore = Depends(get_store),
):
    await store.delete_setting_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
