"""Maintenance Routes — CRUD over the Maintenance aggregate.

Invariants:
    - Thin transport: every rule lives in MaintenanceStore / core
    - Domain errors propagate to the global handlers (404 / 400)
    - POST returns 201 with Location; PUT and DELETE return 204
"""

from fastapi import APIRouter, Depends, Response, status

from maintenance_api.api.dependencies import EntityIdPath, get_store
from maintenance_api.schemas.maintenance import (
    MaintenanceCreate, MaintenanceRead, MaintenanceUpdate,
)
from maintenance_api.services.maintenance_store import MaintenanceStore

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


@router.get("", response_model=list[MaintenanceRead])
async def list_maintenances(store: MaintenanceStore = Depends(get_store)):
    """List every Maintenance, fully hydrated."""
    return await store.list_maintenances()


@router.get("/{maintenance_id}", response_model=MaintenanceRead)
async def get_maintenance(
    maintenance_id: EntityIdPath, store: MaintenanceStore = Depends(get_store),
):
    return await store.get_maintenance(maintenance_id)


@router.post(
    "", response_model=MaintenanceRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_maintenance(
    body: MaintenanceCreate,
    response: Response,
    store: MaintenanceStore = Depends(get_store),
):
    """Create a Maintenance together with its nested Settings, Items and Variants."""
    maintenance = await store.create_maintenance(body)
    response.headers["Location"] = f"{router.prefix}/{maintenance.id}"
    return maintenance


@router.put("/{maintenance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_maintenance(
    maintenance_id: EntityIdPath,
    body: MaintenanceUpdate,
    store: MaintenanceStore = Depends(get_store),
):
    """Replace number and description. Nested Settings are not modified."""
    await store.update_maintenance(maintenance_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{maintenance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_maintenance(
    maintenance_id: EntityIdPath, store: MaintenanceStore = Depends(get_store),
):
    """Delete a Maintenance and its whole subtree."""
    await store.delete_maintenance(maintenance_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
