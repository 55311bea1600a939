"""Route Dependencies — wires a request-scoped MaintenanceStore and typed path ids.

Invariants:
    - One store per request, bound to the request's session
    - Every store shares the db_manager's write lock
    - Path ids outside the 32-bit range are rejected (400) before the store runs
"""

from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

import maintenance_api.infrastructure.database as db_module
from maintenance_api.core.domain_types import INT32_MAX, INT32_MIN
from maintenance_api.infrastructure.database import get_db
from maintenance_api.services.maintenance_store import MaintenanceStore

EntityIdPath = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


async def get_store(db: AsyncSession = Depends(get_db)) -> MaintenanceStore:
    if not db_module.db_manager:
        raise RuntimeError("Database not initialized")
    return MaintenanceStore(db, db_module.db_manager.write_lock)
