"""Seed Loader — populates the fixture aggregates on an empty store.

Invariants:
    - No-op when at least one Maintenance exists (idempotent)
    - Fixtures go through the store's create path: seed data obeys the same
      invariants as user-created data
    - All fixtures commit in one transaction, and the emptiness check runs under the
      write lock: a failed seed leaves the store empty, never half-seeded

Design Decisions:
    - Fixtures declared as MaintenanceCreate drafts, not raw ORM rows: a fixture
      that breaks variant membership fails at startup instead of sitting in the store
"""

import logging

from maintenance_api.schemas.maintenance import MaintenanceCreate
from maintenance_api.services.maintenance_store import MaintenanceStore

logger = logging.getLogger(__name__)


def _heater_item() -> dict:
    return {
        "name": "Heater",
        "description": "Heater control",
        "itemData": 25,
        "DataVariants": [
            {"value": 20, "description": "Low"},
            {"value": 25, "description": "Normal"},
            {"value": 30, "description": "High"},
        ],
    }


FIXTURES: list[MaintenanceCreate] = [
    MaintenanceCreate.model_validate({
        "number": 101,
        "description": "Main maintenance task",
        "Settings": [
            {
                "name": "Temperature",
                "description": "Temperature settings",
                "Items": [_heater_item()],
            },
        ],
    }),
    MaintenanceCreate.model_validate({
        "number": 102,
        "description": "Uxxxx Initialize data",
        "Settings": [
            {
                "name": "HeadCleaning",
                "description": "Conduct cleaning head",
                "Items": [
                    _heater_item(),
                    {
                        "name": "NozzleCheck",
                        "description": "Nozzle check control",
                        "itemData": 1,
                    },
                    {
                        "name": "HeadAlign",
                        "description": "Head align control",
                        "itemData": 1,
                        "DataVariants": [
                            {"value": 0, "description": "Standard"},
                            {"value": 1, "description": "Advanced"},
                            {"value": 2, "description": "Strong"},
                        ],
                    },
                ],
            },
            {
                "name": "InkCharge",
                "description": "Ink charge settings",
                "Items": [
                    {
                        "name": "ChargeLevel",
                        "description": "Ink charge level",
                        "itemData": 3,
                        "DataVariants": [
                            {"value": 1, "description": "Low"},
                            {"value": 2, "description": "Medium"},
                            {"value": 3, "description": "High"},
                        ],
                    },
                ],
            },
        ],
    }),
]


async def seed(store: MaintenanceStore) -> bool:
    """Insert FIXTURES into an empty store. Returns True if anything was written."""
    created = await store.create_maintenances_if_empty(FIXTURES)
    if created is None:
        logger.info("Seed skipped: store already has maintenances")
        return False
    logger.info(f"Seeded {len(FIXTURES)} maintenance fixtures")
    return True
