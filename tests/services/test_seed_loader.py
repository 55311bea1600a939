"""Seed Loader — fixture population through the normal create path.

Invariants:
    - Empty store → two fixture aggregates (101, 102) inserted
    - Second call is a no-op (identical id lists)
    - Non-empty store is never touched
    - A failure part-way through leaves the store empty, so the next run seeds again
"""

import pytest

from maintenance_api.core.errors import DomainValidationError
from maintenance_api.schemas.maintenance import MaintenanceCreate
from maintenance_api.services.seed_loader import FIXTURES, seed


async def _id_tree(store) -> list[tuple]:
    return [
        (
            m.id,
            [(s.id, [(i.id, [v.id for v in i.data_variants]) for i in s.items])
             for s in m.settings],
        )
        for m in await store.list_maintenances()
    ]


async def test_seed_populates_empty_store(store):
    assert await seed(store) is True
    listed = await store.list_maintenances()
    assert [m.number for m in listed] == [101, 102]
    assert [s.name for s in listed[1].settings] == ["HeadCleaning", "InkCharge"]
    head_cleaning = listed[1].settings[0]
    assert [i.name for i in head_cleaning.items] == ["Heater", "NozzleCheck", "HeadAlign"]
    nozzle = head_cleaning.items[1]
    assert nozzle.item_data == 1
    assert nozzle.data_variants == []


async def test_seed_twice_is_idempotent(store):
    await seed(store)
    before = await _id_tree(store)
    assert await seed(store) is False
    assert await _id_tree(store) == before


async def test_seed_skips_store_with_user_data(store):
    await store.create_maintenance(MaintenanceCreate(number=1, description="mine"))
    assert await seed(store) is False
    listed = await store.list_maintenances()
    assert [m.number for m in listed] == [1]


def test_fixtures_satisfy_variant_membership():
    for draft in FIXTURES:
        for setting in draft.settings:
            for item in setting.items:
                values = [v.value for v in item.data_variants]
                assert not values or item.item_data in values


async def test_seed_failure_after_first_insert_leaves_store_empty(store, monkeypatch):
    real_get = store.get_maintenance
    calls = []

    async def get_failing_on_second(maintenance_id):
        calls.append(maintenance_id)
        if len(calls) == 2:
            raise RuntimeError("disk full")
        return await real_get(maintenance_id)

    monkeypatch.setattr(store, "get_maintenance", get_failing_on_second)
    with pytest.raises(RuntimeError):
        await seed(store)
    monkeypatch.undo()

    assert await store.has_maintenances() is False
    assert await seed(store) is True
    assert [m.number for m in await store.list_maintenances()] == [101, 102]


async def test_create_if_empty_is_all_or_nothing_on_invalid_draft(store, heater_draft):
    bad = heater_draft(102)
    bad.settings[0].items[0].item_data = 99
    with pytest.raises(DomainValidationError) as exc:
        await store.create_maintenances_if_empty([heater_draft(101), bad])
    assert exc.value.field == "Settings[0].Items[0].itemData"
    assert await store.has_maintenances() is False


async def test_create_if_empty_returns_hydrated_aggregates_in_order(store, heater_draft):
    created = await store.create_maintenances_if_empty([heater_draft(101), heater_draft(102)])
    assert [m.number for m in created] == [101, 102]
    assert created[0].id < created[1].id
    assert created[1].settings[0].items[0].data_variants[0].value == 20
    assert await store.create_maintenances_if_empty([heater_draft(103)]) is None
