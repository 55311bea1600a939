"""Concurrent Patches — writers serialize on the store lock.

Invariants:
    - Two concurrent patches on one item both run; the last committed wins
    - Each patch validates against the state it overwrites (no lost update)
    - The variant membership invariant holds after any interleaving
"""

import asyncio

from maintenance_api.core.errors import DomainValidationError
from maintenance_api.services.maintenance_store import MaintenanceStore


async def _seed_heater(store, heater_draft) -> int:
    created = await store.create_maintenance(heater_draft())
    return created.settings[0].items[0].id


async def _patch_in_own_session(factory, lock, item_id, document):
    async with factory() as db:
        store = MaintenanceStore(db, lock)
        try:
            patched = await store.patch_setting_item(item_id, document)
            return patched.item_data
        except DomainValidationError as e:
            return e


async def test_concurrent_valid_patches_serialize(
    store, test_session_factory, write_lock, heater_draft,
):
    item_id = await _seed_heater(store, heater_draft)

    results = await asyncio.gather(
        _patch_in_own_session(
            test_session_factory, write_lock, item_id,
            [{"op": "replace", "path": "/itemData", "value": 20}],
        ),
        _patch_in_own_session(
            test_session_factory, write_lock, item_id,
            [{"op": "replace", "path": "/itemData", "value": 30}],
        ),
    )

    assert sorted(results) == [20, 30]
    final = await store.get_setting_item(item_id)
    assert final.item_data == results[-1]


async def test_patch_validates_against_state_it_overwrites(
    store, test_session_factory, write_lock, heater_draft,
):
    item_id = await _seed_heater(store, heater_draft)

    results = await asyncio.gather(
        _patch_in_own_session(
            test_session_factory, write_lock, item_id,
            [
                {"op": "replace", "path": "/DataVariants", "value": [{"value": 99}]},
                {"op": "replace", "path": "/itemData", "value": 99},
            ],
        ),
        _patch_in_own_session(
            test_session_factory, write_lock, item_id,
            [{"op": "replace", "path": "/itemData", "value": 30}],
        ),
    )

    # First writer always commits; the second then sees variants [99] and is rejected
    assert results[0] == 99
    assert isinstance(results[1], DomainValidationError)
    final = await store.get_setting_item(item_id)
    assert final.item_data == 99
    assert [v.value for v in final.data_variants] == [99]
