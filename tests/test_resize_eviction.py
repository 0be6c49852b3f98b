import pytest

from gridstash.events import InventoryEvent
from gridstash.items import ItemType, make_item
from gridstash.manager import InventoryManager
from gridstash.provider import ListInventoryProvider


def test_shrink_evicts_item_that_no_longer_fits(recorder_for):
    provider = ListInventoryProvider()
    inv = InventoryManager(provider, 4, 4)
    # covers cells (0, 0) through (2, 2)
    chest = make_item("chest", 3, 3)
    assert inv.try_add(chest)
    rec = recorder_for(inv)

    inv.resize(2, 2)

    assert (inv.width, inv.height) == (2, 2)
    assert inv.all_items == ()
    assert provider.items == []
    assert rec.of(InventoryEvent.ITEM_DROPPED) == [(chest,)]
    assert rec.names().count(InventoryEvent.RESIZED) == 1
    # RESIZED comes after the evictions
    assert rec.names()[-1] == InventoryEvent.RESIZED


def test_flush_item_survives_shrink():
    inv = InventoryManager(ListInventoryProvider(), 4, 4)
    tile = make_item("tile", 2, 2)
    inv.try_add(tile)
    inv.resize(2, 2)
    assert inv.all_items == (tile,)


def test_undroppable_item_stays_tracked_out_of_bounds(recorder_for):
    inv = InventoryManager(ListInventoryProvider(), 4, 4)
    key = make_item("crypt_key", 1, 1, can_drop=False)
    rock = make_item("rock", 1, 1)
    inv.try_add_at(key, (3, 3))
    inv.try_add_at(rock, (3, 0))
    rec = recorder_for(inv)

    inv.resize(2, 2)

    assert inv.all_items == (key,)
    assert key.position == (3, 3)
    assert rec.of(InventoryEvent.ITEM_DROPPED_FAILED) == [(key,)]
    assert rec.of(InventoryEvent.ITEM_DROPPED) == [(rock,)]
    assert rec.names().count(InventoryEvent.RESIZED) == 1


def test_locked_type_is_not_evicted():
    provider = ListInventoryProvider(locked_types=[ItemType.UTILITY])
    inv = InventoryManager(provider, 3, 1)
    lamp = make_item("lamp")
    inv.try_add_at(lamp, (2, 0))
    inv.resize(1, 1)
    assert inv.all_items == (lamp,)


def test_grow_keeps_everything_and_opens_space():
    inv = InventoryManager(ListInventoryProvider(), 2, 2)
    block = make_item("block", 2, 2)
    inv.try_add(block)
    assert inv.is_full

    inv.resize(4, 2)
    assert inv.all_items == (block,)
    assert not inv.is_full
    late = make_item("late", 2, 2)
    assert inv.try_add(late)
    assert late.position == (2, 0)


def test_constructor_evicts_provider_items_outside_initial_size():
    stray = make_item("stray")
    stray.position = (3, 3)
    inside = make_item("inside")
    provider = ListInventoryProvider(items=[stray, inside])

    inv = InventoryManager(provider, 2, 2)

    assert inv.all_items == (inside,)
    assert provider.items == [inside]


def test_resize_rejects_empty_grid():
    inv = InventoryManager(ListInventoryProvider(), 2, 2)
    with pytest.raises(ValueError):
        inv.resize(0, 3)
    assert (inv.width, inv.height) == (2, 2)
