"""플레이어 문서 저장소 테스트 (인메모리 + SQLite)"""

from dataclasses import replace

import pytest

from sect_economy.core.shop.models import ItemFamily, Price, Rarity
from sect_economy.core.state import (
    InMemoryPlayerStateStore,
    OwnedItem,
    PlayerNotFound,
    PlayerState,
    StaleStateError,
    add_resources,
    inventory_from_dict,
    inventory_to_dict,
)
from sect_economy.db.state_store import SqlPlayerStateStore


def _sword() -> OwnedItem:
    return OwnedItem(
        item_id="weapon_abc",
        name="Dragon Sword Fang",
        item_type="sword",
        rarity=Rarity.EPIC,
        stats={"attack": 140, "critChance": 2},
        icon="fa-khanda",
        price=Price(gold=1350, spiritual_stones=5),
        required_level=15,
    )


@pytest.fixture(params=["memory", "sql"])
def any_store(request, session_factory):
    if request.param == "memory":
        return InMemoryPlayerStateStore()
    return SqlPlayerStateStore(session_factory)


# ── shared contract ──


class TestStoreContract:
    def test_create_and_snapshot(self, any_store):
        any_store.create(PlayerState(player_id="p1", gold=10, character_created=True))
        state = any_store.snapshot("p1")
        assert state.gold == 10
        assert state.character_created is True
        assert any_store.exists("p1")

    def test_create_duplicate_rejected(self, any_store):
        any_store.create(PlayerState(player_id="p1"))
        with pytest.raises(ValueError):
            any_store.create(PlayerState(player_id="p1"))

    def test_snapshot_unknown(self, any_store):
        with pytest.raises(PlayerNotFound):
            any_store.snapshot("ghost")

    def test_update_applies_transform(self, any_store):
        any_store.create(PlayerState(player_id="p1", gold=100))
        state = any_store.update("p1", add_resources(gold=50, spiritual_stones=2))
        assert state.gold == 150
        assert any_store.snapshot("p1").spiritual_stones == 2

    def test_update_unknown(self, any_store):
        with pytest.raises(PlayerNotFound):
            any_store.update("ghost", add_resources(gold=1))

    def test_failing_transform_writes_nothing(self, any_store):
        any_store.create(PlayerState(player_id="p1", gold=100))

        def broken(state):
            raise ValueError("nope")

        with pytest.raises(ValueError):
            any_store.update("p1", broken)
        assert any_store.snapshot("p1").gold == 100

    def test_transform_cannot_change_player_id(self, any_store):
        any_store.create(PlayerState(player_id="p1"))
        with pytest.raises(ValueError):
            any_store.update("p1", lambda s: replace(s, player_id="p2"))

    def test_inventory_survives_round_trip(self, any_store):
        any_store.create(PlayerState(player_id="p1"))
        any_store.update(
            "p1",
            lambda s: replace(
                s, inventory=s.inventory.with_item(ItemFamily.WEAPON, _sword())
            ),
        )
        stored = any_store.snapshot("p1").inventory.weapons["weapon_abc"]
        assert stored == _sword()

    def test_subscribers_see_committed_state(self, any_store):
        seen = []
        any_store.subscribe(lambda s: seen.append(s.gold))
        any_store.create(PlayerState(player_id="p1", gold=5))
        any_store.update("p1", add_resources(gold=5))
        assert seen == [5, 10]


# ── compare-and-update ──


class TestCompareAndUpdate:
    def test_version_increments(self):
        store = InMemoryPlayerStateStore()
        store.create(PlayerState(player_id="p1"))
        assert store.version("p1") == 0
        store.update("p1", add_resources(gold=1))
        assert store.version("p1") == 1

    def test_concurrent_writer_retried(self):
        """변환 도중 끼어든 쓰기 → 최신 상태로 재시도"""
        store = InMemoryPlayerStateStore()
        store.create(PlayerState(player_id="p1", gold=100))
        calls = 0

        def racing(state):
            nonlocal calls
            calls += 1
            if calls == 1:
                store.update("p1", add_resources(gold=1))
            return replace(state, gold=state.gold + 10)

        state = store.update("p1", racing)
        assert calls == 2
        assert state.gold == 111

    def test_gives_up_after_retries(self):
        store = InMemoryPlayerStateStore(max_retries=2)
        store.create(PlayerState(player_id="p1"))

        def always_racing(state):
            store.update("p1", add_resources(gold=1))
            return state

        with pytest.raises(StaleStateError):
            store.update("p1", always_racing)

    def test_sql_concurrent_writer_retried(self, session_factory):
        store = SqlPlayerStateStore(session_factory)
        store.create(PlayerState(player_id="p1", gold=100))
        calls = 0

        def racing(state):
            nonlocal calls
            calls += 1
            if calls == 1:
                store.update("p1", add_resources(gold=1))
            return replace(state, gold=state.gold + 10)

        assert store.update("p1", racing).gold == 111


def test_inventory_dict_round_trip():
    inventory = PlayerState(player_id="p1").inventory.with_item(
        ItemFamily.WEAPON, _sword()
    )
    data = inventory_to_dict(inventory)
    assert data["weapons"]["weapon_abc"]["rarity"] == "epic"
    assert data["apparel"] == {}
    assert inventory_from_dict(data) == inventory
