"""QuestService 통합 테스트 (인메모리 저장소 + EventBus + 가상 시계)"""

import random
from dataclasses import replace

import pytest

from sect_economy.core.event_types import EventTypes
from sect_economy.core.notifications import Severity
from sect_economy.core.quest.enums import QuestCategory
from sect_economy.core.state import CharacterNotCreated, PlayerState
from sect_economy.services.quest_service import (
    QuestNotFound,
    QuestService,
    QuestSessionRegistry,
)


@pytest.fixture()
def make_service(store, bus, scheduler):
    def _make(level: int = 1, **kwargs) -> QuestService:
        store.update("p1", lambda s: replace(s, cultivation_level=level))
        return QuestService(
            "p1", store, bus, scheduler, rng=random.Random(3), **kwargs
        )

    return _make


def _find(service: QuestService, category: QuestCategory):
    return next(q for q in service.active_quests() if q.category == category.value)


def _ids(service: QuestService) -> list[str]:
    return [q.quest_id for q in service.active_quests()]


# ── session ──


class TestSession:
    def test_open_generates_batch_and_arms_timer(self, make_service, scheduler):
        service = make_service(level=1)
        quests = service.open()

        assert len(quests) == 4
        assert service.is_open
        assert service.refresh_deadline == 180.0
        assert service.time_remaining == 180
        assert service.countdown_display == "3:00"

    def test_open_requires_character(self, store, bus, scheduler):
        store.create(PlayerState(player_id="fresh"))
        service = QuestService("fresh", store, bus, scheduler)
        with pytest.raises(CharacterNotCreated) as exc_info:
            service.open()
        assert exc_info.value.redirect == "/character"
        assert not service.is_open

    def test_reopen_keeps_board(self, make_service):
        service = make_service()
        service.open()
        before = _ids(service)
        service.close()
        service.open()
        assert _ids(service) == before
        assert service.refresh_deadline == 180.0
        assert service.time_remaining == 180

    def test_close_cancels_timers(self, make_service, scheduler, notifications):
        service = make_service()
        service.open()
        before = _ids(service)

        service.close()
        assert scheduler.pending_count == 0
        scheduler.advance(1000)

        assert _ids(service) == before
        assert service.refresh_deadline is None
        assert notifications.drain() == []


# ── countdown + refresh ──


class TestRefreshCycle:
    def test_countdown_ticks(self, make_service, scheduler):
        service = make_service()
        service.open()

        scheduler.advance(1)
        assert service.time_remaining == 179
        assert service.countdown_display == "2:59"

        scheduler.advance(59)
        assert service.countdown_display == "2:00"

        scheduler.advance(111)
        assert service.countdown_display == "0:09"

    def test_refresh_replaces_board(self, make_service, scheduler, notifications):
        service = make_service()
        service.open()
        before = set(_ids(service))
        notifications.drain()

        scheduler.advance(180)

        assert set(_ids(service)).isdisjoint(before)
        assert len(service.active_quests()) == 4
        assert [(n.title, n.description) for n in notifications.drain()] == [
            (
                "New Quests Available",
                "The sect has issued new tasks for you to complete.",
            )
        ]
        assert service.refresh_deadline == 360.0
        assert service.time_remaining == 180

    def test_refresh_repeats(self, make_service, scheduler, bus):
        generated = []
        bus.subscribe(EventTypes.QUESTS_GENERATED, lambda e: generated.append(e))
        service = make_service()
        service.open()

        scheduler.advance(540)
        assert len(generated) == 4

    def test_refresh_uses_current_level(self, make_service, scheduler, store):
        service = make_service(level=1)
        service.open()
        store.update("p1", lambda s: replace(s, cultivation_level=5))

        scheduler.advance(180)
        categories = [q.category for q in service.active_quests()]
        assert QuestCategory.BREAKTHROUGH.value in categories

    def test_manual_regenerate_restarts_timer(self, make_service, scheduler):
        service = make_service()
        service.open()
        before = set(_ids(service))

        scheduler.advance(100)
        service.regenerate()

        assert set(_ids(service)).isdisjoint(before)
        assert service.refresh_deadline == 280.0
        assert service.time_remaining == 180
        scheduler.advance(179)
        assert service.refresh_deadline == 280.0


# ── progress ──


class TestProgress:
    def test_progress_notifies(self, make_service, notifications):
        service = make_service(level=1)
        service.open()
        quest = _find(service, QuestCategory.CULTIVATION)

        updated = service.progress(quest.quest_id)

        assert updated.progress == 1
        assert updated.completed is False
        n = notifications.drain()[-1]
        assert n.title == "Quest Progress"
        assert n.description == "1/150 Accumulate Qi energy through meditation"
        assert n.severity is Severity.DEFAULT

    def test_progress_to_completion(self, make_service, notifications):
        service = make_service(level=1)
        service.open()
        gather = _find(service, QuestCategory.GATHER)

        updated = service.progress(gather.quest_id)

        assert updated.completed is True
        n = notifications.drain()[-1]
        assert n.title == "Quest Completed!"
        assert n.description == f'You have completed "{gather.name}"'

    def test_progress_on_completed_is_silent_noop(self, make_service, notifications):
        service = make_service(level=1)
        service.open()
        gather = _find(service, QuestCategory.GATHER)
        service.progress(gather.quest_id)
        notifications.drain()

        assert service.progress(gather.quest_id) is None
        assert service.get_quest(gather.quest_id).progress == 1
        assert notifications.drain() == []

    def test_progress_unknown(self, make_service):
        service = make_service()
        service.open()
        with pytest.raises(QuestNotFound):
            service.progress("nope")


# ── claim ──


class TestClaim:
    def test_claim_incomplete_is_noop(self, make_service, store):
        service = make_service()
        service.open()
        before = store.snapshot("p1")
        quest = _find(service, QuestCategory.CULTIVATION)

        assert service.claim(quest.quest_id) is None
        assert store.snapshot("p1") == before
        assert quest.quest_id in _ids(service)

    def test_breakthrough_claim_at_level_five(
        self, make_service, store, notifications, scheduler
    ):
        service = make_service(level=5)
        service.open()
        assert len(service.active_quests()) == 6
        before = store.snapshot("p1")

        quest = _find(service, QuestCategory.BREAKTHROUGH)
        assert quest.name == "Heaven Defying Breakthrough"
        assert quest.target == 1
        assert service.progress(quest.quest_id).completed

        scheduler.advance(30)
        claimed = service.claim(quest.quest_id)

        assert claimed.quest_id == quest.quest_id
        after = store.snapshot("p1")
        assert after.gold == before.gold + 400
        assert after.spiritual_stones == before.spiritual_stones + 10
        assert after.cultivation_progress == before.cultivation_progress + 250
        assert after.energy == before.energy
        assert quest.quest_id not in _ids(service)

        titles = [n.title for n in notifications.drain()]
        assert "Rewards Claimed" in titles

        # 6 - 1 = 5 <= 임계값 → 보충 퀘스트 정확히 1개
        quests = service.active_quests()
        assert len(quests) == 6
        assert quests[-1].category == QuestCategory.REPLACEMENT.value
        assert service.refresh_deadline == 210.0

    def test_rewards_notification_text(self, make_service, notifications):
        service = make_service(level=5)
        service.open()
        quest = _find(service, QuestCategory.BREAKTHROUGH)
        service.progress(quest.quest_id)
        notifications.drain()

        service.claim(quest.quest_id)

        n = notifications.drain()[0]
        assert n.description == (
            "You gained 400 gold, 10 Qi stones, and 250 cultivation experience."
        )

    def test_no_replenish_above_threshold(self, make_service):
        service = make_service(level=5, replenish_threshold=3)
        service.open()
        quest = _find(service, QuestCategory.BREAKTHROUGH)
        service.progress(quest.quest_id)

        service.claim(quest.quest_id)

        assert len(service.active_quests()) == 5
        assert all(
            q.category != QuestCategory.REPLACEMENT.value
            for q in service.active_quests()
        )

    def test_claim_unknown(self, make_service):
        service = make_service()
        service.open()
        with pytest.raises(QuestNotFound):
            service.claim("nope")

    def test_claim_emits_event(self, make_service, bus):
        claimed = []
        bus.subscribe(EventTypes.QUEST_CLAIMED, lambda e: claimed.append(e.data))
        service = make_service(level=1)
        service.open()
        gather = _find(service, QuestCategory.GATHER)
        service.progress(gather.quest_id)

        service.claim(gather.quest_id)

        assert claimed[0]["quest_id"] == gather.quest_id
        assert claimed[0]["gold"] == 40

    def test_claim_after_close_does_not_rearm(self, make_service, scheduler):
        service = make_service(level=1)
        service.open()
        gather = _find(service, QuestCategory.GATHER)
        service.progress(gather.quest_id)
        service.close()

        service.claim(gather.quest_id)

        assert scheduler.pending_count == 0


# ── registry ──


class TestSessionRegistry:
    def test_open_reuses_session(self, store, bus, scheduler):
        registry = QuestSessionRegistry(store, bus, scheduler, rng=random.Random(1))
        first = registry.open("p1")
        assert registry.open("p1") is first
        assert len(registry) == 1

    def test_close(self, store, bus, scheduler):
        registry = QuestSessionRegistry(store, bus, scheduler)
        service = registry.open("p1")
        assert registry.close("p1") is True
        assert not service.is_open
        assert registry.get("p1") is None
        assert registry.close("p1") is False

    def test_close_all(self, store, bus, scheduler):
        registry = QuestSessionRegistry(store, bus, scheduler)
        registry.open("p1")
        registry.close_all()
        assert len(registry) == 0
        assert scheduler.pending_count == 0
