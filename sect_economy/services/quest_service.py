"""퀘스트 Service: 플레이어 세션 하나의 문파 퀘스트 보드 수명주기

활성 보드, 3분 갱신 타이머, 1초 카운트다운을 소유한다.
보상은 플레이어 문서 저장소로, 플레이어 알림은 EventBus 로 나간다.
Service → Service 금지
"""

from __future__ import annotations

import math
import random

from sect_economy.core.event_bus import EventBus, GameEvent
from sect_economy.core.event_types import EventTypes
from sect_economy.core.logging import get_logger
from sect_economy.core.notifications import Notifier
from sect_economy.core.quest.enums import ProgressOutcome
from sect_economy.core.quest.generator import (
    generate_quests,
    generate_replacement_quest,
)
from sect_economy.core.quest.lifecycle import QuestBoard, reward_transform
from sect_economy.core.quest.models import Quest
from sect_economy.core.scheduler import Scheduler, TimerHandle
from sect_economy.core.state import CharacterNotCreated, PlayerStateStore

logger = get_logger(__name__)

DEFAULT_REFRESH_SECONDS = 180.0
DEFAULT_COUNTDOWN_TICK_SECONDS = 1.0
DEFAULT_REPLENISH_THRESHOLD = 5


class QuestNotFound(LookupError):
    """활성 보드에 없는 quest_id"""


class QuestService:
    """퀘스트 수명주기 관리"""

    def __init__(
        self,
        player_id: str,
        store: PlayerStateStore,
        event_bus: EventBus,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        refresh_seconds: float = DEFAULT_REFRESH_SECONDS,
        countdown_tick_seconds: float = DEFAULT_COUNTDOWN_TICK_SECONDS,
        replenish_threshold: int = DEFAULT_REPLENISH_THRESHOLD,
    ):
        self._player_id = player_id
        self._store = store
        self._bus = event_bus
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._refresh_seconds = refresh_seconds
        self._tick_seconds = countdown_tick_seconds
        self._replenish_threshold = replenish_threshold
        self._notifier = Notifier(event_bus, "quest_service")

        self._board = QuestBoard()
        self._open = False
        self._refresh_handle: TimerHandle | None = None
        self._countdown_handle: TimerHandle | None = None
        self._refresh_deadline: float | None = None
        self._time_remaining = 0

    # === 세션 ===

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> list[Quest]:
        """세션 시작. 보드가 비어 있으면 배치 생성, 아니면 타이머만 재설정."""
        state = self._store.snapshot(self._player_id)
        if not state.character_created:
            raise CharacterNotCreated(self._player_id)

        self._open = True
        if len(self._board) == 0:
            self._regenerate(state.cultivation_level)
        else:
            self._arm_refresh()
        return self.active_quests()

    def close(self) -> None:
        """세션 종료: 타이머 둘 다 취소. 늦게 도착한 콜백은 무시된다."""
        self._open = False
        self._scheduler.cancel(self._refresh_handle)
        self._scheduler.cancel(self._countdown_handle)
        self._refresh_handle = None
        self._countdown_handle = None
        self._refresh_deadline = None
        self._time_remaining = 0
        logger.info("Quest session closed: player=%s", self._player_id)

    # === 보드 조회 ===

    def active_quests(self) -> list[Quest]:
        return self._board.quests()

    def get_quest(self, quest_id: str) -> Quest | None:
        return self._board.get(quest_id)

    # === 전이 ===

    def progress(self, quest_id: str) -> Quest | None:
        """진행 1단계. 이미 완료된 퀘스트면 None."""
        result = self._board.progress(quest_id)
        if result is None:
            logger.warning("Progress on unknown quest %s", quest_id)
            raise QuestNotFound(quest_id)

        quest, outcome = result
        if outcome is ProgressOutcome.NOOP:
            return None

        if outcome is ProgressOutcome.COMPLETED:
            logger.info("Quest completed: %s (%s)", quest.quest_id, quest.name)
            self._notifier.notify(
                "Quest Completed!",
                f'You have completed "{quest.name}"',
                player_id=self._player_id,
            )
            event_type = EventTypes.QUEST_COMPLETED
        else:
            logger.debug(
                "Quest progress: %s %d/%d", quest.quest_id, quest.progress, quest.target
            )
            self._notifier.notify(
                "Quest Progress",
                f"{quest.progress}/{quest.target} {quest.objective}",
                player_id=self._player_id,
            )
            event_type = EventTypes.QUEST_PROGRESSED

        self._bus.emit(
            GameEvent(
                event_type=event_type,
                data={
                    "player_id": self._player_id,
                    "quest_id": quest.quest_id,
                    "progress": quest.progress,
                    "target": quest.target,
                },
                source="quest_service",
            )
        )
        return quest

    def claim(self, quest_id: str) -> Quest | None:
        """보상 지급 후 보드에서 제거. 미완료면 None."""
        quest = self._board.get(quest_id)
        if quest is None:
            logger.warning("Claim on unknown quest %s", quest_id)
            raise QuestNotFound(quest_id)
        if not quest.completed:
            return None

        state = self._store.update(self._player_id, reward_transform(quest.rewards))
        rewards = quest.rewards
        self._notifier.notify(
            "Rewards Claimed",
            f"You gained {rewards.gold} gold, {rewards.spiritual_stones} Qi stones, "
            f"and {rewards.experience} cultivation experience.",
            player_id=self._player_id,
        )
        self._board.remove(quest_id)
        logger.info(
            "Quest claimed: %s (gold=%d, stones=%d, exp=%d)",
            quest_id,
            rewards.gold,
            rewards.spiritual_stones,
            rewards.experience,
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.QUEST_CLAIMED,
                data={
                    "player_id": self._player_id,
                    "quest_id": quest_id,
                    "gold": rewards.gold,
                    "spiritual_stones": rewards.spiritual_stones,
                    "experience": rewards.experience,
                },
                source="quest_service",
            )
        )

        if len(self._board) <= self._replenish_threshold:
            self._replenish(state.cultivation_level)
        return quest

    def regenerate(self) -> list[Quest]:
        """보드 전체를 즉시 교체하고 갱신 타이머 재시작"""
        state = self._store.snapshot(self._player_id)
        self._regenerate(state.cultivation_level)
        return self.active_quests()

    # === 갱신 주기 ===

    @property
    def refresh_deadline(self) -> float | None:
        return self._refresh_deadline

    @property
    def time_remaining(self) -> int:
        """마지막 카운트다운 tick 기준 갱신까지 남은 초"""
        return self._time_remaining

    @property
    def countdown_display(self) -> str:
        minutes, seconds = divmod(self._time_remaining, 60)
        return f"{minutes}:{seconds:02d}"

    def _regenerate(self, level: int) -> None:
        self._board.replace_all(generate_quests(level, self._rng))
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.QUESTS_GENERATED,
                data={
                    "player_id": self._player_id,
                    "quest_ids": [q.quest_id for q in self._board],
                },
                source="quest_service",
            )
        )
        self._arm_refresh()

    def _replenish(self, level: int) -> None:
        quest = generate_replacement_quest(level, self._rng)
        self._board.append(quest)
        logger.info("Board replenished with %s (%s)", quest.quest_id, quest.name)
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.QUEST_REPLENISHED,
                data={"player_id": self._player_id, "quest_id": quest.quest_id},
                source="quest_service",
            )
        )
        self._arm_refresh()

    def _arm_refresh(self) -> None:
        if not self._open:
            return
        self._scheduler.cancel(self._refresh_handle)
        self._refresh_deadline = self._scheduler.now() + self._refresh_seconds
        self._refresh_handle = self._scheduler.call_later(
            self._refresh_seconds, self._on_refresh_due
        )
        logger.debug(
            "Quest refresh armed: player=%s, deadline=%.3f",
            self._player_id,
            self._refresh_deadline,
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.QUEST_REFRESH_SCHEDULED,
                data={"player_id": self._player_id, "deadline": self._refresh_deadline},
                source="quest_service",
            )
        )
        self._restart_countdown()

    def _on_refresh_due(self) -> None:
        if not self._open:
            return
        self._refresh_handle = None
        self._refresh_deadline = None
        self._notifier.notify(
            "New Quests Available",
            "The sect has issued new tasks for you to complete.",
            player_id=self._player_id,
        )
        state = self._store.snapshot(self._player_id)
        self._regenerate(state.cultivation_level)

    # === 카운트다운 ===

    def _restart_countdown(self) -> None:
        self._scheduler.cancel(self._countdown_handle)
        self._countdown_handle = None
        self._tick()

    def _tick(self) -> None:
        if not self._open or self._refresh_deadline is None:
            return
        remaining = max(
            0, math.ceil(self._refresh_deadline - self._scheduler.now())
        )
        self._time_remaining = remaining
        if remaining > 0:
            self._countdown_handle = self._scheduler.call_later(
                self._tick_seconds, self._tick
            )
        else:
            self._countdown_handle = None


class QuestSessionRegistry:
    """플레이어당 QuestService 하나, 첫 접근 시 생성. close 로 제거."""

    def __init__(
        self,
        store: PlayerStateStore,
        event_bus: EventBus,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        refresh_seconds: float = DEFAULT_REFRESH_SECONDS,
        countdown_tick_seconds: float = DEFAULT_COUNTDOWN_TICK_SECONDS,
        replenish_threshold: int = DEFAULT_REPLENISH_THRESHOLD,
    ):
        self._store = store
        self._bus = event_bus
        self._scheduler = scheduler
        self._rng = rng
        self._refresh_seconds = refresh_seconds
        self._tick_seconds = countdown_tick_seconds
        self._replenish_threshold = replenish_threshold
        self._sessions: dict[str, QuestService] = {}

    def open(self, player_id: str) -> QuestService:
        service = self._sessions.get(player_id)
        if service is None:
            service = QuestService(
                player_id,
                self._store,
                self._bus,
                self._scheduler,
                rng=self._rng,
                refresh_seconds=self._refresh_seconds,
                countdown_tick_seconds=self._tick_seconds,
                replenish_threshold=self._replenish_threshold,
            )
        if not service.is_open:
            service.open()
        self._sessions[player_id] = service
        return service

    def get(self, player_id: str) -> QuestService | None:
        return self._sessions.get(player_id)

    def close(self, player_id: str) -> bool:
        service = self._sessions.pop(player_id, None)
        if service is None:
            return False
        service.close()
        return True

    def close_all(self) -> None:
        for player_id in list(self._sessions):
            self.close(player_id)

    def __len__(self) -> int:
        return len(self._sessions)
