"""퀘스트 수명주기 전이: 순수 함수 + 활성 보드

active-incomplete → active-complete → claimed (보드에서 제거)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Iterator

from sect_economy.core.state import StateTransform, add_resources

from .enums import ProgressOutcome, QuestState
from .models import Quest, QuestRewards

logger = logging.getLogger(__name__)


def quest_state(quest: Quest) -> QuestState:
    """보드에 남아 있는 퀘스트의 상태"""
    if quest.completed:
        return QuestState.ACTIVE_COMPLETE
    return QuestState.ACTIVE_INCOMPLETE


def advance_progress(quest: Quest) -> tuple[Quest, ProgressOutcome]:
    """진행 1단계, target 에서 멈춘다. 완료된 퀘스트는 그대로 반환."""
    if quest.completed:
        return quest, ProgressOutcome.NOOP

    new_progress = min(quest.progress + 1, quest.target)
    if new_progress >= quest.target:
        return (
            replace(quest, progress=new_progress, completed=True),
            ProgressOutcome.COMPLETED,
        )
    return replace(quest, progress=new_progress), ProgressOutcome.PROGRESSED


def reward_transform(rewards: QuestRewards) -> StateTransform:
    """gold, 영석, 경험치(수련 진행도)를 플레이어에 가산하는 변환"""
    return add_resources(
        gold=rewards.gold,
        spiritual_stones=rewards.spiritual_stones,
        cultivation_progress=rewards.experience,
    )


class QuestBoard:
    """순서 있는 활성 퀘스트 모음. 퀘스트 인스턴스의 유일한 소유자."""

    def __init__(self, quests: Iterable[Quest] = ()) -> None:
        self._quests: dict[str, Quest] = {}
        self.replace_all(quests)

    def replace_all(self, quests: Iterable[Quest]) -> None:
        self._quests = {}
        for quest in quests:
            self.append(quest)

    def append(self, quest: Quest) -> None:
        if quest.quest_id in self._quests:
            raise ValueError(f"Duplicate quest id: {quest.quest_id}")
        self._quests[quest.quest_id] = quest

    def get(self, quest_id: str) -> Quest | None:
        return self._quests.get(quest_id)

    def progress(self, quest_id: str) -> tuple[Quest, ProgressOutcome] | None:
        """퀘스트 하나 진행. 보드에 없는 id 면 None."""
        quest = self._quests.get(quest_id)
        if quest is None:
            return None
        updated, outcome = advance_progress(quest)
        if outcome is not ProgressOutcome.NOOP:
            self._quests[quest_id] = updated
        return updated, outcome

    def remove(self, quest_id: str) -> Quest | None:
        return self._quests.pop(quest_id, None)

    def quests(self) -> list[Quest]:
        return list(self._quests.values())

    def __len__(self) -> int:
        return len(self._quests)

    def __iter__(self) -> Iterator[Quest]:
        return iter(list(self._quests.values()))

    def __contains__(self, quest_id: object) -> bool:
        return quest_id in self._quests
