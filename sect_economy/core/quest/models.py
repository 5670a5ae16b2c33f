"""퀘스트 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class QuestRewards:
    """수령 시 지급되는 보상 묶음"""

    gold: int = 0
    spiritual_stones: int = 0
    experience: int = 0
    items: tuple[str, ...] = ()  # 생성기는 채우지 않음


@dataclass(frozen=True)
class Quest:
    """문파 퀘스트. 변경 시 교체, 제자리 수정 없음."""

    quest_id: str
    name: str = ""
    description: str = ""
    objective: str = ""

    quest_type: str = "sect"  # QuestType 값
    category: str = "additional"  # QuestCategory 값

    # 진행도: 0 <= progress <= target
    progress: int = 0
    target: int = 1
    completed: bool = False

    rewards: QuestRewards = field(default_factory=QuestRewards)

    # 선택: 레벨 제한 / 장소 태그
    required_level: Optional[int] = None
    location: Optional[str] = None
    enemy_type: Optional[str] = None
