"""퀘스트 시스템 Core 패키지"""

from sect_economy.core.quest.enums import (
    ProgressOutcome,
    QuestCategory,
    QuestState,
    QuestType,
)
from sect_economy.core.quest.generator import (
    MAX_BATCH_SIZE,
    generate_quests,
    generate_replacement_quest,
)
from sect_economy.core.quest.guide import completion_guide, display_name
from sect_economy.core.quest.lifecycle import (
    QuestBoard,
    advance_progress,
    quest_state,
    reward_transform,
)
from sect_economy.core.quest.models import Quest, QuestRewards

__all__ = [
    # enums
    "QuestType",
    "QuestCategory",
    "QuestState",
    "ProgressOutcome",
    # models
    "Quest",
    "QuestRewards",
    # generator
    "MAX_BATCH_SIZE",
    "generate_quests",
    "generate_replacement_quest",
    # lifecycle
    "QuestBoard",
    "advance_progress",
    "quest_state",
    "reward_transform",
    # guide
    "completion_guide",
    "display_name",
]
