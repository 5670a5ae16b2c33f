"""퀘스트 열거형"""

from enum import Enum


class QuestType(str, Enum):
    SECT = "sect"
    MAIN = "main"
    SIDE = "side"
    HIDDEN = "hidden"
    DAILY = "daily"
    WEEKLY = "weekly"


class QuestCategory(str, Enum):
    """퀘스트를 만든 생성 슬롯. quest_id 접두어로도 쓰인다."""

    CULTIVATION = "cultivation"
    COMBAT = "combat"
    BREAKTHROUGH = "breakthrough"
    GATHER = "gather"
    ADDITIONAL = "additional"
    REPLACEMENT = "replacement"


class QuestState(str, Enum):
    ACTIVE_INCOMPLETE = "active_incomplete"
    ACTIVE_COMPLETE = "active_complete"
    CLAIMED = "claimed"


class ProgressOutcome(str, Enum):
    NOOP = "noop"
    PROGRESSED = "progressed"
    COMPLETED = "completed"
