"""문파 퀘스트 생성: 레벨 스케일 배치 + 단일 보충 퀘스트"""

import logging
import math
import random
import uuid
from dataclasses import dataclass

from .enums import QuestCategory, QuestType
from .models import Quest, QuestRewards

logger = logging.getLogger(__name__)

# === 배치 제한 ===
MAX_BATCH_SIZE = 6
MAX_ADDITIONAL_QUESTS = 3
BREAKTHROUGH_MIN_LEVEL = 5

# === 전투 목표 수 ===
ENEMY_TYPES: tuple[tuple[str, str], ...] = (
    ("beast", "Spirit Beast"),
    ("wolf", "Frost Wind Wolf"),
    ("bear", "Blood Mist Bear"),
    ("snake", "Nine-Pattern Serpent"),
    ("tiger", "White Mountain Tiger"),
    ("eagle", "Golden Wing Eagle"),
    ("rogue-cultivator", "Rogue Cultivator"),
)

# === 채집 ===
GATHER_LOCATIONS: tuple[tuple[str, str], ...] = (
    ("forest", "Verdant Spirit Forest"),
    ("mountain", "Azure Dragon Mountains"),
    ("ruins", "Immortal Emperor Ruins"),
)

GATHER_RESOURCES: tuple[str, ...] = (
    "Spirit Herbs",
    "Heavenly Ores",
    "Lightning Essence",
    "Soul Crystals",
    "Dragon Veins",
    "Phoenix Feathers",
)


@dataclass(frozen=True)
class AdditionalQuestTemplate:
    """추가 퀘스트 행. gold = L * gold_per_level + rand[0, gold_jitter)"""

    name: str
    description: str
    objective: str
    gold_per_level: int
    gold_jitter: int
    stone_divisor: int  # 영석 = max(1, L // stone_divisor)
    exp_per_level: int


ADDITIONAL_QUESTS: tuple[AdditionalQuestTemplate, ...] = (
    AdditionalQuestTemplate(
        name="Herb Collection",
        description="Collect rare herbs for the sect's alchemy division",
        objective="Gather special herbs",
        gold_per_level=15,
        gold_jitter=20,
        stone_divisor=5,
        exp_per_level=12,
    ),
    AdditionalQuestTemplate(
        name="Sect Defense",
        description="Help defend the sect grounds from intruders",
        objective="Patrol the sect grounds",
        gold_per_level=20,
        gold_jitter=15,
        stone_divisor=4,
        exp_per_level=18,
    ),
    AdditionalQuestTemplate(
        name="Knowledge Seeking",
        description="Study ancient texts in the sect library",
        objective="Study cultivation techniques",
        gold_per_level=10,
        gold_jitter=10,
        stone_divisor=3,
        exp_per_level=25,
    ),
)


@dataclass(frozen=True)
class ReplacementQuestTemplate:
    """보충 퀘스트 행. target = max(min_target, floor(L * target_ratio))"""

    name: str
    description: str
    objective: str
    min_target: int
    target_ratio: float


REPLACEMENT_QUESTS: tuple[ReplacementQuestTemplate, ...] = (
    ReplacementQuestTemplate(
        name="Divine Scripture Comprehension",
        description="Gain enlightenment by studying the sect's most sacred cultivation techniques",
        objective="Comprehend the profound mysteries in ancient texts",
        min_target=3,
        target_ratio=0.6,
    ),
    ReplacementQuestTemplate(
        name="Demonic Beast Suppression",
        description="The sect needs powerful disciples to subdue demonic beasts threatening nearby territories",
        objective="Hunt and defeat corrupted beasts in the wilderness",
        min_target=4,
        target_ratio=0.7,
    ),
    ReplacementQuestTemplate(
        name="Spirit Treasure Collection",
        description="Gather rare spiritual treasures to strengthen the sect's foundation",
        objective="Collect spiritual treasures throughout the realm",
        min_target=3,
        target_ratio=0.5,
    ),
    ReplacementQuestTemplate(
        name="Array Formation Defense",
        description="Assist in maintaining the sect's defensive formations against rival sects",
        objective="Channel spiritual energy into protective arrays",
        min_target=5,
        target_ratio=0.6,
    ),
    ReplacementQuestTemplate(
        name="Mystic Artifact Refinement",
        description="Help the sect's artifact refinement division forge spiritual weapons",
        objective="Contribute to the refinement of spiritual artifacts",
        min_target=4,
        target_ratio=0.6,
    ),
    ReplacementQuestTemplate(
        name="Heavenly Dao Insight",
        description="Meditate on the principles of the Heavenly Dao to gain profound insights",
        objective="Achieve breakthroughs in your understanding of cultivation",
        min_target=3,
        target_ratio=0.8,
    ),
)


def new_quest_id(category: QuestCategory) -> str:
    return f"{category.value}_{uuid.uuid4().hex[:12]}"


def _quest(category: QuestCategory, **fields) -> Quest:
    return Quest(
        quest_id=new_quest_id(category),
        quest_type=QuestType.SECT.value,
        category=category.value,
        **fields,
    )


# === 카테고리별 생성 ===


def build_cultivation_quest(level: int) -> Quest:
    return _quest(
        QuestCategory.CULTIVATION,
        name="Profound Dao Heart Tempering",
        description="Meditate on the fundamental principles of cultivation to strengthen your Dao Heart",
        objective="Accumulate Qi energy through meditation",
        target=max(1, level * 150),
        rewards=QuestRewards(
            gold=level * 30,
            spiritual_stones=math.ceil(level * 0.8),
            experience=level * 25,
        ),
        required_level=1,
    )


def build_combat_quest(level: int, rng: random.Random) -> Quest:
    enemy_type, enemy_name = rng.choice(ENEMY_TYPES)
    return _quest(
        QuestCategory.COMBAT,
        name=f"Subdue the {enemy_name}",
        description=(
            f"Elder Feng has requested disciples to exterminate {enemy_name}s that "
            "are threatening nearby spiritual herb gardens. Their corrupted energy "
            "is polluting the natural environment."
        ),
        objective=f"Defeat {enemy_name}s in combat",
        target=max(3, math.floor(level * 0.5)),
        rewards=QuestRewards(
            gold=level * 45,
            spiritual_stones=math.ceil(level * 0.6) + 2,
            experience=level * 35,
        ),
        required_level=1,
        enemy_type=enemy_type,
    )


def build_breakthrough_quest(level: int) -> Quest:
    return _quest(
        QuestCategory.BREAKTHROUGH,
        name="Heaven Defying Breakthrough",
        description=(
            "Achieve a realm breakthrough by purifying your core and harmonizing "
            "your meridians with spiritual energy from the heavens"
        ),
        objective="Perform a successful realm breakthrough ritual",
        target=1,
        rewards=QuestRewards(
            gold=level * 80,
            spiritual_stones=level * 2,
            experience=level * 50,
        ),
        required_level=BREAKTHROUGH_MIN_LEVEL,
    )


def build_gather_quest(level: int, rng: random.Random) -> Quest:
    location, location_name = rng.choice(GATHER_LOCATIONS)
    resource = rng.choice(GATHER_RESOURCES)
    return _quest(
        QuestCategory.GATHER,
        name=f"Harvest of {resource}",
        description=(
            f"The sect's Grand Elder needs precious {resource} from {location_name} "
            "for an upcoming alchemy ritual. These materials only appear during "
            "specific spiritual convergences and must be gathered with care."
        ),
        objective=f"Gather {resource} from {location_name}",
        target=1,
        rewards=QuestRewards(
            gold=level * 40,
            spiritual_stones=math.ceil(level * 0.7),
            experience=level * 30,
        ),
        required_level=1,
        location=location,
    )


def build_additional_quest(level: int, rng: random.Random) -> Quest:
    template = rng.choice(ADDITIONAL_QUESTS)
    return _quest(
        QuestCategory.ADDITIONAL,
        name=template.name,
        description=template.description,
        objective=template.objective,
        target=max(1, level // 3),
        rewards=QuestRewards(
            gold=level * template.gold_per_level + rng.randrange(template.gold_jitter),
            spiritual_stones=max(1, level // template.stone_divisor),
            experience=level * template.exp_per_level,
        ),
        required_level=1,
    )


def filter_for_level(quests: list[Quest], player_level: int) -> list[Quest]:
    """플레이어 레벨보다 높은 제한의 퀘스트 제외"""
    return [
        q for q in quests if q.required_level is None or q.required_level <= player_level
    ]


def generate_quests(player_level: int, rng: random.Random | None = None) -> list[Quest]:
    """레벨 스케일 문파 퀘스트 배치, 최대 MAX_BATCH_SIZE 개.

    순서: 수련, 전투, 돌파(레벨 5 이상), 채집, 추가 min(3, level) 개.
    레벨 제한 필터를 먼저 적용하고 잘라낸다 (레벨 0 이면 빈 배치).
    """
    rng = rng or random
    level = max(0, int(player_level))

    quests = [build_cultivation_quest(level), build_combat_quest(level, rng)]
    if level >= BREAKTHROUGH_MIN_LEVEL:
        quests.append(build_breakthrough_quest(level))
    quests.append(build_gather_quest(level, rng))
    for _ in range(min(MAX_ADDITIONAL_QUESTS, level)):
        quests.append(build_additional_quest(level, rng))

    batch = filter_for_level(quests, level)[:MAX_BATCH_SIZE]
    logger.info(
        "Quest batch generated: level=%d, generated=%d, kept=%d",
        level,
        len(quests),
        len(batch),
    )
    return batch


def generate_replacement_quest(
    player_level: int, rng: random.Random | None = None
) -> Quest:
    """활성 보드가 줄었을 때 덧붙이는 퀘스트 1개"""
    rng = rng or random
    level = max(0, int(player_level))
    template = rng.choice(REPLACEMENT_QUESTS)

    quest = _quest(
        QuestCategory.REPLACEMENT,
        name=template.name,
        description=template.description,
        objective=template.objective,
        target=max(template.min_target, math.floor(level * template.target_ratio)),
        rewards=QuestRewards(
            gold=level * 35 + rng.randrange(30),
            spiritual_stones=max(2, math.floor(level * 0.6)),
            experience=level * 25 + rng.randrange(15),
        ),
        required_level=max(1, level - 2),
    )
    logger.debug("Replacement quest generated: %s (%s)", quest.quest_id, quest.name)
    return quest
