"""완료 가이드: 퀘스트를 게임 어디에서 진행하는지 안내"""

from .models import Quest

DISPLAY_NAMES: dict[str, str] = {
    # 장소
    "forest": "Verdant Spirit Forest",
    "mountain": "Azure Dragon Mountains",
    "ruins": "Immortal Emperor Ruins",
    "jade-valley": "Nine Treasures Jade Valley",
    "poison-marsh": "Miasma Venom Marsh",
    "flame-desert": "Nine Suns Flame Desert",
    "frozen-peak": "Frost Immortal Summit",
    # 적
    "demonic-beast": "Demonic Spirit Beast",
    "qi-wolf": "Frost Wind Spirit Wolf",
    "bloodbear": "Blood Mist Cave Bear",
    "venomsnake": "Nine-Pattern Poison Serpent",
    "celestial-tiger": "White Mountain Spirit Tiger",
    "golden-eagle": "Golden Wing Thunder Eagle",
    "rogue-cultivator": "Rogue Cultivator",
    # 생성기 전투 키
    "beast": "Spirit Beast",
    "wolf": "Frost Wind Wolf",
    "bear": "Blood Mist Bear",
    "snake": "Nine-Pattern Serpent",
    "tiger": "White Mountain Tiger",
    "eagle": "Golden Wing Eagle",
}

CULTIVATION_GUIDE = (
    "Go to the main cultivation page. Fill your cultivation bar to maximum by "
    "using the 'Cultivate' button repeatedly. Each cultivation session will "
    "increase your progress toward the target."
)
BREAKTHROUGH_GUIDE = (
    "Accumulate enough cultivation progress, then attempt a breakthrough on the "
    "main cultivation page by clicking the 'Attempt Breakthrough' button when it "
    "becomes available."
)
COMBAT_GUIDE = (
    "Travel to the Combat page and battle {enemy} by selecting an appropriate "
    "hunting ground and engaging in combat. Defeat enemies until you reach the "
    "target number."
)
GATHER_GUIDE = (
    "Visit the Map page and travel to {location}. Click on gathering spots to "
    "collect resources until you reach the target number."
)
ARTIFACT_GUIDE = (
    "Go to the Artifact Refinement section and participate in the refinement "
    "process by contributing materials and spiritual energy. Each successful "
    "refinement session counts toward your progress."
)
DEFENSE_GUIDE = (
    "Visit the Sect Defense page and participate in patrol duties by activating "
    "the defensive arrays. Each successful patrol adds to your progress."
)
LIBRARY_GUIDE = (
    "Go to the Sect Library and study cultivation techniques. Each study session "
    "will increase your comprehension and count toward quest progress."
)
ELDER_GUIDE = (
    "Visit the Sect Elders Hall and speak with the elders to receive their "
    "specific requests. Complete the tasks they assign to progress in the quest."
)
DEFAULT_GUIDE = (
    "Participate in activities related to the quest objective. Your progress "
    "will update automatically as you perform relevant actions throughout the game."
)


def display_name(key: str) -> str:
    """장소/적 키의 표시 이름. 모르는 키는 그대로."""
    return DISPLAY_NAMES.get(key, key)


def _name_has(quest: Quest, *fragments: str) -> bool:
    return any(fragment in quest.name for fragment in fragments)


def completion_guide(quest: Quest) -> str:
    """처음 일치한 규칙 사용"""
    if _name_has(quest, "Profound Dao Heart", "Divine Scripture", "Heavenly Dao"):
        return CULTIVATION_GUIDE

    if _name_has(quest, "Breakthrough", "Realm Breakthrough"):
        return BREAKTHROUGH_GUIDE

    if quest.enemy_type or _name_has(quest, "Subdue", "Beast", "Hunt"):
        enemy = display_name(quest.enemy_type) if quest.enemy_type else "enemies"
        return COMBAT_GUIDE.format(enemy=enemy)

    if quest.location or _name_has(quest, "Harvest", "Gather", "Collection"):
        location = (
            display_name(quest.location) if quest.location else "appropriate locations"
        )
        return GATHER_GUIDE.format(location=location)

    if _name_has(quest, "Artifact", "Refinement"):
        return ARTIFACT_GUIDE

    if _name_has(quest, "Array", "Formation", "Defense"):
        return DEFENSE_GUIDE

    if _name_has(quest, "Knowledge", "Study"):
        return LIBRARY_GUIDE

    if _name_has(quest, "Elder"):
        return ELDER_GUIDE

    return DEFAULT_GUIDE
