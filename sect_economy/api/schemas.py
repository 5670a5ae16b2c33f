"""API request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from sect_economy.core.notifications import Notification
from sect_economy.core.quest.guide import completion_guide
from sect_economy.core.quest.lifecycle import quest_state
from sect_economy.core.quest.models import Quest
from sect_economy.core.shop.models import Price, ShopItem
from sect_economy.core.state import OwnedItem, PlayerState

# === Request Schemas ===


class RegisterRequest(BaseModel):
    """플레이어 등록 요청"""

    player_id: str = Field(..., min_length=1, max_length=50, description="Player ID")
    character_created: bool = Field(
        True, description="False registers an account that still needs a character"
    )


class PurchaseRequest(BaseModel):
    item_id: str = Field(..., min_length=1, description="Item ID from the current stock")


# === Response Schemas ===


class PriceInfo(BaseModel):
    gold: int
    spiritual_stones: int
    qi: int


class ShopItemInfo(BaseModel):
    """상점 상품"""

    item_id: str
    name: str
    description: str
    family: str
    item_type: str
    rarity: str
    rarity_ordinal: int
    stats: dict[str, int]
    price: PriceInfo
    required_level: int
    icon: str


class OwnedItemInfo(BaseModel):
    """인벤토리 기록"""

    item_id: str
    name: str
    item_type: str
    rarity: str
    level: int
    stats: dict[str, int]
    equipped: bool
    icon: str
    description: str
    price: PriceInfo
    required_level: int


class PlayerInfo(BaseModel):
    """플레이어 자원 정보"""

    player_id: str
    gold: int
    spiritual_stones: int
    energy: int
    cultivation_level: int
    cultivation_progress: int
    character_created: bool
    weapons: list[OwnedItemInfo] = []
    apparel: list[OwnedItemInfo] = []


class ShopListResponse(BaseModel):
    family: str
    count: int
    items: list[ShopItemInfo]


class PurchaseResponse(BaseModel):
    success: bool
    reason: Optional[str] = None
    message: str
    item: ShopItemInfo
    player: PlayerInfo


class RewardsInfo(BaseModel):
    gold: int
    spiritual_stones: int
    experience: int
    items: list[str] = []


class QuestInfo(BaseModel):
    """퀘스트 보드 항목"""

    quest_id: str
    name: str
    description: str
    objective: str
    quest_type: str
    category: str
    state: str
    progress: int
    target: int
    completed: bool
    rewards: RewardsInfo
    required_level: Optional[int] = None
    location: Optional[str] = None
    enemy_type: Optional[str] = None
    guide: str


class QuestBoardResponse(BaseModel):
    player_id: str
    quests: list[QuestInfo]
    time_remaining: int
    countdown: str


class QuestActionResponse(BaseModel):
    """progress/claim 결과. 변화가 없었으면 quest 는 None."""

    changed: bool
    quest: Optional[QuestInfo] = None
    board: QuestBoardResponse
    player: Optional[PlayerInfo] = None


class NotificationInfo(BaseModel):
    title: str
    description: str
    severity: str
    player_id: Optional[str] = None


# === Builders ===


def build_price_info(price: Price) -> PriceInfo:
    return PriceInfo(
        gold=price.gold, spiritual_stones=price.spiritual_stones, qi=price.qi
    )


def build_shop_item_info(item: ShopItem) -> ShopItemInfo:
    """ShopItem을 ShopItemInfo로 변환"""
    return ShopItemInfo(
        item_id=item.item_id,
        name=item.name,
        description=item.description,
        family=item.family.value,
        item_type=item.item_type,
        rarity=item.rarity.label,
        rarity_ordinal=int(item.rarity),
        stats=dict(item.stats),
        price=build_price_info(item.price),
        required_level=item.required_level,
        icon=item.icon,
    )


def _build_owned_item_info(item: OwnedItem) -> OwnedItemInfo:
    return OwnedItemInfo(
        item_id=item.item_id,
        name=item.name,
        item_type=item.item_type,
        rarity=item.rarity.label,
        level=item.level,
        stats=dict(item.stats),
        equipped=item.equipped,
        icon=item.icon,
        description=item.description,
        price=build_price_info(item.price),
        required_level=item.required_level,
    )


def build_player_info(state: PlayerState) -> PlayerInfo:
    """PlayerState를 PlayerInfo로 변환 (인벤토리는 family 별 목록)"""
    return PlayerInfo(
        player_id=state.player_id,
        gold=state.gold,
        spiritual_stones=state.spiritual_stones,
        energy=state.energy,
        cultivation_level=state.cultivation_level,
        cultivation_progress=state.cultivation_progress,
        character_created=state.character_created,
        weapons=[_build_owned_item_info(i) for i in state.inventory.weapons.values()],
        apparel=[_build_owned_item_info(i) for i in state.inventory.apparel.values()],
    )


def build_quest_info(quest: Quest) -> QuestInfo:
    """Quest를 QuestInfo로 변환. state/guide 는 Core 에서 계산."""
    return QuestInfo(
        quest_id=quest.quest_id,
        name=quest.name,
        description=quest.description,
        objective=quest.objective,
        quest_type=quest.quest_type,
        category=quest.category,
        state=quest_state(quest).value,
        progress=quest.progress,
        target=quest.target,
        completed=quest.completed,
        rewards=RewardsInfo(
            gold=quest.rewards.gold,
            spiritual_stones=quest.rewards.spiritual_stones,
            experience=quest.rewards.experience,
            items=list(quest.rewards.items),
        ),
        required_level=quest.required_level,
        location=quest.location,
        enemy_type=quest.enemy_type,
        guide=completion_guide(quest),
    )


def build_notification_info(notification: Notification) -> NotificationInfo:
    return NotificationInfo(
        title=notification.title,
        description=notification.description,
        severity=notification.severity.value,
        player_id=notification.player_id,
    )
