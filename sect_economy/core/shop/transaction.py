"""구매 트랜잭션: 재화/레벨 검사 후 원자적 갱신 1회"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from sect_economy.core.state import (
    OwnedItem,
    PlayerState,
    PlayerStateStore,
    StateTransform,
)

from .models import Price, ShopItem

logger = logging.getLogger(__name__)


class PurchaseRejected(Exception):
    """구매 거절. 아무것도 기록되지 않음."""

    reason = "rejected"
    title = "Purchase failed"

    def __init__(self, item: ShopItem, message: str) -> None:
        super().__init__(message)
        self.item = item
        self.message = message


class InsufficientResources(PurchaseRejected):
    reason = "insufficient_resources"
    title = "Cannot afford item"

    def __init__(self, item: ShopItem) -> None:
        super().__init__(
            item, "You don't have enough resources to purchase this item."
        )


class LevelTooLow(PurchaseRejected):
    reason = "level_too_low"
    title = "Level too low"

    def __init__(self, item: ShopItem) -> None:
        super().__init__(
            item,
            f"You need to be at least level {item.required_level} "
            "to purchase this item.",
        )


def can_afford(state: PlayerState, price: Price) -> bool:
    return (
        state.gold >= price.gold
        and state.spiritual_stones >= price.spiritual_stones
        and state.energy >= price.qi
    )


def meets_level_requirement(state: PlayerState, item: ShopItem) -> bool:
    return state.cultivation_level >= item.required_level


def check_purchase(item: ShopItem, state: PlayerState) -> None:
    """처음 실패한 조건을 raise. 재화 검사가 레벨 검사보다 먼저."""
    if not can_afford(state, item.price):
        raise InsufficientResources(item)
    if not meets_level_requirement(state, item):
        raise LevelTooLow(item)


def to_owned_item(item: ShopItem) -> OwnedItem:
    return OwnedItem(
        item_id=item.item_id,
        name=item.name,
        item_type=item.item_type,
        rarity=item.rarity,
        level=1,
        stats=dict(item.stats),
        equipped=False,
        icon=item.icon,
        description=item.description,
        price=item.price,
        required_level=item.required_level,
    )


def apply_purchase(item: ShopItem) -> StateTransform:
    """변환: 최신 상태로 재검사 → 가격 전액 차감 → 인벤토리 기록 추가"""

    def _apply(state: PlayerState) -> PlayerState:
        check_purchase(item, state)
        return replace(
            state,
            gold=state.gold - item.price.gold,
            spiritual_stones=state.spiritual_stones - item.price.spiritual_stones,
            energy=state.energy - item.price.qi,
            inventory=state.inventory.with_item(item.family, to_owned_item(item)),
        )

    return _apply


@dataclass(frozen=True)
class PurchaseResult:
    item: ShopItem
    state: PlayerState
    rejection: PurchaseRejected | None = None

    @property
    def success(self) -> bool:
        return self.rejection is None

    @property
    def reason(self) -> str | None:
        return self.rejection.reason if self.rejection else None


def purchase(item: ShopItem, store: PlayerStateStore, player_id: str) -> PurchaseResult:
    """``player_id`` 가 ``item`` 구매. 거절은 예외가 아니라 결과로 반환."""
    try:
        state = store.update(player_id, apply_purchase(item))
    except PurchaseRejected as rejection:
        logger.warning(
            "Purchase rejected: player=%s, item=%s, reason=%s",
            player_id,
            item.item_id,
            rejection.reason,
        )
        return PurchaseResult(
            item=item, state=store.snapshot(player_id), rejection=rejection
        )

    logger.info(
        "Purchase: player=%s, item=%s (%s), price=%s",
        player_id,
        item.item_id,
        item.rarity.label,
        item.price,
    )
    return PurchaseResult(item=item, state=state)
