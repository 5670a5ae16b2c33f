"""상점 Service: 세션 재고, 목록 조회, 구매

Service → Core, Service → store 허용. 플레이어에게 보이는 결과는
EventBus 알림으로 내보낸다.
"""

import random

from sect_economy.core.event_bus import EventBus, GameEvent
from sect_economy.core.event_types import EventTypes
from sect_economy.core.logging import get_logger
from sect_economy.core.notifications import Notifier, Severity
from sect_economy.core.shop.catalog import (
    DEFAULT_APPAREL_STOCK,
    DEFAULT_WEAPON_STOCK,
    ShopStock,
    generate_shop_stock,
)
from sect_economy.core.shop.filters import ShopFilter, apply_filters
from sect_economy.core.shop.models import ItemFamily, ShopItem
from sect_economy.core.shop.transaction import PurchaseResult, purchase
from sect_economy.core.state import CharacterNotCreated, PlayerStateStore

logger = get_logger(__name__)


class ShopItemNotFound(LookupError):
    """현재 재고에 없는 item_id"""


class ShopService:
    """플레이어별 재고 세션 + 구매 처리"""

    def __init__(
        self,
        store: PlayerStateStore,
        event_bus: EventBus,
        rng: random.Random | None = None,
        weapon_stock: int = DEFAULT_WEAPON_STOCK,
        apparel_stock: int = DEFAULT_APPAREL_STOCK,
    ):
        self._store = store
        self._bus = event_bus
        self._rng = rng or random.Random()
        self._weapon_stock = weapon_stock
        self._apparel_stock = apparel_stock
        self._notifier = Notifier(event_bus, "shop_service")
        self._stocks: dict[str, ShopStock] = {}

    # === 재고 세션 ===

    def open_session(self, player_id: str) -> ShopStock:
        """현재 재고. 첫 방문 시 생성."""
        stock = self._stocks.get(player_id)
        if stock is None:
            stock = self.restock(player_id)
        return stock

    def restock(self, player_id: str) -> ShopStock:
        """현재 재고를 버리고 새로 생성"""
        state = self._store.snapshot(player_id)
        if not state.character_created:
            raise CharacterNotCreated(player_id)

        stock = generate_shop_stock(
            self._rng, self._weapon_stock, self._apparel_stock
        )
        self._stocks[player_id] = stock
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.SHOP_RESTOCKED,
                data={
                    "player_id": player_id,
                    "weapons": len(stock.weapons),
                    "apparel": len(stock.apparel),
                },
                source="shop_service",
            )
        )
        return stock

    def close_session(self, player_id: str) -> bool:
        """세션 재고 해제. 세션이 있었으면 True."""
        return self._stocks.pop(player_id, None) is not None

    # === 목록 조회 ===

    def list_items(
        self,
        player_id: str,
        family: ItemFamily,
        criteria: ShopFilter | None = None,
    ) -> list[ShopItem]:
        stock = self.open_session(player_id)
        return apply_filters(stock.items(family), criteria or ShopFilter())

    def get_item(self, player_id: str, item_id: str) -> ShopItem | None:
        stock = self._stocks.get(player_id)
        if stock is None:
            return None
        return stock.find(item_id)

    # === 구매 ===

    def purchase(self, player_id: str, item_id: str) -> PurchaseResult:
        """재고의 아이템 구매

        거절은 결과 + destructive 알림으로 보고하고 문서는 그대로 둔다.
        재고는 구매 후에도 유지 (같은 아이템 재구매 가능).
        """
        item = self.get_item(player_id, item_id)
        if item is None:
            logger.warning("Purchase of unknown item %s by %s", item_id, player_id)
            raise ShopItemNotFound(item_id)

        result = purchase(item, self._store, player_id)

        if not result.success:
            rejection = result.rejection
            self._notifier.notify(
                rejection.title,
                rejection.message,
                severity=Severity.DESTRUCTIVE,
                player_id=player_id,
            )
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.PURCHASE_REJECTED,
                    data={
                        "player_id": player_id,
                        "item_id": item.item_id,
                        "reason": rejection.reason,
                    },
                    source="shop_service",
                )
            )
            return result

        self._notifier.notify(
            "Item Purchased",
            f"You have purchased {item.name}.",
            player_id=player_id,
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ITEM_PURCHASED,
                data={
                    "player_id": player_id,
                    "item_id": item.item_id,
                    "family": item.family.value,
                    "gold": item.price.gold,
                    "spiritual_stones": item.price.spiritual_stones,
                    "qi": item.price.qi,
                },
                source="shop_service",
            )
        )
        return result
