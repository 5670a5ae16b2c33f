"""플레이어 자원 문서 + 저장소 계약

문서는 불변. 변경은 전부 순수 변환 ``PlayerState -> PlayerState`` 를
``PlayerStateStore.update`` 에 넘겨 compare-and-update 로 커밋한다.
변환이 예외를 던지면 아무것도 기록되지 않는다 (구매 거절이 이 경로).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

from sect_economy.core.shop.models import ItemFamily, Price, Rarity

logger = logging.getLogger(__name__)

DEFAULT_UPDATE_RETRIES = 3


class PlayerNotFound(LookupError):
    """해당 player_id 문서 없음"""


class StaleStateError(RuntimeError):
    """재시도 횟수 안에 compare-and-update 커밋 실패 (API: 409 + retry)"""


class CharacterNotCreated(RuntimeError):
    """캐릭터 미생성. 호출측은 캐릭터 생성 화면으로 보낸다."""

    redirect = "/character"

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Character not created: {player_id}")
        self.player_id = player_id


@dataclass(frozen=True)
class OwnedItem:
    """구매한 아이템 기록"""

    item_id: str
    name: str
    item_type: str
    rarity: Rarity
    level: int = 1
    stats: Mapping[str, int] = field(default_factory=dict)
    equipped: bool = False
    icon: str = ""
    description: str = ""
    price: Price = field(default_factory=Price)
    required_level: int = 1


@dataclass(frozen=True)
class Inventory:
    weapons: Mapping[str, OwnedItem] = field(default_factory=dict)
    apparel: Mapping[str, OwnedItem] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weapons", MappingProxyType(dict(self.weapons)))
        object.__setattr__(self, "apparel", MappingProxyType(dict(self.apparel)))

    def bucket(self, family: ItemFamily) -> Mapping[str, OwnedItem]:
        return self.weapons if family is ItemFamily.WEAPON else self.apparel

    def with_item(self, family: ItemFamily, item: OwnedItem) -> "Inventory":
        """``item`` 을 family 버킷에 item_id 키로 넣은 사본 (같은 id 면 덮어쓰기)"""
        bucket = dict(self.bucket(family))
        bucket[item.item_id] = item
        if family is ItemFamily.WEAPON:
            return Inventory(weapons=bucket, apparel=self.apparel)
        return Inventory(weapons=self.weapons, apparel=bucket)

    def count(self) -> int:
        return len(self.weapons) + len(self.apparel)


@dataclass(frozen=True)
class PlayerState:
    """공유 플레이어 문서 스냅샷"""

    player_id: str
    gold: int = 0
    spiritual_stones: int = 0
    energy: int = 0  # Qi
    cultivation_level: int = 1
    cultivation_progress: int = 0
    character_created: bool = False
    inventory: Inventory = field(default_factory=Inventory)


StateTransform = Callable[[PlayerState], PlayerState]
StateListener = Callable[[PlayerState], None]


def add_resources(
    gold: int = 0,
    spiritual_stones: int = 0,
    cultivation_progress: int = 0,
) -> StateTransform:
    """재화 + 수련 경험치 가산 변환 (퀘스트 보상)"""

    def _apply(state: PlayerState) -> PlayerState:
        return replace(
            state,
            gold=state.gold + gold,
            spiritual_stones=state.spiritual_stones + spiritual_stones,
            cultivation_progress=state.cultivation_progress + cultivation_progress,
        )

    return _apply


class PlayerStateStore(ABC):
    """플레이어 문서 보관 + 커밋된 상태를 구독자에게 전파"""

    def __init__(self, max_retries: int = DEFAULT_UPDATE_RETRIES) -> None:
        self._max_retries = max(1, max_retries)
        self._listeners: list[StateListener] = []

    # === 백엔드 구현부 ===

    @abstractmethod
    def _load(self, player_id: str) -> tuple[PlayerState, int] | None:
        """(state, version) 또는 None"""
        ...

    @abstractmethod
    def _insert(self, state: PlayerState) -> None: ...

    @abstractmethod
    def _compare_and_set(
        self, player_id: str, expected_version: int, state: PlayerState
    ) -> bool:
        """저장된 version 이 ``expected_version`` 과 같을 때만 커밋. 성공 여부 반환."""
        ...

    # === 공개 API ===

    def create(self, state: PlayerState) -> PlayerState:
        if self._load(state.player_id) is not None:
            raise ValueError(f"Player already exists: {state.player_id}")
        self._insert(state)
        logger.info("Player document created: %s", state.player_id)
        self._broadcast(state)
        return state

    def exists(self, player_id: str) -> bool:
        return self._load(player_id) is not None

    def snapshot(self, player_id: str) -> PlayerState:
        loaded = self._load(player_id)
        if loaded is None:
            raise PlayerNotFound(player_id)
        return loaded[0]

    def update(self, player_id: str, transform: StateTransform) -> PlayerState:
        """``transform`` 을 원자적으로 적용하고 커밋된 상태 반환.

        충돌 시 최신 문서로 다시 변환한다. ``transform`` 예외는 그대로 전파.
        """
        for attempt in range(1, self._max_retries + 1):
            loaded = self._load(player_id)
            if loaded is None:
                raise PlayerNotFound(player_id)
            current, version = loaded
            proposed = transform(current)
            if proposed.player_id != player_id:
                raise ValueError("Transform must not change player_id")
            if self._compare_and_set(player_id, version, proposed):
                self._broadcast(proposed)
                return proposed
            logger.warning(
                "Stale player document %s (version=%d, attempt %d/%d)",
                player_id,
                version,
                attempt,
                self._max_retries,
            )
        raise StaleStateError(
            f"Could not commit update for {player_id} after {self._max_retries} attempts"
        )

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _broadcast(self, state: PlayerState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed: %s", listener)


class InMemoryPlayerStateStore(PlayerStateStore):
    """dict 기반 저장소 (테스트/단일 프로세스)"""

    def __init__(self, max_retries: int = DEFAULT_UPDATE_RETRIES) -> None:
        super().__init__(max_retries)
        self._documents: dict[str, tuple[PlayerState, int]] = {}

    def _load(self, player_id: str) -> tuple[PlayerState, int] | None:
        return self._documents.get(player_id)

    def _insert(self, state: PlayerState) -> None:
        self._documents[state.player_id] = (state, 0)

    def _compare_and_set(
        self, player_id: str, expected_version: int, state: PlayerState
    ) -> bool:
        current = self._documents.get(player_id)
        if current is None or current[1] != expected_version:
            return False
        self._documents[player_id] = (state, expected_version + 1)
        return True

    def version(self, player_id: str) -> int:
        loaded = self._documents.get(player_id)
        if loaded is None:
            raise PlayerNotFound(player_id)
        return loaded[1]


# === dict 변환 (DB JSON 컬럼 / API) ===


def price_to_dict(price: Price) -> dict[str, int]:
    return {
        "gold": price.gold,
        "spiritual_stones": price.spiritual_stones,
        "qi": price.qi,
    }


def price_from_dict(data: Mapping[str, Any]) -> Price:
    return Price(
        gold=int(data.get("gold", 0)),
        spiritual_stones=int(data.get("spiritual_stones", 0)),
        qi=int(data.get("qi", 0)),
    )


def owned_item_to_dict(item: OwnedItem) -> dict[str, Any]:
    return {
        "item_id": item.item_id,
        "name": item.name,
        "item_type": item.item_type,
        "rarity": item.rarity.label,
        "level": item.level,
        "stats": dict(item.stats),
        "equipped": item.equipped,
        "icon": item.icon,
        "description": item.description,
        "price": price_to_dict(item.price),
        "required_level": item.required_level,
    }


def owned_item_from_dict(data: Mapping[str, Any]) -> OwnedItem:
    return OwnedItem(
        item_id=data["item_id"],
        name=data.get("name", ""),
        item_type=data.get("item_type", ""),
        rarity=Rarity.from_label(data.get("rarity", "common")),
        level=int(data.get("level", 1)),
        stats={k: int(v) for k, v in data.get("stats", {}).items()},
        equipped=bool(data.get("equipped", False)),
        icon=data.get("icon", ""),
        description=data.get("description", ""),
        price=price_from_dict(data.get("price", {})),
        required_level=int(data.get("required_level", 1)),
    )


def inventory_to_dict(inventory: Inventory) -> dict[str, dict[str, Any]]:
    return {
        "weapons": {k: owned_item_to_dict(v) for k, v in inventory.weapons.items()},
        "apparel": {k: owned_item_to_dict(v) for k, v in inventory.apparel.items()},
    }


def inventory_from_dict(data: Mapping[str, Any] | None) -> Inventory:
    data = data or {}
    return Inventory(
        weapons={
            k: owned_item_from_dict(v) for k, v in data.get("weapons", {}).items()
        },
        apparel={
            k: owned_item_from_dict(v) for k, v in data.get("apparel", {}).items()
        },
    )
