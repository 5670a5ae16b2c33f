"""상점 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class Rarity(IntEnum):
    COMMON = 0
    UNCOMMON = 1
    RARE = 2
    EPIC = 3
    LEGENDARY = 4
    MYTHIC = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Rarity":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown rarity: {label}") from None


class ItemFamily(str, Enum):
    WEAPON = "weapon"
    APPAREL = "apparel"

    @property
    def bucket(self) -> str:
        """인벤토리 버킷 이름 ("weapons" / "apparel")"""
        return "weapons" if self is ItemFamily.WEAPON else "apparel"


@dataclass(frozen=True)
class Price:
    gold: int = 0
    spiritual_stones: int = 0
    qi: int = 0


@dataclass(frozen=True)
class ShopItem:
    """생성된 상점 상품. 불변, 상점 세션마다 새로 생성."""

    item_id: str  # "weapon_3f9a0c1d2e4b"
    name: str  # "Dragon Sword Fang"
    description: str
    family: ItemFamily
    item_type: str  # "sword", "robe", ...
    rarity: Rarity
    stats: Mapping[str, int] = field(default_factory=dict)
    price: Price = field(default_factory=Price)
    required_level: int = 1
    icon: str = ""

    def __post_init__(self) -> None:
        # stats 도 읽기 전용 매핑으로 고정
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))
