"""상점 목록 필터/정렬 파이프라인. 순수 함수, 입력 불변."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .catalog import ITEM_TYPES
from .models import ItemFamily, Rarity, ShopItem

ALL = "all"


class PriceSort(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ShopFilter:
    """None 또는 "all" 이면 해당 조건 비활성"""

    rarity: Rarity | str | None = None
    max_level: int | None = None
    item_type: str | None = None
    price_sort: PriceSort | str | None = None


def _normalize_rarity(value: Rarity | str | None) -> Rarity | None:
    if value is None or value == ALL:
        return None
    if isinstance(value, Rarity):
        return value
    return Rarity.from_label(value)


def _normalize_sort(value: PriceSort | str | None) -> PriceSort | None:
    if value is None or value == ALL:
        return None
    return PriceSort(value)


def apply_filters(items: Iterable[ShopItem], criteria: ShopFilter) -> list[ShopItem]:
    """모든 조건 AND 필터 후, 선택 시 gold 가격 안정 정렬"""
    rarity = _normalize_rarity(criteria.rarity)
    item_type = None if criteria.item_type in (None, ALL) else criteria.item_type
    sort = _normalize_sort(criteria.price_sort)

    result = [
        item
        for item in items
        if (rarity is None or item.rarity == rarity)
        and (criteria.max_level is None or item.required_level <= criteria.max_level)
        and (item_type is None or item.item_type == item_type)
    ]

    if sort is PriceSort.ASC:
        result = sorted(result, key=lambda i: i.price.gold)
    elif sort is PriceSort.DESC:
        result = sorted(result, key=lambda i: i.price.gold, reverse=True)
    return result


def available_types(family: ItemFamily) -> Sequence[str]:
    """family 탭의 종류 필터 선택지"""
    return ITEM_TYPES[family]
