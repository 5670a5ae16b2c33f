"""아이템 카탈로그 생성: 상점 세션용 무기/의복 절차 생성"""

import logging
import random
import uuid
from dataclasses import dataclass

from .formulas import item_price, required_level, roll_rarity, roll_stats
from .models import ItemFamily, ShopItem

logger = logging.getLogger(__name__)

WEAPON_TYPES: tuple[str, ...] = (
    "sword",
    "saber",
    "spear",
    "staff",
    "dagger",
    "bow",
    "fan",
    "whip",
    "hammer",
    "axe",
)

APPAREL_TYPES: tuple[str, ...] = (
    "robe",
    "armor",
    "innerWear",
    "outerWear",
    "belt",
    "boots",
    "gloves",
    "hat",
    "mask",
    "accessory",
)

ITEM_TYPES: dict[ItemFamily, tuple[str, ...]] = {
    ItemFamily.WEAPON: WEAPON_TYPES,
    ItemFamily.APPAREL: APPAREL_TYPES,
}

WEAPON_ICONS: dict[str, str] = {
    "sword": "fa-khanda",
    "saber": "fa-utensils",
    "spear": "fa-location-arrow",
    "staff": "fa-magic",
    "dagger": "fa-cut",
    "bow": "fa-arrow-right",
    "fan": "fa-hand-paper",
    "whip": "fa-wave-square",
    "hammer": "fa-hammer",
    "axe": "fa-axe",
}
DEFAULT_WEAPON_ICON = "fa-sword"

APPAREL_ICONS: dict[str, str] = {
    "robe": "fa-tshirt",
    "armor": "fa-shield-alt",
    "mask": "fa-mask",
    "boots": "fa-boot",
    "gloves": "fa-mitten",
    "hat": "fa-hat-wizard",
}
DEFAULT_APPAREL_ICON = "fa-ring"


@dataclass(frozen=True)
class ItemSeries:
    """생성 배치 하나의 이름 어휘"""

    prefixes: tuple[str, ...]
    suffixes: tuple[str, ...]
    description: str  # format 키: rarity, item_type


WEAPON_SERIES = ItemSeries(
    prefixes=(
        "Dragon",
        "Phoenix",
        "Thunder",
        "Frost",
        "Azure",
        "Blood",
        "Heaven",
        "Earth",
        "Ancient",
        "Divine",
    ),
    suffixes=(
        "Blade",
        "Edge",
        "Fang",
        "Claw",
        "Shard",
        "Slayer",
        "Bane",
        "Reaper",
        "Vanquisher",
        "Harbinger",
    ),
    description="A powerful {rarity} {item_type} forged with mystical techniques.",
)

APPAREL_SERIES = ItemSeries(
    prefixes=(
        "Celestial",
        "Mystic",
        "Immortal",
        "Ethereal",
        "Jade",
        "Golden",
        "Sacred",
        "Profound",
        "Spiritual",
        "Transcendent",
    ),
    suffixes=(
        "Garment",
        "Attire",
        "Vestment",
        "Raiment",
        "Apparel",
        "Protection",
        "Guard",
        "Aegis",
        "Mantle",
        "Ward",
    ),
    description="A refined {rarity} {item_type} crafted with exceptional skill.",
)

ADDITIONAL_APPAREL_SERIES = ItemSeries(
    prefixes=(
        "Cloud",
        "Moon",
        "Star",
        "Sun",
        "Mountain",
        "River",
        "Ocean",
        "Lightning",
        "Fire",
        "Wind",
    ),
    suffixes=(
        "Shroud",
        "Cover",
        "Cloth",
        "Wrapping",
        "Veil",
        "Skin",
        "Shell",
        "Layer",
        "Drape",
        "Fabric",
    ),
    description="An elegant {rarity} {item_type} with unique properties.",
)

DEFAULT_SERIES: dict[ItemFamily, ItemSeries] = {
    ItemFamily.WEAPON: WEAPON_SERIES,
    ItemFamily.APPAREL: APPAREL_SERIES,
}

DEFAULT_WEAPON_STOCK = 25
DEFAULT_APPAREL_STOCK = 50  # 의복 시리즈당


def icon_for(family: ItemFamily, item_type: str) -> str:
    if family is ItemFamily.WEAPON:
        return WEAPON_ICONS.get(item_type, DEFAULT_WEAPON_ICON)
    return APPAREL_ICONS.get(item_type, DEFAULT_APPAREL_ICON)


def compose_name(prefix: str, item_type: str, suffix: str) -> str:
    return f"{prefix} {item_type[:1].upper()}{item_type[1:]} {suffix}"


def new_item_id(family: ItemFamily) -> str:
    return f"{family.value}_{uuid.uuid4().hex[:12]}"


def generate_item(
    family: ItemFamily,
    rng: random.Random | None = None,
    series: ItemSeries | None = None,
) -> ShopItem:
    rng = rng or random
    series = series or DEFAULT_SERIES[family]

    item_type = rng.choice(ITEM_TYPES[family])
    rarity = roll_rarity(rng)
    prefix = rng.choice(series.prefixes)
    suffix = rng.choice(series.suffixes)

    return ShopItem(
        item_id=new_item_id(family),
        name=compose_name(prefix, item_type, suffix),
        description=series.description.format(
            rarity=rarity.label, item_type=item_type
        ),
        family=family,
        item_type=item_type,
        rarity=rarity,
        stats=roll_stats(family, rarity, rng),
        price=item_price(family, rarity),
        required_level=required_level(family, rarity),
        icon=icon_for(family, item_type),
    )


def generate(
    family: ItemFamily,
    count: int,
    rng: random.Random | None = None,
    series: ItemSeries | None = None,
) -> list[ShopItem]:
    """서로 독립인 아이템 ``count`` 개 생성. 시드 고정 ``rng`` 를 넘길 때만 재현 가능."""
    return [generate_item(family, rng, series) for _ in range(max(0, count))]


@dataclass(frozen=True)
class ShopStock:
    weapons: tuple[ShopItem, ...]
    apparel: tuple[ShopItem, ...]

    def items(self, family: ItemFamily) -> tuple[ShopItem, ...]:
        return self.weapons if family is ItemFamily.WEAPON else self.apparel

    def find(self, item_id: str) -> ShopItem | None:
        for item in (*self.weapons, *self.apparel):
            if item.item_id == item_id:
                return item
        return None


def generate_shop_stock(
    rng: random.Random | None = None,
    weapon_count: int = DEFAULT_WEAPON_STOCK,
    apparel_count: int = DEFAULT_APPAREL_STOCK,
) -> ShopStock:
    """세션 재고: 무기 + 의복 2개 시리즈 (일반, 추가)"""
    weapons = generate(ItemFamily.WEAPON, weapon_count, rng, WEAPON_SERIES)
    apparel = generate(ItemFamily.APPAREL, apparel_count, rng, APPAREL_SERIES)
    apparel += generate(
        ItemFamily.APPAREL, apparel_count, rng, ADDITIONAL_APPAREL_SERIES
    )
    logger.info(
        "Shop stock generated: %d weapons, %d apparel", len(weapons), len(apparel)
    )
    return ShopStock(weapons=tuple(weapons), apparel=tuple(apparel))
