"""아이템 카탈로그 생성 테스트"""

import random

import pytest

from sect_economy.core.shop.catalog import (
    ADDITIONAL_APPAREL_SERIES,
    APPAREL_SERIES,
    APPAREL_TYPES,
    DEFAULT_APPAREL_ICON,
    WEAPON_SERIES,
    WEAPON_TYPES,
    compose_name,
    generate,
    generate_item,
    generate_shop_stock,
    icon_for,
)
from sect_economy.core.shop.formulas import item_price, required_level
from sect_economy.core.shop.models import ItemFamily


class TestNaming:
    def test_compose_name_capitalizes_type(self):
        assert compose_name("Dragon", "sword", "Fang") == "Dragon Sword Fang"
        assert compose_name("Jade", "innerWear", "Ward") == "Jade InnerWear Ward"

    def test_icons(self):
        assert icon_for(ItemFamily.WEAPON, "sword") == "fa-khanda"
        assert icon_for(ItemFamily.APPAREL, "robe") == "fa-tshirt"
        assert icon_for(ItemFamily.APPAREL, "belt") == DEFAULT_APPAREL_ICON


class TestGenerateItem:
    def test_weapon_is_consistent_with_formulas(self):
        item = generate_item(ItemFamily.WEAPON, random.Random(11))
        assert item.family is ItemFamily.WEAPON
        assert item.item_type in WEAPON_TYPES
        assert item.item_id.startswith("weapon_")
        assert item.price == item_price(ItemFamily.WEAPON, item.rarity)
        assert item.required_level == required_level(ItemFamily.WEAPON, item.rarity)
        assert "attack" in item.stats
        assert item.description == (
            f"A powerful {item.rarity.label} {item.item_type} "
            "forged with mystical techniques."
        )

    def test_name_uses_series_vocabulary(self):
        item = generate_item(ItemFamily.WEAPON, random.Random(5), WEAPON_SERIES)
        prefix, _, suffix = item.name.split(" ")
        assert prefix in WEAPON_SERIES.prefixes
        assert suffix in WEAPON_SERIES.suffixes

    def test_stats_are_read_only(self):
        item = generate_item(ItemFamily.APPAREL, random.Random(5))
        with pytest.raises(TypeError):
            item.stats["defense"] = 0  # type: ignore[index]

    def test_generate_count(self):
        items = generate(ItemFamily.APPAREL, 7, random.Random(1))
        assert len(items) == 7
        assert len({i.item_id for i in items}) == 7
        assert all(i.item_type in APPAREL_TYPES for i in items)

    def test_generate_zero(self):
        assert generate(ItemFamily.WEAPON, 0) == []

    def test_same_seed_same_rolls(self):
        a = generate(ItemFamily.WEAPON, 5, random.Random(99))
        b = generate(ItemFamily.WEAPON, 5, random.Random(99))
        assert [(i.name, i.rarity, dict(i.stats)) for i in a] == [
            (i.name, i.rarity, dict(i.stats)) for i in b
        ]


class TestShopStock:
    def test_default_stock_sizes(self):
        stock = generate_shop_stock(random.Random(3))
        assert len(stock.weapons) == 25
        assert len(stock.apparel) == 100

    def test_apparel_from_both_series(self):
        stock = generate_shop_stock(random.Random(3), weapon_count=0, apparel_count=4)
        first, second = stock.apparel[:4], stock.apparel[4:]
        assert all(i.name.split(" ")[0] in APPAREL_SERIES.prefixes for i in first)
        assert all(
            i.name.split(" ")[0] in ADDITIONAL_APPAREL_SERIES.prefixes for i in second
        )

    def test_find(self):
        stock = generate_shop_stock(random.Random(3), weapon_count=2, apparel_count=2)
        target = stock.apparel[3]
        assert stock.find(target.item_id) is target
        assert stock.find("missing") is None
        assert stock.items(ItemFamily.WEAPON) == stock.weapons
