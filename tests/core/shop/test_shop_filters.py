"""필터/정렬 파이프라인 테스트"""

import pytest

from sect_economy.core.shop.catalog import WEAPON_TYPES
from sect_economy.core.shop.filters import (
    ALL,
    PriceSort,
    ShopFilter,
    apply_filters,
    available_types,
)
from sect_economy.core.shop.formulas import item_price, required_level
from sect_economy.core.shop.models import ItemFamily, Rarity, ShopItem


def _item(item_id: str, item_type: str, rarity: Rarity) -> ShopItem:
    return ShopItem(
        item_id=item_id,
        name=item_id,
        description="",
        family=ItemFamily.WEAPON,
        item_type=item_type,
        rarity=rarity,
        price=item_price(ItemFamily.WEAPON, rarity),
        required_level=required_level(ItemFamily.WEAPON, rarity),
    )


@pytest.fixture()
def items() -> list[ShopItem]:
    return [
        _item("a", "sword", Rarity.RARE),  # 450g, lvl 10
        _item("b", "bow", Rarity.COMMON),  # 50g, lvl 1
        _item("c", "sword", Rarity.COMMON),  # 50g, lvl 1
        _item("d", "spear", Rarity.MYTHIC),  # 12150g, lvl 25
        _item("e", "sword", Rarity.UNCOMMON),  # 150g, lvl 5
    ]


def _ids(items: list[ShopItem]) -> list[str]:
    return [i.item_id for i in items]


class TestFilters:
    def test_no_criteria_is_identity(self, items):
        assert _ids(apply_filters(items, ShopFilter())) == ["a", "b", "c", "d", "e"]

    def test_all_disables_dimensions(self, items):
        criteria = ShopFilter(rarity=ALL, item_type=ALL, price_sort=ALL)
        assert _ids(apply_filters(items, criteria)) == ["a", "b", "c", "d", "e"]

    def test_rarity_by_label(self, items):
        assert _ids(apply_filters(items, ShopFilter(rarity="common"))) == ["b", "c"]

    def test_rarity_by_enum(self, items):
        assert _ids(apply_filters(items, ShopFilter(rarity=Rarity.MYTHIC))) == ["d"]

    def test_max_level_inclusive(self, items):
        assert _ids(apply_filters(items, ShopFilter(max_level=5))) == ["b", "c", "e"]

    def test_item_type(self, items):
        assert _ids(apply_filters(items, ShopFilter(item_type="sword"))) == ["a", "c", "e"]

    def test_conjunction(self, items):
        criteria = ShopFilter(item_type="sword", max_level=5)
        assert _ids(apply_filters(items, criteria)) == ["c", "e"]

    def test_unknown_rarity(self, items):
        with pytest.raises(ValueError):
            apply_filters(items, ShopFilter(rarity="godly"))

    def test_input_untouched(self, items):
        before = list(items)
        apply_filters(items, ShopFilter(price_sort=PriceSort.DESC, item_type="sword"))
        assert items == before


class TestSort:
    def test_ascending_is_stable(self, items):
        result = apply_filters(items, ShopFilter(price_sort="asc"))
        assert _ids(result) == ["b", "c", "e", "a", "d"]

    def test_descending_is_stable(self, items):
        result = apply_filters(items, ShopFilter(price_sort=PriceSort.DESC))
        assert _ids(result) == ["d", "a", "e", "b", "c"]

    def test_sort_after_filter(self, items):
        criteria = ShopFilter(item_type="sword", price_sort="desc")
        assert _ids(apply_filters(items, criteria)) == ["a", "e", "c"]

    def test_bad_sort_value(self, items):
        with pytest.raises(ValueError):
            apply_filters(items, ShopFilter(price_sort="sideways"))


def test_available_types():
    assert tuple(available_types(ItemFamily.WEAPON)) == WEAPON_TYPES
