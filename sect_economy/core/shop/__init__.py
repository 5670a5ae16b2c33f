"""상점 시스템 Core: 순수 Python, DB 무관"""

from .catalog import ShopStock, generate, generate_shop_stock
from .filters import PriceSort, ShopFilter, apply_filters, available_types
from .models import ItemFamily, Price, Rarity, ShopItem

__all__ = [
    "ItemFamily",
    "Price",
    "Rarity",
    "ShopItem",
    "ShopStock",
    "generate",
    "generate_shop_stock",
    "PriceSort",
    "ShopFilter",
    "apply_filters",
    "available_types",
]
