"""등급 스케일링 공식: 순수 함수, 상태 없음"""

import logging
import math
import random
from dataclasses import dataclass

from .models import ItemFamily, Price, Rarity

logger = logging.getLogger(__name__)

RARITY_BUCKETS = 6

# 보조 재화는 이 등급부터 가격에 붙는다
SPIRITUAL_STONE_THRESHOLD = Rarity.EPIC
QI_THRESHOLD = Rarity.LEGENDARY


@dataclass(frozen=True)
class FamilyFormula:
    """family 별 스케일링 상수"""

    base_price: int
    base_stat: int
    multiplier: float
    primary_stat: str
    stat_jitter: int  # 주 스탯 += rand[0, stat_jitter)
    stone_step: int
    qi_step: int
    level_step: int


WEAPON_FORMULA = FamilyFormula(
    base_price=50,
    base_stat=5,
    multiplier=3.0,
    primary_stat="attack",
    stat_jitter=10,
    stone_step=5,
    qi_step=100,
    level_step=5,
)

APPAREL_FORMULA = FamilyFormula(
    base_price=40,
    base_stat=3,
    multiplier=2.5,
    primary_stat="defense",
    stat_jitter=8,
    stone_step=4,
    qi_step=80,
    level_step=4,
)

FORMULAS: dict[ItemFamily, FamilyFormula] = {
    ItemFamily.WEAPON: WEAPON_FORMULA,
    ItemFamily.APPAREL: APPAREL_FORMULA,
}

# (최소 등급, 스탯 이름, 기본값, 등급당 변동폭)
# 값 = base + rand[0, span * rarity)
SECONDARY_STATS: dict[ItemFamily, tuple[tuple[int, str, int, int], ...]] = {
    ItemFamily.WEAPON: (
        (1, "critChance", 1, 1),
        (2, "strength", 1, 2),
        (3, "agility", 1, 2),
        (4, "intelligence", 1, 3),
    ),
    ItemFamily.APPAREL: (
        (1, "dodgeChance", 1, 1),
        (2, "endurance", 1, 2),
        (3, "perception", 1, 2),
        (4, "maxHealth", 10, 10),
    ),
}


def roll_rarity(rng: random.Random | None = None) -> Rarity:
    """min(floor(random() * 6), 5). 6개 등급 거의 균등."""
    rng = rng or random
    return Rarity(min(math.floor(rng.random() * RARITY_BUCKETS), Rarity.MYTHIC))


def rarity_multiplier(family: ItemFamily, rarity: int) -> float:
    return FORMULAS[family].multiplier ** int(rarity)


def base_price(family: ItemFamily, rarity: int) -> int:
    """gold 가격 (내림)"""
    return math.floor(FORMULAS[family].base_price * rarity_multiplier(family, rarity))


def base_stat(family: ItemFamily, rarity: int) -> int:
    return math.floor(FORMULAS[family].base_stat * rarity_multiplier(family, rarity))


def spiritual_stone_cost(family: ItemFamily, rarity: int) -> int:
    if rarity < SPIRITUAL_STONE_THRESHOLD:
        return 0
    return (int(rarity) - (SPIRITUAL_STONE_THRESHOLD - 1)) * FORMULAS[family].stone_step


def qi_cost(family: ItemFamily, rarity: int) -> int:
    if rarity < QI_THRESHOLD:
        return 0
    return (int(rarity) - (QI_THRESHOLD - 1)) * FORMULAS[family].qi_step


def item_price(family: ItemFamily, rarity: int) -> Price:
    return Price(
        gold=base_price(family, rarity),
        spiritual_stones=spiritual_stone_cost(family, rarity),
        qi=qi_cost(family, rarity),
    )


def required_level(family: ItemFamily, rarity: int) -> int:
    return max(1, int(rarity) * FORMULAS[family].level_step)


def roll_stats(
    family: ItemFamily, rarity: int, rng: random.Random | None = None
) -> dict[str, int]:
    """주 스탯 + 해금된 등급마다 추가 속성 1개"""
    rng = rng or random
    formula = FORMULAS[family]
    stats = {
        formula.primary_stat: base_stat(family, rarity)
        + rng.randrange(formula.stat_jitter)
    }
    for min_rarity, name, base, span in SECONDARY_STATS[family]:
        if rarity >= min_rarity:
            stats[name] = base + rng.randrange(span * int(rarity))
    return stats
