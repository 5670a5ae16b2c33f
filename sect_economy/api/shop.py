"""Sect shop endpoints.

Handlers are ``async def`` so every EventBus emit runs on the event loop thread.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from sect_economy.api.dependencies import (
    character_not_created,
    get_shop_service,
    player_not_found,
    state_conflict,
)
from sect_economy.api.schemas import (
    PurchaseRequest,
    PurchaseResponse,
    ShopListResponse,
    build_player_info,
    build_shop_item_info,
)
from sect_economy.core.logging import get_logger
from sect_economy.core.shop.filters import ALL, ShopFilter, available_types
from sect_economy.core.shop.models import ItemFamily
from sect_economy.core.state import (
    CharacterNotCreated,
    PlayerNotFound,
    StaleStateError,
)
from sect_economy.services.shop_service import ShopItemNotFound, ShopService

logger = get_logger(__name__)

router = APIRouter(prefix="/shop", tags=["shop"])


@router.get("/types/{family}")
async def list_item_types(family: ItemFamily) -> dict[str, object]:
    """family 탭의 종류 필터 선택지 ("all" 포함)"""
    return {"family": family.value, "types": [ALL, *available_types(family)]}


@router.get("/{player_id}/items/{family}", response_model=ShopListResponse)
async def list_items(
    player_id: str,
    family: ItemFamily,
    rarity: str = Query(ALL, description="Rarity label or 'all'"),
    max_level: Optional[int] = Query(None, ge=0),
    item_type: str = Query(ALL),
    price_sort: Optional[str] = Query(None, description="'asc', 'desc' or omitted"),
    service: ShopService = Depends(get_shop_service),
) -> ShopListResponse:
    try:
        criteria = ShopFilter(
            rarity=rarity,
            max_level=max_level,
            item_type=item_type,
            price_sort=price_sort,
        )
        items = service.list_items(player_id, family, criteria)
    except PlayerNotFound:
        raise player_not_found(player_id)
    except CharacterNotCreated as e:
        raise character_not_created(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ShopListResponse(
        family=family.value,
        count=len(items),
        items=[build_shop_item_info(item) for item in items],
    )


@router.post("/{player_id}/restock")
async def restock(
    player_id: str,
    service: ShopService = Depends(get_shop_service),
) -> dict[str, int]:
    try:
        stock = service.restock(player_id)
    except PlayerNotFound:
        raise player_not_found(player_id)
    except CharacterNotCreated as e:
        raise character_not_created(e)
    return {"weapons": len(stock.weapons), "apparel": len(stock.apparel)}


@router.post("/{player_id}/purchase", response_model=PurchaseResponse)
async def purchase_item(
    player_id: str,
    request: PurchaseRequest,
    service: ShopService = Depends(get_shop_service),
) -> PurchaseResponse:
    try:
        result = service.purchase(player_id, request.item_id)
    except PlayerNotFound:
        raise player_not_found(player_id)
    except ShopItemNotFound:
        raise HTTPException(
            status_code=404, detail=f"Item not in stock: {request.item_id}"
        )
    except StaleStateError as e:
        raise state_conflict(e)

    if not result.success:
        raise HTTPException(
            status_code=400,
            detail={
                "reason": result.reason,
                "title": result.rejection.title,
                "message": result.rejection.message,
            },
        )

    return PurchaseResponse(
        success=True,
        message=f"You have purchased {result.item.name}.",
        item=build_shop_item_info(result.item),
        player=build_player_info(result.state),
    )


@router.delete("/{player_id}")
async def close_shop(
    player_id: str,
    service: ShopService = Depends(get_shop_service),
) -> dict[str, bool]:
    """상점 세션 종료: 보관 중인 재고를 버린다"""
    return {"closed": service.close_session(player_id)}
